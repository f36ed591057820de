from __future__ import annotations


class CampusError(Exception):
    """Base for errors that map onto a JSON error response."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(CampusError):
    status_code = 400


class ConflictError(CampusError):
    """The store rejected a write (unique/check/foreign key)."""

    status_code = 400


class AuthenticationError(CampusError):
    status_code = 401


class AuthorizationError(CampusError):
    status_code = 403


class HashTimeoutError(CampusError):
    status_code = 503
