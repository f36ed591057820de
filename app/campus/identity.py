from __future__ import annotations

from typing import Any

from app.campus.constants import KIND_BRANCH, KIND_SEMESTER, ROLE_STUDENT
from app.campus.errors import AuthenticationError, ValidationError
from app.campus.models import TeachingAssignment, User
from app.campus.repository import CampusStore
from app.campus.security import PasswordHasher
from app.campus.utils import clean_str, parse_multi_value


def normalize_email(raw: Any) -> str:
    return (str(raw) if raw is not None else "").strip().lower()


def serialize_user(user: User) -> dict[str, Any]:
    """Public profile. Never includes the password hash."""
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role,
        "mobile_number": user.mobile_number,
        "student_id": user.student_id,
        "branch": user.branch,
        "year": user.year,
        "semester": user.semester,
        "managed_club": user.managed_club,
        "teaching_branches": user.teaching_branches,
        "teaching_semesters": user.teaching_semesters,
    }


def register_user(store: CampusStore, hasher: PasswordHasher, payload: dict[str, Any]) -> User:
    """
    Create a user with a hashed password.

    Duplicate emails and unknown roles are rejected by the store
    (unique / check constraints) and surface as ConflictError.
    """
    email = normalize_email(payload.get("email"))
    password = payload.get("password")
    if not email:
        raise ValidationError("Email is required.")
    if not isinstance(password, str) or not password:
        raise ValidationError("Password is required.")

    user = User(
        email=email,
        name=clean_str(payload.get("name"), "Name"),
        mobile_number=clean_str(payload.get("mobile_number"), "Mobile number"),
        student_id=clean_str(payload.get("student_id"), "Student ID"),
        password_hash=hasher.hash(password),
        role=clean_str(payload.get("role"), "Role") or ROLE_STUDENT,
        branch=clean_str(payload.get("branch"), "Branch"),
        year=clean_str(payload.get("year"), "Year"),
        semester=clean_str(payload.get("semester"), "Semester"),
    )
    for kind, field in ((KIND_BRANCH, "teaching_branches"), (KIND_SEMESTER, "teaching_semesters")):
        for value in parse_multi_value(payload.get(field)):
            user.teaching_assignments.append(TeachingAssignment(kind=kind, value=value))
    return store.add_user(user)


def authenticate(store: CampusStore, hasher: PasswordHasher, email: Any, password: Any) -> User:
    user = store.get_user_by_email(normalize_email(email))
    if not user:
        raise AuthenticationError("User not found")
    if not isinstance(password, str) or not hasher.verify(user.password_hash, password):
        raise AuthenticationError("Invalid password")
    return user


def get_user_or_401(store: CampusStore, user_id: Any) -> User:
    """Load the acting user fresh from the store."""
    try:
        uid = int(user_id)
    except (TypeError, ValueError):
        raise AuthenticationError("Unknown author.") from None
    user = store.get_user(uid)
    if not user:
        raise AuthenticationError("Unknown author.")
    return user
