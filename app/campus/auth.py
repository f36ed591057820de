from __future__ import annotations

import uuid
from typing import Any

from flask import Blueprint, current_app, g, jsonify, request, session

from app.campus.db import db_session
from app.campus.errors import AuthenticationError
from app.campus.identity import authenticate, get_user_or_401, register_user, serialize_user
from app.campus.models import User
from app.campus.repository import CampusStore, store_for_request
from app.campus.security import hasher_from_config

bp = Blueprint("auth", __name__)


def load_current_user() -> None:
    """
    Loads g.current_user from the signed session cookie.
    Also assigns a simple per-request request_id (for log correlation).
    """
    if not getattr(g, "request_id", None):
        g.request_id = uuid.uuid4().hex
    if request.path.startswith(("/static/", "/health", "/healthz")):
        g.current_user = None
        return

    user_id = session.get("user_id")
    if not user_id:
        g.current_user = None
        return

    try:
        s = db_session()
        user = s.get(User, int(user_id))
        if not user:
            session.pop("user_id", None)
            g.current_user = None
            return
        g.current_user = user
    except Exception as e:
        current_app.logger.error("load_current_user DB error (clearing session): %s", e)
        session.pop("user_id", None)
        g.current_user = None


def request_payload() -> dict[str, Any]:
    """JSON body, or form fields for urlencoded posts."""
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return payload
    return request.form.to_dict()


def current_user() -> User | None:
    return getattr(g, "current_user", None)


def acting_user(store: CampusStore, author_id: Any) -> User:
    """
    The user a mutating request acts as.

    A server session wins over any author_id in the body. Without one, the
    body's author_id is looked up fresh unless REQUIRE_LOGIN is set.
    """
    u = current_user()
    if u is not None:
        return u
    if current_app.config.get("REQUIRE_LOGIN"):
        raise AuthenticationError("Login required.")
    return get_user_or_401(store, author_id)


@bp.post("/register")
def register():
    store = store_for_request()
    payload = request_payload()
    user = register_user(store, hasher_from_config(current_app.config), payload)
    store.commit()
    current_app.logger.info("Registered user id=%s role=%s", user.id, user.role)
    return jsonify({"id": user.id, "email": user.email, "role": user.role})


@bp.post("/login")
def login():
    store = store_for_request()
    payload = request_payload()
    email = payload.get("email")
    try:
        user = authenticate(store, hasher_from_config(current_app.config), email, payload.get("password"))
    except AuthenticationError as e:
        current_app.logger.warning(
            "Login failed (email=%s reason=%s request_id=%s)", email, e.message, getattr(g, "request_id", None)
        )
        raise

    session.clear()
    session["user_id"] = user.id
    return jsonify({"message": "Login success", "user": serialize_user(user)})


@bp.post("/logout")
def logout():
    session.pop("user_id", None)
    return jsonify({"message": "Logged out"})


@bp.get("/me")
def me():
    u = current_user()
    if u is None:
        raise AuthenticationError("Not logged in.")
    return jsonify({"user": serialize_user(u)})
