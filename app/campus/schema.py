"""
Startup schema creation and club-admin seeding.

Create-if-absent only: existing tables and rows are never altered.
Seeding does NOT overwrite an existing account's password.
"""
from __future__ import annotations

import logging

from flask import Flask
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from app.campus.constants import ROLE_STUDENT, SEEDED_ADMIN_PROFILE, SEEDED_CLUB_ADMINS
from app.campus.db import session_scope
from app.campus.models import Base, User
from app.campus.security import PasswordHasher, hasher_from_config

logger = logging.getLogger(__name__)


def ensure_schema(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine, checkfirst=True)


def seed_club_admins(s: Session, hasher: PasswordHasher, password: str) -> list[str]:
    """Insert the fixed club-lead accounts that are missing. Returns the emails created."""
    created: list[str] = []
    for admin in SEEDED_CLUB_ADMINS:
        exists = s.query(User.id).filter(User.email == admin["email"]).one_or_none()
        if exists:
            continue
        s.add(
            User(
                email=admin["email"],
                name=admin["name"],
                password_hash=hasher.hash(password),
                role=ROLE_STUDENT,
                managed_club=admin["club"],
                **SEEDED_ADMIN_PROFILE,
            )
        )
        logger.info("Seeded club admin: %s (%s)", admin["email"], admin["club"])
        created.append(admin["email"])
    return created


def init_schema(app: Flask) -> None:
    ensure_schema(app.extensions["sqlalchemy_engine"])
    with session_scope(app) as s:
        seed_club_admins(s, hasher_from_config(app.config), app.config["SEED_ADMIN_PASSWORD"])
