"""
Create tables and seed the club-admin accounts without booting the web app.

Idempotent: existing tables are left alone and existing accounts keep their passwords.

Usage:
  python scripts/init_db.py
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

# Ensure repo root is on sys.path when running as a script (Windows-friendly).
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.campus.config import load_config  # noqa: E402
from app.campus.schema import ensure_schema, seed_club_admins  # noqa: E402
from app.campus.security import hasher_from_config  # noqa: E402


def seed_only(*, database_url: str | None = None) -> list[str]:
    config = load_config()
    db_url = (database_url or config["DATABASE_URL"]).strip()

    engine = create_engine(db_url, future=True, pool_pre_ping=True)
    try:
        ensure_schema(engine)
        with Session(engine) as s, s.begin():
            created = seed_club_admins(s, hasher_from_config(config), config["SEED_ADMIN_PASSWORD"])
    finally:
        engine.dispose()

    print("Initialized database (seed_only).", flush=True)
    if created:
        print(f"Seeded club admins: {', '.join(created)}", flush=True)
    else:
        print("Club admins already present.", flush=True)
    return created


def main() -> None:
    load_dotenv()
    logging.basicConfig(level=logging.INFO)
    seed_only(database_url=None)


if __name__ == "__main__":
    main()
