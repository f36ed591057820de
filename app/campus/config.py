import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    secret_key: str
    env: str
    database_url: str

    password_hash_method: str
    password_hash_timeout: float
    seed_admin_password: str

    require_login: bool
    sqlite_foreign_keys: bool
    cors_allow_origin: str


def _getenv(name: str, default: str = "") -> str:
    return (os.environ.get(name) or default).strip()


def _getflag(name: str, default: str = "0") -> bool:
    return _getenv(name, default).lower() in ("1", "true", "yes", "on")


def _hash_timeout() -> float:
    timeout = float(_getenv("PASSWORD_HASH_TIMEOUT", "10"))
    if timeout <= 0:
        raise RuntimeError("PASSWORD_HASH_TIMEOUT must be a positive number of seconds.")
    return timeout


def load_settings() -> Settings:
    return Settings(
        secret_key=_getenv("SECRET_KEY", "change-me"),
        env=_getenv("ENV", "development"),
        database_url=_getenv("DATABASE_URL", "sqlite:///campus_connect.db"),
        password_hash_method=_getenv("PASSWORD_HASH_METHOD", "scrypt:32768:8:1"),
        password_hash_timeout=_hash_timeout(),
        seed_admin_password=os.environ.get("SEED_ADMIN_PASSWORD") or "admin123",
        require_login=_getflag("REQUIRE_LOGIN"),
        sqlite_foreign_keys=_getflag("SQLITE_FOREIGN_KEYS"),
        cors_allow_origin=_getenv("CORS_ALLOW_ORIGIN", "*"),
    )


def load_config() -> dict:
    s = load_settings()
    is_production = s.env in ("prod", "production")
    return {
        "SECRET_KEY": s.secret_key,
        "ENV": s.env,
        "DATABASE_URL": s.database_url,
        "PASSWORD_HASH_METHOD": s.password_hash_method,
        "PASSWORD_HASH_TIMEOUT": s.password_hash_timeout,
        "SEED_ADMIN_PASSWORD": s.seed_admin_password,
        "REQUIRE_LOGIN": s.require_login,
        "SQLITE_FOREIGN_KEYS": s.sqlite_foreign_keys,
        "CORS_ALLOW_ORIGIN": s.cors_allow_origin,
        # security defaults
        "SESSION_COOKIE_HTTPONLY": True,
        "SESSION_COOKIE_SAMESITE": "Lax",
        "SESSION_COOKIE_SECURE": is_production,  # Require HTTPS in production
    }
