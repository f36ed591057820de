import pytest

from app.campus import create_app
from app.campus.security import hasher_from_config


@pytest.fixture()
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'test.db'}")
    monkeypatch.setenv("ENV", "test")
    monkeypatch.setenv("PASSWORD_HASH_METHOD", "pbkdf2:sha256:1000")
    for k in ("REQUIRE_LOGIN", "SQLITE_FOREIGN_KEYS", "SEED_ADMIN_PASSWORD", "CORS_ALLOW_ORIGIN"):
        monkeypatch.delenv(k, raising=False)

    app = create_app()
    return app.test_client()


def test_health_ok(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json["ok"] is True


def test_healthz_ok(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.data == b"ok"


def test_unknown_route_is_json_404(client):
    r = client.get("/api/nope")
    assert r.status_code == 404
    assert "error" in r.json


def test_cors_headers_present(client):
    r = client.get("/api/posts")
    assert r.status_code == 200
    assert r.headers["Access-Control-Allow-Origin"] == "*"


def test_production_requires_real_secret(tmp_path, monkeypatch):
    monkeypatch.setenv("ENV", "production")
    monkeypatch.setenv("SECRET_KEY", "change-me")
    monkeypatch.setenv("DATABASE_URL", "postgresql+psycopg://u:p@localhost/db")
    with pytest.raises(RuntimeError):
        create_app()


def test_production_refuses_sqlite(tmp_path, monkeypatch):
    monkeypatch.setenv("ENV", "production")
    monkeypatch.setenv("SECRET_KEY", "a-strong-secret")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'prod.db'}")
    with pytest.raises(RuntimeError):
        create_app()


def test_non_positive_hash_timeout_refused(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'t.db'}")
    monkeypatch.setenv("PASSWORD_HASH_TIMEOUT", "0")
    with pytest.raises(RuntimeError):
        create_app()


def test_hasher_keeps_configured_timeout():
    assert hasher_from_config({"PASSWORD_HASH_TIMEOUT": 0.5}).timeout == 0.5
    assert hasher_from_config({"PASSWORD_HASH_TIMEOUT": 0}).timeout == 0
    assert hasher_from_config({}).timeout == 10
