import pytest

from app.campus import create_app


@pytest.fixture()
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'test.db'}")
    monkeypatch.setenv("ENV", "test")
    monkeypatch.setenv("PASSWORD_HASH_METHOD", "pbkdf2:sha256:1000")
    for k in ("REQUIRE_LOGIN", "SQLITE_FOREIGN_KEYS", "SEED_ADMIN_PASSWORD", "CORS_ALLOW_ORIGIN"):
        monkeypatch.delenv(k, raising=False)

    client = create_app().test_client()
    for email, branch, semester, role in (
        ("cse4@example.com", "CSE", "4", "student"),
        ("cse6@example.com", "CSE", "6", "student"),
        ("ece4@example.com", "ECE", "4", "student"),
        ("me4@example.com", "ME", "4", "student"),
        ("tcse4@example.com", "CSE", "4", "teacher"),
    ):
        client.post(
            "/api/register",
            json={"email": email, "name": email.split("@")[0], "password": "pw", "role": role, "branch": branch, "semester": semester},
        )
    return client


def _emails(r):
    assert r.status_code == 200
    return sorted(u["email"] for u in r.json["data"])


def test_empty_assignments_return_nothing(client):
    assert _emails(client.get("/api/my-students")) == []
    assert _emails(client.get("/api/my-students", query_string={"teaching_branches": "", "teaching_semesters": "4"})) == []
    assert _emails(client.get("/api/my-students", query_string={"teaching_branches": "[]", "teaching_semesters": "[]"})) == []


def test_branch_and_semester_must_both_match(client):
    r = client.get("/api/my-students", query_string={"teaching_branches": "CSE,ECE", "teaching_semesters": "4"})
    assert _emails(r) == ["cse4@example.com", "ece4@example.com"]


def test_json_encoded_assignments(client):
    r = client.get("/api/my-students", query_string={"teaching_branches": '["CSE"]', "teaching_semesters": '["4", "6"]'})
    assert _emails(r) == ["cse4@example.com", "cse6@example.com"]


def test_only_students_listed(client):
    r = client.get("/api/my-students", query_string={"teaching_branches": "CSE", "teaching_semesters": "4"})
    emails = _emails(r)
    assert "tcse4@example.com" not in emails
    assert all("password_hash" not in u for u in r.json["data"])


def test_session_teacher_assignments_used_by_default(client):
    client.post(
        "/api/register",
        json={"email": "teach@example.com", "password": "pw", "role": "teacher", "teaching_branches": "ME", "teaching_semesters": "4"},
    )
    client.post("/api/login", json={"email": "teach@example.com", "password": "pw"})
    assert _emails(client.get("/api/my-students")) == ["me4@example.com"]
