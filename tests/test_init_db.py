from sqlalchemy import create_engine, inspect

from scripts.init_db import seed_only


def test_seed_only_is_idempotent(tmp_path, monkeypatch):
    monkeypatch.setenv("PASSWORD_HASH_METHOD", "pbkdf2:sha256:1000")
    monkeypatch.delenv("SEED_ADMIN_PASSWORD", raising=False)
    url = f"sqlite:///{tmp_path/'cli.db'}"

    assert sorted(seed_only(database_url=url)) == ["geek@rjit.com", "innovator@rjit.com", "manthan@rjit.com"]
    assert seed_only(database_url=url) == []

    tables = set(inspect(create_engine(url)).get_table_names())
    assert {"users", "posts", "comments", "post_audiences", "teaching_assignments"} <= tables
