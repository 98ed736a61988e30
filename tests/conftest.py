"""Shared fixtures."""

import pytest


@pytest.fixture
def temp_db(tmp_path, monkeypatch):
    """Point the engine at a fresh SQLite file for one test."""
    db_path = tmp_path / "test.db"
    # Patch in both config and db.database (which imports by value)
    monkeypatch.setattr("config.DB_PATH", db_path)
    monkeypatch.setattr("config.DATA_DIR", tmp_path)
    monkeypatch.setattr("db.database.DB_PATH", db_path)
    monkeypatch.setattr("db.database.DATA_DIR", tmp_path)
    monkeypatch.setattr("db.database.DATABASE_URL", "")

    import db.database as db_mod
    db_mod._engine = None
    db_mod._SessionFactory = None

    db_mod.init_db()
    yield db_path

    db_mod._engine = None
    db_mod._SessionFactory = None
