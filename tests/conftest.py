"""
Pytest configuration and shared fixtures for phoenix-db tests.
"""

import os

import pytest

from phoenix_db import ConnectionContext, Database

SCHEMA = [
    """
    CREATE TABLE users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        email TEXT UNIQUE
    )
    """,
    """
    CREATE TABLE logs (
        message TEXT
    )
    """,
    """
    CREATE TABLE memberships (
        user_id INTEGER NOT NULL,
        group_id INTEGER NOT NULL,
        role TEXT,
        PRIMARY KEY (user_id, group_id)
    )
    """,
]


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep PHOENIX_DB_* variables and .env files out of the tests."""
    for key in list(os.environ):
        if key.upper().startswith("PHOENIX_DB_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def db():
    """In-memory SQLite database with the test schema."""
    database = Database("sqlite::memory:")
    for statement in SCHEMA:
        database.prepare(statement).execute()
    yield database
    database.close()


@pytest.fixture
def context():
    """Fresh connection context."""
    return ConnectionContext()


@pytest.fixture
def users(db):
    """Two users already stored; returns their ids."""
    return db.insert("users", [
        {"name": "Ann", "email": "ann@example.com"},
        {"name": "Bo", "email": "bo@example.com"},
    ])
