"""
Tests for Query lifecycle and fetch shapes.
"""

import pytest

from phoenix_db import NoConnectionError, Query, QueryError, QueryNotExecutedError


class TestLifecycle:
    """Tests for created -> executed."""

    @pytest.mark.parametrize("fetch", [
        "fetch_record", "fetch_all_records", "fetch_field", "fetch_all_fields",
    ])
    def test_fetch_before_execute(self, db, fetch):
        """Every fetch fails until execute() ran."""
        query = db.prepare("SELECT 1")
        assert not query.executed
        with pytest.raises(QueryNotExecutedError):
            getattr(query, fetch)()

    def test_execute_marks_executed(self, db):
        """execute() returns True and flips the state."""
        query = Query(db, "SELECT 1 AS one")
        assert query.execute() is True
        assert query.executed
        assert query.fetch_record() == {"one": 1}

    def test_execute_in_constructor(self, db, users):
        """execute=True runs the statement right away."""
        query = Query(db, "SELECT name FROM users WHERE id = ?", [users[1]], execute=True)
        assert query.fetch_field() == "Bo"

    def test_reexecute_returns_full_result(self, db, users):
        """Each fresh execution yields the whole result set again."""
        query = db.prepare("SELECT name FROM users ORDER BY id")
        query.execute()
        assert query.fetch_all_fields() == ["Ann", "Bo"]
        assert query.fetch_all_fields() == []
        query.execute()
        assert query.fetch_all_fields() == ["Ann", "Bo"]

    def test_prepared_statement_reused(self, db):
        """One prepared INSERT runs for many parameter sets."""
        with db.prepare("INSERT INTO logs (message) VALUES (?)") as query:
            for message in ("a", "b", "c"):
                query.execute([message])
                assert query.row_count == 1
        assert db.get_fields("SELECT message FROM logs") == ["a", "b", "c"]

    def test_failed_execute_stays_created(self, db):
        """A driver error leaves the query unexecuted."""
        query = db.prepare("INSERT INTO users (name) VALUES (?)")
        with pytest.raises(QueryError):
            query.execute([None])
        assert not query.executed


class TestFetch:
    """Tests for fetch shapes."""

    def test_fetch_record_iterates(self, db, users):
        """fetch_record walks the result one row at a time."""
        query = Query(db, "SELECT name FROM users ORDER BY id", execute=True)
        assert query.fetch_record() == {"name": "Ann"}
        assert query.fetch_record() == {"name": "Bo"}
        assert query.fetch_record() is None

    def test_fetch_all_records(self, db, users):
        """All rows as dicts."""
        query = Query(db, "SELECT id, name FROM users ORDER BY id", execute=True)
        assert query.fetch_all_records() == [
            {"id": users[0], "name": "Ann"},
            {"id": users[1], "name": "Bo"},
        ]

    def test_no_result_set(self, db, users):
        """Statements without a result set fetch nothing."""
        query = Query(db, "UPDATE users SET name = 'x'", execute=True)
        assert query.row_count == 2
        assert query.fetch_record() is None
        assert query.fetch_field() is None
        assert query.fetch_all_records() == []
        assert query.fetch_all_fields() == []


class TestOneShotHelpers:
    """Tests for the Query.get_* class helpers."""

    def test_explicit_connection(self, db, users):
        """An explicit connection is used."""
        assert Query.get_fields("SELECT name FROM users ORDER BY id", connection=db) == ["Ann", "Bo"]

    def test_context_connection(self, db, context, users):
        """The context's default connection is used."""
        context.register(db)
        assert Query.get_field("SELECT COUNT(*) FROM users", context=context) == 2
        assert Query.get_record("SELECT name FROM users WHERE id = ?", [users[0]], context=context) == {
            "name": "Ann"
        }
        assert len(Query.get_records("SELECT * FROM users", context=context)) == 2

    def test_no_connection(self, context):
        """Without connection nor registered context, it fails."""
        with pytest.raises(NoConnectionError):
            Query.get_records("SELECT 1")
        with pytest.raises(NoConnectionError):
            Query.get_records("SELECT 1", context=context)
