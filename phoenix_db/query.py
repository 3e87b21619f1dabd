"""
Query

Wraps one prepared statement on a connection.

Lifecycle:
    created (statement prepared) -> executed (may be fetched, may be re-executed)

Placeholders are ? (positional, params as a sequence) or :name (named,
params as a mapping); the adapter converts them to the driver's paramstyle.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from phoenix_db.adapters.base import Parameters, QueryError
from phoenix_db.context import ConnectionContext, resolve_connection
from phoenix_db.errors import query_not_executed

if TYPE_CHECKING:
    from phoenix_db.connection import Connection

logger = logging.getLogger(__name__)


class Query:
    """
    A prepared statement bound to a connection.

    Args:
        connection: Connection to run on
        sql: SQL with ? or :name placeholders
        params: Parameters used when execute=True
        execute: Execute right away (default: False)

    Example:
        query = Query(db, "SELECT id, name FROM users WHERE name LIKE ?")
        query.execute(["A%"])
        rows = query.fetch_all_records()
    """

    def __init__(
        self,
        connection: "Connection",
        sql: str,
        params: Parameters = None,
        execute: bool = False,
    ):
        self.connection = connection
        self.sql = sql
        self.statement = connection.adapter.convert_placeholders(sql)
        self._cursor = connection.adapter.cursor()
        self.executed = False
        self.row_count = -1
        self.last_insert_id: Optional[Any] = None

        if execute:
            self.execute(params)

    def execute(self, params: Parameters = None) -> bool:
        """
        Bind parameters and run the statement.

        Raises:
            QueryError: If the driver rejects the statement
        """
        adapter = self.connection.adapter
        bound = adapter.bind_parameters(params)

        logger.debug(f"Executing on {adapter.ENGINE}: {self.statement}")
        try:
            if bound:
                self._cursor.execute(self.statement, bound)
            else:
                self._cursor.execute(self.statement)
        except Exception as e:
            raise QueryError(
                f"{adapter.ENGINE} query failed: {e}",
                engine=adapter.ENGINE,
                original_error=e
            )

        self.executed = True
        self.row_count = self._cursor.rowcount
        self.last_insert_id = self._cursor.lastrowid
        self.connection._track_insert_id(self.last_insert_id)
        return True

    # -------------------------------------------------------------------------
    # Fetching
    # -------------------------------------------------------------------------

    def _columns(self) -> Optional[List[str]]:
        if not self.executed:
            raise query_not_executed(self.sql)
        description = self._cursor.description
        if not description:
            return None
        return [desc[0] for desc in description]

    def fetch_record(self) -> Optional[Dict[str, Any]]:
        """Next row as a dict, or None when exhausted."""
        columns = self._columns()
        if columns is None:
            return None
        row = self._cursor.fetchone()
        return dict(zip(columns, row)) if row is not None else None

    def fetch_all_records(self) -> List[Dict[str, Any]]:
        """Remaining rows as dicts."""
        columns = self._columns()
        if columns is None:
            return []
        return [dict(zip(columns, row)) for row in self._cursor.fetchall()]

    def fetch_field(self) -> Any:
        """First column of the next row, or None when exhausted."""
        if self._columns() is None:
            return None
        row = self._cursor.fetchone()
        return row[0] if row is not None else None

    def fetch_all_fields(self) -> List[Any]:
        """First column of every remaining row."""
        if self._columns() is None:
            return []
        return [row[0] for row in self._cursor.fetchall()]

    # -------------------------------------------------------------------------
    # One-shot helpers
    # -------------------------------------------------------------------------

    @classmethod
    def _run(cls, sql, params, connection, context) -> "Query":
        query = cls(resolve_connection(connection, context), sql)
        try:
            query.execute(params)
        except Exception:
            query.close()
            raise
        return query

    @classmethod
    def get_record(
        cls,
        sql: str,
        params: Parameters = None,
        *,
        connection: Optional["Connection"] = None,
        context: Optional[ConnectionContext] = None,
    ) -> Optional[Dict[str, Any]]:
        with cls._run(sql, params, connection, context) as query:
            return query.fetch_record()

    @classmethod
    def get_records(
        cls,
        sql: str,
        params: Parameters = None,
        *,
        connection: Optional["Connection"] = None,
        context: Optional[ConnectionContext] = None,
    ) -> List[Dict[str, Any]]:
        with cls._run(sql, params, connection, context) as query:
            return query.fetch_all_records()

    @classmethod
    def get_field(
        cls,
        sql: str,
        params: Parameters = None,
        *,
        connection: Optional["Connection"] = None,
        context: Optional[ConnectionContext] = None,
    ) -> Any:
        with cls._run(sql, params, connection, context) as query:
            return query.fetch_field()

    @classmethod
    def get_fields(
        cls,
        sql: str,
        params: Parameters = None,
        *,
        connection: Optional["Connection"] = None,
        context: Optional[ConnectionContext] = None,
    ) -> List[Any]:
        with cls._run(sql, params, connection, context) as query:
            return query.fetch_all_fields()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self) -> None:
        try:
            self._cursor.close()
        except Exception as e:
            logger.warning(f"Error closing cursor: {e}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def __repr__(self) -> str:
        state = "executed" if self.executed else "created"
        return f"<Query {state}: {self.sql!r}>"
