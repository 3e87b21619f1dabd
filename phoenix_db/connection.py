"""
Connection

Holds one open database connection, built from a DSN plus credentials or
from DatabaseSettings, and exposes transactions and prepared queries.

Usage:
    conn = Connection("mysql:host=localhost;dbname=shop", "app", "secret")

    with conn.transaction():
        conn.prepare("UPDATE stock SET qty = qty - 1 WHERE id = ?").execute([3])

    conn.close()
"""

import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional, Union

from phoenix_db.adapters import AdapterError, QueryError, get_adapter
from phoenix_db.context import ConnectionContext
from phoenix_db.core.config import DatabaseSettings
from phoenix_db.query import Query

logger = logging.getLogger(__name__)


class Connection:
    """
    One live database connection.

    Args:
        dsn: DSN string (e.g. "mysql:host=localhost;dbname=shop") or DatabaseSettings
        username: Overrides the user from settings
        password: Overrides the password from settings
        context: ConnectionContext to register this connection in

    Raises:
        ConfigurationError: If the DSN is invalid or the engine unsupported
        ConnectionError: If the driver cannot connect
    """

    def __init__(
        self,
        dsn: Union[str, DatabaseSettings],
        username: Optional[str] = None,
        password: Optional[str] = None,
        *,
        context: Optional[ConnectionContext] = None,
    ):
        if isinstance(dsn, DatabaseSettings):
            overrides = {}
            if username is not None:
                overrides["user"] = username
            if password is not None:
                overrides["password"] = password
            settings = DatabaseSettings(**{**dsn.model_dump(), **overrides}) if overrides else dsn
        else:
            settings = DatabaseSettings.from_dsn(dsn, username, password)

        self.settings = settings
        self.adapter = get_adapter(settings.engine, settings.to_adapter_config())
        self._in_transaction = False
        self._last_insert_id: Optional[Any] = None

        if context is not None:
            context.register(self)

    # -------------------------------------------------------------------------
    # Statements
    # -------------------------------------------------------------------------

    def prepare(self, sql: str) -> Query:
        """Prepare a statement; returns an unexecuted Query."""
        return Query(self, sql)

    @property
    def last_insert_id(self) -> Optional[Any]:
        """Id generated by the most recent INSERT on this connection."""
        return self._last_insert_id

    def _track_insert_id(self, insert_id: Optional[Any]) -> None:
        if insert_id:
            self._last_insert_id = insert_id

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    @property
    def in_transaction(self) -> bool:
        return self._in_transaction

    def begin_transaction(self) -> None:
        self._driver_call("begin transaction", self.adapter.begin)
        self._in_transaction = True

    def commit(self) -> None:
        try:
            self._driver_call("commit", self.adapter.commit)
        finally:
            self._in_transaction = False

    def rollback(self) -> None:
        try:
            self._driver_call("rollback", self.adapter.rollback)
        finally:
            self._in_transaction = False

    @contextmanager
    def transaction(self) -> Iterator["Connection"]:
        """
        Run the block in a transaction; commit on success, roll back and
        re-raise on error.

        Inside an open transaction the block joins it: the outermost block
        commits or rolls back the whole unit, so table helpers such as
        Database.insert can run within a caller's transaction.
        """
        if self._in_transaction:
            yield self
            return

        self.begin_transaction()
        try:
            yield self
        except Exception as e:
            logger.warning(f"Rolling back transaction on {self.settings.dsn}: {e}")
            try:
                self.rollback()
            except AdapterError as rollback_error:
                logger.error(f"Rollback failed on {self.settings.dsn}: {rollback_error}")
            raise
        self.commit()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def ping(self) -> bool:
        """Check the connection is alive."""
        return self.adapter.health_check()

    def close(self) -> None:
        self.adapter.disconnect()
        self._in_transaction = False

    @property
    def closed(self) -> bool:
        return not self.adapter.is_connected()

    def _driver_call(self, action: str, func: Callable[[], None]) -> None:
        try:
            func()
        except AdapterError:
            raise
        except Exception as e:
            raise QueryError(
                f"Failed to {action}: {e}",
                engine=self.adapter.ENGINE,
                original_error=e
            )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.settings.dsn}>"
