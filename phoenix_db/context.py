"""
Connection Context

A caller-owned holder for the default connection. The first connection
registered in a context stays its default, so code that shares the context
can run queries without passing a connection around.

Usage:
    context = ConnectionContext()
    db = Database("sqlite::memory:", context=context)

    Query.get_records("SELECT * FROM users", context=context)
"""

import logging
from typing import TYPE_CHECKING, Optional

from phoenix_db.errors import no_connection

if TYPE_CHECKING:
    from phoenix_db.connection import Connection

logger = logging.getLogger(__name__)


class ConnectionContext:
    """Remembers the first connection registered in it."""

    def __init__(self):
        self._first: Optional["Connection"] = None

    @property
    def has_connection(self) -> bool:
        return self._first is not None

    def register(self, connection: "Connection") -> "Connection":
        """Register a connection; ignored if the context already has one."""
        if self._first is None:
            self._first = connection
            logger.debug(f"Default connection set: {connection.settings.dsn}")
        return connection

    def get_connection(self) -> "Connection":
        """
        Get the first registered connection.

        Raises:
            NoConnectionError: If no connection was registered yet
        """
        if self._first is None:
            raise no_connection()
        return self._first

    def clear(self) -> None:
        self._first = None


def resolve_connection(
    connection: Optional["Connection"] = None,
    context: Optional[ConnectionContext] = None,
) -> "Connection":
    """Pick the explicit connection, else the context's default one."""
    if connection is not None:
        return connection
    if context is None:
        raise no_connection()
    return context.get_connection()
