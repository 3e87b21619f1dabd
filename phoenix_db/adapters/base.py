"""
Base Adapter Interface for phoenix-db

Every database driver is wrapped by an adapter implementing this interface,
so Connection, Query and Database stay engine-agnostic.

DESIGN PRINCIPLES:
-----------------
1. One adapter holds one driver connection (no pooling)
2. Queries use ? (positional) or :name (named) placeholders; adapters convert
3. Transactions are explicit: begin / commit / rollback
4. Driver errors are wrapped in AdapterError subclasses
5. Connection config is passed on init
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from phoenix_db.errors import ErrorCode, PhoenixDBError

logger = logging.getLogger(__name__)

Parameters = Union[Sequence[Any], Mapping[str, Any], None]


class AdapterError(PhoenixDBError):
    """Base exception for adapter errors."""

    def __init__(self, message: str, engine: str, original_error: Optional[Exception] = None):
        super().__init__(message, details={"engine": engine})
        self.engine = engine
        self.original_error = original_error


class ConnectionError(AdapterError):
    """Failed to connect to database."""
    default_code = ErrorCode.ERR_CONNECTION_FAILED


class QueryError(AdapterError):
    """Query execution failed."""
    default_code = ErrorCode.ERR_QUERY_FAILED


class BaseAdapter(ABC):
    """
    Abstract base class for database adapters.

    Each adapter must implement:
    - connect(): Establish database connection
    - disconnect(): Close connection
    - cursor(): Create a driver cursor
    - begin(): Start a transaction
    - get_primary_key(): Read the primary key column of a table
    - health_check(): Verify connection is alive

    Usage:
        adapter = SQLiteAdapter({"database": ":memory:"})
        adapter.connect()

        cursor = adapter.cursor()
        cursor.execute(adapter.convert_placeholders("SELECT ?"), adapter.bind_parameters([1]))

        adapter.disconnect()
    """

    # Engine identifier (e.g., "mysql", "sqlite")
    ENGINE: str = "base"

    # Placeholder format used by this engine
    PLACEHOLDER: str = "?"

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize adapter with connection configuration.

        Args:
            config: Database-specific configuration dict
                    (host, port, user, password, database, etc.)
        """
        self.config = config
        self._connection = None
        self._connected = False
        self._last_used = None

    @abstractmethod
    def connect(self) -> None:
        """
        Establish connection to database.

        Raises:
            ConnectionError: If connection fails
        """
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """
        Close database connection.

        Should be safe to call even if not connected.
        """
        pass

    @abstractmethod
    def cursor(self):
        """Create a new DB-API cursor on the live connection."""
        pass

    @abstractmethod
    def begin(self) -> None:
        """Start a transaction."""
        pass

    @abstractmethod
    def get_primary_key(self, table: str) -> Optional[str]:
        """
        Look up the primary key column of a table.

        The table name must already be validated (no backtick).

        Returns:
            Column name, or None if the table has no primary key
        """
        pass

    @abstractmethod
    def health_check(self) -> bool:
        """
        Check if connection is alive and usable.

        Returns:
            True if connection is healthy, False otherwise
        """
        pass

    def commit(self) -> None:
        self._require_connection().commit()

    def rollback(self) -> None:
        self._require_connection().rollback()

    def convert_placeholders(self, sql: str) -> str:
        """
        Convert ? and :name placeholders to engine-specific format.

        Default implementation returns sql unchanged.
        """
        return sql

    def bind_parameters(self, params: Parameters = None) -> Union[tuple, dict]:
        """Normalize parameters to what the driver expects."""
        if params is None:
            return ()
        if isinstance(params, Mapping):
            return dict(params)
        if isinstance(params, (str, bytes)):
            return (params,)
        return tuple(params)

    def is_connected(self) -> bool:
        """Check if adapter has an active connection."""
        return self._connected

    def get_engine_info(self) -> Dict[str, Any]:
        """Get information about this adapter/engine."""
        return {
            "engine": self.ENGINE,
            "connected": self._connected,
            "placeholder": self.PLACEHOLDER,
            "last_used": self._last_used.isoformat() if self._last_used else None
        }

    def _require_connection(self):
        if not self._connected or self._connection is None:
            raise QueryError(
                f"Not connected to {self.ENGINE}",
                engine=self.ENGINE
            )
        self._update_last_used()
        return self._connection

    def _update_last_used(self):
        """Update last used timestamp."""
        self._last_used = datetime.now(timezone.utc)

    def __enter__(self):
        """Context manager support."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager cleanup."""
        self.disconnect()
        return False
