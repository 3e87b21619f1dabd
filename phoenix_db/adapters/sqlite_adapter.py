"""
SQLite Adapter for phoenix-db

SQLite is ideal for:
- Local development and testing
- Single-file embedded databases
- Quick prototyping

Requirements:
    None - sqlite3 is included in Python standard library
"""

import os
import logging
import sqlite3
from pathlib import Path
from typing import Any, Dict, Optional

from phoenix_db.adapters.base import BaseAdapter, ConnectionError, QueryError

logger = logging.getLogger(__name__)


class SQLiteAdapter(BaseAdapter):
    """
    Adapter for SQLite databases.

    Supports file-based and in-memory SQLite databases. The connection runs
    with isolation_level=None, so statements outside begin()/commit() are
    committed immediately.

    Config options:
        database: Path to SQLite file or ':memory:' (required)
        read_only: Open in read-only mode (default: False)
        timeout: Connection timeout in seconds (default: 30)
        foreign_keys: Enable foreign key constraints (default: True)

    Example (In-Memory):
        adapter = SQLiteAdapter({
            "database": ":memory:"
        })
    """

    ENGINE = "sqlite"
    PLACEHOLDER = "?"  # SQLite understands ? and :name natively

    def __init__(self, config: Dict[str, Any]):
        """Initialize SQLite adapter."""
        super().__init__(config)

        if not config.get("database"):
            raise ConnectionError(
                "Missing required config: database",
                engine=self.ENGINE
            )

        self.database = config["database"]
        self.is_memory = self.database == ":memory:"

        self.read_only = config.get("read_only", False)
        self.timeout = config.get("timeout", 30.0)
        self.foreign_keys = config.get("foreign_keys", True)

        if self.read_only and not self.is_memory and not os.path.exists(self.database):
            raise ConnectionError(
                f"Database file not found: {self.database}",
                engine=self.ENGINE
            )

    def _get_uri(self) -> str:
        """Build read-only SQLite URI for connection."""
        path = Path(self.database).absolute()
        return f"file:{path}?mode=ro"

    def connect(self) -> None:
        """Connect to SQLite database."""
        try:
            if self.read_only and not self.is_memory:
                self._connection = sqlite3.connect(
                    self._get_uri(),
                    uri=True,
                    timeout=self.timeout,
                    isolation_level=None,
                )
            else:
                self._connection = sqlite3.connect(
                    self.database,
                    timeout=self.timeout,
                    isolation_level=None,
                )

            if self.foreign_keys:
                self._connection.execute("PRAGMA foreign_keys = ON")

            self._connected = True
            logger.info(f"SQLite connected: {self.database}")

        except Exception as e:
            raise ConnectionError(
                f"Failed to connect to SQLite: {e}",
                engine=self.ENGINE,
                original_error=e
            )

    def disconnect(self) -> None:
        """Close SQLite connection."""
        try:
            if self._connection:
                self._connection.close()
                self._connection = None
        except Exception as e:
            logger.warning(f"Error closing SQLite connection: {e}")
        finally:
            self._connected = False

    def cursor(self):
        return self._require_connection().cursor()

    def begin(self) -> None:
        self._require_connection().execute("BEGIN")

    def get_primary_key(self, table: str) -> Optional[str]:
        """Read the primary key from PRAGMA table_info (first column of a composite key)."""
        cursor = self.cursor()
        try:
            cursor.execute(f"PRAGMA table_info(`{table}`)")
            # cid, name, type, notnull, dflt_value, pk
            columns = [row for row in cursor.fetchall() if row[5]]
        except sqlite3.Error as e:
            raise QueryError(
                f"SQLite query failed: {e}",
                engine=self.ENGINE,
                original_error=e
            )
        finally:
            cursor.close()

        if not columns:
            return None
        return min(columns, key=lambda row: row[5])[1]

    def health_check(self) -> bool:
        """Check SQLite connection health."""
        if not self._connected:
            return False

        cursor = None
        try:
            cursor = self._connection.cursor()
            cursor.execute("SELECT 1")
            cursor.fetchone()
            return True
        except sqlite3.Error:
            return False
        finally:
            if cursor:
                cursor.close()


# Aliases
SQLite3Adapter = SQLiteAdapter
