"""
MySQL Adapter for phoenix-db

Covers MySQL and MariaDB through mysql-connector-python.

Features:
- SSL/TLS encryption
- ? / :name placeholders converted to %s / %(name)s
- Buffered cursors, so a new statement can run before a result is drained
"""

import re
import logging
from typing import Any, Dict, Optional

import mysql.connector

from phoenix_db.adapters.base import BaseAdapter, ConnectionError, QueryError

logger = logging.getLogger(__name__)

# Quoted literals and backticked identifiers are copied verbatim
_PLACEHOLDER_RE = re.compile(
    r"""('(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*"|`[^`]*`)"""
    r"""|(\?)"""
    r"""|(?<![:\w]):([A-Za-z_][A-Za-z0-9_]*)"""
)


def _replace_placeholder(match: "re.Match") -> str:
    literal, positional, named = match.groups()
    if literal is not None:
        return literal
    if positional is not None:
        return "%s"
    return f"%({named})s"


class MySQLAdapter(BaseAdapter):
    """
    Adapter for MySQL database.

    Config options:
        host: MySQL server host (required)
        port: MySQL port (default: 3306)
        database: Database name (required)
        user: Username (required)
        password: Password (required)

        # Connection settings
        charset: Character set (default: utf8mb4)
        collation: Collation (default: utf8mb4_unicode_ci)
        use_pure: Use pure Python implementation (default: False)
        connect_timeout: Connection timeout in seconds (default: 10)
        autocommit: Enable autocommit (default: True)

        # SSL settings
        ssl_disabled: Disable SSL (default: False)
        ssl_ca: Path to CA certificate
        ssl_verify_cert: Verify server certificate (default: True)

    Example:
        adapter = MySQLAdapter({
            "host": "mysql.example.com",
            "database": "shop",
            "user": "app",
            "password": "secret"
        })

        adapter.connect()
        cursor = adapter.cursor()
        cursor.execute(adapter.convert_placeholders("SELECT * FROM orders WHERE id = ?"), (1,))
    """

    ENGINE = "mysql"
    PLACEHOLDER = "%s"  # MySQL uses %s for parameters

    def __init__(self, config: Dict[str, Any]):
        """Initialize MySQL adapter."""
        super().__init__(config)

        # Validate required config
        required = ["host", "database", "user", "password"]
        missing = [k for k in required if config.get(k) is None]
        if missing:
            raise ConnectionError(
                f"Missing required config: {', '.join(missing)}",
                engine=self.ENGINE
            )

        self.host = config["host"]
        self.port = config.get("port", 3306)
        self.database = config["database"]
        self.user = config["user"]
        self.password = config["password"]

        # Connection settings
        self.charset = config.get("charset", "utf8mb4")
        self.collation = config.get("collation", "utf8mb4_unicode_ci")
        self.use_pure = config.get("use_pure", False)
        self.connect_timeout = config.get("connect_timeout", 10)
        self.autocommit = config.get("autocommit", True)

        # SSL settings
        self.ssl_disabled = config.get("ssl_disabled", False)
        self.ssl_ca = config.get("ssl_ca")
        self.ssl_verify_cert = config.get("ssl_verify_cert", True)

    def _build_connection_params(self) -> Dict[str, Any]:
        """Build connection parameters dict."""
        params = {
            "host": self.host,
            "port": self.port,
            "database": self.database,
            "user": self.user,
            "password": self.password,
            "charset": self.charset,
            "collation": self.collation,
            "use_pure": self.use_pure,
            "connect_timeout": self.connect_timeout,
            "autocommit": self.autocommit,
        }

        if self.ssl_disabled:
            params["ssl_disabled"] = True
        elif self.ssl_ca:
            params["ssl_ca"] = self.ssl_ca
            params["ssl_verify_cert"] = self.ssl_verify_cert

        return params

    def connect(self) -> None:
        """Connect to MySQL."""
        try:
            logger.info(f"Connecting to MySQL: {self.host}:{self.port}/{self.database}")
            self._connection = mysql.connector.connect(**self._build_connection_params())
            self._connected = True
            logger.info(f"MySQL connected: {self.host}:{self.port}/{self.database}")

        except Exception as e:
            raise ConnectionError(
                f"Failed to connect to MySQL: {e}",
                engine=self.ENGINE,
                original_error=e
            )

    def disconnect(self) -> None:
        """Close MySQL connection."""
        try:
            if self._connection:
                self._connection.close()
                self._connection = None
        except Exception as e:
            logger.warning(f"Error closing MySQL connection: {e}")
        finally:
            self._connected = False

    def cursor(self):
        return self._require_connection().cursor(buffered=True)

    def begin(self) -> None:
        self._require_connection().start_transaction()

    def convert_placeholders(self, sql: str) -> str:
        """
        Convert ? placeholders to %s and :name placeholders to %(name)s.
        """
        return _PLACEHOLDER_RE.sub(_replace_placeholder, sql)

    def get_primary_key(self, table: str) -> Optional[str]:
        """Read the primary key from SHOW KEYS (first column of a composite key)."""
        cursor = self._require_connection().cursor(buffered=True, dictionary=True)
        try:
            cursor.execute(f"SHOW KEYS FROM `{table}` WHERE Key_name = 'PRIMARY'")
            rows = cursor.fetchall()
        except mysql.connector.Error as e:
            raise QueryError(
                f"MySQL query failed: {e}",
                engine=self.ENGINE,
                original_error=e
            )
        finally:
            cursor.close()

        if not rows:
            return None
        rows.sort(key=lambda row: row.get("Seq_in_index", 1))
        return rows[0]["Column_name"]

    def health_check(self) -> bool:
        """Check MySQL connection health."""
        if not self._connected:
            return False

        cursor = None
        try:
            cursor = self._connection.cursor()
            cursor.execute("SELECT 1")
            cursor.fetchone()
            return True
        except mysql.connector.Error:
            return False
        finally:
            if cursor:
                cursor.close()


# MariaDB speaks the same protocol
MariaDBAdapter = MySQLAdapter
