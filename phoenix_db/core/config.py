"""
Configuration Management

Connection settings using Pydantic Settings. Values come from init kwargs,
then PHOENIX_DB_* environment variables, then a .env file.
"""

from typing import Any, Dict, Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from phoenix_db.errors import ConfigurationError, configuration_error

SQLITE_ENGINES = ("sqlite", "sqlite3")

# DSN key -> settings field
_DSN_KEYS = {
    "host": "host",
    "port": "port",
    "dbname": "database",
    "database": "database",
    "charset": "charset",
}


class DatabaseSettings(BaseSettings):
    """Connection settings for one database."""

    model_config = SettingsConfigDict(
        env_prefix="PHOENIX_DB_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    engine: str = "mysql"

    # Server engines
    host: str = "localhost"
    port: int = 3306
    database: str = ""
    user: str = ""
    password: str = Field(default="", repr=False)
    charset: str = "utf8mb4"
    collation: str = "utf8mb4_unicode_ci"
    connect_timeout: int = 10
    autocommit: bool = True
    use_pure: bool = False

    # SSL (server engines)
    ssl_disabled: bool = False
    ssl_ca: Optional[str] = None
    ssl_verify_cert: bool = True

    # SQLite
    read_only: bool = False
    timeout: float = 30.0

    @classmethod
    def from_dsn(
        cls,
        dsn: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        **overrides: Any,
    ) -> "DatabaseSettings":
        """
        Parse a data source name.

        Accepted forms:
            mysql:host=localhost;dbname=shop;port=3306;charset=utf8mb4
            mariadb:host=localhost;dbname=shop
            sqlite:/path/to/file.db
            sqlite::memory:

        Raises:
            ConfigurationError: If the DSN cannot be parsed
        """
        engine, sep, rest = dsn.partition(":")
        engine = engine.strip().lower()
        if not sep or not engine:
            raise configuration_error(f"Invalid DSN, missing engine prefix: {dsn}", dsn=dsn)

        values: Dict[str, Any] = {"engine": engine}

        if engine in SQLITE_ENGINES:
            if not rest:
                raise configuration_error(f"Invalid DSN, missing database path: {dsn}", dsn=dsn)
            values["database"] = rest
        else:
            for part in rest.split(";"):
                part = part.strip()
                if not part:
                    continue
                key, eq, value = part.partition("=")
                field_name = _DSN_KEYS.get(key.strip().lower())
                if not eq or field_name is None:
                    raise configuration_error(f"Invalid DSN entry '{part}' in {dsn}", dsn=dsn, entry=part)
                values[field_name] = value.strip()

        if username is not None:
            values["user"] = username
        if password is not None:
            values["password"] = password

        values.update(overrides)
        try:
            return cls.build(**values)
        except ConfigurationError as e:
            raise configuration_error(f"Invalid DSN {dsn}: {e.message}", dsn=dsn) from e

    @classmethod
    def build(cls, **values: Any) -> "DatabaseSettings":
        """
        Create settings from keyword values, rejecting unknown or invalid ones.

        Raises:
            ConfigurationError: If a name is not a settings field or a value is invalid
        """
        unknown = sorted(set(values) - set(cls.model_fields))
        if unknown:
            raise configuration_error(f"Unknown connection option(s): {', '.join(unknown)}", options=unknown)

        try:
            return cls(**values)
        except ValidationError as e:
            raise configuration_error(f"Invalid connection settings: {e}") from e

    @property
    def is_sqlite(self) -> bool:
        return self.engine.lower() in SQLITE_ENGINES

    @property
    def dsn(self) -> str:
        """Render the settings as a DSN (credentials excluded)."""
        if self.is_sqlite:
            return f"{self.engine}:{self.database}"

        parts = [f"host={self.host}", f"dbname={self.database}"]
        if self.port != 3306:
            parts.append(f"port={self.port}")
        return f"{self.engine}:" + ";".join(parts)

    def to_adapter_config(self) -> Dict[str, Any]:
        """Build the config dict expected by the engine's adapter."""
        if self.is_sqlite:
            return {
                "database": self.database,
                "read_only": self.read_only,
                "timeout": self.timeout,
            }

        return {
            "host": self.host,
            "port": self.port,
            "database": self.database,
            "user": self.user,
            "password": self.password,
            "charset": self.charset,
            "collation": self.collation,
            "connect_timeout": self.connect_timeout,
            "autocommit": self.autocommit,
            "use_pure": self.use_pure,
            "ssl_disabled": self.ssl_disabled,
            "ssl_ca": self.ssl_ca,
            "ssl_verify_cert": self.ssl_verify_cert,
        }
