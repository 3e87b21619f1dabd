"""
Constructor functions

Build a Database or Connection from settings instead of subclassing per
engine.

Usage:
    db = connect(DatabaseSettings(engine="sqlite", database=":memory:"))
    db = mysql_database("localhost", "shop", "app", "secret")
"""

from typing import Any, Optional

from phoenix_db.connection import Connection
from phoenix_db.context import ConnectionContext
from phoenix_db.core.config import DatabaseSettings
from phoenix_db.database import Database


def _settings(settings: Optional[DatabaseSettings], overrides: dict) -> DatabaseSettings:
    if settings is None:
        return DatabaseSettings.build(**overrides)
    if overrides:
        return DatabaseSettings.build(**{**settings.model_dump(), **overrides})
    return settings


def connect(
    settings: Optional[DatabaseSettings] = None,
    *,
    context: Optional[ConnectionContext] = None,
    **overrides: Any,
) -> Database:
    """
    Open a Database.

    Args:
        settings: Connection settings (default: read from PHOENIX_DB_* env vars)
        context: ConnectionContext to register the connection in
        **overrides: Settings fields to override

    Raises:
        ConfigurationError: An override is not a settings field or is invalid

    Example:
        db = connect(engine="sqlite", database="app.db")
    """
    return Database(_settings(settings, overrides), context=context)


def mysql_database(
    host: str,
    database: str,
    username: str,
    password: str,
    *,
    context: Optional[ConnectionContext] = None,
    **options: Any,
) -> Database:
    """Open a Database on a MySQL host/database pair."""
    return connect(
        engine="mysql",
        host=host,
        database=database,
        user=username,
        password=password,
        context=context,
        **options,
    )


def mysql_connection(
    host: str,
    database: str,
    username: str,
    password: str,
    *,
    context: Optional[ConnectionContext] = None,
    **options: Any,
) -> Connection:
    """Open a plain Connection on a MySQL host/database pair."""
    settings = DatabaseSettings.build(
        engine="mysql",
        host=host,
        database=database,
        user=username,
        password=password,
        **options,
    )
    return Connection(settings, context=context)
