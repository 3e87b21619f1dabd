"""
phoenix-db

A thin convenience layer over DB-API drivers: a connection wrapper, a query
executor and table-level CRUD helpers.

Example:
    from phoenix_db import connect

    db = connect(engine="sqlite", database=":memory:")
    db.get_records("SELECT 1 AS one")

    user_id = db.insert("users", {"name": "Ann"})
    ids = db.insert("users", [{"name": "Bo"}, {"name": "Cy"}])
"""

from phoenix_db.adapters import AdapterError, ConnectionError, QueryError
from phoenix_db.builders import connect, mysql_connection, mysql_database
from phoenix_db.connection import Connection
from phoenix_db.context import ConnectionContext
from phoenix_db.core.config import DatabaseSettings
from phoenix_db.database import Database
from phoenix_db.errors import (
    ConfigurationError,
    ErrorCode,
    IllegalCharacterError,
    InvalidRecordsError,
    MissingPrimaryKeyFieldError,
    NoConnectionError,
    NoPrimaryKeyError,
    PhoenixDBError,
    QueryNotExecutedError,
)
from phoenix_db.query import Query

__version__ = "1.0.0"
__all__ = [
    "connect",
    "mysql_database",
    "mysql_connection",
    "Connection",
    "ConnectionContext",
    "Database",
    "DatabaseSettings",
    "Query",
    # Errors
    "PhoenixDBError",
    "ErrorCode",
    "AdapterError",
    "ConnectionError",
    "QueryError",
    "ConfigurationError",
    "IllegalCharacterError",
    "InvalidRecordsError",
    "MissingPrimaryKeyFieldError",
    "NoConnectionError",
    "NoPrimaryKeyError",
    "QueryNotExecutedError",
]
