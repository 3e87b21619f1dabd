"""
Database Adapters for phoenix-db

Each adapter wraps one DB-API driver and handles:
- Connection management
- Parameter placeholder conversion
- Transactions
- Primary key lookup

Supported Engines:
- MySQL / MariaDB (mysql-connector-python)
- SQLite (built-in, zero dependencies)
"""

from phoenix_db.adapters.base import AdapterError, BaseAdapter, ConnectionError, QueryError
from phoenix_db.adapters.factory import (
    get_adapter,
    register_adapter,
    list_adapters,
    is_engine_supported,
)

__all__ = [
    "AdapterError",
    "BaseAdapter",
    "ConnectionError",
    "QueryError",
    "get_adapter",
    "register_adapter",
    "list_adapters",
    "is_engine_supported",
]
