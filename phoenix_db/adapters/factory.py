"""
Adapter Factory for phoenix-db

Maps engine names to adapter classes and builds connected adapters.

Usage:
    from phoenix_db.adapters import get_adapter

    adapter = get_adapter("sqlite", {"database": ":memory:"})
"""

import logging
from typing import Any, Dict, List, Type

from phoenix_db.adapters.base import BaseAdapter
from phoenix_db.errors import configuration_error

logger = logging.getLogger(__name__)


# =============================================================================
# ADAPTER REGISTRY
# =============================================================================

# Map of engine name -> adapter class
_ADAPTER_REGISTRY: Dict[str, Type[BaseAdapter]] = {}


def register_adapter(engine: str, adapter_class: Type[BaseAdapter]) -> None:
    """
    Register an adapter class for an engine.

    Args:
        engine: Engine identifier (e.g., "mysql", "sqlite")
        adapter_class: Adapter class to use for this engine
    """
    _ADAPTER_REGISTRY[engine.lower()] = adapter_class
    logger.debug(f"Registered adapter for engine: {engine}")


def list_adapters() -> List[str]:
    """Get list of registered adapter engines."""
    return list(_ADAPTER_REGISTRY.keys())


def is_engine_supported(engine: str) -> bool:
    """Check if an engine has a registered adapter."""
    return engine.lower() in _ADAPTER_REGISTRY


# =============================================================================
# ADAPTER FACTORY
# =============================================================================

def get_adapter(engine: str, config: Dict[str, Any], connect: bool = True) -> BaseAdapter:
    """
    Get an adapter instance for the specified engine.

    Args:
        engine: Database engine name (e.g., "mysql", "sqlite")
        config: Connection configuration dict
        connect: Whether to open the connection before returning (default: True)

    Returns:
        Adapter instance, connected unless connect=False

    Raises:
        ConfigurationError: If engine not supported
        ConnectionError: If connection fails
    """
    engine_lower = engine.lower()

    if engine_lower not in _ADAPTER_REGISTRY:
        available = ", ".join(list_adapters())
        raise configuration_error(
            f"Unsupported engine: {engine}. Available: {available}",
            engine=engine
        )

    adapter = _ADAPTER_REGISTRY[engine_lower](config)
    if connect:
        adapter.connect()
    return adapter


# =============================================================================
# AUTO-REGISTER BUILT-IN ADAPTERS
# =============================================================================

def _register_builtin_adapters():
    """Register all built-in adapters."""

    # SQLite (built-in, no dependencies)
    from phoenix_db.adapters.sqlite_adapter import SQLiteAdapter, SQLite3Adapter
    register_adapter("sqlite", SQLiteAdapter)
    register_adapter("sqlite3", SQLite3Adapter)  # Alias

    # MySQL
    try:
        from phoenix_db.adapters.mysql_adapter import MySQLAdapter, MariaDBAdapter
        register_adapter("mysql", MySQLAdapter)
        register_adapter("mariadb", MariaDBAdapter)  # MariaDB compatible
    except ImportError as e:
        logger.debug(f"MySQL adapter not available: {e}")


# Register on module load
_register_builtin_adapters()
