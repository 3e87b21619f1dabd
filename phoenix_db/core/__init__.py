"""
Core Components

Configuration.
"""

from phoenix_db.core.config import DatabaseSettings

__all__ = [
    "DatabaseSettings",
]
