"""
phoenix-db - Structured Errors

Every error raised by this package derives from PhoenixDBError and carries a
unique code, so failures can be searched in logs and handled by kind.

ERROR FORMAT:
-------------
{
    "error": {
        "code": "ERR_1001",
        "message": "Not allowed character in table name: `",
        "details": {"kind": "table", "name": "us`ers"},
        "suggestion": "Remove the backtick from the identifier"
    }
}
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


# =============================================================================
# ERROR CODES
# =============================================================================

class ErrorCode(str, Enum):
    """Unique error codes for every error type."""

    # Input validation (1xxx)
    ERR_ILLEGAL_CHARACTER = "ERR_1001"
    ERR_INVALID_RECORDS = "ERR_1002"

    # Table metadata (2xxx)
    ERR_NO_PRIMARY_KEY = "ERR_2001"
    ERR_MISSING_PRIMARY_KEY_FIELD = "ERR_2002"

    # Query lifecycle (3xxx)
    ERR_QUERY_NOT_EXECUTED = "ERR_3001"

    # Connection context (4xxx)
    ERR_NO_CONNECTION = "ERR_4001"

    # Configuration (5xxx)
    ERR_CONFIGURATION = "ERR_5001"

    # Driver (6xxx)
    ERR_CONNECTION_FAILED = "ERR_6001"
    ERR_QUERY_FAILED = "ERR_6002"


# =============================================================================
# BASE ERROR
# =============================================================================

class PhoenixDBError(Exception):
    """
    Structured error with the context needed for debugging.

    Attributes:
        code: Unique error code for searching logs
        message: Human-readable error message
        details: Additional context (dict)
        suggestion: How to fix the issue
    """

    default_code = ErrorCode.ERR_QUERY_FAILED

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestion: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}
        self.suggestion = suggestion

    def to_dict(self) -> Dict[str, Any]:
        error_dict = {
            "code": self.code.value,
            "message": self.message,
        }

        if self.details:
            error_dict["details"] = self.details

        if self.suggestion:
            error_dict["suggestion"] = self.suggestion

        return {"error": error_dict}

    def log(self, level: str = "error"):
        """Log the error with context."""
        log_msg = f"[{self.code.value}] {self.message}"
        if self.details:
            log_msg += f" | details={self.details}"

        getattr(logger, level)(log_msg)


class IllegalCharacterError(PhoenixDBError):
    """A table or field name contains the identifier quote character."""
    default_code = ErrorCode.ERR_ILLEGAL_CHARACTER


class InvalidRecordsError(PhoenixDBError):
    """Records passed to insert/update cannot form a single statement."""
    default_code = ErrorCode.ERR_INVALID_RECORDS


class NoPrimaryKeyError(PhoenixDBError):
    """The target table has no primary key."""
    default_code = ErrorCode.ERR_NO_PRIMARY_KEY


class MissingPrimaryKeyFieldError(PhoenixDBError):
    """A record passed to update does not carry the primary key."""
    default_code = ErrorCode.ERR_MISSING_PRIMARY_KEY_FIELD


class QueryNotExecutedError(PhoenixDBError):
    """A fetch was attempted on a query that has not been executed."""
    default_code = ErrorCode.ERR_QUERY_NOT_EXECUTED


class NoConnectionError(PhoenixDBError):
    """No connection has been registered in the connection context."""
    default_code = ErrorCode.ERR_NO_CONNECTION


class ConfigurationError(PhoenixDBError):
    """Invalid DSN or unsupported engine."""
    default_code = ErrorCode.ERR_CONFIGURATION


# =============================================================================
# ERROR FACTORY FUNCTIONS
# =============================================================================

def illegal_character(kind: str, name: str) -> IllegalCharacterError:
    """Create illegal identifier error."""
    return IllegalCharacterError(
        f"Not allowed character in {kind} name: `",
        details={"kind": kind, "name": name},
        suggestion="Remove the backtick from the identifier",
    )


def invalid_records(reason: str, index: Optional[int] = None) -> InvalidRecordsError:
    """Create invalid records error."""
    details = {"reason": reason}
    if index is not None:
        details["index"] = index

    return InvalidRecordsError(
        f"Invalid records: {reason}" + (f" (index {index})" if index is not None else ""),
        details=details,
        suggestion="Every record of a batch must be a dict with exactly the same fields",
    )


def no_primary_key(table: str) -> NoPrimaryKeyError:
    """Create no primary key error."""
    return NoPrimaryKeyError(
        f"No primary key in {table}",
        details={"table": table},
        suggestion=f"Add a PRIMARY KEY to '{table}' or use a raw query",
    )


def missing_primary_key_field(primary_key: str, index: int) -> MissingPrimaryKeyFieldError:
    """Create missing primary key field error."""
    return MissingPrimaryKeyFieldError(
        f'Missing key "{primary_key}" in records at index {index}',
        details={"primary_key": primary_key, "index": index},
        suggestion=f"Every record passed to update must set '{primary_key}'",
    )


def query_not_executed(sql: str) -> QueryNotExecutedError:
    """Create query not executed error."""
    return QueryNotExecutedError(
        "Query has not been executed yet",
        details={"sql": sql},
        suggestion="Call execute() before fetching",
    )


def no_connection() -> NoConnectionError:
    """Create no connection error."""
    return NoConnectionError(
        "No connection established yet",
        suggestion="Open a Connection with context=... or pass connection= explicitly",
    )


def configuration_error(message: str, **details: Any) -> ConfigurationError:
    """Create configuration error."""
    return ConfigurationError(message, details=details)
