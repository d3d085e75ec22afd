"""Exception hierarchy for the DAO layer.

Database driver errors (``sqlite3.Error`` and friends) are never wrapped; they
reach the caller unchanged. The classes below cover failures detected by the
DAO layer itself before or around a query.
"""

from __future__ import annotations

__all__ = [
    "DaoError",
    "DaoArgsError",
    "UnknownFieldError",
    "InvalidPayloadError",
    "ConnectionPoolTimeout",
]


class DaoError(Exception):
    """Base class for errors raised by the DAO layer."""


class DaoArgsError(DaoError, ValueError):
    """Raised at construction time when a DAO configuration bundle is malformed."""


class UnknownFieldError(DaoError, ValueError):
    """Raised when a payload or criteria mapping names a field the entity does not declare."""

    def __init__(self, table_name: str, field: str) -> None:
        super().__init__(f"Unknown field {field!r} for table {table_name!r}")
        self.table_name = table_name
        self.field = field


class InvalidPayloadError(DaoError, ValueError):
    """Raised when a write payload or its criteria cannot produce a safe statement."""


class ConnectionPoolTimeout(DaoError, RuntimeError):
    """Raised when no pooled connection becomes available in time."""
