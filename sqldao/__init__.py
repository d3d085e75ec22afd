"""Generic async data-access objects over SQLite.

The package maps declared value objects to table rows through an explicit
field-to-column table and runs every statement through a pooled
`aiosqlite` query service.

Typical bootstrap:

    settings = get_settings()
    configure_logging(settings)
    service = SqliteServiceFactory.create_from_settings()
"""

from sqldao.config import AppSettings, DatabaseSettings, get_settings
from sqldao.dao import DaoArgs, DaoArgsFactory, FieldMap, SqliteDao, ValueObject
from sqldao.db import QueryResult, SqliteService, SqliteServiceFactory
from sqldao.exceptions import (
    ConnectionPoolTimeout,
    DaoArgsError,
    DaoError,
    InvalidPayloadError,
    UnknownFieldError,
)
from sqldao.utils.logging_utils import configure_logging

__all__ = [
    "AppSettings",
    "ConnectionPoolTimeout",
    "DaoArgs",
    "DaoArgsError",
    "DaoArgsFactory",
    "DaoError",
    "DatabaseSettings",
    "FieldMap",
    "InvalidPayloadError",
    "QueryResult",
    "SqliteDao",
    "SqliteService",
    "SqliteServiceFactory",
    "UnknownFieldError",
    "ValueObject",
    "configure_logging",
    "get_settings",
]
