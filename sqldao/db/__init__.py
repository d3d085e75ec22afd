"""Database access layer (DAL) for sqldao.

This sub-package encapsulates the pooled SQLite query service and the SQL
statement builders so that the DAO layer never touches connections directly.
"""

from sqldao.db.connection import QueryResult, SqliteService
from sqldao.db.service_factory import SqliteServiceFactory

__all__ = ["QueryResult", "SqliteService", "SqliteServiceFactory"]
