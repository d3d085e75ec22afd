"""
This file contains shared fixtures for the test suite.
"""

import logging
import os

import pytest
import pytest_asyncio

# Set env vars before any application modules are imported
os.environ.setdefault("TEST_MODE", "1")
os.environ.setdefault("DATABASE_PATH", ":memory:")
os.environ.setdefault("PYTHONIOENCODING", "utf-8")

from sqldao.db import SqliteService, SqliteServiceFactory  # noqa: E402
from sqldao.users import create_user_dao  # noqa: E402

USERS_SETUP_QUERIES = [
    "DROP TABLE IF EXISTS users",
    """
    CREATE TABLE IF NOT EXISTS users (
        id INTEGER NOT NULL PRIMARY KEY AUTOINCREMENT,
        first_name VARCHAR(100) NULL,
        last_name VARCHAR(100) NULL,
        email VARCHAR(255) NOT NULL,
        date_created TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,
]

USERS_TEARDOWN_QUERIES = ["DROP TABLE IF EXISTS users"]


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("tests.sqldao")


@pytest.fixture
def db_config(tmp_path):
    """Connection bundle in the shape server-backed deployments hand over."""
    return {
        "host": "localhost",
        "database": str(tmp_path / "sqldao-test.db"),
        "user": "sqldao",
        "password": "sqldao",
        "connectionLimit": 2,
        "timeout": 5,
    }


@pytest_asyncio.fixture
async def service(db_config, logger):
    """File-backed query service with a freshly created users table."""
    svc: SqliteService = SqliteServiceFactory.create_from_dict(db_config, logger)
    await svc.execute_queries(USERS_SETUP_QUERIES)
    yield svc
    await svc.execute_queries(USERS_TEARDOWN_QUERIES)
    await svc.close()


@pytest_asyncio.fixture
async def user_dao(service, logger):
    return create_user_dao(service, logger)
