"""Async SQLite query execution service with connection pooling.

Wraps `aiosqlite` connections in a lazily populated pool and exposes the small
set of primitives the DAO layer builds on: bulk script execution, row selects
and write statements reporting affected rows and generated ids.
"""

from __future__ import annotations

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, List, Optional, Sequence

import aiosqlite

from sqldao.config import ConnectionConfig
from sqldao.exceptions import ConnectionPoolTimeout

MEMORY_DATABASE = ":memory:"

Row = Dict[str, Any]


@dataclass(frozen=True)
class QueryResult:
    """Outcome of a write statement."""

    affected_rows: int
    last_insert_id: Optional[int] = None


class SqliteService:
    """Owns a pool of `aiosqlite` connections and executes raw SQL on them."""

    def __init__(self, config: ConnectionConfig, logger: Optional[logging.Logger] = None) -> None:
        self._config = config
        self._logger = logger or logging.getLogger(__name__)
        self._pool: asyncio.Queue[aiosqlite.Connection] | None = None
        self._pool_lock = asyncio.Lock()
        self._pool_initialized = False

    @property
    def config(self) -> ConnectionConfig:
        return self._config

    @property
    def is_memory(self) -> bool:
        return self._config.database == MEMORY_DATABASE

    async def _open_connection(self) -> aiosqlite.Connection:
        conn = await aiosqlite.connect(
            self._config.database,
            timeout=self._config.timeout,
            cached_statements=self._config.cached_statements,
        )
        conn.row_factory = aiosqlite.Row
        await conn.execute("PRAGMA foreign_keys = ON;")
        await conn.commit()
        return conn

    async def _initialize_pool(self) -> None:
        """Create and populate the connection pool."""
        # Every ":memory:" connection is a separate empty database, so the
        # pool holds exactly one shared connection in that case.
        size = 1 if self.is_memory else self._config.connection_limit

        pool: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue(maxsize=size)
        for i in range(size):
            try:
                conn = await self._open_connection()
            except Exception as e:
                self._logger.exception("Error opening database connection [%d]: %s", i + 1, e)
                while not pool.empty():
                    await pool.get_nowait().close()
                raise
            pool.put_nowait(conn)
            self._logger.debug("Opened connection %d/%d", i + 1, size)

        self._pool = pool
        self._pool_initialized = True
        self._logger.info(
            "Database connection pool initialized with size %d (database=%s)",
            size,
            self._config.database,
        )

    async def _ensure_pool(self) -> asyncio.Queue[aiosqlite.Connection]:
        if not self._pool_initialized:
            async with self._pool_lock:
                if not self._pool_initialized:
                    self._logger.info("Initializing database connection pool")
                    await self._initialize_pool()
        if self._pool is None:
            raise RuntimeError("Connection pool is not initialized")
        return self._pool

    async def _validated(self, conn: aiosqlite.Connection) -> aiosqlite.Connection:
        """Return *conn* if it still answers, otherwise a freshly opened replacement."""
        try:
            await conn.execute("SELECT 1;")
            return conn
        except Exception as e:
            if self.is_memory:
                # A replacement in-memory connection would be an empty database.
                raise
            self._logger.warning("Database connection is invalid, recreating new connection: %s", e)
            try:
                await conn.close()
            except Exception as close_exc:  # pragma: no cover - cleanup best effort
                self._logger.debug("Ignoring error closing stale connection: %s", close_exc)
            return await self._open_connection()

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Acquire a database connection from the pool.

        Usage:
            async with service.connection() as conn:
                await conn.execute(...)
                await conn.commit()
        """
        pool = await self._ensure_pool()
        try:
            conn = await asyncio.wait_for(pool.get(), timeout=self._config.timeout)
        except asyncio.TimeoutError:
            self._logger.error("Timed out waiting for database connection")
            raise ConnectionPoolTimeout("Database connection timeout")
        self._logger.debug("Acquired database connection from pool")

        start_time = time.monotonic()
        try:
            conn = await self._validated(conn)
            yield conn
        finally:
            elapsed = time.monotonic() - start_time
            self._logger.debug("Database connection held for %.3f seconds", elapsed)
            pool.put_nowait(conn)
            self._logger.debug("Returned database connection to pool")

    async def execute_queries(self, queries: Sequence[str]) -> None:
        """Run *queries* in order on one connection and commit once."""
        async with self.connection() as conn:
            try:
                for sql in queries:
                    await conn.execute(sql)
                await conn.commit()
            except BaseException as e:
                self._logger.exception("Failed to execute %d queries: %s", len(queries), e)
                await conn.rollback()
                raise

    async def select(self, sql: str, params: Sequence[Any] = ()) -> List[Row]:
        async with self.connection() as conn:
            cursor = await conn.execute(sql, tuple(params))
            rows = await cursor.fetchall()
            await cursor.close()
            return [dict(row) for row in rows]

    async def select_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[Row]:
        """Return the first row produced by *sql*, or ``None`` when there is none."""
        async with self.connection() as conn:
            cursor = await conn.execute(sql, tuple(params))
            row = await cursor.fetchone()
            await cursor.close()
            return dict(row) if row is not None else None

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> QueryResult:
        """Run a single write statement and commit it, rolling back on failure."""
        async with self.connection() as conn:
            try:
                cursor = await conn.execute(sql, tuple(params))
                result = QueryResult(affected_rows=cursor.rowcount, last_insert_id=cursor.lastrowid)
                await cursor.close()
                await conn.commit()
                return result
            except BaseException:
                # Includes cancellation; a pooled connection must never keep an open transaction.
                await conn.rollback()
                raise

    async def close(self) -> None:
        """Close all connections in the pool and reset its state."""
        if self._pool is None:
            return

        async with self._pool_lock:
            pool, self._pool = self._pool, None
            self._pool_initialized = False
            while not pool.empty():
                conn = pool.get_nowait()
                try:
                    await conn.close()
                except Exception as exc:  # pragma: no cover - cleanup best effort
                    self._logger.warning("Error closing DB connection: %s", exc)

        self._logger.info("Database connection pool closed")
