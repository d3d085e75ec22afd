"""Generic CRUD data-access object over a single SQLite table."""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Dict, Generic, List, Mapping, Optional, Sequence, TypeVar

from sqldao.dao.args import DaoArgs
from sqldao.db.sql import Statement, build_count, build_delete, build_insert, build_select, build_update
from sqldao.exceptions import DaoArgsError, InvalidPayloadError, UnknownFieldError
from sqldao.utils.logging_utils import fmt_ctx

VO = TypeVar("VO")


class SqliteDao(Generic[VO]):
    """Translates field-keyed mappings into SQL and rows back into value objects.

    Field names go through the entity's :class:`~sqldao.dao.fields.FieldMap`
    before any statement is built, and every raw row is handed to the
    configured converter. "First" always means the lowest primary key.

    The instance keeps no mutable state beyond its configuration, so it can be
    shared by concurrent callers; the connection pool lives in the service.
    """

    def __init__(self, args: DaoArgs) -> None:
        if not isinstance(args, DaoArgs):
            raise DaoArgsError("SqliteDao requires DaoArgs; build them with DaoArgsFactory")
        self._table_name = args.table_name
        self._create_vo = args.create_vo_from_db_row
        self._service = args.service
        self._logger = args.logger
        self._field_map = args.field_map
        self._pk_column = args.field_map.column_for(args.id_field, table_name=args.table_name)

    @property
    def table_name(self) -> str:
        return self._table_name

    def _columns(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        return self._field_map.to_columns(values, table_name=self._table_name)

    def _criteria(self, criteria: Optional[Mapping[str, Any]], *, required: bool = False) -> Dict[str, Any]:
        if not criteria:
            if required:
                raise InvalidPayloadError(f"Criteria for {self._table_name!r} must name at least one field")
            return {}
        return self._columns(criteria)

    def _payload(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        if not fields:
            raise InvalidPayloadError(f"Update payload for {self._table_name!r} is empty")
        return self._columns(fields)

    @asynccontextmanager
    async def _operation(self, op: str, **ctx: Any) -> AsyncIterator[Dict[str, Any]]:
        """Time an operation, log it at DEBUG and log-and-reraise any failure.

        Payloads rejected before any SQL runs are logged at WARNING without a
        traceback; everything else is logged with one.
        """
        log_ctx: Dict[str, Any] = {"table": self._table_name, "op": op, **ctx}
        start_time = time.monotonic()
        try:
            yield log_ctx
        except (UnknownFieldError, InvalidPayloadError) as e:
            log_ctx["error"] = e
            self._logger.warning("DAO operation rejected %s", fmt_ctx(log_ctx))
            raise
        except Exception as e:
            log_ctx["error"] = e
            self._logger.exception("DAO operation failed %s", fmt_ctx(log_ctx))
            raise
        log_ctx["elapsed_ms"] = int((time.monotonic() - start_time) * 1000)
        self._logger.debug("DAO operation completed %s", fmt_ctx(log_ctx))

    def _to_vo(self, row: Optional[Dict[str, Any]]) -> Optional[VO]:
        return self._create_vo(row) if row is not None else None

    async def create(self, fields: Mapping[str, Any]) -> int:
        """Insert one row and return its generated primary key."""
        async with self._operation("create") as ctx:
            columns = self._columns(fields)
            sql, params = build_insert(self._table_name, list(columns), [list(columns.values())])
            result = await self._service.execute(sql, params)
            ctx["id"] = result.last_insert_id
        return result.last_insert_id

    async def create_bulk(self, rows: Sequence[Mapping[str, Any]]) -> int:
        """Insert all *rows* with one statement and return how many were inserted."""
        if not rows:
            return 0
        async with self._operation("create_bulk", requested=len(rows)) as ctx:
            translated = [self._columns(row) for row in rows]
            columns = list(translated[0])
            if not columns:
                raise InvalidPayloadError(f"Bulk rows for {self._table_name!r} must name at least one field")
            for index, row in enumerate(translated[1:], start=1):
                if set(row) != set(columns):
                    raise InvalidPayloadError(
                        f"Bulk row {index} for {self._table_name!r} does not use the same fields as row 0"
                    )
            values = [[row[column] for column in columns] for row in translated]
            sql, params = build_insert(self._table_name, columns, values)
            result = await self._service.execute(sql, params)
            ctx["rows"] = result.affected_rows
        return result.affected_rows

    async def get_one_by_id(self, id_: Any) -> Optional[VO]:
        """Return the row with primary key *id_*, or ``None`` if there is none."""
        async with self._operation("get_one_by_id", id=id_) as ctx:
            sql, params = build_select(self._table_name, {self._pk_column: id_}, limit=1)
            row = await self._service.select_one(sql, params)
            ctx["found"] = row is not None
        return self._to_vo(row)

    async def get_one(self, criteria: Mapping[str, Any]) -> Optional[VO]:
        """Return the first row matching *criteria*, or ``None``."""
        async with self._operation("get_one") as ctx:
            where = self._criteria(criteria)
            sql, params = build_select(self._table_name, where, order_by=self._pk_column, limit=1)
            row = await self._service.select_one(sql, params)
            ctx["found"] = row is not None
        return self._to_vo(row)

    async def get_all(self, criteria: Optional[Mapping[str, Any]] = None) -> List[VO]:
        async with self._operation("get_all") as ctx:
            where = self._criteria(criteria)
            sql, params = build_select(self._table_name, where, order_by=self._pk_column)
            rows = await self._service.select(sql, params)
            ctx["rows"] = len(rows)
        return [self._create_vo(row) for row in rows]

    async def count(self, criteria: Optional[Mapping[str, Any]] = None) -> int:
        async with self._operation("count") as ctx:
            where = self._criteria(criteria)
            sql, params = build_count(self._table_name, where)
            row = await self._service.select_one(sql, params)
            total = int(row["total"]) if row is not None else 0
            ctx["rows"] = total
        return total

    async def update_by_id(self, id_: Any, fields: Mapping[str, Any]) -> int:
        """Update the row with primary key *id_*; returns rows changed (0 or 1)."""

        def statement() -> Statement:
            return build_update(self._table_name, self._payload(fields), {self._pk_column: id_})

        return await self._write("update_by_id", statement, id=id_)

    async def update_one(self, criteria: Mapping[str, Any], fields: Mapping[str, Any]) -> int:
        """Update the first row matching *criteria*; returns rows changed (0 or 1)."""

        def statement() -> Statement:
            where = self._criteria(criteria, required=True)
            return build_update(self._table_name, self._payload(fields), where, first_by=self._pk_column)

        return await self._write("update_one", statement)

    async def update(self, criteria: Mapping[str, Any], fields: Mapping[str, Any]) -> int:
        """Update every row matching *criteria*; returns rows changed."""

        def statement() -> Statement:
            where = self._criteria(criteria, required=True)
            return build_update(self._table_name, self._payload(fields), where)

        return await self._write("update", statement)

    async def delete_by_id(self, id_: Any) -> int:
        return await self._write(
            "delete_by_id", lambda: build_delete(self._table_name, {self._pk_column: id_}), id=id_
        )

    async def delete_one(self, criteria: Mapping[str, Any]) -> int:
        return await self._write(
            "delete_one",
            lambda: build_delete(
                self._table_name, self._criteria(criteria, required=True), first_by=self._pk_column
            ),
        )

    async def delete(self, criteria: Mapping[str, Any]) -> int:
        return await self._write(
            "delete", lambda: build_delete(self._table_name, self._criteria(criteria, required=True))
        )

    async def _write(self, op: str, statement: Callable[[], Statement], **ctx: Any) -> int:
        async with self._operation(op, **ctx) as log_ctx:
            sql, params = statement()
            result = await self._service.execute(sql, params)
            log_ctx["rows"] = result.affected_rows
        return result.affected_rows
