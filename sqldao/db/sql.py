"""Parameterised SQL statement builders.

Builders take column names (already translated from field names) and return a
``(sql, params)`` pair. Identifiers are validated and quoted; values are always
bound as ``?`` parameters.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence, Tuple

from sqldao.utils.validators import quote_identifier

Statement = Tuple[str, List[Any]]


def where_clause(criteria: Mapping[str, Any]) -> Statement:
    """Equality conjunction over *criteria*; ``None`` compares with ``IS NULL``."""
    if not criteria:
        return "", []
    parts: List[str] = []
    params: List[Any] = []
    for column, value in criteria.items():
        quoted = quote_identifier(column)
        if value is None:
            parts.append(f"{quoted} IS NULL")
        else:
            parts.append(f"{quoted} = ?")
            params.append(value)
    return " WHERE " + " AND ".join(parts), params


def _set_clause(values: Mapping[str, Any]) -> Statement:
    assignments = [f"{quote_identifier(column)} = ?" for column in values]
    return " SET " + ", ".join(assignments), list(values.values())


def _first_match(table: str, criteria: Mapping[str, Any], pk: str) -> Statement:
    # Stock SQLite has no UPDATE/DELETE ... LIMIT, so scope to the lowest matching key.
    select_sql, params = build_select(table, criteria, columns=[pk], order_by=pk, limit=1)
    return f" WHERE {quote_identifier(pk)} IN ({select_sql})", params


def build_insert(table: str, columns: Sequence[str], rows: Sequence[Sequence[Any]]) -> Statement:
    """Single INSERT statement carrying every row in *rows*."""
    if not rows:
        raise ValueError("At least one row is required")
    width = len(columns)
    placeholders = "(" + ", ".join("?" for _ in range(width)) + ")"
    params: List[Any] = []
    for row in rows:
        if len(row) != width:
            raise ValueError(f"Row has {len(row)} values, expected {width}")
        params.extend(row)
    if width:
        column_list = ", ".join(quote_identifier(column) for column in columns)
        values = ", ".join(placeholders for _ in rows)
        sql = f"INSERT INTO {quote_identifier(table)} ({column_list}) VALUES {values}"
    else:
        sql = f"INSERT INTO {quote_identifier(table)} DEFAULT VALUES"
    return sql, params


def build_select(
    table: str,
    criteria: Optional[Mapping[str, Any]] = None,
    *,
    columns: Optional[Sequence[str]] = None,
    order_by: Optional[str] = None,
    limit: Optional[int] = None,
) -> Statement:
    column_list = ", ".join(quote_identifier(c) for c in columns) if columns else "*"
    where_sql, params = where_clause(criteria or {})
    sql = f"SELECT {column_list} FROM {quote_identifier(table)}{where_sql}"
    if order_by is not None:
        sql += f" ORDER BY {quote_identifier(order_by)}"
    if limit is not None:
        sql += f" LIMIT {int(limit)}"
    return sql, params


def build_count(table: str, criteria: Optional[Mapping[str, Any]] = None) -> Statement:
    where_sql, params = where_clause(criteria or {})
    return f"SELECT COUNT(*) AS total FROM {quote_identifier(table)}{where_sql}", params


def build_update(
    table: str,
    values: Mapping[str, Any],
    criteria: Mapping[str, Any],
    *,
    first_by: Optional[str] = None,
) -> Statement:
    """UPDATE every row matching *criteria*, or only the first one when *first_by* names the key."""
    if not values:
        raise ValueError("At least one column must be updated")
    set_sql, set_params = _set_clause(values)
    if first_by is not None:
        where_sql, where_params = _first_match(table, criteria, first_by)
    else:
        where_sql, where_params = where_clause(criteria)
    return f"UPDATE {quote_identifier(table)}{set_sql}{where_sql}", set_params + where_params


def build_delete(
    table: str,
    criteria: Mapping[str, Any],
    *,
    first_by: Optional[str] = None,
) -> Statement:
    if first_by is not None:
        where_sql, params = _first_match(table, criteria, first_by)
    else:
        where_sql, params = where_clause(criteria)
    return f"DELETE FROM {quote_identifier(table)}{where_sql}", params
