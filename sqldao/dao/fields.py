"""Explicit field-to-column tables."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Tuple

from sqldao.exceptions import UnknownFieldError
from sqldao.utils.validators import is_valid_identifier


class FieldMap:
    """Statically declared mapping from application field names to column names.

    >>> users = FieldMap({"id": "id", "firstName": "first_name"})
    >>> users.to_columns({"firstName": "John"}, table_name="users")
    {'first_name': 'John'}
    >>> users.to_fields({"id": 1, "first_name": "John"})
    {'id': 1, 'firstName': 'John'}
    """

    def __init__(self, fields: Mapping[str, str]) -> None:
        if not fields:
            raise ValueError("A field map needs at least one field")
        for field, column in fields.items():
            if not isinstance(field, str) or not field:
                raise ValueError(f"Invalid field name: {field!r}")
            if not is_valid_identifier(column):
                raise ValueError(f"Invalid column name for field {field!r}: {column!r}")
        if len(set(fields.values())) != len(fields):
            raise ValueError("Two fields cannot share a column")
        self._field_to_column: Mapping[str, str] = MappingProxyType(dict(fields))
        self._column_to_field: Mapping[str, str] = MappingProxyType(
            {column: field for field, column in fields.items()}
        )

    def __contains__(self, field: object) -> bool:
        return field in self._field_to_column

    def __iter__(self) -> Iterator[str]:
        return iter(self._field_to_column)

    def __len__(self) -> int:
        return len(self._field_to_column)

    def __repr__(self) -> str:
        return f"FieldMap({dict(self._field_to_column)!r})"

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(self._field_to_column.items())

    def column_for(self, field: str, *, table_name: str = "?") -> str:
        try:
            return self._field_to_column[field]
        except KeyError:
            raise UnknownFieldError(table_name, field) from None

    def to_columns(self, values: Mapping[str, Any], *, table_name: str = "?") -> Dict[str, Any]:
        """Translate a field-keyed mapping into a column-keyed one, preserving order."""
        return {self.column_for(field, table_name=table_name): value for field, value in values.items()}

    def to_fields(self, row: Mapping[str, Any]) -> Dict[str, Any]:
        """Project a database row onto the declared fields; undeclared columns are dropped."""
        return {
            self._column_to_field[column]: value
            for column, value in row.items()
            if column in self._column_to_field
        }
