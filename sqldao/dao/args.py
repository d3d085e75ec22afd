"""Validated configuration bundle for a DAO."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from sqldao.dao.fields import FieldMap
from sqldao.exceptions import DaoArgsError
from sqldao.utils.validators import is_valid_identifier

# Primitives a query service must expose for the DAO to work.
SERVICE_METHODS = ("select", "select_one", "execute")


class DaoArgs(BaseModel):
    """Everything a DAO needs, fixed at construction time."""

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,
        populate_by_name=True,
        extra="forbid",
    )

    table_name: str = Field(..., alias="tableName")
    create_vo_from_db_row: Callable[[Dict[str, Any]], Any] = Field(..., alias="createVoFromDbRowFunction")
    service: Any = Field(..., alias="queryService")
    logger: logging.Logger
    field_map: FieldMap = Field(..., alias="fieldMap")
    id_field: str = Field("id", alias="idField")

    @field_validator("table_name")
    @classmethod
    def table_name_must_be_identifier(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("table name must be a non-empty string")
        if not is_valid_identifier(v):
            raise ValueError(f"table name {v!r} is not a valid SQL identifier")
        return v

    @field_validator("service")
    @classmethod
    def service_must_execute_queries(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("a query service is required")
        missing = [name for name in SERVICE_METHODS if not callable(getattr(v, name, None))]
        if missing:
            raise ValueError(f"query service lacks required methods: {', '.join(missing)}")
        return v

    @model_validator(mode="after")
    def id_field_must_be_mapped(self) -> "DaoArgs":
        if self.id_field not in self.field_map:
            raise ValueError(f"id field {self.id_field!r} is not declared in the field map")
        return self


class DaoArgsFactory:  # pylint: disable=too-few-public-methods
    """Builds :class:`DaoArgs`, turning every validation problem into :class:`DaoArgsError`."""

    @staticmethod
    def create_from_dict(obj: Mapping[str, Any]) -> DaoArgs:
        if not isinstance(obj, Mapping):
            raise DaoArgsError(f"DAO args must be a mapping, got {type(obj).__name__}")
        try:
            return DaoArgs.model_validate(dict(obj))
        except ValidationError as e:
            raise DaoArgsError(f"Invalid DAO args: {e}") from e
