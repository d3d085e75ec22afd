"""The ``users`` entity: value object, field map, row converter and DAO wiring."""

from __future__ import annotations

import datetime
import logging
from typing import Any, Mapping, Optional

from pydantic import Field

from sqldao.dao import DaoArgsFactory, FieldMap, SqliteDao, ValueObject
from sqldao.db import SqliteService

USERS_TABLE = "users"

USER_FIELDS = FieldMap(
    {
        "id": "id",
        "firstName": "first_name",
        "lastName": "last_name",
        "email": "email",
        "dateCreated": "date_created",
    }
)


class User(ValueObject):
    """Represents one row of the users table."""

    id: int
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    email: str
    date_created: datetime.datetime = Field(..., alias="dateCreated")


def create_user_from_db_row(row: Mapping[str, Any]) -> User:
    return User.from_fields(USER_FIELDS.to_fields(row))


def create_user_dao(service: SqliteService, logger: logging.Logger) -> SqliteDao[User]:
    """Assemble the users DAO through the validating args factory."""
    args = DaoArgsFactory.create_from_dict(
        {
            "table_name": USERS_TABLE,
            "create_vo_from_db_row": create_user_from_db_row,
            "service": service,
            "logger": logger,
            "field_map": USER_FIELDS,
        }
    )
    return SqliteDao(args)
