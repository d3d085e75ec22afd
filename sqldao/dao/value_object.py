"""Immutable value objects representing one table row."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Type, TypeVar

from pydantic import BaseModel, ConfigDict

VO = TypeVar("VO", bound="ValueObject")


class ValueObject(BaseModel):
    """Declared, frozen record type.

    Subclasses declare their properties as pydantic fields, optionally with a
    camelCase alias. Missing required properties or undeclared ones fail
    construction with ``pydantic.ValidationError``; assignment after
    construction raises as well.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    @classmethod
    def from_fields(cls: Type[VO], fields: Mapping[str, Any]) -> VO:
        return cls.model_validate(dict(fields))

    def as_fields(self) -> Dict[str, Any]:
        """Return the properties keyed by their field (alias) names."""
        return self.model_dump(by_alias=True)
