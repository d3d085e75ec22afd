"""Validation helpers used across the project."""

from __future__ import annotations

import re
from typing import Final

# Plain SQL identifier: letter or underscore first, then letters, digits, underscores.
IDENTIFIER_PATTERN: Final[re.Pattern[str]] = re.compile(r"[A-Za-z_][A-Za-z0-9_]{0,63}")


def is_valid_identifier(name: str) -> bool:
    """
    Checks if a string can be used verbatim as a table or column name.
    - Starts with a letter or underscore
    - At most 64 characters long
    - Contains only A-Z, a-z, 0-9, and underscores
    """
    if not isinstance(name, str):
        return False
    return bool(IDENTIFIER_PATTERN.fullmatch(name))


def validate_identifier(name: str) -> str:
    """Return *name* unchanged or raise ``ValueError`` if it is not a safe identifier."""
    if not is_valid_identifier(name):
        raise ValueError(f"Invalid SQL identifier: {name!r}")
    return name


def quote_identifier(name: str) -> str:
    return f'"{validate_identifier(name)}"'
