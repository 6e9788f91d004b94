"""SQL identifier validation.

Identifiers cannot be bound as parameters, so any name that is spliced into
SQL text must first match ``name`` or ``schema.name`` where each part is a
letter followed by letters, digits or underscores.
"""

from __future__ import annotations

import re

from oraspine.core.errors import InvalidIdentifierError

MAX_IDENTIFIER_LENGTH = 128

_PART = re.compile(r"[A-Za-z][A-Za-z0-9_]*")


def validate_identifier(name: str) -> str:
    """Return ``name`` unchanged if it is a safe, optionally qualified identifier.

    Raises:
        InvalidIdentifierError: If ``name`` is not a string or does not match.
    """
    if not isinstance(name, str) or not name:
        raise InvalidIdentifierError(name, "non-empty string")

    parts = name.split(".")
    if len(parts) > 2:
        raise InvalidIdentifierError(name, "at most one schema qualifier")

    for part in parts:
        if len(part) > MAX_IDENTIFIER_LENGTH:
            raise InvalidIdentifierError(name, f"parts of at most {MAX_IDENTIFIER_LENGTH} characters")
        if not _PART.fullmatch(part):
            raise InvalidIdentifierError(name, "letter followed by letters, digits or underscores")

    return name


__all__ = ["validate_identifier", "MAX_IDENTIFIER_LENGTH"]
