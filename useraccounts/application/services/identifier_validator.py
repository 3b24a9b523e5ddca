"""Lexical validation of user identifiers (never touches storage)."""

import re

from useraccounts.core.constants import OBJECT_ID_PATTERN

_OBJECT_ID_RE = re.compile(OBJECT_ID_PATTERN)


def is_valid_user_id(value: str | None) -> bool:
    """Return True if value is a 24-character hexadecimal string.

    Args:
        value: Candidate identifier (may be None or empty).

    Returns:
        True when value has the primary store's native id shape.
    """
    if not value:
        return False
    return _OBJECT_ID_RE.fullmatch(value) is not None
