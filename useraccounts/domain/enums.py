"""Domain enums (outcome categories)."""

from enum import Enum


class Outcome(str, Enum):
    """Categorical result of a user-record operation."""

    OK = "ok"
    NOT_FOUND = "not-found"
    FORBIDDEN = "forbidden"
    CONFLICT = "conflict"
    BAD_INPUT = "bad-input"
    INTERNAL_ERROR = "internal-error"
