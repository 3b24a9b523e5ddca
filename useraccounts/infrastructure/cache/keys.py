"""Cache key builders. Single place for key format.

Key components must not contain CACHE_KEY_SEP to avoid ambiguous or
colliding keys.
"""

from useraccounts.core.constants import (
    CACHE_KEY_SEP,
    CACHE_PREFIX_SESSION,
    CACHE_PREFIX_USER,
)

USER_KEY_PREFIX = f"{CACHE_PREFIX_USER}{CACHE_KEY_SEP}id{CACHE_KEY_SEP}"


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value contains CACHE_KEY_SEP.
    """
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def user_key(user_id: str) -> str:
    """Cache key for user by ID."""
    _validate_key_component(user_id, "user_id")
    return f"{USER_KEY_PREFIX}{user_id}"


def revoked_session_key(session_id: str) -> str:
    """Cache key marking a session (token jti) as revoked."""
    _validate_key_component(session_id, "session_id")
    return f"{CACHE_PREFIX_SESSION}{CACHE_KEY_SEP}revoked{CACHE_KEY_SEP}{session_id}"


def session_generation_key(user_id: str) -> str:
    """Cache key holding the counter that invalidates all of a user's sessions."""
    _validate_key_component(user_id, "user_id")
    return f"{CACHE_PREFIX_SESSION}{CACHE_KEY_SEP}generation{CACHE_KEY_SEP}{user_id}"
