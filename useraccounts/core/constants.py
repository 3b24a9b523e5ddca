"""Core constants: cache key prefixes and identifier format."""

# Cache key prefixes
CACHE_PREFIX_USER = "user"
CACHE_PREFIX_SESSION = "session"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Primary store ids: 12 bytes rendered as 24 hex characters.
OBJECT_ID_LENGTH = 24
OBJECT_ID_PATTERN = r"^[0-9a-fA-F]{24}$"
