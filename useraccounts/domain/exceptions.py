"""Domain exceptions for the user-accounts service.

Anticipated request outcomes (not found, forbidden, conflict, bad input)
are returned as result envelopes by the application layer, not raised.
These exceptions cover the remaining cases: unexpected store failures,
authentication problems and constraint violations surfaced by storage.
The presentation layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class AccountsException(Exception):
    """Base exception for all user-accounts application errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the response body for this error (message only, no internals)."""
        return {"message": self.message}


class AuthenticationException(AccountsException):
    """Raised when authentication fails (missing, invalid, expired or revoked token)."""

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class DuplicateUsernameException(AccountsException):
    """Raised by storage when a write would create a second record with the same username."""

    def __init__(self, username: str) -> None:
        """Initialize with the duplicate username.

        Args:
            username: The username that is already registered.
        """
        super().__init__(
            f"User is already registered with this username: {username}",
            "DUPLICATE_USERNAME",
            {"username": username},
        )


class UserStoreException(AccountsException):
    """Raised when a store call fails unexpectedly (connectivity, driver errors).

    The client-facing message is fixed; the operation and the cause stay in
    details and the server log.
    """

    def __init__(self, operation: str, cause: BaseException) -> None:
        """Initialize with the failing operation and the underlying error.

        Args:
            operation: Coordinator operation name (e.g. 'get_by_id').
            cause: The exception raised by the store or collaborator.
        """
        super().__init__(
            "Internal server error",
            "STORE_ERROR",
            {"operation": operation, "cause": repr(cause)},
        )
