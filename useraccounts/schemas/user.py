"""User API schemas."""

from pydantic import BaseModel, Field


class UserCreateRequest(BaseModel):
    """Request body for registering a user (public)."""

    username: str = Field(..., min_length=1, max_length=128)
    password: str = Field(..., min_length=1)


class UserUpdateRequest(BaseModel):
    """Request body for replacing the caller's username and password.

    The target id travels in the body; an empty id is answered by the
    service, not rejected here.
    """

    id: str | None = None
    username: str = Field(..., min_length=1, max_length=128)
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """User response (no password)."""

    id: str
    username: str


class MessageResponse(BaseModel):
    """Plain message envelope used for confirmations and errors."""

    message: str
