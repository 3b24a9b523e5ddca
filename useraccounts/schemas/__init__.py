"""Pydantic request/response schemas for the HTTP API."""

from useraccounts.schemas.auth import LoginRequest, TokenResponse
from useraccounts.schemas.health import HealthResponse
from useraccounts.schemas.user import (
    MessageResponse,
    UserCreateRequest,
    UserResponse,
    UserUpdateRequest,
)

__all__ = [
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "TokenResponse",
    "UserCreateRequest",
    "UserResponse",
    "UserUpdateRequest",
]
