"""Auth API schemas."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Request body for login."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """JWT token response."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
