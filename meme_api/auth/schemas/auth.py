"""Pydantic schemas for authentication requests, responses and token claims."""

from typing import Any

from pydantic import BaseModel, Field, model_validator


class UserCredentials(BaseModel):
    """Username/password pair submitted by a client."""

    username: str = Field(..., description="Unique username")
    password: str = Field(..., description="Plain text password (hashed before storage)")

    @model_validator(mode="before")
    @classmethod
    def require_username_and_password(cls, data: Any) -> Any:
        """Reject missing or empty username/password with a single message."""
        if isinstance(data, dict) and (not data.get("username") or not data.get("password")):
            raise ValueError("Username and password are required")
        return data


class UserCreate(UserCredentials):
    """Request body for POST /api/auth/register."""


class UserLogin(UserCredentials):
    """Request body for POST /api/auth/login."""


class UserResponse(BaseModel):
    """Public view of a user. The password hash is never included."""

    id: int
    username: str


class RegistrationResponse(BaseModel):
    """Response body for a successful registration."""

    message: str
    user: UserResponse


class LoginResponse(BaseModel):
    """Response body for a successful login."""

    message: str
    token: str


class TokenPayload(BaseModel):
    """Decoded JWT claims.

    - id: user ID
    - username: username at issuance
    - iat: issued at (unix seconds)
    - exp: expiry (unix seconds)
    """

    id: int
    username: str
    iat: int
    exp: int
