"""Authentication Pydantic schemas for API validation."""

from .auth import (
    UserCredentials,
    UserCreate,
    UserLogin,
    UserResponse,
    RegistrationResponse,
    LoginResponse,
    TokenPayload,
)

__all__ = [
    "UserCredentials",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "RegistrationResponse",
    "LoginResponse",
    "TokenPayload",
]
