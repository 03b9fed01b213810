"""Authentication module for the Meme API.

This module provides:
- Schema validation for auth operations
- Password hashing and the credential store (service)
- JWT issuance and verification (token)
- The bearer-token gate for protected endpoints (decorators)

Auth endpoints (public, under /api/auth):
- POST /api/auth/register - Create a user
- POST /api/auth/login - Authenticate and return a JWT
"""

from . import schemas, token

__all__ = ["schemas", "token"]
