"""Authentication gate for protected endpoints.

- authenticate_request() - verifies the bearer token of the current request
- @auth_required - decorator form for individual views

The /api blueprint calls authenticate_request() from before_request, so every
meme endpoint is protected.
"""

import logging
from functools import wraps

import jwt
from flask import g, request

from ..exceptions import InvalidToken, Unauthenticated
from . import token
from .schemas import TokenPayload

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def authenticate_request() -> TokenPayload:
    """
    Verify the Authorization header of the current request.

    Only the exact "Bearer " prefix is stripped. A header using any other
    scheme is verified as a token as-is and therefore fails as an invalid
    token (400) rather than a missing one (401).

    Stores the decoded claims in flask.g:
    - g.user: TokenPayload
    - g.user_id: User ID
    - g.username: Username

    Raises:
        Unauthenticated: If no token was provided
        InvalidToken: If the token is malformed, forged or expired
    """
    auth_header = request.headers.get("Authorization", "")
    token_str = auth_header.removeprefix(BEARER_PREFIX)
    if not token_str:
        logger.warning("Unauthenticated request to protected endpoint")
        raise Unauthenticated()

    try:
        payload = token.get_signer().verify(token_str)
    except jwt.ExpiredSignatureError:
        logger.warning("JWT token expired")
        raise InvalidToken(details={"code": "token_expired"})
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid JWT token: {e}")
        raise InvalidToken(details={"code": "invalid_token"})

    g.user = payload
    g.user_id = payload.id
    g.username = payload.username

    logger.debug(f"JWT authentication successful for user {payload.username}")
    return payload


def auth_required(f):
    """
    Decorator to require a valid bearer token for endpoint access.

    Example:
    ```python
    @auth_required
    def protected_endpoint():
        user_id = g.user_id
        ...
    ```
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        authenticate_request()
        return f(*args, **kwargs)

    return wrapper
