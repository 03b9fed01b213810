"""JWT access tokens.

Tokens are HS256-signed JWTs carrying {id, username, iat, exp}. They are never
stored: expiry is the only way a token stops being valid.

The signer is built once per application in create_app() from the configured
secret and kept on app.extensions; request code reaches it through
get_signer().
"""

import logging
from datetime import timedelta
from typing import Callable

import jwt
from flask import current_app
from pydantic import ValidationError as PydanticValidationError

from ..utils import isodatetime
from .schemas import TokenPayload

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
REQUIRED_CLAIMS = ["id", "username", "iat", "exp"]
EXTENSION_KEY = "token_signer"


class TokenSigner:
    """Issues and verifies access tokens with a single symmetric secret."""

    def __init__(
        self,
        secret_key: str,
        expiry: timedelta = timedelta(hours=1),
        clock: Callable[[], int] = isodatetime.now_unix,
    ):
        """
        Args:
            secret_key: HMAC signing secret
            expiry: Token lifetime measured from issuance
            clock: Returns current unix time; used for iat/exp at issuance
        """
        if not secret_key:
            raise ValueError("A JWT signing secret must be configured")
        self._secret_key = secret_key
        self.expiry = expiry
        self._clock = clock

    def issue(self, user_id: int, username: str) -> str:
        """Create a signed token for a user."""
        issued_at = self._clock()
        payload = {
            "id": user_id,
            "username": username,
            "iat": issued_at,
            "exp": issued_at + int(self.expiry.total_seconds()),
        }
        return jwt.encode(payload, self._secret_key, algorithm=ALGORITHM)

    def verify(self, token: str) -> TokenPayload:
        """
        Verify signature and expiry, and decode the claims.

        Raises:
            jwt.ExpiredSignatureError: If the token has expired
            jwt.InvalidTokenError: If the token is malformed, has a bad
                signature, or lacks the expected claims
        """
        payload = jwt.decode(
            token,
            self._secret_key,
            algorithms=[ALGORITHM],
            options={"require": REQUIRED_CLAIMS},
        )
        try:
            return TokenPayload(**payload)
        except PydanticValidationError as e:
            raise jwt.InvalidTokenError(f"Unexpected token claims: {e.error_count()} error(s)")


def get_signer() -> TokenSigner:
    """Return the TokenSigner of the current Flask application."""
    return current_app.extensions[EXTENSION_KEY]
