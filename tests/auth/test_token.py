"""
Tests for JWT token issuance and verification.

Tests verify that:
- Tokens carry id, username, iat and exp claims
- Tokens expire one hour after issuance by default
- Forged, malformed, incomplete and expired tokens are rejected
- The app exposes its signer through get_signer()
"""

from datetime import timedelta

import jwt as pyjwt
import pytest

from meme_api.auth.schemas import TokenPayload
from meme_api.auth.token import TokenSigner, get_signer
from meme_api.utils import isodatetime

SECRET = "unit-test-secret-0123456789abcdefghij"


@pytest.fixture
def signer():
    return TokenSigner(SECRET)


# ============================================================================
# Token Issuance Tests
# ============================================================================


class TestIssue:
    """Tests for TokenSigner.issue."""

    def test_issue_returns_string(self, signer):
        """Issued tokens are non-empty strings."""
        token = signer.issue(1, "alice")
        assert isinstance(token, str)
        assert len(token) > 0

    def test_token_contains_required_claims(self, signer):
        """Token should carry id, username, iat and exp."""
        token = signer.issue(42, "alice")
        payload = pyjwt.decode(token, options={"verify_signature": False})

        assert payload["id"] == 42
        assert payload["username"] == "alice"
        assert isinstance(payload["iat"], int)
        assert isinstance(payload["exp"], int)

    def test_token_expires_after_one_hour_by_default(self, signer):
        """Default lifetime is one hour."""
        payload = pyjwt.decode(signer.issue(1, "alice"), options={"verify_signature": False})
        assert payload["exp"] - payload["iat"] == 3600

    def test_token_uses_configured_expiry(self):
        """A custom lifetime is reflected in exp."""
        signer = TokenSigner(SECRET, expiry=timedelta(minutes=5))
        payload = pyjwt.decode(signer.issue(1, "alice"), options={"verify_signature": False})
        assert payload["exp"] - payload["iat"] == 300

    def test_token_issued_at_is_current_time(self, signer):
        """iat should be close to now."""
        before = isodatetime.now_unix()
        token = signer.issue(1, "alice")
        after = isodatetime.now_unix()

        iat = pyjwt.decode(token, options={"verify_signature": False})["iat"]
        assert before - 2 <= iat <= after + 2

    def test_token_signed_with_secret(self, signer):
        """Token should verify with the secret using HS256."""
        payload = pyjwt.decode(signer.issue(7, "bob"), SECRET, algorithms=["HS256"])
        assert payload["id"] == 7

    def test_empty_secret_rejected(self):
        """A signer cannot be built without a secret."""
        with pytest.raises(ValueError):
            TokenSigner("")


# ============================================================================
# Token Verification Tests
# ============================================================================


class TestVerify:
    """Tests for TokenSigner.verify."""

    def test_verify_valid_token(self, signer):
        """A freshly issued token verifies and decodes to TokenPayload."""
        payload = signer.verify(signer.issue(1, "alice"))

        assert isinstance(payload, TokenPayload)
        assert payload.id == 1
        assert payload.username == "alice"
        assert payload.exp - payload.iat == 3600

    def test_token_accepted_before_expiry(self):
        """A token issued 30 minutes ago is still valid."""
        signer = TokenSigner(SECRET, clock=lambda: isodatetime.now_unix() - 1800)
        token = signer.issue(1, "alice")

        assert TokenSigner(SECRET).verify(token).username == "alice"

    def test_token_rejected_after_expiry(self):
        """A token issued two hours ago has expired."""
        signer = TokenSigner(SECRET, clock=lambda: isodatetime.now_unix() - 7200)
        token = signer.issue(1, "alice")

        with pytest.raises(pyjwt.ExpiredSignatureError):
            TokenSigner(SECRET).verify(token)

    def test_wrong_secret_rejected(self, signer):
        """A token signed with another secret is rejected."""
        forged = TokenSigner("wrong-secret-0123456789abcdefghijklmn").issue(1, "alice")

        with pytest.raises(pyjwt.InvalidTokenError):
            signer.verify(forged)

    def test_tampered_token_rejected(self, signer):
        """Appending to the signature invalidates the token."""
        token = signer.issue(1, "alice")

        with pytest.raises(pyjwt.InvalidTokenError):
            signer.verify(token + "x")

    @pytest.mark.parametrize(
        "token",
        [
            "not-a-jwt",
            "invalid.token.here",
            "eyJhbGciOiJub25lIn0.eyJpZCI6MX0.",  # alg=none
            "",
        ],
    )
    def test_malformed_token_rejected(self, signer, token):
        """Malformed tokens raise InvalidTokenError."""
        with pytest.raises(pyjwt.InvalidTokenError):
            signer.verify(token)

    def test_missing_claims_rejected(self, signer):
        """Tokens without all required claims are rejected."""
        incomplete = pyjwt.encode({"id": 1}, SECRET, algorithm="HS256")

        with pytest.raises(pyjwt.InvalidTokenError):
            signer.verify(incomplete)

    def test_wrongly_typed_claims_rejected(self, signer):
        """Claims that don't fit TokenPayload are reported as invalid tokens."""
        now = isodatetime.now_unix()
        token = pyjwt.encode(
            {"id": "not-a-number", "username": "alice", "iat": now, "exp": now + 60},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(pyjwt.InvalidTokenError):
            signer.verify(token)


class TestGetSigner:
    """Tests for the app-bound signer."""

    def test_get_signer_returns_app_signer(self, app):
        """get_signer() returns the signer built by create_app()."""
        with app.app_context():
            signer = get_signer()
            assert isinstance(signer, TokenSigner)
            assert signer.verify(signer.issue(3, "carol")).id == 3
