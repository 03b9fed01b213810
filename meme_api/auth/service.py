"""Credential storage and password hashing.

Passwords are hashed with bcrypt (random per-call salt embedded in the hash,
tunable work factor). Service functions receive a database Core explicitly.

bcrypt only accepts 72 bytes of input, so every password is first reduced to
the base64 of its SHA-256 digest (44 ASCII bytes). Hashing and verification
both go through _prehash, so passwords of any length work and differ
beyond the 72nd byte.
"""

import base64
import hashlib
import logging
import sqlite3
from functools import lru_cache

import bcrypt

from ..db import Core
from ..exceptions import DuplicateUsername
from .schemas import UserCreate, UserResponse

logger = logging.getLogger(__name__)

DEFAULT_WORK_FACTOR = 12


# ============================================================================
# Password Hashing
# ============================================================================


def _prehash(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def hash_password(password: str, rounds: int = DEFAULT_WORK_FACTOR) -> str:
    """Hash a password with bcrypt.

    Args:
        password: Plain text password of any length
        rounds: bcrypt work factor (log2 of iterations)

    Returns:
        60-character bcrypt hash string
    """
    return bcrypt.hashpw(_prehash(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a bcrypt hash.

    A malformed hash is treated as a mismatch.
    """
    try:
        return bcrypt.checkpw(_prehash(password), password_hash.encode("utf-8"))
    except (ValueError, TypeError):
        logger.warning("Stored password hash could not be parsed")
        return False


@lru_cache
def _dummy_hash(rounds: int) -> str:
    """Hash compared against when the username is unknown."""
    return hash_password("dummy-password", rounds=rounds)


# ============================================================================
# Credential Store
# ============================================================================


def register_user(core: Core, data: UserCreate, rounds: int = DEFAULT_WORK_FACTOR) -> UserResponse:
    """
    Create a user with a hashed password.

    The lookup gives an early, cheap rejection; the UNIQUE index on
    users.username is what actually guarantees uniqueness under concurrent
    registrations.

    Raises:
        DuplicateUsername: If the username is already taken
    """
    if core.user.get_by_username(data.username) is not None:
        raise DuplicateUsername(details={"username": data.username})

    password_hash = hash_password(data.password, rounds=rounds)
    try:
        user_id = core.user.create(data.username, password_hash)
    except sqlite3.IntegrityError:
        raise DuplicateUsername(details={"username": data.username})

    return UserResponse(id=user_id, username=data.username)


def get_user_with_password(core: Core, username: str) -> tuple[UserResponse, str] | None:
    """Get a user and their password hash by username.

    Returns:
        (UserResponse, password_hash) or None if no such user
    """
    row = core.user.get_by_username(username)
    if row is None:
        return None
    return UserResponse(id=row["id"], username=row["username"]), row["password_hash"]


def verify_credentials(
    core: Core,
    username: str,
    password: str,
    rounds: int = DEFAULT_WORK_FACTOR,
) -> UserResponse | None:
    """
    Verify a username/password pair.

    Returns None for an unknown username and for a wrong password alike, so
    callers cannot tell the two apart. An unknown username still costs one
    bcrypt comparison at the given work factor.
    """
    result = get_user_with_password(core, username)
    if result is None:
        verify_password(password, _dummy_hash(rounds))
        return None

    user, password_hash = result
    if not verify_password(password, password_hash):
        return None
    return user
