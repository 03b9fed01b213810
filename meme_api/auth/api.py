"""Authentication endpoints for the Meme API.

- POST /api/auth/register - Create a user
- POST /api/auth/login    - Verify credentials and return a JWT

Both endpoints are public. All responses are JSON.
"""

import logging

from flask import Blueprint, current_app, jsonify

from ..api.validation import validate_request
from ..db import get_core
from ..exceptions import InvalidCredentials
from . import service, token
from .schemas import LoginResponse, RegistrationResponse, UserCreate, UserLogin

logger = logging.getLogger(__name__)


auth_bp = Blueprint("auth", __name__)


@auth_bp.post("/register")
@validate_request
def register(data: UserCreate):
    """
    Register a new user.

    Example request:
    ```json
    {
        "username": "alice",
        "password": "Secret1!"
    }
    ```

    Example response (201):
    ```json
    {
        "message": "User registered",
        "user": {"id": 1, "username": "alice"}
    }
    ```

    Raises:
        ValidationError: If username or password is missing
        DuplicateUsername: If the username is already taken
    """
    with get_core(atomic=True) as core:
        user = service.register_user(
            core, data, rounds=current_app.config["BCRYPT_WORK_FACTOR"]
        )

    logger.info(f"User registered: {user.username}")

    return jsonify(
        RegistrationResponse(message="User registered", user=user).model_dump()
    ), 201


@auth_bp.post("/login")
@validate_request
def login(data: UserLogin):
    """
    Authenticate a user and return a JWT.

    Example response (200):
    ```json
    {
        "message": "Login successful",
        "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."
    }
    ```

    Raises:
        ValidationError: If username or password is missing
        InvalidCredentials: If the username is unknown or the password is wrong
    """
    core = get_core()
    user = service.verify_credentials(
        core, data.username, data.password, rounds=current_app.config["BCRYPT_WORK_FACTOR"]
    )
    if user is None:
        logger.warning(f"Failed login attempt for username: {data.username}")
        raise InvalidCredentials(details={"username": data.username})

    access_token = token.get_signer().issue(user.id, user.username)

    logger.info(f"Successful login: {user.username}")

    return jsonify(
        LoginResponse(message="Login successful", token=access_token).model_dump()
    ), 200
