"""Flask application entry point.

Run the development server with:

    JWT_SECRET=... flask --app meme_api.main run
"""

import logging
from datetime import timedelta

from flask import Flask, jsonify
from flask_cors import CORS
from pydantic import ValidationError as PydanticValidationError
from werkzeug.exceptions import HTTPException

from .api import api_bp
from .auth import token
from .auth.api import auth_bp
from .config import Settings, get_settings
from .db import close_core, init_db
from .exceptions import MemeApiError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


# Error handlers
def handle_meme_api_error(error: MemeApiError):
    """Handle MemeApiError and subclasses using their status code."""
    if error.status_code >= 500:
        logger.error(f"{error.__class__.__name__}: {error.message} {error.details}")
        return jsonify({"error": INTERNAL_ERROR_MESSAGE}), error.status_code

    logger.info(f"{error.__class__.__name__} ({error.status_code}): {error.message}")
    return jsonify({"error": error.message}), error.status_code


def handle_http_exception(error: HTTPException):
    """Render routing errors (404, 405, ...) as JSON."""
    return jsonify({"error": error.name}), error.code


def handle_internal_error(error: Exception):
    """Handle unexpected exceptions without leaking details."""
    logger.error(f"Internal error: {error}", exc_info=error)
    return jsonify({"error": INTERNAL_ERROR_MESSAGE}), 500


# Health check endpoint
def health():
    """Health check endpoint."""
    return jsonify({"status": "ok"})


def create_app(config: Settings | None = None) -> Flask:
    """
    Build the Flask application.

    Args:
        config: Settings to use. Loaded from the environment when omitted.

    Raises:
        pydantic.ValidationError: If settings come from the environment and
            JWT_SECRET is not set
    """
    if config is None:
        try:
            config = get_settings()
        except PydanticValidationError:
            logger.critical("JWT_SECRET is not configured; refusing to start")
            raise

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    app = Flask(__name__)
    app.config.update(
        DATABASE_PATH=config.database_path,
        BCRYPT_WORK_FACTOR=config.bcrypt_work_factor,
    )
    app.extensions[token.EXTENSION_KEY] = token.TokenSigner(
        config.jwt_secret,
        expiry=timedelta(seconds=config.jwt_expiry_seconds),
    )

    # CORS configuration
    CORS(app, origins=config.cors_origins, supports_credentials=True)

    try:
        init_db(config.database_path)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise
    app.teardown_appcontext(close_core)

    app.register_error_handler(MemeApiError, handle_meme_api_error)
    app.register_error_handler(HTTPException, handle_http_exception)
    app.register_error_handler(Exception, handle_internal_error)

    app.add_url_rule("/health", view_func=health, methods=["GET"])

    app.register_blueprint(auth_bp, url_prefix=f"{config.api_prefix}/auth")
    app.register_blueprint(api_bp, url_prefix=config.api_prefix)

    return app


if __name__ == "__main__":
    create_app().run(debug=True)
