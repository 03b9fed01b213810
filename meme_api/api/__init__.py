"""Protected API endpoints for the Meme API.

The api blueprint aggregates all resource blueprints and is the single place
authentication is applied: every request routed through it must carry a
valid bearer token.
"""

from flask import Blueprint

from ..auth.decorators import authenticate_request
from . import memes

api_bp = Blueprint("api", __name__)


@api_bp.before_request
def authenticate():
    """Require a valid bearer token for all resource endpoints."""
    authenticate_request()


api_bp.register_blueprint(memes.memes_bp)

__all__ = ["api_bp"]
