"""Meme endpoints for the Meme API.

- GET  /api/memes          - List memes, newest first
- GET  /api/memes/random   - One random meme
- GET  /api/memes/{id}     - Get single meme
- POST /api/memes          - Create meme

Authentication is enforced by the parent /api blueprint.
"""

import logging

from flask import Blueprint, g, jsonify

from ..db import get_core
from .schemas import MemeCreate, MemeResponse
from .validation import validate_request

logger = logging.getLogger(__name__)

memes_bp = Blueprint("memes", __name__, url_prefix="/memes")


def _row_to_meme_response(row) -> dict:
    """Convert a memes table row to a MemeResponse dict."""
    return MemeResponse(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        image_url=row["image_url"],
        created_at=row["created_at"],
    ).model_dump()


@memes_bp.get("")
def list_memes():
    """
    List all memes.

    Returns:
        200: Array of MemeResponse objects, newest first
    """
    core = get_core()
    rows = core.meme.list()
    return jsonify([_row_to_meme_response(row) for row in rows])


@memes_bp.get("/random")
def get_random_meme():
    """
    Get a random meme.

    Returns:
        200: MemeResponse
        404: No memes stored
    """
    core = get_core()
    return jsonify(_row_to_meme_response(core.meme.get_random()))


@memes_bp.get("/<int:meme_id>")
def get_meme(meme_id: int):
    """
    Get a single meme by ID.

    Returns:
        200: MemeResponse
        404: Meme not found
    """
    core = get_core()
    return jsonify(_row_to_meme_response(core.meme.get_by_id(meme_id)))


@memes_bp.post("")
@validate_request
def create_meme(data: MemeCreate):
    """
    Create a meme.

    Request Body (MemeCreate):
        - title: str (required, max 100)
        - description: str | None (max 300)
        - imageUrl: str (required)

    Returns:
        201: MemeResponse with created meme
        400: Validation error
    """
    with get_core(atomic=True) as core:
        meme_id = core.meme.create(
            title=data.title,
            image_url=data.image_url,
            description=data.description,
        )
        row = core.meme.get_by_id(meme_id)

    logger.info(f"Meme {meme_id} created by {g.username}")
    return jsonify(_row_to_meme_response(row)), 201
