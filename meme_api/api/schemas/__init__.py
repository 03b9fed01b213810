"""Pydantic schemas for the meme endpoints."""

from .meme import MemeCreate, MemeResponse

__all__ = ["MemeCreate", "MemeResponse"]
