"""Meme request/response schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 300


class MemeCreate(BaseModel):
    """Request body for POST /api/memes.

    The image URL is accepted as either imageUrl or image_url.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str | None = None
    image_url: str = Field(..., alias="imageUrl")

    @model_validator(mode="before")
    @classmethod
    def require_title_and_image_url(cls, data: Any) -> Any:
        if isinstance(data, dict):
            image_url = data.get("imageUrl") or data.get("image_url")
            if not data.get("title") or not image_url:
                raise ValueError("Title and imageUrl are required")
        return data

    @field_validator("title")
    @classmethod
    def title_max_length(cls, v: str) -> str:
        if len(v) > TITLE_MAX_LENGTH:
            raise ValueError(f"Title max length is {TITLE_MAX_LENGTH}")
        return v

    @field_validator("description")
    @classmethod
    def description_max_length(cls, v: str | None) -> str | None:
        if v is not None and len(v) > DESCRIPTION_MAX_LENGTH:
            raise ValueError(f"Description max length is {DESCRIPTION_MAX_LENGTH}")
        return v


class MemeResponse(BaseModel):
    """A stored meme."""

    id: int
    title: str
    description: str | None
    image_url: str
    created_at: str
