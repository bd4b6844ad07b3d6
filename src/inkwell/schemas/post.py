# src/inkwell/schemas/post.py
"""Post-related Pydantic schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator

from inkwell.core.settings import settings

from .tag import TagResponse

BANNER_MAX_LENGTH = 191

TagName = Annotated[str, Field(max_length=191)]


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    title: str = Field(..., min_length=5, max_length=190)
    description: str = Field(..., min_length=5, max_length=300)
    content: str = Field(..., min_length=1)
    banner: str | None = Field(None, max_length=BANNER_MAX_LENGTH, description="Relative asset path")
    tags: list[TagName] | None = Field(None, description="Tag names to attach")
    visible: bool | None = None
    private: bool | None = None


class PostUpdate(PostCreate):
    """Schema for replacing a post's editable fields.

    ``banner`` may be the post's current public URL, in which case it is left
    untouched, so the path length limit is only applied by
    ``post_service.update_post`` when the banner is actually replaced.
    """

    banner: str | None = Field(None, description="Relative asset path or current banner URL")


class PostOwner(BaseModel):
    """Public view of a post's author."""

    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    title: str
    description: str
    content: str
    banner: str | None
    visible: bool
    private: bool
    created_at: datetime
    user: PostOwner
    tags: list[TagResponse]

    @model_validator(mode="before")
    @classmethod
    def _from_orm_post(cls, data: object) -> object:
        if isinstance(data, dict):
            return data
        banner = getattr(data, "banner", None)
        return {
            "id": data.id,
            "title": data.title,
            "description": data.description,
            "content": data.content,
            "banner": settings.asset_url(banner) if banner else None,
            "visible": data.visible,
            "private": data.private,
            "created_at": data.created_at,
            "user": data.owner,
            "tags": list(data.tags),
        }

    model_config = ConfigDict(from_attributes=True)


class PaginationMeta(BaseModel):
    """Offset pagination metadata."""

    current_page: int
    per_page: int
    total: int
    last_page: int


class PostPageResponse(BaseModel):
    """One page of posts."""

    data: list[PostResponse]
    meta: PaginationMeta
