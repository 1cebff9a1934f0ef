"""Pydantic schemas for media post API endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from gamesocio.api.schemas.common import AuthorSummary
from gamesocio.constants import MediaCategory


class MediaPostResponse(BaseModel):
    """Response schema for a media post."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    author_id: str
    title: str
    content: str
    category: MediaCategory
    image_url: str | None = None
    upvotes: int = 0
    view_count: int = 0
    created_at: datetime
    updated_at: datetime
    profile: AuthorSummary | None = None


class MediaPostCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, description="Post title")
    content: str = Field(..., min_length=1, description="Post body")
    category: MediaCategory = Field(..., description="Section the post is filed under")
    image_url: str | None = Field(None, description="Cover image URL")


class MediaPostUpdateRequest(BaseModel):
    """Request schema for updating a media post.

    All fields are optional; only provided fields are updated.
    """

    title: str | None = Field(None, min_length=1)
    content: str | None = Field(None, min_length=1)
    category: MediaCategory | None = None
    image_url: str | None = None
