"""Pydantic schemas for game idea API endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from gamesocio.api.schemas.common import AuthorSummary
from gamesocio.constants import IdeaCategory


class IdeaResponse(BaseModel):
    """Response schema for a game idea."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    creator_id: str
    title: str
    genre: str
    category: IdeaCategory
    summary: str
    tags: list[str] = Field(default_factory=list)
    file_url: str | None = None
    upvotes: int = 0
    view_count: int = 0
    created_at: datetime
    updated_at: datetime
    profile: AuthorSummary | None = None


class IdeaCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, description="Idea title")
    genre: str = Field(..., min_length=1, description="Game genre")
    category: IdeaCategory = Field(IdeaCategory.STORY, description="Idea category")
    summary: str = Field(..., min_length=1, description="What the idea is about")
    tags: list[str] = Field(default_factory=list, description="Free-form tags")
    file_url: str | None = Field(None, description="Link to a supporting file")


class IdeaUpdateRequest(BaseModel):
    """Request schema for updating a game idea.

    All fields are optional; only provided fields are updated.
    """

    title: str | None = Field(None, min_length=1)
    genre: str | None = Field(None, min_length=1)
    category: IdeaCategory | None = None
    summary: str | None = Field(None, min_length=1)
    tags: list[str] | None = None
    file_url: str | None = None
