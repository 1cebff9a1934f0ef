"""Pydantic schemas for profile API endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ProfileResponse(BaseModel):
    """Response schema for profile data."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    avatar_url: str | None = None
    bio: str | None = None
    badges: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class ProfileCreateRequest(BaseModel):
    """Request schema for creating the signed-in user's profile."""

    username: str = Field(..., min_length=1, description="Public handle")
    avatar_url: str | None = Field(None, description="Avatar image URL")
    bio: str | None = Field(None, description="Short biography")


class ProfileUpdateRequest(BaseModel):
    """Request schema for updating a profile.

    All fields are optional; only provided fields are updated.
    """

    username: str | None = Field(None, min_length=1, description="Public handle")
    avatar_url: str | None = Field(None, description="Avatar image URL")
    bio: str | None = Field(None, description="Short biography")
