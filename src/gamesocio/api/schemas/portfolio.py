"""Pydantic schemas for portfolio API endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from gamesocio.models import AttachmentKind


class AttachmentResponse(BaseModel):
    """The file or link attached to a portfolio item."""

    model_config = ConfigDict(from_attributes=True)

    kind: AttachmentKind
    url: str
    display_name: str


class PortfolioItemResponse(BaseModel):
    """Response schema for a portfolio item."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    description: str
    image_url: str | None = None
    tags: list[str] = Field(default_factory=list)
    attachment: AttachmentResponse | None = None
    created_at: datetime


class PortfolioItemCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, description="Portfolio item title")
    description: str = Field(..., min_length=1, description="Portfolio item description")
    image_url: str | None = Field(None, description="Cover image URL")
    tags: list[str] = Field(default_factory=list, description="Free-form tags")


class PortfolioItemUpdateRequest(BaseModel):
    """Request schema for updating a portfolio item.

    All fields are optional; only provided fields are updated. Attachments
    are managed through the attachment endpoints.
    """

    title: str | None = Field(None, min_length=1)
    description: str | None = Field(None, min_length=1)
    image_url: str | None = None
    tags: list[str] | None = None


class PortfolioLinkRequest(BaseModel):
    url: str = Field(..., min_length=1, description="External link to attach")
