"""Pydantic schemas for event API endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from gamesocio.api.schemas.common import AuthorSummary
from gamesocio.constants import EventType


class EventResponse(BaseModel):
    """Response schema for a community event."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    organizer_id: str
    title: str
    description: str
    event_type: EventType
    location: str
    is_online: bool = False
    event_date: datetime
    registration_url: str | None = None
    tags: list[str] = Field(default_factory=list)
    created_at: datetime
    profile: AuthorSummary | None = None


class EventCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, description="Event title")
    description: str = Field(..., min_length=1, description="Event details")
    event_type: EventType = Field(..., description="Kind of event")
    location: str = Field(..., min_length=1, description="Venue, or platform when online")
    is_online: bool = Field(False, description="Whether the event is held online")
    event_date: datetime = Field(..., description="When the event starts (ISO format)")
    registration_url: str | None = Field(None, description="Sign-up link")
    tags: list[str] = Field(default_factory=list, description="Free-form tags")


class EventUpdateRequest(BaseModel):
    """Request schema for updating an event.

    All fields are optional; only provided fields are updated.
    """

    title: str | None = Field(None, min_length=1)
    description: str | None = Field(None, min_length=1)
    event_type: EventType | None = None
    location: str | None = Field(None, min_length=1)
    is_online: bool | None = None
    event_date: datetime | None = None
    registration_url: str | None = None
    tags: list[str] | None = None
