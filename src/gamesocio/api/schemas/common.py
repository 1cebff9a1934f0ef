"""Shared Pydantic schemas for API responses."""

from __future__ import annotations

from pydantic import BaseModel, Field


class AuthorSummary(BaseModel):
    """Profile fields embedded in content listings."""

    username: str
    avatar_url: str | None = None
    badges: list[str] = Field(default_factory=list)


class UpvoteRequest(BaseModel):
    """Request schema for upvoting an idea or media post.

    When ``current_upvotes`` is given, the count written is that value plus
    one. When omitted, the stored count is incremented in place.
    """

    current_upvotes: int | None = Field(
        None, ge=0, description="Upvote count the client last displayed"
    )


class UpvoteResponse(BaseModel):
    id: str
    upvotes: int


class PurgeResponse(BaseModel):
    purged: int = Field(description="Number of orphaned objects removed")
