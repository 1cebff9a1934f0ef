"""ORM model for community events (tournaments, hackathons, challenges)."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gamesocio.data.db import Base, generate_uuid

if TYPE_CHECKING:
    from gamesocio.data.models.profile import Profile


class Event(Base):
    """Event announced by an organizer.

    Attributes:
        event_type: One of the values of :class:`gamesocio.constants.EventType`.
        is_online: True when the event has no physical venue.
        event_date: When the event takes place; listings are ordered by it.
        registration_url: Optional external sign-up page.
    """

    __tablename__ = "events"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    organizer_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    event_type: Mapped[str] = mapped_column(String, nullable=False)
    location: Mapped[str] = mapped_column(String, nullable=False)
    is_online: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    event_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    registration_url: Mapped[str | None] = mapped_column(String, nullable=True)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )

    profile: Mapped[Profile] = relationship("Profile", back_populates="events")
