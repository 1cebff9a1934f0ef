"""ORM model for user profiles.

A profile row shares its primary key with the identity-provider user id and
owns every piece of content the user authors.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import JSON, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gamesocio.data.db import Base

if TYPE_CHECKING:
    from gamesocio.data.models.event import Event
    from gamesocio.data.models.game_idea import GameIdea
    from gamesocio.data.models.media_post import MediaPost
    from gamesocio.data.models.portfolio_item import PortfolioItem
    from gamesocio.data.models.project import Project, ProjectFeedback


class Profile(Base):
    """Public profile of a community member.

    Attributes:
        id: Identity-provider user id.
        username: Unique display handle.
        avatar_url: Optional avatar image URL.
        bio: Optional free-text biography.
        badges: Achievement labels such as "Trusted Editor".
    """

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    username: Mapped[str] = mapped_column(String(128), unique=True, nullable=False, index=True)
    avatar_url: Mapped[str | None] = mapped_column(String, nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    badges: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    game_ideas: Mapped[list[GameIdea]] = relationship(
        "GameIdea", back_populates="profile", cascade="all, delete-orphan"
    )
    media_posts: Mapped[list[MediaPost]] = relationship(
        "MediaPost", back_populates="profile", cascade="all, delete-orphan"
    )
    events: Mapped[list[Event]] = relationship(
        "Event", back_populates="profile", cascade="all, delete-orphan"
    )
    projects: Mapped[list[Project]] = relationship(
        "Project", back_populates="profile", cascade="all, delete-orphan"
    )
    feedback: Mapped[list[ProjectFeedback]] = relationship(
        "ProjectFeedback", back_populates="profile", cascade="all, delete-orphan"
    )
    portfolio_items: Mapped[list[PortfolioItem]] = relationship(
        "PortfolioItem", back_populates="profile", cascade="all, delete-orphan"
    )
