"""ORM model for portfolio items shown on a user's profile.

Each item may hold one attachment: an uploaded image or PDF stored in the
portfolio bucket, or an external link. The attachment is spread over the
``file_*`` columns; all four are null when the item has none.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gamesocio.data.db import Base, generate_uuid

if TYPE_CHECKING:
    from gamesocio.data.models.profile import Profile


class PortfolioItem(Base):
    """Persisted portfolio entry.

    Attributes:
        id: UUID primary key.
        user_id: Owning profile.
        title: Title of the portfolio item.
        description: Free-text description.
        image_url: Legacy cover image URL, independent of the attachment.
        tags: Tag set.
        file_type: ``image``, ``pdf`` or ``link``.
        file_url: Public URL of the stored object, or the external link.
        file_name: Display name (original file name, or the link).
        file_key: Object-store key of the uploaded object (null for links).
        created_at: UTC timestamp of when the item was created.
    """

    __tablename__ = "portfolio_items"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    user_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str | None] = mapped_column(String, nullable=True)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    file_type: Mapped[str | None] = mapped_column(String(16), nullable=True)
    file_url: Mapped[str | None] = mapped_column(String, nullable=True)
    file_name: Mapped[str | None] = mapped_column(String, nullable=True)
    file_key: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )

    profile: Mapped[Profile] = relationship("Profile", back_populates="portfolio_items")
