"""ORM models for collaboration projects, their feedback and open roles.

A project carries a rating aggregate (``rating_sum``/``rating_count``) that
is only ever changed together with the insertion of a feedback row.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gamesocio.constants import ProjectStage
from gamesocio.data.db import Base, generate_uuid

if TYPE_CHECKING:
    from gamesocio.data.models.profile import Profile


class Project(Base):
    """Game prototype or work in progress open for feedback and collaborators.

    Attributes:
        stage: One of :class:`gamesocio.constants.ProjectStage`.
        rating_sum: Sum of every rating ever submitted for the project.
        rating_count: Number of ratings submitted.
    """

    __tablename__ = "projects"
    __table_args__ = (
        CheckConstraint("rating_sum >= 0", name="ck_projects_rating_sum_non_negative"),
        CheckConstraint("rating_count >= 0", name="ck_projects_rating_count_non_negative"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    creator_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    stage: Mapped[str] = mapped_column(String, nullable=False, default=ProjectStage.IDEA.value)
    image_url: Mapped[str | None] = mapped_column(String, nullable=True)
    rating_sum: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    rating_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    profile: Mapped[Profile] = relationship("Profile", back_populates="projects")
    feedback: Mapped[list[ProjectFeedback]] = relationship(
        "ProjectFeedback", back_populates="project", cascade="all, delete-orphan"
    )
    collaborator_requests: Mapped[list[CollaboratorRequest]] = relationship(
        "CollaboratorRequest", back_populates="project", cascade="all, delete-orphan"
    )


class ProjectFeedback(Base):
    """A rating (1-5) with a comment left on a project."""

    __tablename__ = "project_feedback"
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_project_feedback_rating_range"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    project_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )

    project: Mapped[Project] = relationship("Project", back_populates="feedback")
    profile: Mapped[Profile] = relationship("Profile", back_populates="feedback")


class CollaboratorRequest(Base):
    """Open role a project creator is looking to fill."""

    __tablename__ = "collaborator_requests"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    project_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role_type: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )

    project: Mapped[Project] = relationship("Project", back_populates="collaborator_requests")
