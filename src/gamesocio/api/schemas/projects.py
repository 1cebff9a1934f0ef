"""Pydantic schemas for project, feedback and collaborator request endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from gamesocio.api.schemas.common import AuthorSummary
from gamesocio.constants import RATING_MAX, RATING_MIN, CollaboratorRole, ProjectStage


class ProjectResponse(BaseModel):
    """Response schema for a collaboration project, with its rating aggregate."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    creator_id: str
    title: str
    description: str
    stage: ProjectStage
    image_url: str | None = None
    rating_sum: int = 0
    rating_count: int = 0
    average_rating: float = Field(0.0, description="Mean rating to one decimal, 0 if unrated")
    created_at: datetime
    updated_at: datetime
    profile: AuthorSummary | None = None


class ProjectCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, description="Project title")
    description: str = Field(..., min_length=1, description="What the project is")
    stage: ProjectStage = Field(ProjectStage.IDEA, description="Development stage")
    image_url: str | None = Field(None, description="Cover image URL")


class ProjectUpdateRequest(BaseModel):
    """Request schema for updating a project.

    All fields are optional; only provided fields are updated. The rating
    aggregate can only change by submitting feedback.
    """

    title: str | None = Field(None, min_length=1)
    description: str | None = Field(None, min_length=1)
    stage: ProjectStage | None = None
    image_url: str | None = None


class FeedbackCreateRequest(BaseModel):
    rating: int = Field(..., ge=RATING_MIN, le=RATING_MAX, description="Rating from 1 to 5")
    content: str = Field(..., min_length=1, description="Feedback text")


class FeedbackResponse(BaseModel):
    """Response schema for a piece of project feedback."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    project_id: str
    user_id: str
    content: str
    rating: int
    created_at: datetime
    profile: AuthorSummary | None = None


class CollaboratorRequestCreateRequest(BaseModel):
    role_type: CollaboratorRole = Field(..., description="Role the project needs")
    description: str = Field(..., min_length=1, description="What the role involves")


class CollaboratorRequestUpdateRequest(BaseModel):
    role_type: CollaboratorRole | None = None
    description: str | None = Field(None, min_length=1)


class ProjectTitle(BaseModel):
    title: str


class CollaboratorRequestResponse(BaseModel):
    """Response schema for an open collaborator role."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    project_id: str
    role_type: CollaboratorRole
    description: str
    created_at: datetime
    project: ProjectTitle | None = None
