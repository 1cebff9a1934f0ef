from __future__ import annotations

from gamesocio.constants.content import (
    IMAGE_EXTENSIONS,
    PDF_EXTENSION,
    PORTFOLIO_BUCKET,
    RATING_MAX,
    RATING_MIN,
    CollaboratorRole,
    EventType,
    IdeaCategory,
    MediaCategory,
    ProjectStage,
)

__all__ = [
    "CollaboratorRole",
    "EventType",
    "IdeaCategory",
    "MediaCategory",
    "ProjectStage",
    "IMAGE_EXTENSIONS",
    "PDF_EXTENSION",
    "PORTFOLIO_BUCKET",
    "RATING_MIN",
    "RATING_MAX",
]
