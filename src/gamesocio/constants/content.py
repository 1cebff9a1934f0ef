"""Vocabularies shared by the content tables and the API schemas.

The values mirror the choices offered by the community front-end, so they are
stored verbatim (including spaces) in the database.
"""

from __future__ import annotations

from enum import StrEnum

PORTFOLIO_BUCKET = "portfolio_uploads"

IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif", "webp"})
PDF_EXTENSION = "pdf"

RATING_MIN = 1
RATING_MAX = 5


class IdeaCategory(StrEnum):
    """Kind of game idea posted to the idea hub."""

    STORY = "Story"
    PROTOTYPE = "Prototype"
    ELEMENT = "Element"


class MediaCategory(StrEnum):
    """Section a community media post is filed under."""

    REVIEWS = "Reviews"
    GAME_NEWS = "Game News"
    DEVLOGS = "Devlogs"
    OPINION = "Opinion"


class EventType(StrEnum):
    TOURNAMENT = "Tournament"
    HACKATHON = "Hackathon"
    CSR_CHALLENGE = "CSR Challenge"


class ProjectStage(StrEnum):
    """Development stage of a collaboration project."""

    IDEA = "Idea"
    PROTOTYPE = "Prototype"
    BETA = "Beta"
    RELEASED = "Released"


class CollaboratorRole(StrEnum):
    ARTIST = "Artist"
    SOUND_DESIGNER = "Sound Designer"
    CODER = "Coder"
    WRITER = "Writer"
