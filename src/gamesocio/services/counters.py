"""Aggregate counters attached to community content.

Two counter payloads exist: upvote counts on game ideas and media posts, and
the rating aggregate (``rating_sum``/``rating_count``) on projects. Ratings
are only ever recorded together with the feedback row that carries them, in
a single transaction, so the aggregate always equals the sum and count of
the stored feedback.

``increment_upvote`` keeps the front-end's read-then-write contract: the
caller supplies the count it last saw and that value plus one is written.
Two callers working from the same stale count therefore lose an increment.
``add_upvote`` performs the increment in the database instead and never
loses one.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError

from gamesocio.constants import RATING_MAX, RATING_MIN
from gamesocio.data.db import get_session
from gamesocio.data.models import GameIdea, MediaPost, Project, ProjectFeedback
from gamesocio.models import CurrentUser, NotFoundError, StorageError, ValidationError
from gamesocio.services.content_repository import record_to_dict

logger = logging.getLogger(__name__)

__all__ = [
    "UPVOTE_TABLES",
    "add_upvote",
    "average_rating",
    "increment_upvote",
    "submit_rating",
    "validate_rating",
]

UPVOTE_TABLES = {
    "game_ideas": GameIdea,
    "media_posts": MediaPost,
}


def _upvote_model(table: str) -> type[GameIdea] | type[MediaPost]:
    model = UPVOTE_TABLES.get(table)
    if model is None:
        raise ValidationError(f"{table} rows cannot be upvoted.")
    return model


def increment_upvote(
    table: str, item_id: str, current_upvotes: int, *, actor: CurrentUser | None
) -> int | None:
    """Write ``current_upvotes + 1`` as the item's upvote count.

    The write is based solely on the caller's last-known count; concurrent
    callers holding the same count overwrite each other.

    Args:
        table: ``"game_ideas"`` or ``"media_posts"``.
        item_id: Primary key of the item.
        current_upvotes: Upvote count the caller last read.
        actor: Acting user; nothing is written when None.

    Returns:
        The count written, or None when no user is signed in.
    """
    model = _upvote_model(table)
    if isinstance(current_upvotes, bool) or not isinstance(current_upvotes, int):
        raise ValidationError("current_upvotes must be an integer.")
    if current_upvotes < 0:
        raise ValidationError("current_upvotes cannot be negative.")
    if actor is None:
        logger.warning("Ignoring upvote on %s %s without a signed-in user", table, item_id)
        return None

    new_upvotes = current_upvotes + 1
    try:
        with get_session() as session:
            result = session.execute(
                update(model).where(model.id == item_id).values(upvotes=new_upvotes)
            )
            if result.rowcount == 0:
                raise NotFoundError(f"{table} record {item_id} not found.")
    except SQLAlchemyError as exc:
        logger.exception("Failed to upvote %s %s", table, item_id)
        raise StorageError(f"Failed to upvote {table} record.") from exc

    return new_upvotes


def add_upvote(table: str, item_id: str, *, actor: CurrentUser | None) -> int | None:
    """Increment the item's upvote count in the database and return the new count."""
    model = _upvote_model(table)
    if actor is None:
        logger.warning("Ignoring upvote on %s %s without a signed-in user", table, item_id)
        return None

    try:
        with get_session() as session:
            result = session.execute(
                update(model).where(model.id == item_id).values(upvotes=model.upvotes + 1)
            )
            if result.rowcount == 0:
                raise NotFoundError(f"{table} record {item_id} not found.")
            return session.query(model.upvotes).filter(model.id == item_id).scalar()
    except SQLAlchemyError as exc:
        logger.exception("Failed to upvote %s %s", table, item_id)
        raise StorageError(f"Failed to upvote {table} record.") from exc


def validate_rating(rating: Any) -> int:
    """Return ``rating`` if it is an integer in [1, 5], else raise ValidationError."""
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationError("Rating must be a whole number.")
    if not RATING_MIN <= rating <= RATING_MAX:
        raise ValidationError(f"Rating must be between {RATING_MIN} and {RATING_MAX}.")
    return rating


def submit_rating(
    project_id: str, rating: int, feedback_text: str, *, actor: CurrentUser | None
) -> dict | None:
    """Record a rated piece of feedback and fold it into the project's aggregate.

    The feedback row and the ``rating_sum``/``rating_count`` increment are
    written in one transaction; if either fails, neither is kept.

    Args:
        project_id: Project being rated.
        rating: Integer from 1 to 5.
        feedback_text: Comment accompanying the rating.
        actor: Acting user; nothing is written when None.

    Returns:
        The updated project record (including ``average_rating``), or None
        when no user is signed in.

    Raises:
        ValidationError: Rating out of range or blank feedback.
        NotFoundError: The project does not exist.
        StorageError: The database write failed.
    """
    validate_rating(rating)
    if not feedback_text or not feedback_text.strip():
        raise ValidationError("Feedback text cannot be empty.")
    if actor is None:
        logger.warning("Ignoring rating of project %s without a signed-in user", project_id)
        return None

    try:
        with get_session() as session:
            if session.get(Project, project_id) is None:
                raise NotFoundError(f"Project {project_id} not found.")

            session.add(
                ProjectFeedback(
                    project_id=project_id,
                    user_id=actor.id,
                    content=feedback_text.strip(),
                    rating=rating,
                )
            )
            session.execute(
                update(Project)
                .where(Project.id == project_id)
                .values(
                    rating_sum=Project.rating_sum + rating,
                    rating_count=Project.rating_count + 1,
                )
            )
            session.flush()

            project = session.get(Project, project_id, populate_existing=True)
            record = record_to_dict(project)
    except SQLAlchemyError as exc:
        logger.exception("Failed to record rating for project %s", project_id)
        raise StorageError("Failed to save feedback.") from exc

    record["average_rating"] = average_rating(record)
    logger.info("Recorded rating %d for project %s", rating, project_id)
    return record


def average_rating(project: Mapping[str, Any] | Any) -> float:
    """Return the project's mean rating rounded to one decimal (0 when unrated).

    Args:
        project: Mapping or object exposing ``rating_sum`` and ``rating_count``.
    """
    if isinstance(project, Mapping):
        rating_sum = project.get("rating_sum") or 0
        rating_count = project.get("rating_count") or 0
    else:
        rating_sum = getattr(project, "rating_sum", 0) or 0
        rating_count = getattr(project, "rating_count", 0) or 0

    if rating_count == 0:
        return 0.0
    # Half-up on the exact float value, as Number.toFixed(1) rounds.
    mean = Decimal(rating_sum / rating_count)
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
