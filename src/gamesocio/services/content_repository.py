"""Content repository: record-oriented CRUD over the community tables.

Every table is addressed by name and records cross this boundary as plain
dicts. Writes enforce the ownership rules of the community: the owner column
of a row must match the acting user, and rows without an owner column of
their own (collaborator requests) are writable by the owner of their parent
project. Every write path is a no-op when no user is signed in.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import func, inspect, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from gamesocio.data.db import Base, get_session
from gamesocio.data.models import (
    CollaboratorRequest,
    Event,
    GameIdea,
    MediaPost,
    PortfolioItem,
    Profile,
    Project,
    ProjectFeedback,
)
from gamesocio.models import (
    CurrentUser,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
)
from gamesocio.utils.tags import normalize_tags

logger = logging.getLogger(__name__)

__all__ = [
    "TABLES",
    "TableSpec",
    "count_by",
    "delete",
    "get",
    "get_table_spec",
    "insert",
    "record_to_dict",
    "select",
    "update",
]

_PROFILE_JOIN = ("profile", ("username", "avatar_url", "badges"))
_PROJECT_JOIN = ("project", ("title",))

# Columns the database fills in and nobody may write directly.
_SERVER_COLUMNS = frozenset({"id", "created_at", "updated_at"})
_TAG_COLUMNS = frozenset({"tags", "badges"})


@dataclass(frozen=True, slots=True)
class TableSpec:
    """How a table is exposed through the repository.

    Attributes:
        model: ORM class backing the table.
        owner_column: Column that must equal the acting user id on writes.
        parent: ``(fk_column, parent_model, parent_owner_column)`` for tables
            whose rows are owned through a parent row.
        protected_columns: Columns only a dedicated service may change
            (counters, badges).
        search_columns: Text columns matched by ``select(search=...)``.
        joins: Join name -> (relationship attribute, fields to include).
        writable: False for tables whose writes must go through a service.
    """

    model: type[Base]
    owner_column: str | None = None
    parent: tuple[str, type[Base], str] | None = None
    protected_columns: frozenset[str] = frozenset()
    search_columns: tuple[str, ...] = ()
    joins: Mapping[str, tuple[str, tuple[str, ...]]] = field(default_factory=dict)
    writable: bool = True


TABLES: dict[str, TableSpec] = {
    "profiles": TableSpec(
        model=Profile,
        owner_column="id",
        protected_columns=frozenset({"badges"}),
        search_columns=("username", "bio"),
    ),
    "game_ideas": TableSpec(
        model=GameIdea,
        owner_column="creator_id",
        protected_columns=frozenset({"upvotes", "view_count"}),
        search_columns=("title", "summary", "genre"),
        joins={"profile": _PROFILE_JOIN},
    ),
    "media_posts": TableSpec(
        model=MediaPost,
        owner_column="author_id",
        protected_columns=frozenset({"upvotes", "view_count"}),
        search_columns=("title", "content"),
        joins={"profile": _PROFILE_JOIN},
    ),
    "events": TableSpec(
        model=Event,
        owner_column="organizer_id",
        search_columns=("title", "description"),
        joins={"profile": _PROFILE_JOIN},
    ),
    "projects": TableSpec(
        model=Project,
        owner_column="creator_id",
        protected_columns=frozenset({"rating_sum", "rating_count"}),
        search_columns=("title", "description"),
        joins={"profile": _PROFILE_JOIN},
    ),
    "project_feedback": TableSpec(
        model=ProjectFeedback,
        owner_column="user_id",
        search_columns=("content",),
        joins={"profile": _PROFILE_JOIN, "project": _PROJECT_JOIN},
        writable=False,
    ),
    "collaborator_requests": TableSpec(
        model=CollaboratorRequest,
        parent=("project_id", Project, "creator_id"),
        search_columns=("description",),
        joins={"project": _PROJECT_JOIN},
    ),
    "portfolio_items": TableSpec(
        model=PortfolioItem,
        owner_column="user_id",
        search_columns=("title", "description"),
        joins={"profile": _PROFILE_JOIN},
    ),
}


def get_table_spec(table: str) -> TableSpec:
    """Return the TableSpec registered for ``table`` or raise ValidationError."""
    spec = TABLES.get(table)
    if spec is None:
        raise ValidationError(f"Unknown table '{table}'.")
    return spec


def _column_names(spec: TableSpec) -> set[str]:
    return {attr.key for attr in inspect(spec.model).column_attrs}


def _column(spec: TableSpec, name: str) -> Any:
    if name not in _column_names(spec):
        raise ValidationError(f"Unknown column '{name}' on {spec.model.__tablename__}.")
    return getattr(spec.model, name)


def _validate_joins(spec: TableSpec, joins: Iterable[str]) -> tuple[str, ...]:
    names = tuple(joins)
    for name in names:
        if name not in spec.joins:
            raise ValidationError(f"Cannot join '{name}' on {spec.model.__tablename__}.")
    return names


def record_to_dict(row: Base, joins: Iterable[str] = (), spec: TableSpec | None = None) -> dict:
    """Convert an ORM row to a dictionary, embedding the requested joins.

    Must be called while the row's session is still open when joins are
    requested.
    """
    data = {attr.key: getattr(row, attr.key) for attr in inspect(row).mapper.column_attrs}
    if spec is None:
        return data

    for name in joins:
        relationship_name, fields = spec.joins[name]
        related = getattr(row, relationship_name)
        data[name] = None if related is None else {f: getattr(related, f) for f in fields}
    return data


def _clean_values(spec: TableSpec, values: Mapping[str, Any], *, is_update: bool) -> dict:
    """Validate column names and normalise tag columns."""
    columns = _column_names(spec)
    cleaned: dict[str, Any] = {}
    for key, value in values.items():
        if key not in columns:
            raise ValidationError(f"Unknown column '{key}' on {spec.model.__tablename__}.")
        if key in _SERVER_COLUMNS:
            raise ValidationError(f"Column '{key}' is set by the server.")
        if key in spec.protected_columns:
            raise ValidationError(f"Column '{key}' is maintained by the server.")
        if is_update and key == spec.owner_column:
            raise ValidationError(f"Column '{key}' cannot be changed.")
        if is_update and spec.parent is not None and key == spec.parent[0]:
            raise ValidationError(f"Column '{key}' cannot be changed.")
        cleaned[key] = normalize_tags(value) if key in _TAG_COLUMNS else value
    return cleaned


def _ensure_writable(spec: TableSpec) -> None:
    if not spec.writable:
        raise ValidationError(
            f"{spec.model.__tablename__} rows are written through their dedicated service."
        )


def _ensure_owner(
    session: Session, spec: TableSpec, values: Mapping[str, Any], actor: CurrentUser
) -> None:
    """Raise PermissionDeniedError unless ``actor`` owns the row described by ``values``."""
    if spec.owner_column is not None:
        if values.get(spec.owner_column) != actor.id:
            raise PermissionDeniedError(
                f"You can only modify your own {spec.model.__tablename__} rows."
            )
        return

    if spec.parent is not None:
        fk_column, parent_model, parent_owner_column = spec.parent
        parent = session.get(parent_model, values.get(fk_column))
        if parent is None:
            raise NotFoundError(f"{parent_model.__tablename__} row not found.")
        if getattr(parent, parent_owner_column) != actor.id:
            raise PermissionDeniedError(
                f"Only the owner of the {parent_model.__tablename__} row can modify it."
            )


def select(
    table: str,
    filters: Mapping[str, Any] | None = None,
    *,
    order_by: str | None = "created_at",
    descending: bool = True,
    joins: Iterable[str] = (),
    search: str | None = None,
) -> list[dict]:
    """Load rows from ``table``.

    Args:
        table: Table name, e.g. ``"game_ideas"``.
        filters: Column -> value equality filters (``None`` matches NULL).
        order_by: Column to order by, or ``None`` for storage order.
        descending: Order direction.
        joins: Names of related records to embed (see ``TableSpec.joins``).
        search: Case-insensitive substring matched against the table's
            searchable text columns.

    Returns:
        List of record dictionaries.

    Raises:
        ValidationError: Unknown table, column or join.
        StorageError: The database query failed.
    """
    spec = get_table_spec(table)
    join_names = _validate_joins(spec, joins)

    clauses = []
    for column_name, value in (filters or {}).items():
        column = _column(spec, column_name)
        clauses.append(column.is_(None) if value is None else column == value)

    term = search.strip().lower() if search else ""
    if term:
        if not spec.search_columns:
            raise ValidationError(f"{table} does not support search.")
        escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        pattern = f"%{escaped}%"
        clauses.append(
            or_(
                *(
                    func.lower(_column(spec, name)).like(pattern, escape="\\")
                    for name in spec.search_columns
                )
            )
        )

    order_clause = None
    if order_by is not None:
        order_column = _column(spec, order_by)
        order_clause = order_column.desc() if descending else order_column.asc()

    try:
        with get_session() as session:
            query = session.query(spec.model).filter(*clauses)
            for name in join_names:
                query = query.options(selectinload(getattr(spec.model, spec.joins[name][0])))
            if order_clause is not None:
                query = query.order_by(order_clause, spec.model.id)
            return [record_to_dict(row, join_names, spec) for row in query.all()]
    except SQLAlchemyError as exc:
        logger.exception("Failed to select from %s", table)
        raise StorageError(f"Failed to load {table}.") from exc


def get(table: str, record_id: Any, *, joins: Iterable[str] = ()) -> dict | None:
    """Return a single record by primary key, or None if it does not exist."""
    spec = get_table_spec(table)
    join_names = _validate_joins(spec, joins)
    try:
        with get_session() as session:
            row = session.get(spec.model, record_id)
            if row is None:
                return None
            return record_to_dict(row, join_names, spec)
    except SQLAlchemyError as exc:
        logger.exception("Failed to load %s %s", table, record_id)
        raise StorageError(f"Failed to load {table} record.") from exc


def count_by(table: str, column: str, filters: Mapping[str, Any] | None = None) -> dict[Any, int]:
    """Return the number of rows per distinct value of ``column``."""
    spec = get_table_spec(table)
    group_column = _column(spec, column)
    clauses = [_column(spec, name) == value for name, value in (filters or {}).items()]
    try:
        with get_session() as session:
            rows = (
                session.query(group_column, func.count())
                .filter(*clauses)
                .group_by(group_column)
                .all()
            )
            return {value: count for value, count in rows}
    except SQLAlchemyError as exc:
        logger.exception("Failed to count %s by %s", table, column)
        raise StorageError(f"Failed to count {table}.") from exc


def insert(table: str, actor: CurrentUser | None, record: Mapping[str, Any]) -> dict | None:
    """Insert a record owned by ``actor`` and return it.

    The owner column defaults to the acting user when omitted.

    Returns:
        The inserted record, or None when no user is signed in.

    Raises:
        ValidationError: Unknown column, server-managed column, or a
            constraint violation.
        PermissionDeniedError: The record would be owned by someone else.
        NotFoundError: The parent row of an owned-through-parent record is missing.
        StorageError: The database write failed.
    """
    if actor is None:
        logger.warning("Ignoring insert into %s without a signed-in user", table)
        return None

    spec = get_table_spec(table)
    _ensure_writable(spec)
    values = _clean_values(spec, record, is_update=False)
    if spec.owner_column is not None:
        values.setdefault(spec.owner_column, actor.id)

    try:
        with get_session() as session:
            _ensure_owner(session, spec, values, actor)
            row = spec.model(**values)
            session.add(row)
            session.flush()
            session.refresh(row)
            return record_to_dict(row)
    except IntegrityError as exc:
        logger.warning("Constraint violation inserting into %s: %s", table, exc.orig)
        raise ValidationError(f"Record violates a constraint on {table}.") from exc
    except SQLAlchemyError as exc:
        logger.exception("Failed to insert into %s", table)
        raise StorageError(f"Failed to save {table} record.") from exc


def update(
    table: str, actor: CurrentUser | None, record_id: Any, changes: Mapping[str, Any]
) -> dict | None:
    """Apply ``changes`` to a record owned by ``actor`` and return the updated record.

    Returns:
        The updated record, or None when no user is signed in.

    Raises:
        NotFoundError: No record with ``record_id``.
        PermissionDeniedError: The record belongs to someone else.
        ValidationError: Unknown or protected column.
        StorageError: The database write failed.
    """
    if actor is None:
        logger.warning("Ignoring update of %s %s without a signed-in user", table, record_id)
        return None

    spec = get_table_spec(table)
    _ensure_writable(spec)
    values = _clean_values(spec, changes, is_update=True)

    try:
        with get_session() as session:
            row = session.get(spec.model, record_id)
            if row is None:
                raise NotFoundError(f"{table} record {record_id} not found.")
            _ensure_owner(session, spec, record_to_dict(row), actor)

            for key, value in values.items():
                setattr(row, key, value)
            session.flush()
            session.refresh(row)
            return record_to_dict(row)
    except IntegrityError as exc:
        logger.warning("Constraint violation updating %s %s: %s", table, record_id, exc.orig)
        raise ValidationError(f"Record violates a constraint on {table}.") from exc
    except SQLAlchemyError as exc:
        logger.exception("Failed to update %s %s", table, record_id)
        raise StorageError(f"Failed to save {table} record.") from exc


def delete(table: str, actor: CurrentUser | None, record_id: Any) -> dict | None:
    """Delete a record owned by ``actor``.

    Returns:
        The deleted record as it was before deletion, or None when no user
        is signed in.

    Raises:
        NotFoundError: No record with ``record_id``.
        PermissionDeniedError: The record belongs to someone else.
        StorageError: The database write failed.
    """
    if actor is None:
        logger.warning("Ignoring delete of %s %s without a signed-in user", table, record_id)
        return None

    spec = get_table_spec(table)
    _ensure_writable(spec)

    try:
        with get_session() as session:
            row = session.get(spec.model, record_id)
            if row is None:
                raise NotFoundError(f"{table} record {record_id} not found.")
            snapshot = record_to_dict(row)
            _ensure_owner(session, spec, snapshot, actor)

            session.delete(row)
            return snapshot
    except SQLAlchemyError as exc:
        logger.exception("Failed to delete %s %s", table, record_id)
        raise StorageError(f"Failed to delete {table} record.") from exc
