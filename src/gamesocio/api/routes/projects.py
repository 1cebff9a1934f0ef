"""Project, feedback and collaborator request routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from gamesocio.api.dependencies import get_current_user
from gamesocio.api.errors import to_http_error
from gamesocio.api.schemas.projects import (
    CollaboratorRequestCreateRequest,
    CollaboratorRequestResponse,
    CollaboratorRequestUpdateRequest,
    FeedbackCreateRequest,
    FeedbackResponse,
    ProjectCreateRequest,
    ProjectResponse,
    ProjectUpdateRequest,
)
from gamesocio.constants import CollaboratorRole
from gamesocio.models import CurrentUser, GameSocioError
from gamesocio.services import content_repository
from gamesocio.services.counters import average_rating, submit_rating

router = APIRouter(prefix="/projects", tags=["projects"])

TABLE = "projects"
FEEDBACK_TABLE = "project_feedback"
REQUESTS_TABLE = "collaborator_requests"


def _project_response(record: dict) -> ProjectResponse:
    return ProjectResponse(**record, average_rating=average_rating(record))


def _require_project(project_id: str) -> dict:
    """Return the project or raise 404."""
    result = content_repository.get(TABLE, project_id, joins=("profile",))
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Project {project_id} not found",
        )
    return result


# Collaborator request routes come first so "/collaborator-requests" is not
# captured by "/{project_id}".


@router.get(
    "/collaborator-requests",
    response_model=list[CollaboratorRequestResponse],
    summary="List open collaborator roles",
    description="Return open roles across all projects, newest first.",
)
def list_collaborator_requests(
    role_type: Annotated[CollaboratorRole | None, Query(description="Role to filter by")] = None,
) -> list[CollaboratorRequestResponse]:
    filters = {"role_type": role_type} if role_type is not None else None
    try:
        results = content_repository.select(REQUESTS_TABLE, filters, joins=("project",))
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return [CollaboratorRequestResponse(**r) for r in results]


@router.get(
    "/collaborator-requests/role-counts",
    response_model=dict[str, int],
    summary="Count open roles by type",
)
def count_collaborator_roles() -> dict[str, int]:
    try:
        counts = content_repository.count_by(REQUESTS_TABLE, "role_type")
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return {str(role): count for role, count in counts.items()}


@router.patch("/collaborator-requests/{request_id}", response_model=CollaboratorRequestResponse)
def update_collaborator_request(
    request_id: Annotated[str, Path(description="Collaborator request ID")],
    data: CollaboratorRequestUpdateRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CollaboratorRequestResponse:
    """Update an open role on one of your projects."""
    try:
        result = content_repository.update(
            REQUESTS_TABLE, current_user, request_id, data.model_dump(exclude_unset=True)
        )
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return CollaboratorRequestResponse(**result)


@router.delete("/collaborator-requests/{request_id}", response_model=CollaboratorRequestResponse)
def delete_collaborator_request(
    request_id: Annotated[str, Path(description="Collaborator request ID")],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CollaboratorRequestResponse:
    try:
        result = content_repository.delete(REQUESTS_TABLE, current_user, request_id)
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return CollaboratorRequestResponse(**result)


@router.get(
    "",
    response_model=list[ProjectResponse],
    summary="List projects",
    description="Return projects newest first, each with its average rating.",
)
def list_projects(
    q: Annotated[str | None, Query(description="Search title and description")] = None,
) -> list[ProjectResponse]:
    try:
        results = content_repository.select(TABLE, joins=("profile",), search=q)
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return [_project_response(r) for r in results]


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(
    project_id: Annotated[str, Path(description="Project ID")],
) -> ProjectResponse:
    try:
        result = _require_project(project_id)
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return _project_response(result)


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(
    data: ProjectCreateRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ProjectResponse:
    """Share a new project as the signed-in user."""
    try:
        result = content_repository.insert(TABLE, current_user, data.model_dump())
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return _project_response(result)


@router.patch("/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: Annotated[str, Path(description="Project ID")],
    data: ProjectUpdateRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ProjectResponse:
    """Update one of your projects. Only provided fields are updated."""
    try:
        result = content_repository.update(
            TABLE, current_user, project_id, data.model_dump(exclude_unset=True)
        )
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return _project_response(result)


@router.delete("/{project_id}", response_model=ProjectResponse)
def delete_project(
    project_id: Annotated[str, Path(description="Project ID")],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ProjectResponse:
    """Delete one of your projects along with its feedback and open roles."""
    try:
        result = content_repository.delete(TABLE, current_user, project_id)
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return _project_response(result)


@router.get("/{project_id}/feedback", response_model=list[FeedbackResponse])
def list_feedback(
    project_id: Annotated[str, Path(description="Project ID")],
) -> list[FeedbackResponse]:
    """List the feedback left on a project, newest first."""
    try:
        _require_project(project_id)
        results = content_repository.select(
            FEEDBACK_TABLE, {"project_id": project_id}, joins=("profile",)
        )
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return [FeedbackResponse(**r) for r in results]


@router.post(
    "/{project_id}/feedback",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Rate a project",
    description=(
        "Record a rating with a comment. The feedback and the project's rating "
        "aggregate are saved together; the updated project is returned."
    ),
)
def submit_feedback(
    project_id: Annotated[str, Path(description="Project ID")],
    data: FeedbackCreateRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ProjectResponse:
    try:
        result = submit_rating(project_id, data.rating, data.content, actor=current_user)
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return ProjectResponse(**result)


@router.get(
    "/{project_id}/collaborator-requests",
    response_model=list[CollaboratorRequestResponse],
)
def list_project_collaborator_requests(
    project_id: Annotated[str, Path(description="Project ID")],
) -> list[CollaboratorRequestResponse]:
    try:
        _require_project(project_id)
        results = content_repository.select(
            REQUESTS_TABLE, {"project_id": project_id}, joins=("project",)
        )
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return [CollaboratorRequestResponse(**r) for r in results]


@router.post(
    "/{project_id}/collaborator-requests",
    response_model=CollaboratorRequestResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_collaborator_request(
    project_id: Annotated[str, Path(description="Project ID")],
    data: CollaboratorRequestCreateRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CollaboratorRequestResponse:
    """Open a role on one of your projects."""
    try:
        result = content_repository.insert(
            REQUESTS_TABLE, current_user, {"project_id": project_id, **data.model_dump()}
        )
    except GameSocioError as exc:
        raise to_http_error(exc) from exc
    return CollaboratorRequestResponse(**result)
