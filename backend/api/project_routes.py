from fastapi import APIRouter, HTTPException, Query

from backend.api.dependencies import get_project_service
from backend.domain.errors import ProjectNotFoundError, UnauthenticatedError
from backend.domain.models import (
    AnimationProject,
    ProjectCreateRequest,
    ProjectListResponse,
    ProjectUpdateRequest,
)

router = APIRouter(prefix="/projects", tags=["projects"])


def _not_found(project_id: str) -> HTTPException:
    return HTTPException(
        status_code=404,
        detail={
            "error_code": "PROJECT_NOT_FOUND",
            "detail": f"Animation project not found: {project_id}",
        },
    )


@router.post(
    "",
    response_model=AnimationProject,
    status_code=201,
    summary="Create an animation project",
    responses={401: {"description": "No user id supplied"}},
)
def create_project(request: ProjectCreateRequest) -> AnimationProject:
    """Create an empty project owned by the requesting user."""
    service = get_project_service()

    try:
        return service.create_project(request.name, request.user_id)
    except UnauthenticatedError:
        raise HTTPException(
            status_code=401,
            detail={
                "error_code": "UNAUTHENTICATED",
                "detail": "User not authenticated.",
            },
        )


@router.get(
    "",
    response_model=ProjectListResponse,
    summary="List a user's animation projects",
)
def list_projects(user_id: str = Query(default="")) -> ProjectListResponse:
    """Return the projects a user collaborates on, most recently updated first."""
    service = get_project_service()
    projects = service.list_user_projects(user_id)
    return ProjectListResponse(projects=projects, total=len(projects))


@router.get(
    "/{project_id}",
    response_model=AnimationProject,
    summary="Get an animation project",
    responses={404: {"description": "Project not found"}},
)
def get_project(project_id: str) -> AnimationProject:
    service = get_project_service()
    project = service.get_project(project_id)
    if project is None:
        raise _not_found(project_id)
    return project


@router.patch(
    "/{project_id}",
    response_model=AnimationProject,
    summary="Update frames, fps or thumbnail of a project",
    responses={404: {"description": "Project not found"}},
)
def update_project(project_id: str, request: ProjectUpdateRequest) -> AnimationProject:
    """Write the provided fields directly, bypassing any editing session."""
    service = get_project_service()

    try:
        return service.update_project(project_id, request)
    except ProjectNotFoundError:
        raise _not_found(project_id)
