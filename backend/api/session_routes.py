from fastapi import APIRouter, HTTPException, Response

from backend.api.dependencies import get_session_service
from backend.domain.errors import ProjectNotFoundError, SessionNotFoundError
from backend.domain.models import ProjectDraft, SaveResponse, SessionStatus
from backend.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/projects/{project_id}/session", tags=["session"])

# Session handlers are async: the autosave timers live on the event loop.


def _session_not_found(project_id: str) -> HTTPException:
    return HTTPException(
        status_code=404,
        detail={
            "error_code": "SESSION_NOT_FOUND",
            "detail": f"No editing session open for project: {project_id}",
        },
    )


@router.post(
    "",
    response_model=SessionStatus,
    summary="Open an editing session with autosave",
    responses={404: {"description": "Project not found"}},
)
async def open_session(project_id: str) -> SessionStatus:
    """Open the editing session for a project, reusing one that is already open."""
    service = get_session_service()

    try:
        return service.open_session(project_id)
    except ProjectNotFoundError:
        raise HTTPException(
            status_code=404,
            detail={
                "error_code": "PROJECT_NOT_FOUND",
                "detail": f"Animation project not found: {project_id}",
            },
        )


@router.get(
    "",
    response_model=SessionStatus,
    summary="Get autosave status of an editing session",
    responses={404: {"description": "No open session"}},
)
async def get_session_status(project_id: str) -> SessionStatus:
    service = get_session_service()

    try:
        return service.get_status(project_id)
    except SessionNotFoundError:
        raise _session_not_found(project_id)


@router.put(
    "/draft",
    response_model=SessionStatus,
    status_code=202,
    summary="Push the latest draft; it is saved after the debounce window",
    responses={404: {"description": "No open session"}},
)
async def push_draft(project_id: str, draft: ProjectDraft) -> SessionStatus:
    """Replace the session's pending draft and restart its autosave timer."""
    service = get_session_service()

    try:
        return service.push_draft(project_id, draft)
    except SessionNotFoundError:
        raise _session_not_found(project_id)


@router.post(
    "/save",
    response_model=SaveResponse,
    summary="Save the pending draft immediately",
    responses={404: {"description": "No open session"}},
)
async def save_session(project_id: str) -> SaveResponse:
    """Force a save. Reports 'skipped' when nothing is pending or a save is running."""
    service = get_session_service()

    try:
        outcome = await service.save_now(project_id)
        return SaveResponse(status=outcome, session=service.get_status(project_id))
    except SessionNotFoundError:
        raise _session_not_found(project_id)


@router.delete(
    "",
    status_code=204,
    summary="Close an editing session",
    responses={404: {"description": "No open session"}},
)
async def close_session(project_id: str) -> Response:
    """Close the session; its pending draft gets one final save in the background."""
    service = get_session_service()

    try:
        service.close_session(project_id)
    except SessionNotFoundError:
        raise _session_not_found(project_id)
    logger.info("Session closed via API: %s", project_id)
    return Response(status_code=204)
