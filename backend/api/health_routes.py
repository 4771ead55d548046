from datetime import datetime, timezone

from fastapi import APIRouter

from backend.api.dependencies import get_session_service
from backend.domain.models import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse, summary="Health check endpoint")
async def health_check() -> HealthResponse:
    """Return service health status and the number of open editing sessions."""
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(tz=timezone.utc).isoformat(),
        open_sessions=get_session_service().open_count,
    )
