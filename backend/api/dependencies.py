import os

from backend.application.project_service import ProjectService
from backend.application.session_service import SessionService
from backend.domain.constants import AUTOSAVE_INTERVAL_SECONDS
from backend.infrastructure.project_store import InMemoryProjectStore
from backend.logging_config import get_logger

logger = get_logger(__name__)

_project_service: ProjectService | None = None
_session_service: SessionService | None = None

# Shared infrastructure singleton (created once, shared across services)
_store: InMemoryProjectStore | None = None


def initialize_services() -> None:
    """Initialize all services at startup. Called from FastAPI lifespan."""
    get_project_service()
    get_session_service()


def get_project_service() -> ProjectService:
    """Return the singleton ProjectService, creating it on first call."""
    global _project_service, _store  # noqa: PLW0603
    if _project_service is None:
        _store = _store or InMemoryProjectStore()
        _project_service = ProjectService(store=_store)
        logger.info("Initialized ProjectService")

    return _project_service


def get_session_service() -> SessionService:
    """Return the singleton SessionService, creating it on first call."""
    global _session_service  # noqa: PLW0603
    if _session_service is None:
        interval = float(
            os.getenv("AUTOSAVE_INTERVAL_SECONDS", str(AUTOSAVE_INTERVAL_SECONDS))
        )
        skip_unchanged = os.getenv("AUTOSAVE_SKIP_UNCHANGED", "false").lower() in (
            "1",
            "true",
            "yes",
        )
        logger.info(
            "Initializing SessionService (interval=%.1fs, skip_unchanged=%s)",
            interval,
            skip_unchanged,
        )
        _session_service = SessionService(
            project_service=get_project_service(),
            interval=interval,
            skip_unchanged=skip_unchanged,
        )

    return _session_service


def set_project_service(service: ProjectService) -> None:
    """Override the ProjectService singleton (for testing)."""
    global _project_service  # noqa: PLW0603
    _project_service = service


def set_session_service(service: SessionService) -> None:
    """Override the SessionService singleton (for testing)."""
    global _session_service  # noqa: PLW0603
    _session_service = service
