import asyncio
from collections.abc import Awaitable, Callable

from backend.application.project_service import ProjectService
from backend.domain.constants import AUTOSAVE_INTERVAL_SECONDS
from backend.domain.errors import ProjectNotFoundError, SessionNotFoundError
from backend.domain.models import ProjectDraft, SaveOutcome, SessionStatus
from backend.infrastructure.autosave import AutosaveScheduler
from backend.logging_config import get_logger

logger = get_logger(__name__)


class SessionService:
    """Own one autosave scheduler per open editing session of a project.

    Every method runs on the event loop. Draft saves are pushed to a worker
    thread so the store never blocks the loop.
    """

    def __init__(
        self,
        project_service: ProjectService,
        interval: float = AUTOSAVE_INTERVAL_SECONDS,
        skip_unchanged: bool = False,
    ) -> None:
        self._projects = project_service
        self._interval = interval
        self._skip_unchanged = skip_unchanged
        self._sessions: dict[str, AutosaveScheduler[ProjectDraft]] = {}
        self._closing: set[asyncio.Task[None]] = set()  # Closed sessions still saving

    def open_session(self, project_id: str) -> SessionStatus:
        """Open (or reuse) the editing session for a project."""
        if project_id not in self._sessions:
            if self._projects.get_project(project_id) is None:
                raise ProjectNotFoundError(project_id)
            self._sessions[project_id] = AutosaveScheduler(
                save=self._make_save(project_id),
                interval=self._interval,
                skip_unchanged=self._skip_unchanged,
                name=f"project {project_id}",
            )
            logger.info("Opened editing session: %s", project_id)
        return self.get_status(project_id)

    def push_draft(self, project_id: str, draft: ProjectDraft) -> SessionStatus:
        """Hand the latest draft to the session's scheduler."""
        self._get_scheduler(project_id).update(draft)
        return self.get_status(project_id)

    async def save_now(self, project_id: str) -> SaveOutcome:
        """Force an immediate save of the session's pending draft."""
        return await self._get_scheduler(project_id).flush()

    def get_status(self, project_id: str) -> SessionStatus:
        """Return the autosave status of an open session."""
        scheduler = self._get_scheduler(project_id)
        return SessionStatus(
            project_id=project_id,
            state=scheduler.state,
            is_saving=scheduler.is_saving,
            has_unsaved_changes=scheduler.has_unsaved_changes,
            last_saved_at=scheduler.last_saved_at,
            last_error=scheduler.last_error,
            save_count=scheduler.save_count,
            interval_seconds=scheduler.interval,
        )

    def close_session(self, project_id: str) -> None:
        """End a session. Running and final saves finish in the background."""
        scheduler = self._sessions.pop(project_id, None)
        if scheduler is None:
            raise SessionNotFoundError(project_id)
        scheduler.dispose()
        closing = asyncio.get_running_loop().create_task(scheduler.aclose())
        self._closing.add(closing)
        closing.add_done_callback(self._closing.discard)
        logger.info("Closed editing session: %s", project_id)

    async def close_all(self) -> None:
        """Close every session and wait for their final saves. Called on shutdown."""
        sessions = list(self._sessions.items())
        self._sessions.clear()
        for project_id, scheduler in sessions:
            await scheduler.aclose()
            logger.info("Closed editing session on shutdown: %s", project_id)
        if self._closing:
            await asyncio.gather(*self._closing, return_exceptions=True)

    @property
    def open_count(self) -> int:
        """Return the number of open sessions."""
        return len(self._sessions)

    def _get_scheduler(self, project_id: str) -> AutosaveScheduler[ProjectDraft]:
        scheduler = self._sessions.get(project_id)
        if scheduler is None:
            raise SessionNotFoundError(project_id)
        return scheduler

    def _make_save(
        self, project_id: str
    ) -> Callable[[ProjectDraft], Awaitable[None]]:
        async def save(draft: ProjectDraft) -> None:
            await asyncio.to_thread(self._projects.save_draft, project_id, draft)

        return save
