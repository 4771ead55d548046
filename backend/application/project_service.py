from backend.domain.constants import (
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_FPS,
)
from backend.domain.errors import UnauthenticatedError
from backend.domain.models import AnimationProject, ProjectDraft, ProjectUpdateRequest
from backend.infrastructure.project_store import InMemoryProjectStore
from backend.logging_config import get_logger

logger = get_logger(__name__)


class ProjectService:
    """Create, read and update animation projects in the document store."""

    def __init__(self, store: InMemoryProjectStore) -> None:
        self._store = store

    def create_project(self, name: str, user_id: str) -> AnimationProject:
        """Create an empty project owned by `user_id`."""
        if not user_id:
            raise UnauthenticatedError("User not authenticated.")

        project = self._store.create(
            {
                "name": name,
                "owner_id": user_id,
                "collaborators": [user_id],
                "thumbnail": None,
                "width": DEFAULT_CANVAS_WIDTH,
                "height": DEFAULT_CANVAS_HEIGHT,
                "fps": DEFAULT_FPS,
                "frames": [],
            }
        )
        logger.info("Project created: %s (%s) for %s", project.id, name, user_id)
        return project

    def list_user_projects(self, user_id: str) -> list[AnimationProject]:
        """Return the user's projects, most recently updated first."""
        if not user_id:
            return []
        return self._store.list_for_user(user_id)

    def get_project(self, project_id: str) -> AnimationProject | None:
        """Return a single project, or None if unknown."""
        return self._store.get(project_id)

    def update_project(
        self, project_id: str, update: ProjectUpdateRequest
    ) -> AnimationProject:
        """Write only the explicitly provided fields of `update`."""
        fields = {
            k: v
            for k, v in update.model_dump(exclude_unset=True).items()
            if v is not None or k == "thumbnail"  # Only the thumbnail may be cleared
        }
        project = self._store.update(project_id, fields)
        logger.info("Project updated: %s (%s)", project_id, ", ".join(sorted(fields)))
        return project

    def save_draft(self, project_id: str, draft: ProjectDraft) -> AnimationProject:
        """Persist an editing session draft. The first frame becomes the thumbnail."""
        return self._store.update(
            project_id,
            {
                "frames": draft.frames,
                "fps": draft.fps,
                "thumbnail": draft.thumbnail,
            },
        )
