"""Thread-safe in-process document store for animation projects."""

import threading
import uuid
from datetime import datetime, timezone
from typing import Any

from backend.domain.errors import ProjectNotFoundError
from backend.domain.models import AnimationProject
from backend.logging_config import get_logger

logger = get_logger(__name__)

# Fields the store manages itself; callers cannot overwrite them.
_RESERVED_FIELDS = frozenset({"id", "created_at", "updated_at"})


class InMemoryProjectStore:
    """Keep animation project documents keyed by a generated id.

    The store assigns `id`, `created_at` and `updated_at`; every write bumps
    `updated_at`. Documents are copied on the way in and out so callers
    never share state with the store.
    """

    def __init__(self) -> None:
        self._documents: dict[str, AnimationProject] = {}
        self._lock = threading.Lock()

    def create(self, data: dict[str, Any]) -> AnimationProject:
        """Insert a new project document and return it."""
        now = datetime.now(tz=timezone.utc)
        fields = {k: v for k, v in data.items() if k not in _RESERVED_FIELDS}
        project = AnimationProject(
            id=uuid.uuid4().hex,
            created_at=now,
            updated_at=now,
            **fields,
        )
        with self._lock:
            self._documents[project.id] = project
        logger.info("Created project document: %s", project.id)
        return project.model_copy(deep=True)

    def get(self, project_id: str) -> AnimationProject | None:
        """Return a copy of the project, or None if it does not exist."""
        with self._lock:
            project = self._documents.get(project_id)
        return project.model_copy(deep=True) if project is not None else None

    def update(self, project_id: str, fields: dict[str, Any]) -> AnimationProject:
        """Merge `fields` into an existing project and refresh `updated_at`."""
        changes = {k: v for k, v in fields.items() if k not in _RESERVED_FIELDS}
        with self._lock:
            current = self._documents.get(project_id)
            if current is None:
                raise ProjectNotFoundError(project_id)
            merged = current.model_dump()
            merged.update(changes)
            merged["updated_at"] = datetime.now(tz=timezone.utc)
            project = AnimationProject.model_validate(merged)
            self._documents[project_id] = project
        logger.debug("Updated project %s fields: %s", project_id, sorted(changes))
        return project.model_copy(deep=True)

    def list_for_user(self, user_id: str) -> list[AnimationProject]:
        """Return projects the user collaborates on, most recently updated first."""
        with self._lock:
            matches = [
                p for p in self._documents.values() if user_id in p.collaborators
            ]
        matches.sort(key=lambda p: p.updated_at, reverse=True)
        return [p.model_copy(deep=True) for p in matches]

    def count(self) -> int:
        """Return the number of stored projects."""
        with self._lock:
            return len(self._documents)
