from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from backend.domain.constants import (
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_FPS,
    MAX_FPS,
    MIN_FPS,
)


# --- Core Entities ---


class AnimationProject(BaseModel):
    """A multi-frame animation project as stored in the document store."""

    id: str
    name: str
    owner_id: str
    collaborators: list[str] = []
    thumbnail: str | None = None
    width: int = DEFAULT_CANVAS_WIDTH
    height: int = DEFAULT_CANVAS_HEIGHT
    fps: int = DEFAULT_FPS
    frames: list[str | None] = []  # Frame image data URLs, None for a blank frame
    created_at: datetime
    updated_at: datetime


class ProjectDraft(BaseModel):
    """Editable snapshot of a project held by an editing session."""

    frames: list[str | None]
    fps: int = Field(default=DEFAULT_FPS, ge=MIN_FPS, le=MAX_FPS)

    @property
    def thumbnail(self) -> str | None:
        """The first frame doubles as the project thumbnail."""
        return self.frames[0] if self.frames else None


# --- Project Requests ---


class ProjectCreateRequest(BaseModel):
    """Request body for POST /projects."""

    name: str = Field(min_length=1)
    user_id: str


class ProjectUpdateRequest(BaseModel):
    """Request body for PATCH /projects/{project_id}.

    Only fields that were explicitly provided are written.
    """

    frames: list[str | None] | None = None
    fps: int | None = Field(default=None, ge=MIN_FPS, le=MAX_FPS)
    thumbnail: str | None = None


class ProjectListResponse(BaseModel):
    """Response from GET /projects."""

    projects: list[AnimationProject]
    total: int


# --- Editing Sessions ---


class AutosaveState(str, Enum):
    """Observable state of an autosave scheduler."""

    IDLE = "idle"
    ARMED = "armed"
    SAVING = "saving"
    ARMED_WHILE_SAVING = "armed_while_saving"
    DISPOSED = "disposed"


class SessionStatus(BaseModel):
    """Response from GET /projects/{project_id}/session."""

    project_id: str
    state: AutosaveState
    is_saving: bool
    has_unsaved_changes: bool
    last_saved_at: datetime | None = None
    last_error: str | None = None
    save_count: int = 0
    interval_seconds: float


class SaveOutcome(str, Enum):
    """Result of a single flush attempt."""

    SAVED = "saved"
    SKIPPED = "skipped"  # Nothing pending, already saving, or unchanged
    FAILED = "failed"


class SaveResponse(BaseModel):
    """Response from POST /projects/{project_id}/session/save."""

    status: SaveOutcome
    session: SessionStatus


# --- Health ---


class HealthResponse(BaseModel):
    """Response from GET /health."""

    status: str
    timestamp: str
    open_sessions: int = 0
