import pytest

from backend.application.project_service import ProjectService
from backend.domain.constants import (
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_FPS,
)
from backend.domain.errors import ProjectNotFoundError, UnauthenticatedError
from backend.domain.models import ProjectDraft, ProjectUpdateRequest
from backend.infrastructure.project_store import InMemoryProjectStore


def _make_service() -> ProjectService:
    return ProjectService(store=InMemoryProjectStore())


class TestCreateProject:
    def test_create_should_apply_defaults(self) -> None:
        service = _make_service()

        project = service.create_project("Bouncing ball", "u1")

        assert project.name == "Bouncing ball"
        assert project.owner_id == "u1"
        assert project.collaborators == ["u1"]
        assert project.width == DEFAULT_CANVAS_WIDTH
        assert project.height == DEFAULT_CANVAS_HEIGHT
        assert project.fps == DEFAULT_FPS
        assert project.frames == []
        assert project.thumbnail is None

    def test_create_should_require_user(self) -> None:
        service = _make_service()

        with pytest.raises(UnauthenticatedError):
            service.create_project("Orphan", "")


class TestReadProjects:
    def test_list_should_return_empty_for_blank_user(self) -> None:
        service = _make_service()
        service.create_project("A", "u1")

        assert service.list_user_projects("") == []

    def test_list_should_return_user_projects(self) -> None:
        service = _make_service()
        service.create_project("A", "u1")
        service.create_project("B", "u2")

        projects = service.list_user_projects("u1")

        assert [p.name for p in projects] == ["A"]

    def test_get_should_return_none_for_unknown_project(self) -> None:
        assert _make_service().get_project("missing") is None


class TestUpdateProject:
    def test_update_should_write_only_provided_fields(self) -> None:
        service = _make_service()
        project = service.create_project("A", "u1")

        updated = service.update_project(project.id, ProjectUpdateRequest(fps=12))

        assert updated.fps == 12
        assert updated.frames == []
        assert updated.name == "A"

    def test_update_should_ignore_explicit_null_frames(self) -> None:
        service = _make_service()
        project = service.create_project("A", "u1")
        service.update_project(project.id, ProjectUpdateRequest(frames=["f0"]))

        updated = service.update_project(
            project.id, ProjectUpdateRequest(frames=None, thumbnail=None)
        )

        assert updated.frames == ["f0"]
        assert updated.thumbnail is None

    def test_update_should_raise_for_unknown_project(self) -> None:
        service = _make_service()

        with pytest.raises(ProjectNotFoundError):
            service.update_project("missing", ProjectUpdateRequest(fps=12))


class TestSaveDraft:
    def test_save_draft_should_use_first_frame_as_thumbnail(self) -> None:
        service = _make_service()
        project = service.create_project("A", "u1")

        saved = service.save_draft(
            project.id, ProjectDraft(frames=["f0", "f1"], fps=8)
        )

        assert saved.frames == ["f0", "f1"]
        assert saved.fps == 8
        assert saved.thumbnail == "f0"

    def test_save_draft_without_frames_should_clear_thumbnail(self) -> None:
        service = _make_service()
        project = service.create_project("A", "u1")
        service.save_draft(project.id, ProjectDraft(frames=["f0"]))

        saved = service.save_draft(project.id, ProjectDraft(frames=[]))

        assert saved.thumbnail is None
