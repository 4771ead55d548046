import time
from datetime import timezone

import pytest

from backend.domain.errors import ProjectNotFoundError
from backend.infrastructure.project_store import InMemoryProjectStore


def _create(store: InMemoryProjectStore, name: str = "Walk cycle", owner: str = "u1"):
    return store.create({"name": name, "owner_id": owner, "collaborators": [owner]})


class TestProjectStoreCreate:
    def test_create_should_assign_id_and_timestamps(self) -> None:
        store = InMemoryProjectStore()

        project = _create(store)

        assert len(project.id) == 32
        assert project.created_at == project.updated_at
        assert project.created_at.tzinfo == timezone.utc

    def test_create_should_ignore_caller_supplied_id(self) -> None:
        store = InMemoryProjectStore()

        project = store.create({"id": "mine", "name": "x", "owner_id": "u1"})

        assert project.id != "mine"
        assert store.get("mine") is None

    def test_create_should_generate_unique_ids(self) -> None:
        store = InMemoryProjectStore()

        ids = {_create(store).id for _ in range(20)}

        assert len(ids) == 20
        assert store.count() == 20


class TestProjectStoreGet:
    def test_get_should_return_none_for_unknown_id(self) -> None:
        assert InMemoryProjectStore().get("missing") is None

    def test_get_should_return_a_copy(self) -> None:
        store = InMemoryProjectStore()
        project = _create(store)

        fetched = store.get(project.id)
        fetched.frames.append("data:image/png;base64,AAAA")

        assert store.get(project.id).frames == []


class TestProjectStoreUpdate:
    def test_update_should_merge_fields_and_bump_updated_at(self) -> None:
        store = InMemoryProjectStore()
        project = _create(store)
        time.sleep(0.01)

        updated = store.update(project.id, {"fps": 12, "frames": ["f0", None]})

        assert updated.fps == 12
        assert updated.frames == ["f0", None]
        assert updated.name == "Walk cycle"
        assert updated.created_at == project.created_at
        assert updated.updated_at > project.updated_at

    def test_update_should_not_overwrite_reserved_fields(self) -> None:
        store = InMemoryProjectStore()
        project = _create(store)

        updated = store.update(project.id, {"id": "other", "created_at": None})

        assert updated.id == project.id
        assert updated.created_at == project.created_at

    def test_update_should_raise_for_unknown_id(self) -> None:
        store = InMemoryProjectStore()

        with pytest.raises(ProjectNotFoundError) as exc_info:
            store.update("missing", {"fps": 12})

        assert exc_info.value.project_id == "missing"


class TestProjectStoreListForUser:
    def test_list_should_filter_by_collaborator(self) -> None:
        store = InMemoryProjectStore()
        _create(store, "mine", owner="u1")
        _create(store, "theirs", owner="u2")
        store.create({"name": "shared", "owner_id": "u2", "collaborators": ["u2", "u1"]})

        names = sorted(p.name for p in store.list_for_user("u1"))

        assert names == ["mine", "shared"]

    def test_list_should_order_by_updated_at_descending(self) -> None:
        store = InMemoryProjectStore()
        first = _create(store, "first")
        time.sleep(0.01)
        _create(store, "second")
        time.sleep(0.01)
        store.update(first.id, {"fps": 30})

        names = [p.name for p in store.list_for_user("u1")]

        assert names == ["first", "second"]

    def test_list_should_return_empty_for_unknown_user(self) -> None:
        store = InMemoryProjectStore()
        _create(store)

        assert store.list_for_user("nobody") == []
