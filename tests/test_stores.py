from __future__ import annotations

import pytest

from taskboard.errors import InvalidTaskIdError, TaskStoreError
from taskboard.stores import MemoryTaskStore, SqlTaskStore, build_store


@pytest.fixture(params=["document", "sqlite"])
def store(request):
    store = MemoryTaskStore() if request.param == "document" else SqlTaskStore("sqlite://")
    yield store
    store.close()


def _key(record: dict):
    return record.get("_id", record.get("id"))


def test_insert_assigns_key_and_timestamps(store) -> None:
    record = store.insert_task({"title": "Buy milk", "description": "", "complete": False})

    assert _key(record) is not None
    assert record["title"] == "Buy milk"
    assert record["created_at"] is not None
    assert record["updated_at"] is not None


def test_get_update_delete(store) -> None:
    record = store.insert_task({"title": "Draft", "description": "", "complete": False})
    task_id = str(_key(record))

    assert store.get_task(task_id)["title"] == "Draft"

    updated = store.update_task(task_id, {"title": "Final", "description": "done", "complete": True})
    assert updated["title"] == "Final"
    assert updated["complete"] is True
    assert updated["updated_at"] >= record["updated_at"]

    assert store.delete_task(task_id) is True
    assert store.get_task(task_id) is None
    assert store.delete_task(task_id) is False


def test_list_filters_on_complete(store) -> None:
    store.insert_task({"title": "a", "description": "", "complete": True})
    store.insert_task({"title": "b", "description": "", "complete": False})

    assert [r["title"] for r in store.list_tasks()] == ["a", "b"]
    assert [r["title"] for r in store.list_tasks(complete=True)] == ["a"]
    assert [r["title"] for r in store.list_tasks(complete=False)] == ["b"]


@pytest.mark.parametrize("bad_id", ["", "abc", "12ab", "-1", "1.5"])
def test_malformed_ids_are_rejected(store, bad_id) -> None:
    with pytest.raises(InvalidTaskIdError):
        store.get_task(bad_id)
    with pytest.raises(InvalidTaskIdError):
        store.update_task(bad_id, {"title": "x", "description": "", "complete": False})
    with pytest.raises(InvalidTaskIdError):
        store.delete_task(bad_id)


def test_update_missing_returns_none(store) -> None:
    record = store.insert_task({"title": "only", "description": "", "complete": False})
    store.delete_task(str(_key(record)))

    assert store.update_task(str(_key(record)), {"title": "x", "description": "", "complete": False}) is None


@pytest.mark.parametrize("field", ["title", "complete"])
def test_null_required_fields_are_rejected(store, field) -> None:
    record = store.insert_task({"title": "keep", "description": "", "complete": False})
    fields = {"title": "keep", "description": "", "complete": False, field: None}

    with pytest.raises(TaskStoreError):
        store.update_task(str(_key(record)), fields)

    assert store.get_task(str(_key(record)))["title"] == "keep"


def test_insert_without_title_is_rejected(store) -> None:
    with pytest.raises(TaskStoreError):
        store.insert_task({"title": None, "description": "", "complete": False})
    assert store.list_tasks() == []


def test_memory_store_returns_copies() -> None:
    store = MemoryTaskStore()
    record = store.insert_task({"title": "original", "description": "", "complete": False})
    record["title"] = "changed"

    assert store.get_task(record["_id"])["title"] == "original"


def test_memory_store_keys_look_like_document_ids() -> None:
    record = MemoryTaskStore().insert_task({"title": "x", "description": "", "complete": False})
    assert len(record["_id"]) == 24
    int(record["_id"], 16)


def test_sql_store_uses_integer_keys() -> None:
    store = SqlTaskStore("sqlite://")
    record = store.insert_task({"title": "x", "description": "", "complete": False})
    assert isinstance(record["id"], int)
    assert store.get_task(str(record["id"]))["id"] == record["id"]


def test_sql_store_rejects_oversized_ids() -> None:
    with pytest.raises(InvalidTaskIdError):
        SqlTaskStore("sqlite://").get_task("9" * 40)


def test_build_store_picks_backend_from_url(tmp_path) -> None:
    assert isinstance(build_store("memory://"), MemoryTaskStore)
    assert isinstance(build_store("sqlite://"), SqlTaskStore)

    file_store = build_store(f"sqlite:///{tmp_path / 'tasks.db'}")
    assert isinstance(file_store, SqlTaskStore)
    file_store.close()
    assert (tmp_path / "tasks.db").exists()


def test_memory_store_timestamps_are_timezone_aware() -> None:
    store = MemoryTaskStore()
    record = store.insert_task({"title": "x", "description": "", "complete": False})
    updated = store.update_task(record["_id"], {"title": "y", "description": "", "complete": True})

    assert record["created_at"].tzinfo is not None
    assert updated["updated_at"].tzinfo is not None


def test_sql_store_writes_to_file_database(tmp_path) -> None:
    store = SqlTaskStore(f"sqlite:///{tmp_path / 'tasks.db'}")
    record = store.insert_task({"title": "x", "description": "", "complete": False})

    updated = store.update_task(str(record["id"]), {"title": "y", "description": "", "complete": True})

    assert updated["title"] == "y"
    store.close()
