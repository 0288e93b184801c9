# tests/test_task_store.py

from __future__ import annotations

import json
import time
from datetime import datetime, timezone
from pathlib import Path

import pytest

from task_tracker.errors import DecodeError, StorageIOError
from task_tracker.tasks.task_models import Task, TaskStatus
from task_tracker.tasks.task_store import TaskStore

from .conftest import OLD_TS


def _record(**overrides) -> dict:
    rec = {
        "id": 1,
        "description": "buy milk",
        "status": "todo",
        "createdAt": "2024-01-02T03:04:05+00:00",
        "updatedAt": "2024-01-02T03:04:05+00:00",
    }
    rec.update(overrides)
    return rec


def _write(path: Path, data) -> None:
    path.write_text(json.dumps(data), "utf-8")


def test_missing_file_loads_empty(store: TaskStore) -> None:
    assert not store.path.exists()
    assert store.load() == []


@pytest.mark.parametrize("content", ["", "   \n"])
def test_empty_file_loads_empty(store: TaskStore, content: str) -> None:
    store.path.write_text(content, "utf-8")
    assert store.load() == []


def test_save_then_load_round_trip(store: TaskStore) -> None:
    created = datetime(2024, 5, 6, 7, 8, 9, 123456, tzinfo=timezone.utc)
    tasks = [
        Task(1, "buy milk", TaskStatus.TODO, created, created),
        Task(4, "walk dog ☂", TaskStatus.IN_PROGRESS, OLD_TS, created),
    ]
    store.save(tasks)

    assert store.load() == tasks


def test_save_writes_indented_array_with_wire_keys(store: TaskStore) -> None:
    store.save([Task(1, "buy milk", TaskStatus.DONE, OLD_TS, OLD_TS)])

    text = store.path.read_text("utf-8")
    assert text.startswith("[\n  {")
    data = json.loads(text)
    assert data == [
        {
            "id": 1,
            "description": "buy milk",
            "status": "done",
            "createdAt": "2024-01-02T03:04:05+00:00",
            "updatedAt": "2024-01-02T03:04:05+00:00",
        }
    ]
    assert not store.path.with_name("tasks.json.tmp").exists()


def test_save_creates_parent_directory(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "nested" / "dir" / "tasks.json")
    store.save([])
    assert json.loads(store.path.read_text("utf-8")) == []


def test_legacy_update_key_is_accepted(store: TaskStore) -> None:
    rec = _record()
    rec["updateAt"] = rec.pop("updatedAt")
    _write(store.path, [rec])

    [task] = store.load()
    assert task.updated_at == OLD_TS

    store.save([task])
    assert "updatedAt" in json.loads(store.path.read_text("utf-8"))[0]


def test_nanosecond_timestamps_are_truncated(store: TaskStore) -> None:
    _write(store.path, [_record(createdAt="2024-01-02T03:04:05.123456789+03:00")])

    [task] = store.load()
    assert task.created_at.microsecond == 123456
    assert task.created_at.utcoffset().total_seconds() == 3 * 3600


def test_naive_timestamp_becomes_aware(store: TaskStore) -> None:
    _write(store.path, [_record(createdAt="2024-01-02T03:04:05")])

    [task] = store.load()
    assert task.created_at.tzinfo is not None


@pytest.mark.parametrize(
    "data",
    [
        {"id": 1},
        ["not an object"],
        [_record(status="blocked")],
        [_record(id=True)],
        [_record(id=0)],
        [_record(id="1")],
        [_record(description=None)],
        [_record(createdAt="yesterday")],
        [_record(updatedAt=1700000000)],
        [_record(extra="field")],
        [{k: v for k, v in _record().items() if k != "status"}],
        [_record(), _record(description="dup")],
    ],
)
def test_malformed_shapes_raise_decode_error(store: TaskStore, data) -> None:
    _write(store.path, data)
    with pytest.raises(DecodeError):
        store.load()


def test_invalid_json_raises_decode_error(store: TaskStore) -> None:
    store.path.write_text("[{", "utf-8")
    with pytest.raises(DecodeError) as ei:
        store.load()
    assert ei.value.path == store.path


def test_read_failure_raises_storage_error(tmp_path: Path) -> None:
    store = TaskStore(tmp_path)  # a directory, not a file
    with pytest.raises(StorageIOError):
        store.load()


def test_write_failure_raises_storage_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", "utf-8")
    store = TaskStore(blocker / "tasks.json")
    with pytest.raises(StorageIOError) as ei:
        store.save([])
    assert isinstance(ei.value.__cause__, OSError)


@pytest.fixture()
def local_tz(monkeypatch: pytest.MonkeyPatch):
    """Switch the process time zone for the duration of a test."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")

    def _set(name: str) -> None:
        monkeypatch.setenv("TZ", name)
        time.tzset()

    yield _set
    monkeypatch.undo()
    time.tzset()


@pytest.mark.parametrize(
    "tz, value",
    [("Asia/Tokyo", "0001-01-01T00:00:00")],
)
def test_naive_timestamp_outside_range_raises_decode_error(
    store: TaskStore, local_tz, tz: str, value: str
) -> None:
    local_tz(tz)
    _write(store.path, [_record(createdAt=value)])

    with pytest.raises(DecodeError, match="out of range"):
        store.load()


def test_failed_replace_leaves_no_temp_file(tmp_path: Path) -> None:
    target = tmp_path / "tasks.json"
    target.mkdir()
    (target / "keep").write_text("", "utf-8")
    store = TaskStore(target)

    with pytest.raises(StorageIOError):
        store.save([Task(1, "buy milk", TaskStatus.TODO, OLD_TS, OLD_TS)])

    assert sorted(p.name for p in tmp_path.iterdir()) == ["tasks.json"]
