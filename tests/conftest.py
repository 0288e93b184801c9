# tests/conftest.py

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from types import SimpleNamespace

import pytest

from task_tracker.tasks.task_models import Task, TaskStatus
from task_tracker.tasks.task_store import TaskStore

OLD_TS = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the CLI wiring.

    A SimpleNamespace instead of the real config keeps tests independent of
    the developer's environment and .env file.
    """
    return SimpleNamespace(
        tasks_file=tmp_path / "tasks.json",
        log_level="WARNING",
        log_file=None,
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.tasks_file)


@pytest.fixture()
def seeded_store(store: TaskStore) -> TaskStore:
    """Store pre-filled with three tasks carrying fixed, old timestamps."""
    store.save(
        [
            Task(1, "buy milk", TaskStatus.TODO, OLD_TS, OLD_TS),
            Task(2, "walk dog", TaskStatus.IN_PROGRESS, OLD_TS, OLD_TS),
            Task(3, "clean", TaskStatus.DONE, OLD_TS, OLD_TS),
        ]
    )
    return store


@pytest.fixture()
def cli_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, settings: SimpleNamespace) -> Path:
    """Point the real CLI config at tmp_path (and away from any local .env)."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TASK_CLI_TASKS_FILE", str(settings.tasks_file))
    for name in ("TASK_CLI_LOG_LEVEL", "TASK_CLI_LOG_FILE"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return settings.tasks_file
