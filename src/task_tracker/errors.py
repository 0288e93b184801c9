# src/task_tracker/errors.py

"""
Error hierarchy.

Everything the CLI reports to the user derives from TaskTrackerError;
anything else is a bug and is allowed to propagate with a traceback.
"""

from __future__ import annotations

from pathlib import Path


class TaskTrackerError(Exception):
    """Base class for user-facing errors."""


class UsageError(TaskTrackerError):
    """Missing or malformed command-line arguments."""


class UnknownCommandError(UsageError):
    def __init__(self, name: str) -> None:
        super().__init__(f"unknown command {name}")
        self.name = name


class TaskNotFoundError(TaskTrackerError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"The task with ID {task_id} is not found")
        self.task_id = task_id


class DecodeError(TaskTrackerError):
    """Persisted file is not a valid task collection."""

    def __init__(self, path: str | Path, reason: str) -> None:
        super().__init__(f"Cannot decode tasks file {path}: {reason}")
        self.path = Path(path)
        self.reason = reason


class StorageIOError(TaskTrackerError):
    """Read/write failure on the tasks file (other than 'file does not exist')."""

    def __init__(self, path: str | Path, action: str, exc: OSError) -> None:
        super().__init__(f"Failed to {action} tasks file {path}: {exc.strerror or exc}")
        self.path = Path(path)
        self.action = action
