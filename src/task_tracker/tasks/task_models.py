# src/task_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any


class TaskStatus(StrEnum):
    """Task lifecycle status. Values are the strings stored on disk."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"


# Filter value accepted by `list` that matches every status.
ALL_STATUSES = "all"


def now_local() -> datetime:
    return datetime.now().astimezone()


@dataclass(slots=True)
class Task:
    id: int
    description: str
    status: TaskStatus
    created_at: datetime
    updated_at: datetime

    def touch(self, when: datetime | None = None) -> None:
        self.updated_at = when or now_local()

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping using the on-disk key names."""
        return {
            "id": self.id,
            "description": self.description,
            "status": self.status.value,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }
