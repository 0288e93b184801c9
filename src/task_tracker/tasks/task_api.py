# src/task_tracker/tasks/task_api.py

"""
High-level task operations.

Each mutating helper is one full read-modify-write cycle against the store:
load the whole collection, change one task, save the whole collection.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from ..errors import TaskNotFoundError, UsageError
from .task_models import ALL_STATUSES, Task, TaskStatus, now_local
from .task_store import TaskStore

logger = logging.getLogger(__name__)


def next_task_id(tasks: Iterable[Task]) -> int:
    """
    max(existing ids) + 1, or 1 for an empty collection.

    Ids are recomputed, not stored: deleting the highest id lets the next
    add hand that id out again.
    """
    return max((t.id for t in tasks), default=0) + 1


def _find_task(tasks: list[Task], task_id: int) -> Task:
    for task in tasks:
        if task.id == task_id:
            return task
    raise TaskNotFoundError(task_id)


def add_task(store: TaskStore, description: str) -> Task:
    if not description or not description.strip():
        raise UsageError("There is no description for task")

    tasks = store.load()
    now = now_local()
    task = Task(
        id=next_task_id(tasks),
        description=description,
        status=TaskStatus.TODO,
        created_at=now,
        updated_at=now,
    )
    tasks.append(task)
    store.save(tasks)
    logger.info("Task added id=%s", task.id)
    return task


def update_task(store: TaskStore, task_id: int, description: str) -> Task:
    if not description or not description.strip():
        raise UsageError("There is no description for task")

    tasks = store.load()
    task = _find_task(tasks, task_id)
    task.description = description
    task.touch()
    store.save(tasks)
    logger.info("Task updated id=%s", task.id)
    return task


def set_task_status(store: TaskStore, task_id: int, status: TaskStatus) -> Task:
    tasks = store.load()
    task = _find_task(tasks, task_id)
    task.status = TaskStatus(status)
    task.touch()
    store.save(tasks)
    logger.info("Task status changed id=%s status=%s", task.id, task.status.value)
    return task


def delete_task(store: TaskStore, task_id: int) -> Task:
    tasks = store.load()
    task = _find_task(tasks, task_id)
    store.save([t for t in tasks if t.id != task_id])
    logger.info("Task deleted id=%s", task_id)
    return task


def iter_tasks(tasks: Iterable[Task], status_filter: str = ALL_STATUSES) -> Iterator[Task]:
    """
    Lazily yield tasks whose status equals `status_filter`, in collection order.

    "all" matches everything; any other unrecognised value simply matches nothing.
    """
    for task in tasks:
        if status_filter == ALL_STATUSES or task.status.value == status_filter:
            yield task
