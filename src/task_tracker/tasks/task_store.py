# src/task_tracker/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import re
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path
from typing import Any

from ..errors import DecodeError, StorageIOError
from .task_models import Task, TaskStatus

logger = logging.getLogger(__name__)

_REQUIRED_KEYS = frozenset({"id", "description", "status", "createdAt", "updatedAt"})
# Older files wrote the update timestamp under this key.
_LEGACY_KEYS = {"updateAt": "updatedAt"}
# Sub-microsecond digits (e.g. nanosecond timestamps) are dropped before parsing.
_EXTRA_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


class TaskStore:
    """
    JSON file task store.

    The whole collection is one JSON array:
    - load() reads the full file into a list of Task
    - save() rewrites the full file (temp file + os.replace)

    No locking: two processes doing load/modify/save at the same time
    lose one of the updates (last writer wins).
    """

    def __init__(self, path: str | Path = "tasks.json") -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    # ---- public API ----

    def load(self) -> list[Task]:
        try:
            raw = self._path.read_text("utf-8")
        except FileNotFoundError:
            logger.debug("Tasks file %s does not exist; starting empty", self._path)
            return []
        except OSError as exc:
            raise StorageIOError(self._path, "read", exc) from exc
        except UnicodeDecodeError as exc:
            raise DecodeError(self._path, f"not valid UTF-8 ({exc.reason})") from exc

        if not raw.strip():
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise DecodeError(self._path, f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc

        tasks = self._decode_tasks(data)
        logger.debug("Loaded %d task(s) from %s", len(tasks), self._path)
        return tasks

    def save(self, tasks: Iterable[Task]) -> None:
        payload = [t.to_dict() for t in tasks]
        text = json.dumps(payload, ensure_ascii=False, indent=2) + "\n"

        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(text, "utf-8")
            os.replace(tmp, self._path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise StorageIOError(self._path, "write", exc) from exc
        logger.debug("Saved %d task(s) to %s", len(payload), self._path)

    # ---- decoding ----

    def _decode_tasks(self, data: Any) -> list[Task]:
        if not isinstance(data, list):
            raise DecodeError(self._path, f"expected a JSON array, got {type(data).__name__}")

        tasks: list[Task] = []
        seen: set[int] = set()
        for index, item in enumerate(data):
            task = self._decode_task(index, item)
            if task.id in seen:
                raise DecodeError(self._path, f"duplicate task id {task.id}")
            seen.add(task.id)
            tasks.append(task)
        return tasks

    def _decode_task(self, index: int, item: Any) -> Task:
        where = f"item {index}"
        if not isinstance(item, dict):
            raise DecodeError(self._path, f"{where}: expected an object")

        fields = dict(item)
        for old, new in _LEGACY_KEYS.items():
            if old in fields and new not in fields:
                fields[new] = fields.pop(old)

        missing = _REQUIRED_KEYS - fields.keys()
        if missing:
            raise DecodeError(self._path, f"{where}: missing {', '.join(sorted(missing))}")
        unknown = fields.keys() - _REQUIRED_KEYS
        if unknown:
            raise DecodeError(self._path, f"{where}: unknown key(s) {', '.join(sorted(unknown))}")

        task_id = fields["id"]
        # bool is an int subclass; reject it explicitly.
        if not isinstance(task_id, int) or isinstance(task_id, bool) or task_id < 1:
            raise DecodeError(self._path, f"{where}: id must be a positive integer")

        description = fields["description"]
        if not isinstance(description, str):
            raise DecodeError(self._path, f"{where}: description must be a string")

        try:
            status = TaskStatus(fields["status"])
        except ValueError:
            raise DecodeError(self._path, f"{where}: unknown status {fields['status']!r}") from None

        return Task(
            id=task_id,
            description=description,
            status=status,
            created_at=self._decode_timestamp(where, "createdAt", fields["createdAt"]),
            updated_at=self._decode_timestamp(where, "updatedAt", fields["updatedAt"]),
        )

    def _decode_timestamp(self, where: str, key: str, value: Any) -> datetime:
        if not isinstance(value, str):
            raise DecodeError(self._path, f"{where}: {key} must be an ISO-8601 string")
        try:
            ts = datetime.fromisoformat(_EXTRA_FRACTION_RE.sub(r"\1", value))
        except ValueError:
            raise DecodeError(self._path, f"{where}: {key} is not ISO-8601: {value!r}") from None
        if ts.tzinfo is not None:
            return ts
        # Naive timestamps are taken as local time; near year 1 or 9999 that can leave the range.
        try:
            return ts.astimezone()
        except (ValueError, OverflowError):
            raise DecodeError(self._path, f"{where}: {key} is out of range: {value!r}") from None
