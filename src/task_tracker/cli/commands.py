# src/task_tracker/cli/commands.py

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from ..errors import UnknownCommandError, UsageError
from ..tasks.task_api import add_task, delete_task, iter_tasks, set_task_status, update_task
from ..tasks.task_models import ALL_STATUSES, TaskStatus
from ..tasks.task_store import TaskStore

CommandHandler = Callable[[TaskStore, list[str]], str]

logger = logging.getLogger(__name__)

PROG = "task-cli"
SEPARATOR = "-" * 24
_ID_RE = re.compile(r"[+-]?\d+")


@dataclass(frozen=True, slots=True)
class _Command:
    handler: CommandHandler
    usage: str
    help_text: str


class CommandRegistry:
    """Verb -> handler registry used by the CLI entry point (add, list, ...)."""

    def __init__(self) -> None:
        self._commands: dict[str, _Command] = {}
        self._aliases: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        usage: str | None = None,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        self._commands[name] = _Command(handler=handler, usage=usage or name, help_text=help_text)
        for alias in aliases:
            self._aliases[alias] = name

    def handle(self, store: TaskStore, argv: list[str]) -> str:
        """
        Dispatch ["command", *args] to its handler and return the reply text.
        Raises UnknownCommandError for an unregistered verb.
        """
        if not argv:
            return self.build_help()

        name = argv[0]
        args = argv[1:]

        key = self._aliases.get(name, name)
        command = self._commands.get(key)
        if command is None:
            raise UnknownCommandError(name)

        logger.debug("Dispatching command=%s args=%s", key, args)
        return command.handler(store, args)

    def build_help(self) -> str:
        lines = [f"Usage: {PROG} <command> [arguments]", "Commands:"]
        for command in self._commands.values():
            lines.append(f"  {command.usage:<25} - {command.help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def parse_task_id(raw: str) -> int:
    """Parse a task id given on the command line (UsageError if not an integer)."""
    text = raw.strip()
    if not _ID_RE.fullmatch(text):
        raise UsageError(f"incorrect ID format: {raw}")
    return int(text)


def cmd_add(store: TaskStore, args: list[str]) -> str:
    if not args:
        raise UsageError("There is no description for task")
    task = add_task(store, args[0])
    return f"Task has been added (ID: {task.id})"


def cmd_update(store: TaskStore, args: list[str]) -> str:
    if len(args) < 2:
        raise UsageError("You should enter ID of the task and its description")
    task = update_task(store, parse_task_id(args[0]), args[1])
    return f"The task {task.id} has been updated."


def _make_mark_command(status: TaskStatus) -> CommandHandler:
    def cmd_mark(store: TaskStore, args: list[str]) -> str:
        if not args:
            raise UsageError(f"You should enter ID of the task you want make {status.value}")
        task = set_task_status(store, parse_task_id(args[0]), status)
        return f"Status of the task {task.id} has been changed to {task.status.value}."

    cmd_mark.__name__ = f"cmd_mark_{status.name.lower()}"
    return cmd_mark


cmd_mark_done = _make_mark_command(TaskStatus.DONE)
cmd_mark_in_progress = _make_mark_command(TaskStatus.IN_PROGRESS)


def cmd_list(store: TaskStore, args: list[str]) -> str:
    """
    list          -> every task
    list <status> -> only tasks with that status (todo / in-progress / done)
    """
    status_filter = args[0] if args else ALL_STATUSES
    tasks = store.load()

    lines = [SEPARATOR]
    if not tasks:
        lines.append("Task list is empty")
    else:
        found = False
        for task in iter_tasks(tasks, status_filter):
            found = True
            lines.append(f"{task.id}. [{task.status.value}] {task.description}")
        if not found and status_filter != ALL_STATUSES:
            lines.append(f"Tasks with status '{status_filter}' are not found")
    lines.append(SEPARATOR)
    return "\n".join(lines)


def cmd_delete(store: TaskStore, args: list[str]) -> str:
    if not args:
        raise UsageError("You should enter ID of the task you want to delete")
    task = delete_task(store, parse_task_id(args[0]))
    return f"The task {task.id} has been removed."


def cmd_help(store: TaskStore, args: list[str]) -> str:
    return registry.build_help()


registry.register("add", cmd_add, help_text="Add new task", usage="add <description>")
registry.register(
    "list",
    cmd_list,
    help_text="Show tasks (all, todo, in-progress, done)",
    usage="list [status]",
)
registry.register(
    "update",
    cmd_update,
    help_text="Update description of the task",
    usage="update <ID> <description>",
)
registry.register("delete", cmd_delete, help_text="Delete the task", usage="delete <ID>")
registry.register(
    "mark-done", cmd_mark_done, help_text="Mark task as 'done'", usage="mark-done <ID>"
)
registry.register(
    "mark-in-progress",
    cmd_mark_in_progress,
    help_text="Mark task as 'in-progress'",
    usage="mark-in-progress <ID>",
)
registry.register("help", cmd_help, help_text="Show this help", aliases=["-h", "--help"])
