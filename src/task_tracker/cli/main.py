# src/task_tracker/cli/main.py

"""
CLI entrypoint.

Loads settings, initializes logging, builds the TaskStore from the configured
path and dispatches `task-cli <command> [arguments]` through the registry.
"""

from __future__ import annotations

import logging
import sys

from ..config import get_settings
from ..errors import TaskTrackerError
from ..logging_setup import setup_logging
from ..tasks.task_store import TaskStore
from .commands import registry

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)

    try:
        settings = get_settings()
        console_level = getattr(logging, settings.log_level, logging.WARNING)
        setup_logging(console_level=console_level, log_file=settings.log_file)
    except OSError as exc:
        print(f"Error: cannot start: {exc}", file=sys.stderr)
        return 1

    store = TaskStore(settings.tasks_file)

    try:
        reply = registry.handle(store, args)
    except TaskTrackerError as exc:
        logger.debug("Command failed args=%s", args, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(reply)
    return 0


if __name__ == "__main__":
    sys.exit(main())
