# src/task_tracker/config.py

"""Settings loaded from environment variables (+ optional .env).

With no TASK_CLI_* variables set the CLI keeps its plain defaults:
tasks.json in the current directory, warnings only, no log file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "TASK_CLI"

DEFAULT_TASKS_FILE = "tasks.json"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_optional_path(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    tasks_file: Path
    log_level: str
    log_file: Optional[Path]

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            tasks_file=_env_path(_k("TASKS_FILE"), Path(DEFAULT_TASKS_FILE)),
            log_level=_env(_k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING",
            log_file=_env_optional_path(_k("LOG_FILE")),
        )


def get_settings() -> Settings:
    # Real environment wins over .env.
    load_dotenv(find_dotenv(usecwd=True), override=False)
    return Settings.from_env()
