"""JSON task-file helpers.

A task file holds a list of task objects, either as the top-level JSON value
or under a ``"tasks"`` key. Unlike UI preferences a broken task file is a
user error, so problems raise ``TaskConfigError`` instead of falling back.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from platformdirs import user_config_dir

from .copy_model import CopyTask
from .tasks import TaskConfigError, task_from_mapping, task_to_mapping

APP_NAME = "treecopy"
TASKS_FILENAME = "tasks.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / TASKS_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH


def _task_file_path(path: Path | str | None) -> Path:
    return Path(path) if path is not None else CONFIG_PATH


def load_task_file(path: Path | str | None = None) -> list[dict[str, object]]:
    """Read raw task objects from ``path`` (default: ``CONFIG_PATH``)."""
    config_path = _task_file_path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise TaskConfigError(f"Task file not found: {config_path}") from exc
    except OSError as exc:
        raise TaskConfigError(f"Cannot read task file {config_path}: {exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise TaskConfigError(f"Malformed task file {config_path}: {exc}") from exc

    if isinstance(data, dict):
        data = data.get("tasks")
    if not isinstance(data, list):
        raise TaskConfigError(f"Task file {config_path} must contain a list of tasks")
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise TaskConfigError(f"Task #{index} in {config_path} is not an object")
    return data


def load_tasks(path: Path | str | None = None) -> list[CopyTask]:
    """Load and expand every task in the task file."""
    return [task_from_mapping(entry) for entry in load_task_file(path)]


def save_task_file(tasks: Iterable[CopyTask], path: Path | str | None = None) -> Path:
    """Persist ``tasks`` as pretty-printed JSON and return the file path."""
    config_path = _task_file_path(path)
    payload = {"tasks": [task_to_mapping(task) for task in tasks]}
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return config_path


__all__ = [
    "APP_NAME",
    "DEFAULT_CONFIG_PATH",
    "CONFIG_PATH",
    "load_task_file",
    "load_tasks",
    "save_task_file",
]
