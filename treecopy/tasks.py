"""Task orchestration: config expansion, root pairing, and ordered execution.

Turns loosely typed task mappings (as found in JSON task files) into
``CopyTask`` values, resolves each task into root (source, destination)
pairs, and runs them one after another through the copier.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path

from .copy_model import ConflictPolicy, CopyTask, LogLevel, Outcome, iter_copy

logger = logging.getLogger(__name__)

OutcomeCallback = Callable[[Outcome], None]

# Accepted spellings for each CopyTask field, first match wins.
_KEY_ALIASES: dict[str, tuple[str, ...]] = {
    "source": ("src", "source"),
    "destination": ("dest", "destination"),
    "max_depth": ("depth", "max_depth", "maxDepth"),
    "max_height": ("height", "max_height", "maxHeight"),
    "flatten": ("flatten",),
    "conflict_policy": ("conflictResolution", "conflict_policy", "conflictPolicy"),
    "log_level": ("logLevel", "log_level"),
}


class TaskConfigError(ValueError):
    """Raised for task configuration that cannot be turned into a ``CopyTask``."""


def _lookup(mapping: Mapping[str, object], field: str) -> object | None:
    for key in _KEY_ALIASES[field]:
        if key in mapping:
            return mapping[key]
    return None


def _coerce_bound(value: object, field: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise TaskConfigError(f"{field} must be a non-negative integer, got {value!r}")
    if value < 0:
        raise TaskConfigError(f"{field} must be a non-negative integer, got {value!r}")
    return value


def _coerce_flag(value: object, field: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise TaskConfigError(f"{field} must be true or false, got {value!r}")
    return value


def _coerce_source(value: object) -> Path | tuple[Path, ...]:
    if isinstance(value, (str, os.PathLike)):
        return Path(value)
    if isinstance(value, (list, tuple)):
        sources: list[Path] = []
        for item in value:
            if not isinstance(item, (str, os.PathLike)):
                raise TaskConfigError(f"source entries must be paths, got {item!r}")
            sources.append(Path(item))
        return tuple(sources)
    raise TaskConfigError(f"source must be a path or a list of paths, got {value!r}")


def _coerce_policy(value: object) -> ConflictPolicy | str:
    """Map known policy names to ``ConflictPolicy``.

    Unknown names are kept verbatim; they surface as per-file failures when a
    conflict actually happens.
    """
    if value is None:
        return ConflictPolicy.OVERWRITE
    if isinstance(value, ConflictPolicy):
        return value
    text = str(value)
    try:
        return ConflictPolicy(text)
    except ValueError:
        return text


def _coerce_log_level(value: object) -> LogLevel:
    if value is None:
        return LogLevel.NONE
    try:
        return LogLevel(value)
    except ValueError as exc:
        choices = ", ".join(level.value for level in LogLevel)
        raise TaskConfigError(f"log level must be one of {choices}, got {value!r}") from exc


def task_from_mapping(mapping: Mapping[str, object]) -> CopyTask:
    """Build a ``CopyTask`` from a config mapping, filling in defaults.

    Both the short keys used by task files (``src``, ``dest``, ``depth``,
    ``height``, ``conflictResolution``, ``logLevel``) and the ``CopyTask``
    field names are accepted.
    """
    if not isinstance(mapping, Mapping):
        raise TaskConfigError(f"task must be an object, got {mapping!r}")
    source = _lookup(mapping, "source")
    if source is None:
        raise TaskConfigError("task is missing 'src'")
    destination = _lookup(mapping, "destination")
    if not isinstance(destination, (str, os.PathLike)):
        raise TaskConfigError("task is missing 'dest'")

    return CopyTask(
        source=_coerce_source(source),
        destination=Path(destination),
        max_depth=_coerce_bound(_lookup(mapping, "max_depth"), "depth"),
        max_height=_coerce_bound(_lookup(mapping, "max_height"), "height"),
        flatten=_coerce_flag(_lookup(mapping, "flatten"), "flatten"),
        conflict_policy=_coerce_policy(_lookup(mapping, "conflict_policy")),
        log_level=_coerce_log_level(_lookup(mapping, "log_level")),
    )


def task_to_mapping(task: CopyTask) -> dict[str, object]:
    """Inverse of ``task_from_mapping`` using the short task-file keys."""
    if task.is_multi_source:
        source: object = [str(path) for path in task.sources]
    else:
        source = str(task.source)
    policy = task.conflict_policy
    return {
        "src": source,
        "dest": str(task.destination),
        "depth": task.max_depth,
        "height": task.max_height,
        "flatten": task.flatten,
        "conflictResolution": policy.value if isinstance(policy, ConflictPolicy) else str(policy),
        "logLevel": task.log_level.value,
    }


def root_pairs(task: CopyTask) -> list[tuple[Path, Path]]:
    """Resolve a task into ordered root (source, destination) pairs.

    A single source lands at ``dest/<basename>``; each source of a list lands
    at ``dest/<source relative to its parent>``. Flattening sends every source
    straight to ``dest``. The relative join is kept literal, so inputs such as
    ``..`` resolve outside ``dest``.
    """
    if not task.is_multi_source:
        source = task.sources[0]
        if task.flatten:
            return [(source, task.destination)]
        return [(source, task.destination / source.name)]

    pairs: list[tuple[Path, Path]] = []
    for source in task.sources:
        if task.flatten:
            pairs.append((source, task.destination))
        else:
            pairs.append((source, task.destination / os.path.relpath(source, source.parent)))
    return pairs


def run_task(task: CopyTask, on_outcome: OutcomeCallback | None = None) -> list[Outcome]:
    """Run every root pair of ``task`` in order and collect outcomes."""
    outcomes: list[Outcome] = []
    for source, destination in root_pairs(task):
        logger.debug("Copying root %s -> %s", source, destination)
        for outcome in iter_copy(
            source,
            destination,
            max_depth=task.max_depth,
            max_height=task.max_height,
            flatten=task.flatten,
            conflict_policy=task.conflict_policy,
            destination_root=destination,
        ):
            outcomes.append(outcome)
            if on_outcome is not None:
                on_outcome(outcome)
    return outcomes


def run_tasks(
    tasks: Iterable[CopyTask | Mapping[str, object]],
    on_outcome: OutcomeCallback | None = None,
    done: Callable[[], None] | None = None,
    *,
    reporter_factory: Callable[[CopyTask], object] | None = None,
) -> list[Outcome]:
    """Run tasks strictly in order, then call ``done`` once.

    Mappings are expanded with ``task_from_mapping`` up front, so a bad entry
    raises ``TaskConfigError`` before anything is copied. When
    ``reporter_factory`` is given it is called per task; the returned reporter
    receives that task's outcomes and, when it has them, its
    ``task_started``/``task_finished`` hooks.
    """
    resolved = [task if isinstance(task, CopyTask) else task_from_mapping(task) for task in tasks]

    outcomes: list[Outcome] = []
    for task in resolved:
        reporter = reporter_factory(task) if reporter_factory is not None else None

        def forward(outcome: Outcome, reporter: object = reporter) -> None:
            if reporter is not None:
                reporter(outcome)
            if on_outcome is not None:
                on_outcome(outcome)

        if reporter is not None and hasattr(reporter, "task_started"):
            reporter.task_started()
        outcomes.extend(run_task(task, forward))
        if reporter is not None and hasattr(reporter, "task_finished"):
            reporter.task_finished()

    if done is not None:
        done()
    return outcomes


__all__ = [
    "OutcomeCallback",
    "TaskConfigError",
    "task_from_mapping",
    "task_to_mapping",
    "root_pairs",
    "run_task",
    "run_tasks",
]
