"""Public package surface for treecopy.

Exports the copy core, the task runner, and ``main`` for programmatic CLI
invocation. Implementation lives in ``treecopy.copy_model`` and siblings.
"""

from __future__ import annotations

from .copy_model import (
    ConflictPolicy,
    CopyTask,
    FailureReason,
    LogLevel,
    Outcome,
    OutcomeKind,
    copy_tree,
    iter_copy,
    unique_path,
)
from .tasks import TaskConfigError, run_task, run_tasks, task_from_mapping


def copy(tasks, done=None, on_outcome=None):
    """Run task configurations with per-task reporting, then call ``done``.

    ``tasks`` may hold ``CopyTask`` values or mappings using the task-file
    keys (``src``, ``dest``, ``depth``, ``height``, ``flatten``,
    ``conflictResolution``, ``logLevel``).

    Report lines go through the ``treecopy.report`` logger and nothing
    configures logging here: call ``treecopy.reporting.configure_logging()``
    (as the CLI does) or attach your own handler to see ``verbose``/``brief``
    output. Failures are logged at ERROR and reach stderr through logging's
    last-resort handler even without configuration.
    """
    from .reporting import OutcomeReporter

    return run_tasks(
        tasks,
        on_outcome=on_outcome,
        done=done,
        reporter_factory=lambda task: OutcomeReporter(task.log_level),
    )


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "ConflictPolicy",
    "CopyTask",
    "FailureReason",
    "LogLevel",
    "Outcome",
    "OutcomeKind",
    "TaskConfigError",
    "copy",
    "copy_tree",
    "iter_copy",
    "unique_path",
    "run_task",
    "run_tasks",
    "task_from_mapping",
    "main",
]
