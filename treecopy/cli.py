"""Command-line front door for treecopy.

Builds one task from positional sources, or loads the task file, then runs
every task with an outcome reporter at the requested log level.
"""

from __future__ import annotations

import argparse
import logging

from . import config
from .copy_model import ConflictPolicy, CopyTask, LogLevel
from .reporting import REPORT_LOGGER_NAME, OutcomeReporter, configure_logging
from .tasks import TaskConfigError, run_tasks, task_from_mapping

logger = logging.getLogger(REPORT_LOGGER_NAME)


def _nonnegative_int(value: str) -> int:
    """argparse type for non-negative integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="treecopy",
        description="Copy files and directory trees with depth bounds, flattening, and conflict policies.",
    )
    parser.add_argument("sources", nargs="*", metavar="SRC", help="Source file or directory. Repeat for several.")
    parser.add_argument("-d", "--dest", help="Destination directory (required with SRC).")
    parser.add_argument("--depth", type=_nonnegative_int, default=0, help="Maximum directory depth (0 = unbounded).")
    parser.add_argument("--height", type=_nonnegative_int, default=0, help="Maximum directory height (0 = unbounded).")
    parser.add_argument("--flatten", action="store_true", help="Copy every file directly into DEST.")
    parser.add_argument(
        "--conflict",
        choices=[policy.value for policy in ConflictPolicy],
        default=ConflictPolicy.OVERWRITE.value,
        help="What to do when a destination file exists (default: overwrite).",
    )
    parser.add_argument(
        "--log-level",
        choices=[level.value for level in LogLevel],
        default=None,
        help="Report style. Overrides the level stored in each task.",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        default=None,
        help=f"Task file to run when no SRC is given (default: {config.DEFAULT_CONFIG_PATH}).",
    )
    parser.add_argument("--save", action="store_true", help="Write the task built from SRC to the task file and exit.")
    parser.add_argument("--debug", action="store_true", help="Log every filesystem action.")
    return parser


def _task_from_args(args: argparse.Namespace) -> CopyTask:
    if not args.dest:
        raise TaskConfigError("--dest is required when SRC is given")
    source: object = args.sources[0] if len(args.sources) == 1 else list(args.sources)
    return task_from_mapping(
        {
            "src": source,
            "dest": args.dest,
            "depth": args.depth,
            "height": args.height,
            "flatten": args.flatten,
            "conflictResolution": args.conflict,
            "logLevel": args.log_level or LogLevel.NONE.value,
        }
    )


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run the requested copy tasks.

    Exits with status 1 when any entry failed; configuration problems exit
    with their message before anything is copied.
    """
    args = build_parser().parse_args(argv)
    configure_logging(debug=args.debug)

    try:
        if args.sources:
            tasks = [_task_from_args(args)]
            if args.save:
                saved_to = config.save_task_file(tasks, args.config)
                logger.info("Saved task to %s", saved_to)
                return
        else:
            if args.save:
                raise TaskConfigError("--save needs at least one SRC")
            tasks = config.load_tasks(args.config)
    except TaskConfigError as exc:
        raise SystemExit(str(exc)) from exc

    level_override = LogLevel(args.log_level) if args.log_level else None

    def reporter_for(task: CopyTask) -> OutcomeReporter:
        return OutcomeReporter(level_override or task.log_level)

    def done() -> None:
        if any((level_override or task.log_level) is not LogLevel.NONE for task in tasks):
            logger.info("Copy process completed!")

    outcomes = run_tasks(tasks, done=done, reporter_factory=reporter_for)
    if any(not outcome.ok for outcome in outcomes):
        raise SystemExit(1)


if __name__ == "__main__":
    main()
