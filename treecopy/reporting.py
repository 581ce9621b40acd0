"""Outcome presentation: verbose lines, brief symbol lines, and path shortening.

Reporters subscribe to the copier's outcome stream and write through the
``treecopy.report`` logger, so tests can capture output with ``assertLogs``.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from .copy_model import LogLevel, Outcome, OutcomeKind

REPORT_LOGGER_NAME = "treecopy.report"
BRIEF_PATH_MAX_LENGTH = 30

BRIEF_SYMBOLS: dict[OutcomeKind, str] = {
    OutcomeKind.COPIED: "→",
    OutcomeKind.SKIPPED: "⠿",
    OutcomeKind.OVERWRITTEN: "↺",
    OutcomeKind.RENAMED: "⥅",
}
DEFAULT_BRIEF_SYMBOL = "•"


def format_path(path: Path | str, max_length: int = BRIEF_PATH_MAX_LENGTH) -> str:
    """Shorten ``path`` for one-line display.

    Short paths are returned unchanged. Longer ones become ``.../<name>`` with
    parent segments prepended, nearest first, while the text stays under
    ``max_length``; anything still too long keeps only its last
    ``max_length`` characters behind ``...``.
    """
    text = str(path)
    if len(text) <= max_length:
        return text
    parts = text.split(os.sep)
    file_name = parts.pop()
    shortened = "..." + os.sep + file_name
    index = len(parts) - 1
    while index >= 0 and len(shortened) < max_length:
        shortened = parts[index] + os.sep + shortened
        index -= 1
    if len(shortened) > max_length:
        return "..." + shortened[-max_length:]
    return shortened


def verbose_line(outcome: Outcome) -> str | None:
    """Return the verbose report line for ``outcome``."""
    kind = outcome.kind
    if kind is OutcomeKind.COPIED:
        return f"Copied: {outcome.source} -> {outcome.destination}"
    if kind is OutcomeKind.OVERWRITTEN:
        return f"Overwritten: {outcome.destination}"
    if kind is OutcomeKind.SKIPPED:
        return f"Skipped: {outcome.destination}"
    if kind is OutcomeKind.RENAMED:
        return f"Renamed: {outcome.source} -> {outcome.destination}"
    if kind is OutcomeKind.DIRECTORY_CREATED:
        return f"Created directory: {outcome.destination}"
    return failure_line(outcome)


def brief_line(outcome: Outcome) -> str | None:
    """Return the symbol-prefixed brief line, or ``None`` for silent outcomes.

    Directory creation is not shown in brief mode.
    """
    kind = outcome.kind
    if kind is OutcomeKind.DIRECTORY_CREATED:
        return None
    if kind is OutcomeKind.FAILED:
        return failure_line(outcome)
    symbol = BRIEF_SYMBOLS.get(kind, DEFAULT_BRIEF_SYMBOL)
    source = format_path(outcome.source)
    if kind is OutcomeKind.SKIPPED or outcome.destination is None:
        return f"{symbol} {source}"
    return f"{symbol} {source} → {format_path(outcome.destination)}"


def failure_line(outcome: Outcome) -> str:
    return f"Error copying {outcome.source}: {outcome.message}"


class OutcomeReporter:
    """Callable outcome subscriber writing report lines for one log level.

    Failures are reported at ERROR for every level, including ``none``;
    everything else is INFO and only written for ``verbose`` and ``brief``.
    """

    def __init__(self, level: LogLevel | str = LogLevel.NONE, logger: logging.Logger | None = None) -> None:
        self.level = LogLevel(level)
        self.logger = logger if logger is not None else logging.getLogger(REPORT_LOGGER_NAME)
        self.failures = 0

    def __call__(self, outcome: Outcome) -> None:
        if not outcome.ok:
            self.failures += 1
            self.logger.error("%s", failure_line(outcome))
            return
        if self.level is LogLevel.VERBOSE:
            line = verbose_line(outcome)
        elif self.level is LogLevel.BRIEF:
            line = brief_line(outcome)
        else:
            line = None
        if line is not None:
            self.logger.info("%s", line)

    def task_started(self) -> None:
        if self.level is LogLevel.BRIEF:
            self.logger.info("\nStarting copy task...")

    def task_finished(self) -> None:
        if self.level is LogLevel.BRIEF:
            self.logger.info("Copy task completed\n")


def configure_logging(debug: bool = False) -> None:
    """Send report lines to stdout and failures to stderr as bare messages.

    Records below WARNING go to stdout, the rest to stderr. ``debug`` also
    enables per-action DEBUG records from the copier.
    """
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.addFilter(lambda record: record.levelno < logging.WARNING)
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        handlers=[stdout_handler, stderr_handler],
    )


__all__ = [
    "REPORT_LOGGER_NAME",
    "BRIEF_SYMBOLS",
    "format_path",
    "verbose_line",
    "brief_line",
    "failure_line",
    "OutcomeReporter",
    "configure_logging",
]
