"""Domain datatypes for copy tasks, path probes, and per-entry outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ConflictPolicy(str, Enum):
    """What to do when a destination file already exists."""

    OVERWRITE = "overwrite"
    SKIP = "skip"
    RENAME = "rename"


class LogLevel(str, Enum):
    """Presentation level for outcome reporting."""

    NONE = "none"
    VERBOSE = "verbose"
    BRIEF = "brief"


class PathKind(Enum):
    ABSENT = "absent"
    FILE = "file"
    DIRECTORY = "directory"
    ERROR = "error"


@dataclass(frozen=True)
class PathProbe:
    """Existence-and-kind answer for one path.

    ``error`` is only set for ``PathKind.ERROR`` and keeps the underlying
    ``OSError`` so its message can be reported.
    """

    kind: PathKind
    error: OSError | None = None

    @property
    def exists(self) -> bool:
        return self.kind in (PathKind.FILE, PathKind.DIRECTORY)


@dataclass(frozen=True)
class CopyTask:
    """One copy request: source path(s), destination, bounds, and policies.

    ``source`` keeps the shape it was given in: a single ``Path`` or an ordered
    tuple of paths. The shape decides how root destinations are joined.
    """

    source: Path | tuple[Path, ...]
    destination: Path
    max_depth: int = 0
    max_height: int = 0
    flatten: bool = False
    conflict_policy: ConflictPolicy | str = ConflictPolicy.OVERWRITE
    log_level: LogLevel = LogLevel.NONE

    @property
    def is_multi_source(self) -> bool:
        return isinstance(self.source, tuple)

    @property
    def sources(self) -> tuple[Path, ...]:
        if isinstance(self.source, tuple):
            return self.source
        return (self.source,)


@dataclass(frozen=True)
class TraversalFrame:
    """Recursion state for one (source, destination) pair."""

    source: Path
    destination: Path
    destination_root: Path
    depth: int = 0

    def child(self, name: str, flatten: bool) -> TraversalFrame:
        destination = self.destination_root if flatten else self.destination / name
        return TraversalFrame(
            source=self.source / name,
            destination=destination,
            destination_root=self.destination_root,
            depth=self.depth + 1,
        )


class OutcomeKind(Enum):
    COPIED = "copied"
    OVERWRITTEN = "overwritten"
    SKIPPED = "skipped"
    RENAMED = "renamed"
    DIRECTORY_CREATED = "directory_created"
    FAILED = "failed"


class FailureReason(Enum):
    NOT_FOUND = "not_found"
    KIND_CONFLICT = "kind_conflict"
    UNKNOWN_POLICY = "unknown_policy"
    FILESYSTEM_ERROR = "filesystem_error"


@dataclass(frozen=True)
class Outcome:
    """Result of one traversal action.

    For ``RENAMED`` outcomes ``original_destination`` is the occupied target
    and ``destination`` is the free path the bytes were written to.
    """

    kind: OutcomeKind
    source: Path
    destination: Path | None = None
    original_destination: Path | None = None
    reason: FailureReason | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.kind is not OutcomeKind.FAILED

    @classmethod
    def copied(cls, source: Path, destination: Path) -> Outcome:
        return cls(OutcomeKind.COPIED, source, destination)

    @classmethod
    def overwritten(cls, source: Path, destination: Path) -> Outcome:
        return cls(OutcomeKind.OVERWRITTEN, source, destination)

    @classmethod
    def skipped(cls, source: Path, destination: Path) -> Outcome:
        return cls(OutcomeKind.SKIPPED, source, destination)

    @classmethod
    def renamed(cls, source: Path, original: Path, final: Path) -> Outcome:
        return cls(OutcomeKind.RENAMED, source, final, original_destination=original)

    @classmethod
    def directory_created(cls, source: Path, destination: Path) -> Outcome:
        return cls(OutcomeKind.DIRECTORY_CREATED, source, destination)

    @classmethod
    def failed(
        cls,
        source: Path,
        reason: FailureReason,
        message: str,
        destination: Path | None = None,
    ) -> Outcome:
        return cls(OutcomeKind.FAILED, source, destination, reason=reason, message=message)


__all__ = [
    "ConflictPolicy",
    "LogLevel",
    "PathKind",
    "PathProbe",
    "CopyTask",
    "TraversalFrame",
    "OutcomeKind",
    "FailureReason",
    "Outcome",
]
