"""Depth-first tree copier that yields one ``Outcome`` per action.

The copier never prints. Callers subscribe to the outcome stream and decide
how to present it. Failures are isolated to the (source, destination) pair
being processed: they become ``FAILED`` outcomes and traversal moves on to
the next sibling.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from .fs import copy_file_bytes, ensure_directory, list_entry_names, probe_path, unique_path
from .types import ConflictPolicy, FailureReason, Outcome, OutcomeKind, PathKind, TraversalFrame

logger = logging.getLogger(__name__)


def _failed(
    frame: TraversalFrame,
    reason: FailureReason,
    message: str,
    destination: Path | None = None,
) -> Outcome:
    logger.debug("Failed %s: %s", frame.source, message)
    return Outcome.failed(frame.source, reason, message, destination=destination)


def _make_directory(frame: TraversalFrame, path: Path, destination: Path) -> Outcome | None:
    """Create ``path`` with parents, returning a failure outcome on error.

    A file sitting on ``path`` or on one of its ancestors is a kind conflict.
    """
    try:
        ensure_directory(path)
    except (FileExistsError, NotADirectoryError) as exc:
        return _failed(
            frame,
            FailureReason.KIND_CONFLICT,
            f"Cannot create directory '{path}': A file is in the way ({exc}).",
            destination=destination,
        )
    except OSError as exc:
        return _failed(frame, FailureReason.FILESYSTEM_ERROR, str(exc), destination=destination)
    return None


def _parse_policy(value: ConflictPolicy | str) -> ConflictPolicy | None:
    if isinstance(value, ConflictPolicy):
        return value
    try:
        return ConflictPolicy(value)
    except ValueError:
        return None


def _copy_directory(
    frame: TraversalFrame,
    max_depth: int,
    max_height: int,
    flatten: bool,
    conflict_policy: ConflictPolicy | str,
) -> Iterator[Outcome]:
    # Depth and height share one counter, so either bound stops descent.
    if max_depth > 0 and frame.depth >= max_depth:
        return
    if max_height > 0 and frame.depth >= max_height:
        return

    try:
        names = list_entry_names(frame.source)
    except OSError as exc:
        yield _failed(frame, FailureReason.FILESYSTEM_ERROR, str(exc))
        return
    if not names and flatten:
        return

    if not flatten:
        existing = probe_path(frame.destination)
        if existing.kind is PathKind.FILE:
            yield _failed(
                frame,
                FailureReason.KIND_CONFLICT,
                f"Cannot create directory '{frame.destination}': A file with the same name already exists.",
                destination=frame.destination,
            )
            return
        if existing.kind is PathKind.ERROR:
            yield _failed(frame, FailureReason.FILESYSTEM_ERROR, str(existing.error), destination=frame.destination)
            return
        if existing.kind is PathKind.ABSENT:
            failure = _make_directory(frame, frame.destination, frame.destination)
            if failure is not None:
                yield failure
                return
            logger.debug("Created directory %s", frame.destination)
            yield Outcome.directory_created(frame.source, frame.destination)

    for name in names:
        yield from _copy_frame(frame.child(name, flatten), max_depth, max_height, flatten, conflict_policy)


def _copy_file(frame: TraversalFrame, flatten: bool, conflict_policy: ConflictPolicy | str) -> Outcome:
    source = frame.source
    target = frame.destination_root / source.name if flatten else frame.destination

    existing = probe_path(target)
    if existing.kind is PathKind.DIRECTORY:
        return _failed(
            frame,
            FailureReason.KIND_CONFLICT,
            f"Cannot copy file '{source}' to '{target}': A directory with the same name already exists.",
            destination=target,
        )
    if existing.kind is PathKind.ERROR:
        return _failed(frame, FailureReason.FILESYSTEM_ERROR, str(existing.error), destination=target)

    if existing.kind is PathKind.ABSENT:
        failure = _make_directory(frame, target.parent, target)
        if failure is not None:
            return failure

    try:
        if existing.kind is PathKind.ABSENT:
            copy_file_bytes(source, target)
            logger.debug("Copied %s -> %s", source, target)
            return Outcome.copied(source, target)

        policy = _parse_policy(conflict_policy)
        if policy is ConflictPolicy.OVERWRITE:
            copy_file_bytes(source, target)
            logger.debug("Overwrote %s with %s", target, source)
            return Outcome.overwritten(source, target)
        if policy is ConflictPolicy.SKIP:
            logger.debug("Skipped %s", target)
            return Outcome.skipped(source, target)
        if policy is ConflictPolicy.RENAME:
            free_path = unique_path(target)
            copy_file_bytes(source, free_path)
            logger.debug("Renamed %s -> %s", source, free_path)
            return Outcome.renamed(source, target, free_path)
    except OSError as exc:
        return _failed(frame, FailureReason.FILESYSTEM_ERROR, str(exc), destination=target)

    return _failed(
        frame,
        FailureReason.UNKNOWN_POLICY,
        f"Unknown conflict resolution strategy: {conflict_policy}",
        destination=target,
    )


def _copy_frame(
    frame: TraversalFrame,
    max_depth: int,
    max_height: int,
    flatten: bool,
    conflict_policy: ConflictPolicy | str,
) -> Iterator[Outcome]:
    probe = probe_path(frame.source)
    if probe.kind is PathKind.ABSENT:
        yield _failed(frame, FailureReason.NOT_FOUND, f"No such file or directory: '{frame.source}'")
        return
    if probe.kind is PathKind.ERROR:
        yield _failed(frame, FailureReason.FILESYSTEM_ERROR, str(probe.error))
        return

    if probe.kind is PathKind.DIRECTORY:
        yield from _copy_directory(frame, max_depth, max_height, flatten, conflict_policy)
    else:
        yield _copy_file(frame, flatten, conflict_policy)


def iter_copy(
    source: Path | str,
    destination: Path | str,
    *,
    max_depth: int = 0,
    max_height: int = 0,
    flatten: bool = False,
    conflict_policy: ConflictPolicy | str = ConflictPolicy.OVERWRITE,
    destination_root: Path | str | None = None,
    current_depth: int = 0,
) -> Iterator[Outcome]:
    """Copy ``source`` to ``destination`` lazily, yielding each ``Outcome``.

    ``destination_root`` is where flattened files land; it defaults to
    ``destination``. ``current_depth`` counts directory levels already
    descended and is compared against both ``max_depth`` and ``max_height``
    (0 disables a bound).
    """
    destination = Path(destination)
    frame = TraversalFrame(
        source=Path(source),
        destination=destination,
        destination_root=Path(destination_root) if destination_root is not None else destination,
        depth=current_depth,
    )
    yield from _copy_frame(frame, max_depth, max_height, flatten, conflict_policy)


def copy_tree(
    source: Path | str,
    destination: Path | str,
    *,
    max_depth: int = 0,
    max_height: int = 0,
    flatten: bool = False,
    conflict_policy: ConflictPolicy | str = ConflictPolicy.OVERWRITE,
    destination_root: Path | str | None = None,
    current_depth: int = 0,
) -> list[Outcome]:
    """Eager form of ``iter_copy`` returning every outcome in order."""
    return list(
        iter_copy(
            source,
            destination,
            max_depth=max_depth,
            max_height=max_height,
            flatten=flatten,
            conflict_policy=conflict_policy,
            destination_root=destination_root,
            current_depth=current_depth,
        )
    )


def failed_outcomes(outcomes: list[Outcome]) -> list[Outcome]:
    return [outcome for outcome in outcomes if outcome.kind is OutcomeKind.FAILED]


__all__ = [
    "iter_copy",
    "copy_tree",
    "failed_outcomes",
]
