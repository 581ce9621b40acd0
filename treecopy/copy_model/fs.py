"""Filesystem primitives used by the tree copier.

Every helper here maps to a single filesystem call (stat, listing, mkdir,
byte copy, existence check) so no handle outlives the call that opened it.
"""

from __future__ import annotations

import os
import shutil
import stat
from collections.abc import Callable
from pathlib import Path

from .types import PathKind, PathProbe


def probe_path(path: Path) -> PathProbe:
    """Return the existence and kind of ``path`` without raising.

    Symlinks are followed, like ``stat``. A missing path (or a path whose
    parent is a file) is ``ABSENT``; any other stat failure is ``ERROR``.
    """
    try:
        st = os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        return PathProbe(PathKind.ABSENT)
    except OSError as exc:
        return PathProbe(PathKind.ERROR, exc)
    if stat.S_ISDIR(st.st_mode):
        return PathProbe(PathKind.DIRECTORY)
    return PathProbe(PathKind.FILE)


def list_entry_names(directory: Path) -> list[str]:
    """List immediate entry names of ``directory`` in name order."""
    with os.scandir(directory) as entries:
        names = [entry.name for entry in entries]
    names.sort()
    return names


def unique_path(candidate: Path, exists: Callable[[Path], bool] = os.path.exists) -> Path:
    """Return ``candidate`` or the first free ``<stem>_<n><suffix>`` sibling.

    Suffixes always derive from the original stem (``a_1.txt``, ``a_2.txt``,
    never ``a_1_1.txt``). Only checks existence, never creates anything, so a
    concurrent writer may still claim the returned path.
    """
    candidate = Path(candidate)
    if not exists(candidate):
        return candidate
    parent = candidate.parent
    stem = candidate.stem
    suffix = candidate.suffix
    counter = 1
    while True:
        attempt = parent / f"{stem}_{counter}{suffix}"
        if not exists(attempt):
            return attempt
        counter += 1


def ensure_directory(path: Path) -> None:
    Path(path).mkdir(parents=True, exist_ok=True)


def copy_file_bytes(source: Path, destination: Path) -> None:
    """Replace ``destination`` contents with the bytes of ``source``."""
    shutil.copyfile(source, destination)


__all__ = [
    "probe_path",
    "list_entry_names",
    "unique_path",
    "ensure_directory",
    "copy_file_bytes",
]
