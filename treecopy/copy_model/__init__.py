"""Core copy model: datatypes, filesystem primitives, and the tree copier.

This package contains no presentation concerns:
- task/outcome/probe datatypes
- single-call filesystem helpers and the unique-name resolver
- the depth-first copier producing an outcome stream
"""

from __future__ import annotations

from .types import (
    ConflictPolicy,
    CopyTask,
    FailureReason,
    LogLevel,
    Outcome,
    OutcomeKind,
    PathKind,
    PathProbe,
    TraversalFrame,
)
from .fs import copy_file_bytes, ensure_directory, list_entry_names, probe_path, unique_path
from .copier import copy_tree, failed_outcomes, iter_copy

__all__ = [
    "ConflictPolicy",
    "CopyTask",
    "FailureReason",
    "LogLevel",
    "Outcome",
    "OutcomeKind",
    "PathKind",
    "PathProbe",
    "TraversalFrame",
    "probe_path",
    "list_entry_names",
    "unique_path",
    "ensure_directory",
    "copy_file_bytes",
    "iter_copy",
    "copy_tree",
    "failed_outcomes",
]
