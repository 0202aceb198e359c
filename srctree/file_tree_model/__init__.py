"""Domain model for source-tree snapshots.

This package contains non-rendering tree primitives:
- entry metadata and node datatypes
- ``lstat``-based filesystem snapshot helpers
"""

from __future__ import annotations

from .types import Diagnostic, EntryKind, EntryMeta, Node, SourceTree
from .fs import (
    count_directory_items,
    directory_is_empty,
    is_hidden_name,
    kind_from_mode,
    list_directory_children,
    placeholder_entry,
    snapshot_from_stat,
    snapshot_path,
)

__all__ = [
    "count_directory_items",
    "Diagnostic",
    "EntryKind",
    "EntryMeta",
    "Node",
    "SourceTree",
    "directory_is_empty",
    "is_hidden_name",
    "kind_from_mode",
    "list_directory_children",
    "placeholder_entry",
    "snapshot_from_stat",
    "snapshot_path",
]
