"""Filesystem scanning helpers that produce ``EntryMeta`` snapshots.

Nothing here follows symlinks: kinds come from ``lstat`` so a link to a
directory is reported as ``SYMLINK`` and never descended.
"""

from __future__ import annotations

import os
import stat
from collections.abc import Collection
from pathlib import Path

from .types import EntryKind, EntryMeta

_FILE_ATTRIBUTE_HIDDEN = getattr(stat, "FILE_ATTRIBUTE_HIDDEN", 0x2)


def kind_from_mode(mode: int) -> EntryKind:
    """Map ``st_mode`` to the closed ``EntryKind`` set."""
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    if stat.S_ISLNK(mode):
        return EntryKind.SYMLINK
    if stat.S_ISSOCK(mode):
        return EntryKind.SOCKET
    if stat.S_ISFIFO(mode):
        return EntryKind.PIPE
    if stat.S_ISBLK(mode) or stat.S_ISCHR(mode):
        return EntryKind.DEVICE
    return EntryKind.FILE


def is_hidden_name(name: str, stat_result: os.stat_result | None = None) -> bool:
    """Dot-prefixed names are hidden; Windows also honours the hidden attribute."""
    if name.startswith("."):
        return True
    if os.name == "nt" and stat_result is not None:
        attributes = getattr(stat_result, "st_file_attributes", 0)
        return bool(attributes & _FILE_ATTRIBUTE_HIDDEN)
    return False


def _relative_to_root(path: Path, root: Path) -> Path:
    try:
        return path.relative_to(root)
    except ValueError:
        return Path(path.name)


def snapshot_from_stat(path: Path, root: Path, stat_result: os.stat_result, is_empty: bool | None = None) -> EntryMeta:
    """Build an ``EntryMeta`` from an ``lstat`` result.

    Files derive ``is_empty`` from their size. Directories need the caller to
    pass ``is_empty`` because it depends on a listing; ``None`` means unknown
    and is stored as ``False``.
    """
    kind = kind_from_mode(stat_result.st_mode)
    size = 0 if kind is EntryKind.DIRECTORY else int(stat_result.st_size)
    if is_empty is None:
        is_empty = kind is EntryKind.FILE and size == 0
    name = path.name or str(path)
    return EntryMeta(
        path=path,
        relative_path=_relative_to_root(path, root),
        name=name,
        kind=kind,
        size=size,
        mtime_ns=int(stat_result.st_mtime_ns),
        mode=stat.S_IMODE(stat_result.st_mode),
        hidden=is_hidden_name(name, stat_result),
        is_empty=is_empty,
    )


def snapshot_path(path: Path, root: Path, is_empty: bool | None = None) -> EntryMeta:
    """Snapshot ``path`` without following links; raises ``OSError``."""
    return snapshot_from_stat(path, root, os.lstat(path), is_empty=is_empty)


def placeholder_entry(path: Path, root: Path) -> EntryMeta:
    """Metadata stand-in for an entry whose ``lstat`` failed."""
    return EntryMeta(
        path=path,
        relative_path=_relative_to_root(path, root),
        name=path.name,
        kind=EntryKind.FILE,
        hidden=is_hidden_name(path.name),
    )


def directory_is_empty(directory: Path) -> bool:
    """Return whether ``directory`` has no children; unreadable counts as non-empty."""
    try:
        with os.scandir(directory) as entries:
            return next(entries, None) is None
    except OSError:
        return False


def count_directory_items(directory: Path) -> int:
    """Count direct children of ``directory``; unreadable directories count as 0."""
    try:
        with os.scandir(directory) as entries:
            return sum(1 for _entry in entries)
    except OSError:
        return 0


def list_directory_children(
    directory: Path,
    exclude: Collection[str] = (),
) -> tuple[list[Path], int, Exception | None]:
    """List immediate children of ``directory`` minus excluded names.

    Returns ``(children, raw_count, scan_error)``. ``raw_count`` counts every
    child before exclusions. Excluded names are dropped here so excluded
    directories are never opened. ``scan_error`` is set, with an empty list,
    when the directory cannot be read.
    """
    children: list[Path] = []
    raw_count = 0
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                raw_count += 1
                if child.name in exclude:
                    continue
                children.append(Path(child.path))
    except OSError as exc:
        return [], 0, exc
    return children, raw_count, None


__all__ = [
    "kind_from_mode",
    "is_hidden_name",
    "snapshot_from_stat",
    "snapshot_path",
    "placeholder_entry",
    "count_directory_items",
    "directory_is_empty",
    "list_directory_children",
]
