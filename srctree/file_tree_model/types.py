"""Domain datatypes for traversal snapshots and the built source tree."""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path

from ..search.types import NO_CONTENT, ContentExcerpt

WINDOWS_EXECUTABLE_EXTENSIONS = frozenset({"exe", "bat", "cmd", "com", "ps1"})


class EntryKind(Enum):
    """Filesystem object kind as observed by ``lstat`` (links never followed)."""

    DIRECTORY = "directory"
    FILE = "file"
    SYMLINK = "symlink"
    SOCKET = "socket"
    PIPE = "pipe"
    DEVICE = "device"


@dataclass(frozen=True)
class EntryMeta:
    """Immutable snapshot of one filesystem object at visit time.

    ``is_empty`` describes the raw object: a zero-length file, or a directory
    with no direct children before any filtering. Directories past the depth
    limit are only listed for this when a directory-targeting filter is active,
    otherwise the flag is ``False``.
    """

    path: Path
    relative_path: Path
    name: str
    kind: EntryKind
    size: int = 0
    mtime_ns: int = 0
    mode: int = 0
    hidden: bool = False
    is_empty: bool = False

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE

    @property
    def extension(self) -> str:
        """Final dot suffix without the dot; empty for directories and dotfiles."""
        if self.is_dir:
            return ""
        return os.path.splitext(self.name)[1][1:]

    @property
    def executable(self) -> bool:
        if not self.is_file:
            return False
        if os.name == "nt":
            return self.extension.lower() in WINDOWS_EXECUTABLE_EXTENSIONS
        return bool(self.mode & 0o111)

    @property
    def modified(self) -> datetime:
        return datetime.fromtimestamp(self.mtime_ns / 1_000_000_000, tz=timezone.utc)

    @property
    def depth(self) -> int:
        return len(self.relative_path.parts)


@dataclass(frozen=True)
class Diagnostic:
    """Non-fatal problem recorded against one path during a build."""

    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass(frozen=True)
class Node:
    """Traversal output unit: metadata, content excerpt, ordered children."""

    entry: EntryMeta
    content: ContentExcerpt = NO_CONTENT
    children: tuple["Node", ...] = ()
    warning: str | None = None

    @property
    def name(self) -> str:
        return self.entry.name

    @property
    def is_dir(self) -> bool:
        return self.entry.is_dir


@dataclass(frozen=True)
class SourceTree:
    """A built tree plus diagnostics accumulated while walking it."""

    root: Node
    diagnostics: tuple[Diagnostic, ...] = ()

    def iter_nodes(self) -> Iterator[Node]:
        """Yield every node depth-first in pre-order, root included."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


__all__ = [
    "EntryKind",
    "EntryMeta",
    "Diagnostic",
    "Node",
    "SourceTree",
    "WINDOWS_EXECUTABLE_EXTENSIONS",
]
