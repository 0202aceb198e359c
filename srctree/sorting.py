"""Sibling ordering by name, date, size, type, or extension.

Every key breaks ties by case-folded name, then raw name, so output is
deterministic. ``DESC`` reverses the whole comparison; Python's stable sort
keeps fully-equal nodes in input order in both directions.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from .errors import ConfigError
from .file_tree_model.types import EntryKind, EntryMeta, Node

_KIND_RANK = {
    EntryKind.DIRECTORY: 0,
    EntryKind.FILE: 1,
    EntryKind.SYMLINK: 2,
    EntryKind.SOCKET: 3,
    EntryKind.PIPE: 4,
    EntryKind.DEVICE: 5,
}


class SortKey(Enum):
    NAME = "name"
    DATE = "date"
    SIZE = "size"
    TYPE = "type"
    EXT = "ext"

    @classmethod
    def parse(cls, value: str) -> "SortKey":
        try:
            return cls(value.strip().lower())
        except ValueError as exc:
            choices = ", ".join(key.value for key in cls)
            raise ConfigError(f"unknown sort key {value!r} (expected one of: {choices})") from exc


class SortDirection(Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: str) -> "SortDirection":
        try:
            return cls(value.strip().lower())
        except ValueError as exc:
            raise ConfigError(f"unknown sort direction {value!r} (expected asc or desc)") from exc


def _name_key(entry: EntryMeta) -> tuple[str, str]:
    return entry.name.casefold(), entry.name


def sort_key_for(entry: EntryMeta, key: SortKey) -> tuple:
    """Comparison tuple for ``entry`` under ``key``."""
    if key is SortKey.DATE:
        return (entry.mtime_ns, *_name_key(entry))
    if key is SortKey.SIZE:
        return (0 if entry.is_dir else entry.size, *_name_key(entry))
    if key is SortKey.TYPE:
        return (_KIND_RANK[entry.kind], entry.extension.lower(), *_name_key(entry))
    if key is SortKey.EXT:
        return (entry.extension.lower(), *_name_key(entry))
    return _name_key(entry)


@dataclass(frozen=True)
class SortPolicy:
    """Key, direction, and directories-first preference for sibling order."""

    key: SortKey = SortKey.NAME
    direction: SortDirection = SortDirection.ASC
    dirs_first: bool = True

    @property
    def is_default(self) -> bool:
        return self.key is SortKey.NAME and self.direction is SortDirection.ASC

    def _sorted(self, nodes: Iterable[Node]) -> list[Node]:
        return sorted(
            nodes,
            key=lambda node: sort_key_for(node.entry, self.key),
            reverse=self.direction is SortDirection.DESC,
        )

    def order(self, nodes: Iterable[Node]) -> tuple[Node, ...]:
        items = list(nodes)
        if not self.dirs_first:
            return tuple(self._sorted(items))
        directories = self._sorted(node for node in items if node.is_dir)
        others = self._sorted(node for node in items if not node.is_dir)
        return (*directories, *others)


__all__ = ["SortKey", "SortDirection", "SortPolicy", "sort_key_for"]
