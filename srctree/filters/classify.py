"""Classify filesystem entries against type tokens.

Extension groups and the archive set are fixed tables. Binary detection is a
byte-sample heuristic shared with content extraction so each file is probed
at most once per build.
"""

from __future__ import annotations

from pathlib import Path

from ..file_tree_model.types import EntryKind, EntryMeta
from ..search.binary import BINARY_PROBE_BYTES, is_binary_file, looks_binary
from .tokens import SpecialKind, TokenKind, TypeToken

FILE_TYPE_GROUPS: dict[str, frozenset[str]] = {
    "web": frozenset({"html", "htm", "css", "scss", "less", "js", "jsx", "ts", "tsx"}),
    "docs": frozenset({"md", "txt", "pdf", "doc", "docx", "odt", "rtf"}),
    "images": frozenset({"jpg", "jpeg", "png", "gif", "svg", "webp", "bmp"}),
    "code": frozenset(
        {"py", "java", "cpp", "c", "h", "hpp", "cs", "go", "rs", "php", "rb", "pl", "scala", "kt", "swift"}
    ),
    "config": frozenset({"json", "yaml", "yml", "toml", "ini", "conf", "xml"}),
    "data": frozenset({"csv", "sql", "db", "sqlite"}),
    "script": frozenset({"sh", "bash", "zsh", "fish", "ps1", "bat", "cmd"}),
}

ARCHIVE_EXTENSIONS = frozenset(
    {"zip", "tar", "gz", "tgz", "bz2", "tbz2", "xz", "txz", "7z", "rar", "zst", "jar", "war", "whl"}
)


class TypeClassifier:
    """Decide whether an entry matches a type token.

    Binary probes are memoized per path for the lifetime of the instance, so
    one classifier should be used per build.
    """

    def __init__(self, groups: dict[str, frozenset[str]] | None = None) -> None:
        self.groups = FILE_TYPE_GROUPS if groups is None else groups
        self._binary_cache: dict[Path, bool] = {}
        self._read_errors: dict[Path, OSError] = {}

    def is_binary(self, path: Path) -> bool:
        cached = self._binary_cache.get(path)
        if cached is not None:
            return cached
        result = is_binary_file(path)
        self._binary_cache[path] = result
        return result

    def _probe_text(self, entry: EntryMeta) -> bool | None:
        """Return ``True`` for text, ``False`` for binary, ``None`` if unreadable."""
        if not entry.is_file:
            return None
        try:
            return not self.is_binary(entry.path)
        except OSError as exc:
            self._read_errors[entry.path] = exc
            return None

    def read_error(self, path: Path) -> OSError | None:
        """The error from a failed binary/text check of ``path``, if any."""
        return self._read_errors.get(path)

    def matches(self, entry: EntryMeta, token: TypeToken) -> bool:
        if token.kind is TokenKind.EXTENSION:
            return not entry.is_dir and entry.extension.lower() == token.value
        if token.kind is TokenKind.GROUP:
            extensions = self.groups.get(token.value)
            if not extensions or entry.is_dir:
                return False
            return entry.extension.lower() in extensions
        return self.matches_special(entry, token.special)

    def matches_special(self, entry: EntryMeta, special: SpecialKind | None) -> bool:
        if special is SpecialKind.BINARY:
            return self._probe_text(entry) is False
        if special is SpecialKind.TEXT:
            return self._probe_text(entry) is True
        if special is SpecialKind.DIR:
            return entry.kind is EntryKind.DIRECTORY
        if special is SpecialKind.SOCKET:
            return entry.kind is EntryKind.SOCKET
        if special is SpecialKind.PIPE:
            return entry.kind is EntryKind.PIPE
        if special is SpecialKind.SYMLINK:
            return entry.kind is EntryKind.SYMLINK
        if special is SpecialKind.DEVICE:
            return entry.kind is EntryKind.DEVICE
        if special is SpecialKind.EXECUTABLE:
            return entry.executable
        if special is SpecialKind.HIDDEN:
            return entry.hidden
        if special is SpecialKind.EMPTY:
            return entry.is_empty and entry.kind in {EntryKind.FILE, EntryKind.DIRECTORY}
        if special is SpecialKind.ARCHIVE:
            return entry.is_file and entry.extension.lower() in ARCHIVE_EXTENSIONS
        if special is SpecialKind.ALL:
            return True
        return False


__all__ = [
    "ARCHIVE_EXTENSIONS",
    "BINARY_PROBE_BYTES",
    "FILE_TYPE_GROUPS",
    "TypeClassifier",
    "is_binary_file",
    "looks_binary",
]
