"""Bounded-depth traversal that builds the filtered, sorted source tree.

The walk is synchronous and depth-first. Each directory returns its surviving
children by value; survival of the directory itself is decided only after its
children are known. Problems with individual entries become warning nodes and
``Diagnostic`` records instead of aborting the walk.
"""

from __future__ import annotations

import os
from collections.abc import Collection
from pathlib import Path

from ..errors import RootNotADirectory, RootNotFound, RootPermissionDenied
from ..file_tree_model.fs import (
    directory_is_empty,
    kind_from_mode,
    list_directory_children,
    placeholder_entry,
    snapshot_from_stat,
    snapshot_path,
)
from ..file_tree_model.types import Diagnostic, EntryKind, EntryMeta, Node, SourceTree
from ..filters.predicate import PredicateSet
from ..search.content import ContentOptions, extract_content
from ..search.types import NO_CONTENT, REASON_UNREADABLE, ContentExcerpt
from ..sorting import SortPolicy


def _reason(exc: BaseException) -> str:
    strerror = getattr(exc, "strerror", None)
    return str(strerror or exc)


class Diagnostics:
    """Ordered collector of non-fatal problems for one build."""

    def __init__(self) -> None:
        self.items: list[Diagnostic] = []

    def add(self, path: Path, message: str) -> str:
        self.items.append(Diagnostic(path=path, message=message))
        return message


class TraversalEngine:
    """Walk a directory tree applying depth, exclusion, filter, sort, and content rules.

    ``depth`` of ``0`` is unlimited; ``N`` lists entries down to ``N`` levels
    below the root and does not descend further. Symlinks are listed and never
    followed.
    """

    def __init__(
        self,
        depth: int = 0,
        exclude: Collection[str] = (),
        predicate: PredicateSet | None = None,
        sort_policy: SortPolicy | None = None,
        content: ContentOptions | None = None,
    ) -> None:
        self.depth = depth
        self.exclude = frozenset(exclude)
        self.predicate = predicate if predicate is not None else PredicateSet()
        self.sort_policy = sort_policy if sort_policy is not None else SortPolicy()
        self.content = content if content is not None else ContentOptions()

    def can_descend(self, depth: int) -> bool:
        """Whether children of a directory at ``depth`` are within the limit."""
        return self.depth == 0 or depth < self.depth

    def build(self, root: Path | str) -> SourceTree:
        root_path = _validated_root(Path(root))
        children, raw_count, scan_error = list_directory_children(root_path, self.exclude)
        if scan_error is not None:
            raise RootPermissionDenied(f"Cannot read directory: {root_path} ({_reason(scan_error)})") from scan_error

        diagnostics = Diagnostics()
        root_entry = snapshot_path(root_path, root_path, is_empty=raw_count == 0)
        root_node = Node(
            entry=root_entry,
            children=self.visit_children(root_path, children, 0, diagnostics),
        )
        return SourceTree(root=root_node, diagnostics=tuple(diagnostics.items))

    def visit_children(
        self,
        root: Path,
        paths: list[Path],
        depth: int,
        diagnostics: Diagnostics,
    ) -> tuple[Node, ...]:
        """Build, filter, and order the children of a directory at ``depth``."""
        nodes: list[Node] = []
        child_depth = depth + 1
        for path in paths:
            try:
                stat_result = os.lstat(path)
            except OSError as exc:
                warning = diagnostics.add(path, f"cannot stat entry ({_reason(exc)})")
                nodes.append(Node(entry=placeholder_entry(path, root), warning=warning))
                continue

            if kind_from_mode(stat_result.st_mode) is EntryKind.DIRECTORY:
                node = self.visit_directory(root, path, stat_result, child_depth, diagnostics)
            else:
                node = self.visit_entry(snapshot_from_stat(path, root, stat_result), diagnostics)
            if node is not None:
                nodes.append(node)
        return self.sort_policy.order(nodes)

    def visit_directory(
        self,
        root: Path,
        path: Path,
        stat_result: os.stat_result,
        depth: int,
        diagnostics: Diagnostics,
    ) -> Node | None:
        if not self.can_descend(depth):
            # Emptiness needs a listing; only directory-targeting tokens read it.
            is_empty = directory_is_empty(path) if self.predicate.targets_directories else None
            entry = snapshot_from_stat(path, root, stat_result, is_empty=is_empty)
            return Node(entry=entry) if self.predicate.keep_directory(entry, False) else None

        paths, raw_count, scan_error = list_directory_children(path, self.exclude)
        if scan_error is not None:
            entry = snapshot_from_stat(path, root, stat_result, is_empty=False)
            warning = diagnostics.add(path, f"cannot read directory ({_reason(scan_error)})")
            return Node(entry=entry, warning=warning)

        entry = snapshot_from_stat(path, root, stat_result, is_empty=raw_count == 0)
        children = self.visit_children(root, paths, depth, diagnostics)
        if not self.predicate.keep_directory(entry, bool(children)):
            return None
        return Node(entry=entry, children=children)

    def visit_entry(self, entry: EntryMeta, diagnostics: Diagnostics) -> Node | None:
        """Filter a non-directory entry and attach content for regular files."""
        if not self.predicate.keep(entry):
            read_error = self.predicate.classifier.read_error(entry.path)
            if read_error is None:
                return None
            warning = diagnostics.add(entry.path, f"cannot read file ({_reason(read_error)})")
            return Node(entry=entry, warning=warning)
        if not entry.is_file:
            return Node(entry=entry)

        content = self.extract(entry)
        if content.reason == REASON_UNREADABLE:
            warning = diagnostics.add(entry.path, "cannot read file")
            return Node(entry=entry, content=content, warning=warning)
        return Node(entry=entry, content=content)

    def extract(self, entry: EntryMeta) -> ContentExcerpt:
        if not self.content.enabled:
            return NO_CONTENT
        return extract_content(
            entry.path,
            entry.size,
            self.content,
            is_binary=self.predicate.classifier.is_binary,
        )


def _validated_root(root: Path) -> Path:
    """Resolve ``root`` and raise the matching root error when unusable."""
    try:
        resolved = root.resolve()
    except OSError as exc:
        raise RootNotFound(f"Path not found: {root}") from exc
    if not resolved.exists():
        raise RootNotFound(f"Path not found: {root}")
    if not resolved.is_dir():
        raise RootNotADirectory(f"'{root}' is not a directory.")
    return resolved


def build_source_tree(
    root: Path | str,
    *,
    depth: int = 0,
    exclude: Collection[str] = (),
    predicate: PredicateSet | None = None,
    sort_policy: SortPolicy | None = None,
    content: ContentOptions | None = None,
) -> SourceTree:
    """Walk ``root`` and return the filtered, sorted tree with diagnostics.

    Raises ``RootNotFound``, ``RootNotADirectory`` or ``RootPermissionDenied``
    before any child is visited.
    """
    engine = TraversalEngine(
        depth=depth,
        exclude=exclude,
        predicate=predicate,
        sort_policy=sort_policy,
        content=content,
    )
    return engine.build(root)


__all__ = ["Diagnostics", "TraversalEngine", "build_source_tree"]
