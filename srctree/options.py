"""Validated option bundle turning raw CLI/config values into engine inputs.

All validation happens here, before any directory is touched, so malformed
patterns or sort keys surface as ``ConfigError`` ahead of traversal.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ConfigError
from .file_tree_model.types import SourceTree
from .filters.classify import TypeClassifier
from .filters.predicate import PredicateSet
from .filters.tokens import parse_type_tokens
from .search.content import DEFAULT_MAX_SIZE, ContentOptions, compile_pattern
from .sorting import SortDirection, SortKey, SortPolicy
from .tree_model.build import build_source_tree

DEFAULT_DEPTH = 1


@dataclass(frozen=True)
class TreeOptions:
    """Everything one build needs: root, limits, filter, order, content."""

    root: Path
    depth: int = DEFAULT_DEPTH
    exclude: tuple[str, ...] = ()
    predicate: PredicateSet = field(default_factory=PredicateSet)
    sort_policy: SortPolicy = field(default_factory=SortPolicy)
    content: ContentOptions = field(default_factory=ContentOptions)
    pattern_text: str | None = None

    def build(self) -> SourceTree:
        """Run one traversal with a fresh classifier cache."""
        return build_source_tree(
            self.root,
            depth=self.depth,
            exclude=self.exclude,
            predicate=PredicateSet(self.predicate.tokens),
            sort_policy=self.sort_policy,
            content=self.content,
        )


def _non_negative(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError(f"{name} must be a non-negative integer, got {value!r}")
    return value


def _positive(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{name} must be a positive integer, got {value!r}")
    return value


def build_tree_options(
    root: Path | str = ".",
    *,
    depth: int = DEFAULT_DEPTH,
    exclude: Sequence[str] = (),
    types: Sequence[str] = (),
    show_content: bool = False,
    max_size: int = DEFAULT_MAX_SIZE,
    pattern: str | None = None,
    context: int = 0,
    whole_file: bool = False,
    highlight: bool = False,
    sort: str = "name",
    direction: str = "asc",
    dirs_first: bool = True,
) -> TreeOptions:
    """Validate raw option values and assemble ``TreeOptions``.

    Raises ``ConfigError`` for negative depth/context, non-positive max size,
    unknown type keywords, unknown sort key or direction, and patterns that do
    not compile.
    """
    tokens = parse_type_tokens(tuple(types))
    sort_policy = SortPolicy(
        key=SortKey.parse(sort),
        direction=SortDirection.parse(direction),
        dirs_first=bool(dirs_first),
    )
    content = ContentOptions(
        enabled=bool(show_content),
        max_size=_positive("max size", max_size),
        pattern=compile_pattern(pattern),
        context=_non_negative("context", context),
        whole_file=bool(whole_file),
        highlight=bool(highlight),
    )
    return TreeOptions(
        root=Path(root),
        depth=_non_negative("depth", depth),
        exclude=tuple(dict.fromkeys(exclude)),
        predicate=PredicateSet(tokens, TypeClassifier()),
        sort_policy=sort_policy,
        content=content,
        pattern_text=pattern,
    )


__all__ = ["DEFAULT_DEPTH", "TreeOptions", "build_tree_options"]
