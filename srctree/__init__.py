"""Public package surface for srctree.

Exports the tree-building API and ``main`` for programmatic CLI invocation.
"""

from __future__ import annotations

from .errors import ConfigError, RootNotADirectory, RootNotFound, RootPermissionDenied, SrcTreeError
from .file_tree_model import Diagnostic, EntryKind, EntryMeta, Node, SourceTree
from .filters import PredicateSet, SpecialKind, TypeClassifier, TypeToken, parse_type_token
from .options import TreeOptions, build_tree_options
from .search import ContentExcerpt, ContentOptions, ExcerptKind, MatchSpan, compile_pattern, extract_content
from .sorting import SortDirection, SortKey, SortPolicy
from .tree_model import TraversalEngine, build_source_tree


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "ConfigError",
    "ContentExcerpt",
    "ContentOptions",
    "Diagnostic",
    "EntryKind",
    "EntryMeta",
    "ExcerptKind",
    "MatchSpan",
    "Node",
    "PredicateSet",
    "RootNotADirectory",
    "RootNotFound",
    "RootPermissionDenied",
    "SortDirection",
    "SortKey",
    "SortPolicy",
    "SourceTree",
    "SpecialKind",
    "SrcTreeError",
    "TraversalEngine",
    "TreeOptions",
    "TypeClassifier",
    "TypeToken",
    "build_source_tree",
    "build_tree_options",
    "compile_pattern",
    "extract_content",
    "main",
    "parse_type_token",
]
