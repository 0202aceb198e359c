"""Tree construction: the bounded-depth traversal engine."""

from __future__ import annotations

from .build import Diagnostics, TraversalEngine, build_source_tree

__all__ = ["Diagnostics", "TraversalEngine", "build_source_tree"]
