"""Content extraction: binary probing, pattern scanning, and excerpt types."""

from .binary import BINARY_PROBE_BYTES, is_binary_file, looks_binary
from .content import (
    DEFAULT_MAX_SIZE,
    ContentOptions,
    build_excerpt,
    compile_pattern,
    extract_content,
    merge_windows,
)
from .types import NO_CONTENT, ContentExcerpt, ExcerptKind, ExcerptLine, MatchSpan

__all__ = [
    "BINARY_PROBE_BYTES",
    "DEFAULT_MAX_SIZE",
    "NO_CONTENT",
    "ContentExcerpt",
    "ContentOptions",
    "ExcerptKind",
    "ExcerptLine",
    "MatchSpan",
    "build_excerpt",
    "compile_pattern",
    "extract_content",
    "is_binary_file",
    "looks_binary",
    "merge_windows",
]
