"""Markdown/text serialization of built source trees."""

from __future__ import annotations

from .syntax import colorize_lines, language_for_path, sanitize_terminal_text
from .tree import (
    FORMAT_MARKDOWN,
    FORMAT_TEXT,
    OUTPUT_FORMATS,
    TreeRenderer,
    format_modified,
    format_size,
    mime_type_for,
    render_tree,
)

__all__ = [
    "FORMAT_MARKDOWN",
    "FORMAT_TEXT",
    "OUTPUT_FORMATS",
    "TreeRenderer",
    "colorize_lines",
    "format_modified",
    "format_size",
    "language_for_path",
    "mime_type_for",
    "render_tree",
    "sanitize_terminal_text",
]
