"""Serialize a built ``SourceTree`` as Markdown or indented plain text.

The report is a header, one row per entry indented two spaces per level,
optional numbered content blocks, then a footer. Content lines are marked
``>`` when they match the pattern.
"""

from __future__ import annotations

import mimetypes
import re
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path

from ..ansi import emphasize_ranges
from ..errors import ConfigError
from ..file_tree_model.fs import count_directory_items
from ..file_tree_model.types import EntryKind, EntryMeta, Node, SourceTree
from ..options import TreeOptions
from ..search.types import REASON_OVERSIZED, ContentExcerpt, ExcerptKind, ExcerptLine
from ..sorting import SortKey
from .syntax import DEFAULT_STYLE, colorize_lines, language_for_path, sanitize_terminal_text, sanitize_with_ranges

FORMAT_MARKDOWN = "markdown"
FORMAT_TEXT = "text"
OUTPUT_FORMATS = (FORMAT_MARKDOWN, FORMAT_TEXT)

INDENT = "  "
_BACKTICK_RUN_RE = re.compile(r"`+")

_SPECIAL_MIME = {
    EntryKind.DIRECTORY: "inode/directory",
    EntryKind.SYMLINK: "inode/symlink",
    EntryKind.SOCKET: "inode/socket",
    EntryKind.PIPE: "inode/fifo",
    EntryKind.DEVICE: "inode/device",
}


def format_size(size: int) -> str:
    """Compact size label using binary units (``512B``, ``3K``, ``12M``, ``1G``)."""
    if size >= 1_073_741_824:
        return f"{size // 1_073_741_824}G"
    if size >= 1_048_576:
        return f"{size // 1_048_576}M"
    if size >= 1024:
        return f"{size // 1024}K"
    return f"{size}B"


def format_modified(entry: EntryMeta) -> str:
    if entry.mtime_ns <= 0:
        return "unknown"
    return entry.modified.isoformat()


def code_fence(text: str) -> str:
    """Backtick fence longer than any backtick run inside ``text``."""
    longest = max((len(run) for run in _BACKTICK_RUN_RE.findall(text)), default=0)
    return "`" * max(3, longest + 1)


def mime_type_for(entry: EntryMeta) -> str:
    special = _SPECIAL_MIME.get(entry.kind)
    if special is not None:
        return special
    guessed, _encoding = mimetypes.guess_type(entry.name)
    return guessed or "application/octet-stream"


class TreeRenderer:
    """Line-oriented renderer shared by Markdown and text output."""

    def __init__(
        self,
        output_format: str = FORMAT_MARKDOWN,
        color: bool = False,
        style: str = DEFAULT_STYLE,
        options: TreeOptions | None = None,
    ) -> None:
        if output_format not in OUTPUT_FORMATS:
            raise ConfigError(f"unknown output format {output_format!r} (expected markdown or text)")
        self.markdown = output_format == FORMAT_MARKDOWN
        self.color = color
        self.style = style
        self.options = options

    def render(self, tree: SourceTree, now: datetime | None = None) -> str:
        lines: list[str] = []
        lines.extend(self.header(tree.root, now))
        for child in tree.root.children:
            self.emit_node(child, "", lines)
        lines.append("")
        lines.append("_End of source tree_" if self.markdown else "End of source tree")
        return "\n".join(lines) + "\n"

    def header(self, root: Node, now: datetime | None) -> list[str]:
        stamp = (now or datetime.now(timezone.utc)).isoformat()
        name = sanitize_terminal_text(root.entry.name)
        out = [
            f"# 📁 Project Source Tree: {name}" if self.markdown else f"Project Source Tree: {name}",
            f"Generated on {stamp}",
        ]
        options = self.options
        if options is not None:
            if options.predicate.tokens:
                out.append("Filters: " + ", ".join(str(token) for token in options.predicate.tokens))
            if options.pattern_text is not None:
                out.append(f"Content Pattern: {options.pattern_text}")
            if not options.sort_policy.is_default:
                policy = options.sort_policy
                out.append(f"Sorting: {policy.key.value} ({policy.direction.value})")
        out.append("")
        return out

    def emit_node(self, node: Node, prefix: str, lines: list[str]) -> None:
        if node.is_dir:
            lines.append(f"{prefix}{self.directory_row(node)}")
            if node.warning:
                lines.append(f"{prefix}{INDENT}! {node.warning}")
            for child in node.children:
                self.emit_node(child, prefix + INDENT, lines)
            return

        lines.append(f"{prefix}{self.file_row(node.entry)}")
        if node.warning:
            lines.append(f"{prefix}{INDENT}! {node.warning}")
        self.emit_content(node, prefix, lines)

    def directory_row(self, node: Node) -> str:
        name = sanitize_terminal_text(node.name)
        label = f"📁 **{name}/**" if self.markdown else f"[DIR] {name}/"
        key = self.options.sort_policy.key if self.options is not None else SortKey.NAME
        if key is SortKey.DATE:
            label += f" (modified: {format_modified(node.entry)})"
        elif key is SortKey.SIZE:
            label += f" ({count_directory_items(node.entry.path)} items)"
        return label

    def file_row(self, entry: EntryMeta) -> str:
        icon = "📄 " if self.markdown else "[FILE] "
        name = sanitize_terminal_text(entry.name)
        extension = f".{entry.extension}" if entry.extension else ""
        return (
            f"{icon}{name} ({format_size(entry.size)}, {format_modified(entry)}) "
            f"[{mime_type_for(entry)}]{sanitize_terminal_text(extension)}"
        )

    def emit_content(self, node: Node, prefix: str, lines: list[str]) -> None:
        content = node.content
        if content.kind is ExcerptKind.NONE:
            if content.reason == REASON_OVERSIZED:
                lines.append(f"{prefix}{INDENT}(File not displayed - {format_size(node.entry.size)})")
            return

        fence = code_fence(content.text)
        lines.append("")
        if self.markdown:
            lines.append(f"{prefix}{INDENT}Content:")
            lines.append(f"{prefix}{INDENT}{fence}{language_for_path(node.entry.path)}")
        else:
            lines.append(f"{prefix}{INDENT}--- Content Start ---")
        lines.append(f"{prefix}     ┌ Total lines: {content.total_lines}")
        lines.append(f"{prefix}     │")
        lines.extend(self.content_rows(node.entry.path, content, prefix))
        lines.append(f"{prefix}     │")
        if self.markdown:
            lines.append(f"{prefix}{INDENT}{fence}")
        else:
            lines.append(f"{prefix}{INDENT}--- Content End ---")
        lines.append("")

    def content_rows(self, path: Path, content: ContentExcerpt, prefix: str) -> list[str]:
        if not content.has_content:
            return [f"{prefix}    ! No matches found"]
        if content.kind is ExcerptKind.WHOLE_FILE:
            return self.line_rows(path, content.lines, prefix)

        rows: list[str] = []
        previous_end = 0
        for span in content.spans:
            if span.start_line > previous_end + 1:
                rows.append(f"{prefix}     │")
                rows.append(f"{prefix}   ⋯ │ ...")
                rows.append(f"{prefix}     │")
            rows.extend(self.line_rows(path, span.lines, prefix))
            previous_end = span.end_line
        return rows

    def line_rows(self, path: Path, excerpt_lines: Iterable[ExcerptLine], prefix: str) -> list[str]:
        items = list(excerpt_lines)
        texts: list[str] = []
        ranges: list[tuple[tuple[int, int], ...]] = []
        for line in items:
            text, shifted = sanitize_with_ranges(line.text, line.highlights)
            texts.append(text)
            ranges.append(shifted)

        if self.color and not self.markdown:
            texts = colorize_lines(texts, path, self.style)

        rows: list[str] = []
        for line, text, line_ranges in zip(items, texts, ranges):
            if self.color and line_ranges:
                text = emphasize_ranges(text, line_ranges)
            marker = "> " if line.is_match else "  "
            rows.append(f"{prefix}{line.number:4} │{marker}{text}")
        return rows


def render_tree(
    tree: SourceTree,
    *,
    output_format: str = FORMAT_MARKDOWN,
    color: bool = False,
    style: str = DEFAULT_STYLE,
    options: TreeOptions | None = None,
    now: datetime | None = None,
) -> str:
    """Render ``tree`` in ``output_format`` (``markdown`` or ``text``)."""
    renderer = TreeRenderer(output_format=output_format, color=color, style=style, options=options)
    return renderer.render(tree, now=now)


__all__ = [
    "FORMAT_MARKDOWN",
    "FORMAT_TEXT",
    "OUTPUT_FORMATS",
    "TreeRenderer",
    "code_fence",
    "format_modified",
    "format_size",
    "mime_type_for",
    "render_tree",
]
