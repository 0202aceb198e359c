"""Extract file content excerpts by regex matching with context windows.

Files are checked against ``max_size`` using their stat size before anything
is opened, then read once through a bounded ``read`` so memory never exceeds
the limit. Matching lines and context are grouped into merged spans; line
numbers are 1-based.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..errors import ConfigError
from .binary import is_binary_file
from .types import (
    REASON_BINARY,
    REASON_DISABLED,
    REASON_OVERSIZED,
    REASON_UNREADABLE,
    ContentExcerpt,
    ExcerptLine,
    MatchSpan,
)

DEFAULT_MAX_SIZE = 100_000


@dataclass(frozen=True)
class ContentOptions:
    """Content display settings applied to every kept file."""

    enabled: bool = False
    max_size: int = DEFAULT_MAX_SIZE
    pattern: re.Pattern[str] | None = None
    context: int = 0
    whole_file: bool = False
    highlight: bool = False


def compile_pattern(text: str | None) -> re.Pattern[str] | None:
    """Compile a user pattern, raising ``ConfigError`` when it is invalid."""
    if text is None:
        return None
    try:
        return re.compile(text)
    except re.error as exc:
        raise ConfigError(f"invalid pattern {text!r}: {exc}") from exc


def decode_text(data: bytes) -> str:
    """Decode bytes as UTF-8 (dropping a BOM), falling back to latin-1."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("latin-1")


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only (form feeds and other separators stay in the line)."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def read_bounded_lines(path: Path, max_size: int) -> list[str] | None:
    """Read at most ``max_size`` bytes of ``path`` as lines.

    Returns ``None`` when the file holds more than ``max_size`` bytes (it may
    have grown since it was stat'ed). Raises ``OSError`` on read failure.
    """
    with path.open("rb") as handle:
        data = handle.read(max_size + 1)
    if len(data) > max_size:
        return None
    return split_lines(decode_text(data))


def match_offsets(pattern: re.Pattern[str], line: str) -> tuple[tuple[int, int], ...]:
    """Character ranges of every non-empty match of ``pattern`` in ``line``."""
    return tuple(match.span() for match in pattern.finditer(line) if match.end() > match.start())


def merge_windows(windows: list[tuple[int, int]]) -> list[tuple[int, int]]:
    """Merge inclusive line windows that overlap or touch.

    ``(1, 3)`` and ``(4, 6)`` merge into ``(1, 6)``; ``(1, 3)`` and ``(5, 6)``
    stay apart.
    """
    merged: list[tuple[int, int]] = []
    for start, end in sorted(windows):
        if merged and start <= merged[-1][1] + 1:
            prev_start, prev_end = merged[-1]
            merged[-1] = (prev_start, max(prev_end, end))
            continue
        merged.append((start, end))
    return merged


def context_window(line_number: int, context: int, total_lines: int) -> tuple[int, int]:
    return max(1, line_number - context), min(total_lines, line_number + context)


def scan_lines(
    lines: list[str],
    pattern: re.Pattern[str] | None,
    highlight: bool,
) -> tuple[ExcerptLine, ...]:
    """Mark matching lines and attach offsets when ``highlight`` is on."""
    out: list[ExcerptLine] = []
    for index, text in enumerate(lines, start=1):
        if pattern is None or pattern.search(text) is None:
            out.append(ExcerptLine(number=index, text=text))
            continue
        offsets = match_offsets(pattern, text) if highlight else ()
        out.append(ExcerptLine(number=index, text=text, is_match=True, highlights=offsets))
    return tuple(out)


def build_excerpt(lines: list[str], options: ContentOptions) -> ContentExcerpt:
    """Turn decoded lines into an excerpt according to ``options``."""
    pattern = options.pattern
    if pattern is None:
        return ContentExcerpt.whole_file(scan_lines(lines, None, highlight=False))

    scanned = scan_lines(lines, pattern, options.highlight)
    match_numbers = [line.number for line in scanned if line.is_match]
    total = len(scanned)
    if not match_numbers:
        return ContentExcerpt.no_match(total)
    if options.whole_file:
        return ContentExcerpt.whole_file(scanned)

    windows = [context_window(number, options.context, total) for number in match_numbers]
    spans = tuple(
        MatchSpan(start_line=start, end_line=end, lines=scanned[start - 1 : end])
        for start, end in merge_windows(windows)
    )
    return ContentExcerpt.matches(spans, total)


def extract_content(
    path: Path,
    size: int,
    options: ContentOptions,
    is_binary: Callable[[Path], bool] | None = None,
) -> ContentExcerpt:
    """Return the content excerpt for one file.

    The file is not opened when content is disabled or its stat ``size``
    exceeds ``options.max_size``. Binary files are never scanned. Read errors
    yield ``NONE`` with reason ``unreadable`` rather than raising.
    """
    if not options.enabled:
        return ContentExcerpt.none(REASON_DISABLED)
    if size > options.max_size:
        return ContentExcerpt.none(REASON_OVERSIZED)

    probe = is_binary if is_binary is not None else is_binary_file
    try:
        if probe(path):
            return ContentExcerpt.none(REASON_BINARY)
        lines = read_bounded_lines(path, options.max_size)
    except OSError:
        return ContentExcerpt.none(REASON_UNREADABLE)
    if lines is None:
        return ContentExcerpt.none(REASON_OVERSIZED)
    return build_excerpt(lines, options)


__all__ = [
    "DEFAULT_MAX_SIZE",
    "ContentOptions",
    "build_excerpt",
    "compile_pattern",
    "context_window",
    "decode_text",
    "extract_content",
    "match_offsets",
    "merge_windows",
    "read_bounded_lines",
    "scan_lines",
    "split_lines",
]
