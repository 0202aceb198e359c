"""Content excerpt datatypes produced by pattern scanning.

Line numbers are 1-based everywhere. Highlight offsets are ``(start, end)``
character ranges into ``ExcerptLine.text``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ExcerptKind(Enum):
    """Closed set of content outcomes for one file."""

    NONE = "none"
    MATCHES = "matches"
    WHOLE_FILE = "whole_file"
    NO_MATCH = "no_match"


# Reasons attached to ``ExcerptKind.NONE``.
REASON_DISABLED = "disabled"
REASON_OVERSIZED = "oversized"
REASON_BINARY = "binary"
REASON_UNREADABLE = "unreadable"


@dataclass(frozen=True)
class ExcerptLine:
    """One content line with match marker and highlight ranges."""

    number: int
    text: str
    is_match: bool = False
    highlights: tuple[tuple[int, int], ...] = ()


@dataclass(frozen=True)
class MatchSpan:
    """Contiguous run of lines covering one or more matches plus context."""

    start_line: int
    end_line: int
    lines: tuple[ExcerptLine, ...]

    @property
    def match_lines(self) -> tuple[int, ...]:
        return tuple(line.number for line in self.lines if line.is_match)


@dataclass(frozen=True)
class ContentExcerpt:
    """Content extracted for a file node.

    Only the fields relevant to ``kind`` are populated: ``spans`` for
    ``MATCHES``, ``lines`` for ``WHOLE_FILE`` and ``reason`` for ``NONE``.
    """

    kind: ExcerptKind = ExcerptKind.NONE
    spans: tuple[MatchSpan, ...] = ()
    lines: tuple[ExcerptLine, ...] = ()
    total_lines: int = 0
    reason: str | None = REASON_DISABLED

    @classmethod
    def none(cls, reason: str = REASON_DISABLED) -> "ContentExcerpt":
        return cls(kind=ExcerptKind.NONE, reason=reason)

    @classmethod
    def matches(cls, spans: tuple[MatchSpan, ...], total_lines: int) -> "ContentExcerpt":
        return cls(kind=ExcerptKind.MATCHES, spans=spans, total_lines=total_lines, reason=None)

    @classmethod
    def whole_file(cls, lines: tuple[ExcerptLine, ...]) -> "ContentExcerpt":
        return cls(kind=ExcerptKind.WHOLE_FILE, lines=lines, total_lines=len(lines), reason=None)

    @classmethod
    def no_match(cls, total_lines: int) -> "ContentExcerpt":
        return cls(kind=ExcerptKind.NO_MATCH, total_lines=total_lines, reason=None)

    @property
    def has_content(self) -> bool:
        return self.kind in {ExcerptKind.MATCHES, ExcerptKind.WHOLE_FILE}

    @property
    def text(self) -> str:
        """Joined excerpt text (whole file, or every span concatenated)."""
        if self.kind == ExcerptKind.WHOLE_FILE:
            return "\n".join(line.text for line in self.lines)
        if self.kind == ExcerptKind.MATCHES:
            return "\n".join(line.text for span in self.spans for line in span.lines)
        return ""


NO_CONTENT = ContentExcerpt.none()


__all__ = [
    "ExcerptKind",
    "ExcerptLine",
    "MatchSpan",
    "ContentExcerpt",
    "NO_CONTENT",
    "REASON_DISABLED",
    "REASON_OVERSIZED",
    "REASON_BINARY",
    "REASON_UNREADABLE",
]
