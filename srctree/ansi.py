"""ANSI-aware emphasis of character ranges.

Match highlighting is applied after syntax colouring, so offsets refer to
visible characters and escape sequences already in the text are skipped.
"""

from __future__ import annotations

import re

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")

MATCH_START = "\033[7;1m"
MATCH_END = "\033[27;22m"


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def emphasize_ranges(
    text: str,
    ranges: tuple[tuple[int, int], ...] | list[tuple[int, int]],
    start: str = MATCH_START,
    end: str = MATCH_END,
) -> str:
    """Wrap visible-character ``ranges`` of ``text`` in ``start``/``end`` sequences.

    Ranges are ``(start, end)`` offsets into the text with escapes removed.
    Existing escapes are preserved; reverse-video emphasis is used by default
    so foreground colours from syntax highlighting stay intact.
    """
    if not text or not ranges:
        return text

    visible_start: list[int] = []
    visible_end: list[int] = []
    idx = 0
    text_len = len(text)
    while idx < text_len:
        if text[idx] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, idx)
            if match:
                idx = match.end()
                continue
        visible_start.append(idx)
        idx += 1
        visible_end.append(idx)

    if not visible_start:
        return text

    out: list[str] = []
    raw_cursor = 0
    for start_vis, end_vis in sorted(ranges):
        if start_vis >= len(visible_start) or end_vis <= start_vis:
            continue
        start_raw = visible_start[start_vis]
        if start_raw < raw_cursor:
            continue
        end_raw = visible_end[min(len(visible_end), end_vis) - 1]
        out.append(text[raw_cursor:start_raw])
        out.append(start)
        out.append(text[start_raw:end_raw])
        out.append(end)
        raw_cursor = end_raw
    out.append(text[raw_cursor:])
    return "".join(out)


__all__ = ["ANSI_ESCAPE_RE", "MATCH_END", "MATCH_START", "emphasize_ranges", "strip_ansi"]
