"""Terminal-safe text, Pygments colouring, and code-fence language hints.

Control bytes in file content are escaped before output so a rendered tree
cannot ring bells or move the cursor. Highlight offsets are remapped through
that escaping.
"""

from __future__ import annotations

import re
from pathlib import Path

from pygments import highlight as pygments_highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"
FALLBACK_LANGUAGE = "text"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

_FORMATTERS: dict[str, TerminalFormatter] = {}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()


def _escape_char(ch: str) -> str:
    code = ord(ch)
    # C0 controls + DEL + C1 controls.
    if ch not in {"\n", "\r", "\t"} and (code < 32 or code == 127 or 0x80 <= code <= 0x9F):
        return f"\\x{code:02x}"
    return ch


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source
    return "".join(_escape_char(ch) for ch in source)


def sanitize_with_ranges(
    text: str,
    ranges: tuple[tuple[int, int], ...],
) -> tuple[str, tuple[tuple[int, int], ...]]:
    """Sanitize ``text`` and shift ``ranges`` so they cover the same characters."""
    if _CONTROL_RE.search(text) is None:
        return text, ranges

    pieces: list[str] = []
    offsets: list[int] = []
    position = 0
    for ch in text:
        offsets.append(position)
        piece = _escape_char(ch)
        pieces.append(piece)
        position += len(piece)
    offsets.append(position)
    return "".join(pieces), tuple((offsets[start], offsets[end]) for start, end in ranges)


def language_for_path(path: Path) -> str:
    """Return a fence language hint for ``path`` from its Pygments lexer."""
    try:
        lexer = get_lexer_for_filename(path.name)
    except ClassNotFound:
        return FALLBACK_LANGUAGE
    aliases = getattr(lexer, "aliases", None) or []
    return aliases[0] if aliases else FALLBACK_LANGUAGE


def _normalize_style(style: str) -> str:
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE

    try:
        get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str) -> TerminalFormatter:
    formatter = _FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    formatter = TerminalFormatter(style=style)
    _FORMATTERS[style] = formatter
    return formatter


def colorize_lines(lines: list[str], path: Path, style: str = DEFAULT_STYLE) -> list[str]:
    """Syntax-colour already-sanitized ``lines`` as one block.

    Lexing the block together keeps multi-line constructs (docstrings, block
    comments) correct. Returns the input unchanged if Pygments output does not
    line up one-to-one with the input lines.
    """
    if not lines:
        return lines
    source = "\n".join(lines) + "\n"
    try:
        lexer = get_lexer_for_filename(path.name, source, stripnl=False, stripall=False)
    except ClassNotFound:
        lexer = TextLexer(stripnl=False)

    rendered = pygments_highlight(source, lexer, _formatter_for_style(_normalize_style(style)))
    out = rendered.split("\n")
    if out and out[-1] == "":
        out.pop()
    if len(out) != len(lines):
        return lines
    return out


__all__ = [
    "DEFAULT_STYLE",
    "FALLBACK_LANGUAGE",
    "colorize_lines",
    "language_for_path",
    "sanitize_terminal_text",
    "sanitize_with_ranges",
]
