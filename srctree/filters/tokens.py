"""Type-filter tokens parsed from repeated ``-t`` values.

Accepted forms are ``ext:EXTENSION``, ``group:GROUP`` and a bare special
keyword such as ``binary`` or ``hidden``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..errors import ConfigError


class SpecialKind(Enum):
    """Fixed set of special attributes a token can request."""

    BINARY = "binary"
    TEXT = "text"
    DIR = "dir"
    SOCKET = "socket"
    PIPE = "pipe"
    EXECUTABLE = "executable"
    SYMLINK = "symlink"
    DEVICE = "device"
    HIDDEN = "hidden"
    EMPTY = "empty"
    ARCHIVE = "archive"
    ALL = "all"


class TokenKind(Enum):
    EXTENSION = "ext"
    GROUP = "group"
    SPECIAL = "special"


# Tokens whose match is evaluated against a directory's own metadata.
DIRECTORY_SPECIALS = frozenset({SpecialKind.DIR, SpecialKind.HIDDEN, SpecialKind.EMPTY, SpecialKind.ALL})


@dataclass(frozen=True)
class TypeToken:
    """One parsed type filter."""

    kind: TokenKind
    value: str = ""
    special: SpecialKind | None = None

    @classmethod
    def extension(cls, value: str) -> "TypeToken":
        return cls(kind=TokenKind.EXTENSION, value=value.lstrip(".").lower())

    @classmethod
    def group(cls, value: str) -> "TypeToken":
        return cls(kind=TokenKind.GROUP, value=value.lower())

    @classmethod
    def of_special(cls, special: SpecialKind) -> "TypeToken":
        return cls(kind=TokenKind.SPECIAL, value=special.value, special=special)

    @property
    def targets_directories(self) -> bool:
        return self.special in DIRECTORY_SPECIALS

    def __str__(self) -> str:
        if self.kind is TokenKind.SPECIAL:
            return self.value
        return f"{self.kind.value}:{self.value}"


def parse_type_token(raw: str) -> TypeToken:
    """Parse one ``-t`` value into a ``TypeToken``.

    Raises ``ConfigError`` for empty ``ext:``/``group:`` values and unknown
    special keywords.
    """
    text = raw.strip()
    prefix, sep, rest = text.partition(":")
    if sep:
        value = rest.strip()
        if prefix == "ext":
            if not value.lstrip("."):
                raise ConfigError(f"missing extension in type filter: {raw!r}")
            return TypeToken.extension(value)
        if prefix == "group":
            if not value:
                raise ConfigError(f"missing group name in type filter: {raw!r}")
            return TypeToken.group(value)
        raise ConfigError(f"unknown type filter prefix: {raw!r}")

    try:
        special = SpecialKind(text.lower())
    except ValueError as exc:
        raise ConfigError(f"unknown type filter: {raw!r}") from exc
    return TypeToken.of_special(special)


def parse_type_tokens(values: list[str] | tuple[str, ...]) -> tuple[TypeToken, ...]:
    return tuple(parse_type_token(value) for value in values)


__all__ = [
    "SpecialKind",
    "TokenKind",
    "TypeToken",
    "DIRECTORY_SPECIALS",
    "parse_type_token",
    "parse_type_tokens",
]
