"""Type-token parsing, entry classification, and predicate composition."""

from .classify import (
    ARCHIVE_EXTENSIONS,
    BINARY_PROBE_BYTES,
    FILE_TYPE_GROUPS,
    TypeClassifier,
    is_binary_file,
    looks_binary,
)
from .predicate import PredicateSet
from .tokens import DIRECTORY_SPECIALS, SpecialKind, TokenKind, TypeToken, parse_type_token, parse_type_tokens

__all__ = [
    "ARCHIVE_EXTENSIONS",
    "BINARY_PROBE_BYTES",
    "DIRECTORY_SPECIALS",
    "FILE_TYPE_GROUPS",
    "PredicateSet",
    "SpecialKind",
    "TokenKind",
    "TypeClassifier",
    "TypeToken",
    "is_binary_file",
    "looks_binary",
    "parse_type_token",
    "parse_type_tokens",
]
