"""Error types raised by tree building and option validation.

Root errors subclass the matching builtin ``OSError`` flavours so callers can
catch either the project type or the standard one.
"""

from __future__ import annotations


class SrcTreeError(Exception):
    """Base class for fatal srctree errors."""


class ConfigError(SrcTreeError, ValueError):
    """Invalid option value detected before traversal starts."""


class RootNotFound(SrcTreeError, FileNotFoundError):
    """The requested root path does not exist."""


class RootNotADirectory(SrcTreeError, NotADirectoryError):
    """The requested root path exists but is not a directory."""


class RootPermissionDenied(SrcTreeError, PermissionError):
    """The requested root directory cannot be listed."""


__all__ = [
    "SrcTreeError",
    "ConfigError",
    "RootNotFound",
    "RootNotADirectory",
    "RootPermissionDenied",
]
