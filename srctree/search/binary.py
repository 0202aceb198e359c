"""Byte-sample heuristic separating text files from binary ones."""

from __future__ import annotations

from pathlib import Path

BINARY_PROBE_BYTES = 8_000
BINARY_NON_TEXT_RATIO = 0.30

_TEXT_BYTES = frozenset({7, 8, 9, 10, 12, 13, 27} | set(range(32, 127)) | set(range(128, 256)))


def looks_binary(sample: bytes) -> bool:
    """Return whether a byte sample looks like non-text content.

    A NUL byte is decisive; otherwise more than 30% control bytes outside
    common whitespace marks the sample binary. Bytes >= 0x80 count as text so
    UTF-8 and latin-1 sources are not misclassified.
    """
    if not sample:
        return False
    if b"\x00" in sample:
        return True
    non_text = sum(1 for byte in sample if byte not in _TEXT_BYTES)
    return non_text / len(sample) > BINARY_NON_TEXT_RATIO


def is_binary_file(path: Path, sample_size: int = BINARY_PROBE_BYTES) -> bool:
    """Probe the first ``sample_size`` bytes of ``path``; raises ``OSError``."""
    with path.open("rb") as handle:
        sample = handle.read(sample_size)
    return looks_binary(sample)


__all__ = ["BINARY_PROBE_BYTES", "BINARY_NON_TEXT_RATIO", "looks_binary", "is_binary_file"]
