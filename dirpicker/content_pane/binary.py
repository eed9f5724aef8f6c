"""Binary-file classification by magic bytes and control-byte density."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

BINARY_SAMPLE_BYTES = 4_096
BINARY_BYTE_RATIO = 0.1

BINARY_SIGNATURES: tuple[tuple[str, bytes], ...] = (
    ("jpeg", b"\xff\xd8\xff"),
    ("png", b"\x89PNG"),
    ("zip", b"PK\x03\x04"),
    ("pdf", b"%PDF"),
    ("gif", b"GIF8"),
    ("riff", b"RIFF"),
    ("gzip", b"\x1f\x8b"),
    ("bmp", b"BM"),
)


def matches_binary_signature(sample: bytes) -> bool:
    return any(sample.startswith(signature) for _name, signature in BINARY_SIGNATURES)


def looks_binary(sample: bytes) -> bool:
    """Classify a byte prefix.

    Known signatures win outright. Otherwise the sample is binary when NUL
    bytes, or bytes 1-8, each exceed 10% of the sample.
    """
    if matches_binary_signature(sample):
        return True
    null_count = 0
    control_count = 0
    for byte in sample:
        if byte == 0:
            null_count += 1
        elif byte < 9:
            control_count += 1
    threshold = len(sample) * BINARY_BYTE_RATIO
    return null_count > threshold or control_count > threshold


def is_binary(path: Path) -> bool:
    """Return whether ``path`` looks binary; unreadable files count as text."""
    try:
        with Path(path).open("rb") as handle:
            sample = handle.read(BINARY_SAMPLE_BYTES)
    except OSError:
        return False
    return looks_binary(sample)


def partition_binary(paths: Iterable[Path]) -> tuple[list[Path], list[Path]]:
    """Split ``paths`` into ``(text_files, binary_files)`` preserving order."""
    text_files: list[Path] = []
    binary_files: list[Path] = []
    for path in paths:
        (binary_files if is_binary(path) else text_files).append(path)
    return text_files, binary_files
