"""Error taxonomy for scanning, reading, writing, and root resolution.

Scan and read failures are recovered where they happen and surfaced to the
user; only root resolution is fatal (raised before any tree exists).
"""

from __future__ import annotations

from pathlib import Path


class DirpickerError(Exception):
    """Base class for all dirpicker failures tied to one filesystem path."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class ScanError(DirpickerError):
    """Directory entries could not be listed or classified."""


class ReadError(DirpickerError):
    """File content could not be read for viewing or export."""


class WriteError(DirpickerError):
    """An export file could not be persisted."""


class RootResolutionError(DirpickerError):
    """The requested root does not exist or is not a directory."""


def describe_os_error(exc: BaseException) -> str:
    """Return a short human-readable reason for an ``OSError``."""
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    return str(exc) or exc.__class__.__name__


__all__ = [
    "DirpickerError",
    "ScanError",
    "ReadError",
    "WriteError",
    "RootResolutionError",
    "describe_os_error",
]
