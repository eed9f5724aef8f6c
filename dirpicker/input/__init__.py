"""Input-layer public API: raw key decoding and per-mode key dispatch."""

from .key_registry import KeyBinding, ModeKeymap, fold_letter_case
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyBinding",
    "ModeKeymap",
    "fold_letter_case",
]
