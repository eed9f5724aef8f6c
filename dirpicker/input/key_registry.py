"""Mode-aware key tables for the explorer screens.

Each screen mode (tree, content menu, filename prompt, message, pager) owns
its own table of key tokens. A mode may also register a catch-all action
that receives the raw token, e.g. "any other key closes the message".
Dispatch reports whether the screen changed so callers can mark it dirty.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

KeyAction = Callable[[], bool | None]
FallbackAction = Callable[[str], bool | None]


@dataclass(frozen=True)
class KeyBinding:
    """Action bound to one or more key tokens within one screen mode."""

    mode: str
    keys: tuple[str, ...]
    action: KeyAction


def fold_letter_case(key: str) -> str:
    """Normalize single printable letters so ``S`` and ``s`` share a binding."""
    if len(key) == 1:
        return key.lower()
    return key


class ModeKeymap:
    """Per-mode key tables with an optional catch-all action per mode.

    Bound keys are matched after ``normalize`` (letter-case folding by
    default); catch-all actions see the raw token so text entry keeps case.
    """

    def __init__(self, normalize: Callable[[str], str] = fold_letter_case) -> None:
        self._normalize = normalize
        self._tables: dict[str, dict[str, KeyAction]] = {}
        self._fallbacks: dict[str, FallbackAction] = {}

    def bind(self, *bindings: KeyBinding) -> ModeKeymap:
        """Register bindings; a later binding for the same mode and key wins."""
        for binding in bindings:
            table = self._tables.setdefault(binding.mode, {})
            for key in binding.keys:
                table[self._normalize(key)] = binding.action
        return self

    def fallback(self, mode: str, action: FallbackAction) -> ModeKeymap:
        self._fallbacks[mode] = action
        return self

    def modes(self) -> tuple[str, ...]:
        return tuple(sorted(set(self._tables) | set(self._fallbacks)))

    def lookup(self, mode: str, key: str) -> KeyAction | None:
        return self._tables.get(mode, {}).get(self._normalize(key))

    def dispatch(self, mode: str, key: str) -> bool:
        """Run the action for ``key`` in ``mode``; return whether the screen changed.

        Unknown modes and unbound keys without a catch-all return ``False``.
        """
        action = self.lookup(mode, key)
        if action is not None:
            return bool(action())
        fallback = self._fallbacks.get(mode)
        if fallback is not None:
            return bool(fallback(key))
        return False
