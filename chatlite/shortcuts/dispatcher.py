"""
ShortcutDispatcher — maps a raw key descriptor to an application action.
Only active on macOS, where Command is the primary modifier; elsewhere the
menu's native accelerators handle the same actions.
Returns a descriptor only. Never touches windows or geometry.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from chatlite.core.enums import ShortcutAction

COMMAND_PLATFORM = "darwin"

_ZOOM_OUT_KEYS = frozenset(["-", "_"])
_ZOOM_IN_KEYS = frozenset(["=", "+"])


@dataclass(frozen=True)
class KeyInput:
    """
    Raw key press.
    primary   — Command on macOS
    secondary — Control on macOS
    """
    key: str
    primary: bool = False
    secondary: bool = False
    alt: bool = False
    shift: bool = False


class ShortcutDispatcher:
    """Stateless. One shared instance serves every window."""

    def __init__(self, enabled_platform: str = COMMAND_PLATFORM) -> None:
        self._enabled_platform = enabled_platform

    def is_active(self, platform: str) -> bool:
        return platform == self._enabled_platform

    def dispatch(self, key_input: KeyInput, platform: str) -> Optional[ShortcutAction]:
        """First match wins; order matters."""
        if not self.is_active(platform) or not key_input.primary:
            return None

        key = key_input.key.lower()
        plain = not key_input.secondary and not key_input.alt

        if key_input.alt and key_input.secondary and key == "l":
            return ShortcutAction.TOGGLE_DEVTOOLS

        if plain:
            if key in _ZOOM_OUT_KEYS:
                return ShortcutAction.ZOOM_OUT
            if key in _ZOOM_IN_KEYS:
                return ShortcutAction.ZOOM_IN

        if not plain:
            return None

        if key == "w":
            return ShortcutAction.CLOSE_WINDOW
        if key == "n" and key_input.shift:
            return ShortcutAction.NEW_CHAT
        if key == "n":
            return ShortcutAction.NEW_WINDOW
        return None


_DEFAULT = ShortcutDispatcher()


def dispatch(key_input: KeyInput, platform: str) -> Optional[ShortcutAction]:
    return _DEFAULT.dispatch(key_input, platform)
