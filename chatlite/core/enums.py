# chatlite/core/enums.py
"""
Canonical enums for the entire system.
String values are stable: they appear in audit records and tests.
"""
from enum import Enum


class AttemptKind(str, Enum):
    IN_PLACE_NAVIGATE = "IN_PLACE_NAVIGATE"
    OPEN_NEW_TARGET = "OPEN_NEW_TARGET"


class NavigationAction(str, Enum):
    CONTINUE = "CONTINUE"
    REDIRECT = "REDIRECT"
    OPEN_EXTERNALLY = "OPEN_EXTERNALLY"
    BLOCK = "BLOCK"


class ShortcutAction(str, Enum):
    NEW_WINDOW = "new_window"
    NEW_CHAT = "new_chat"
    CLOSE_WINDOW = "close_window"
    ZOOM_IN = "zoom_in"
    ZOOM_OUT = "zoom_out"
    TOGGLE_DEVTOOLS = "toggle_devtools"
    TOGGLE_SIDEBAR = "toggle_sidebar"


class UpdateCheckPhase(str, Enum):
    FRESH = "fresh"
    CACHED = "cached"
