# chatlite/core/exceptions.py
"""
All custom exceptions for ChatLite.
Granular exception types allow precise error handling and logging.
None of them is fatal: each component catches its own at its boundary
and degrades to a safe default.
"""


class ChatLiteError(Exception):
    """Base exception for all ChatLite errors."""


# --- Malformed input ---

class MalformedInputError(ChatLiteError):
    """Input could not be parsed. Always recovered locally."""


class MalformedUrlError(MalformedInputError):
    """URL is not absolute, has no host, or fails to parse."""
    def __init__(self, reason: str = "not an absolute URL"):
        super().__init__(f"malformed url: {reason}")


class StateFileError(MalformedInputError):
    """Persisted JSON record is missing, unreadable or has the wrong shape."""


# --- Navigation ---

class NavigationError(ChatLiteError):
    """Base for navigation-layer errors."""


class SurfaceRegistrationError(NavigationError):
    """Surface registered twice, or used after its enforcer was unregistered."""


# --- Update check ---

class ReleaseLookupError(ChatLiteError):
    """Remote release lookup failed (transport, status or response shape)."""


# --- Config ---

class ConfigError(ChatLiteError):
    """Configuration error."""
