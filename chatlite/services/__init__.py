# chatlite/services — persisted session state
# Window geometry and the update-check cache. No Qt imports: the ui layer
# owns timers and threads and drives these through plain method calls.
from chatlite.services.update_check import UpdateChecker, UpdateInfo, is_newer
from chatlite.services.window_state import FALLBACK_GEOMETRY, WindowGeometry, WindowStateStore

__all__ = [
    "UpdateChecker",
    "UpdateInfo",
    "is_newer",
    "WindowGeometry",
    "WindowStateStore",
    "FALLBACK_GEOMETRY",
]
