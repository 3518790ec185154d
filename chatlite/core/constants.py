# chatlite/core/constants.py
"""
Project-wide constants.
Do not import from navigation, services or ui here — this is a leaf module.
"""

APP_NAME = "ChatGPT-Lite"
APP_VERSION = "0.1.0"
ORGANIZATION_NAME = "ChatLite"

# Embedded web application
CANONICAL_URL = "https://chatgpt.com/"
PLACEHOLDER_URLS = frozenset(["", "about:blank"])

# Security — root hosts; subdomains match on the dot boundary only
TRUSTED_SCHEME = "https"
TRUSTED_ROOT_HOSTS = frozenset([
    "chatgpt.com",
    "openai.com",
    "oaistatic.com",
    "oaiusercontent.com",
    "auth0.com",
    "google.com",
    "gstatic.com",
    "apple.com",
])
EXTERNAL_SCHEMES = frozenset(["http", "https"])
RESERVED_TLDS = frozenset(["example", "invalid", "test"])  # RFC 2606
URL_HASH_LENGTH = 64  # SHA256 hex digest

# Release endpoint
GITHUB_REPO = "es-studio/ChatGPT-Lite"
RELEASES_API_URL = f"https://api.github.com/repos/{GITHUB_REPO}/releases/latest"
RELEASES_PAGE_URL = f"https://github.com/{GITHUB_REPO}/releases"
RELEASES_ACCEPT_HEADER = "application/vnd.github.v3+json"
UPDATE_CHECK_INTERVAL_MS = 24 * 60 * 60 * 1000
UPDATE_CHECK_TIMEOUT_S = 10
MAX_RELEASE_RESPONSE_BYTES = 1_048_576  # 1MB hard cap

# Window
DEFAULT_WINDOW_WIDTH = 360
DEFAULT_WINDOW_HEIGHT = 640
MIN_WINDOW_WIDTH = 360
MIN_WINDOW_HEIGHT = 640
NEW_WINDOW_OFFSET = 30
WINDOW_STATE_DEBOUNCE_MS = 250
BACKGROUND_COLOR = "#212121"

# Zoom
ZOOM_STEP = 0.1
MIN_ZOOM = 0.5
MAX_ZOOM = 3.0

# Files (relative to the data dir — never absolute)
DATA_DIR_NAME = ".chatlite"
WINDOW_STATE_FILE = "window-state.json"
UPDATE_CHECK_FILE = "update-check.json"
PROFILE_NAME = "chatlite"
PROFILE_DIR = "profile"

# Chromium
DISABLED_CHROMIUM_FEATURES = "BlockThirdPartyCookies,ThirdPartyStoragePartitioning"
