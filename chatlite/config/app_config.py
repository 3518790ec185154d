"""
AppConfig — process-wide settings resolved once at startup.
Sources: environment variables only. Read-only after load_config().
Data dir default: ~/.chatlite
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from chatlite.core.constants import (
    CANONICAL_URL,
    DISABLED_CHROMIUM_FEATURES,
    UPDATE_CHECK_FILE,
    WINDOW_STATE_FILE,
)
from chatlite.core.exceptions import ConfigError
from chatlite.navigation.policy import is_trusted
from chatlite.utils.paths import default_data_dir, state_file

_log = logging.getLogger("chatlite.config.app_config")

ENV_DATA_DIR = "CHATLITE_DATA_DIR"
ENV_DEV = "CHATLITE_DEV"
ENV_LOG_LEVEL = "CHATLITE_LOG_LEVEL"
ENV_START_URL = "CHATLITE_START_URL"
ENV_CHROMIUM_FLAGS = "QTWEBENGINE_CHROMIUM_FLAGS"

_TRUE_VALUES = frozenset(["1", "true", "yes", "on"])


@dataclass(frozen=True)
class AppConfig:
    data_dir: Path
    dev_mode: bool = False
    log_level: int = logging.INFO
    start_url: str = CANONICAL_URL

    @property
    def window_state_path(self) -> Path:
        return state_file(self.data_dir, WINDOW_STATE_FILE)

    @property
    def update_check_path(self) -> Path:
        return state_file(self.data_dir, UPDATE_CHECK_FILE)


def load_config(environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    """
    Build AppConfig from environment variables.
    Raises ConfigError on an unknown log level name.
    """
    env = os.environ if environ is None else environ

    raw_dir = env.get(ENV_DATA_DIR, "").strip()
    data_dir = Path(raw_dir).expanduser() if raw_dir else default_data_dir()

    dev_mode = env.get(ENV_DEV, "").strip().lower() in _TRUE_VALUES

    level_name = env.get(ENV_LOG_LEVEL, "INFO").strip().upper() or "INFO"
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ConfigError(f"unknown log level: {level_name!r}")

    start_url = env.get(ENV_START_URL, "").strip() or CANONICAL_URL
    if not is_trusted(start_url):
        _log.warning("ignoring untrusted %s; using canonical url", ENV_START_URL)
        start_url = CANONICAL_URL

    return AppConfig(
        data_dir=data_dir,
        dev_mode=dev_mode,
        log_level=level,
        start_url=start_url,
    )


def chromium_flags(existing: str = "") -> str:
    """
    Append the third-party-cookie switches to an existing
    QTWEBENGINE_CHROMIUM_FLAGS value, without duplicating them.
    """
    switch = f"--disable-features={DISABLED_CHROMIUM_FEATURES}"
    parts = existing.split()
    if switch in parts:
        return existing
    return " ".join(parts + [switch])
