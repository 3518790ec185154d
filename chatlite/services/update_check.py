"""
UpdateChecker — GitHub Releases based update check.
At most one remote lookup per interval (24h), whatever its outcome.

State machine (keyed purely by elapsed time):
  FRESH  — no cache, or cache older than the interval
           -> one lookup; success or failure, lastCheck advances to now
  CACHED — cache within the interval
           -> no network; compare cached latestVersion with the running one

Known limitation (kept on purpose): a first-ever failed lookup reports
"no update" until the next interval, even if a newer release exists.

No Qt imports. Callers run check() off the UI thread (see ui.update_worker).
"""
from __future__ import annotations

import http.client
import json
import logging
import math
import re
import time
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

from chatlite.core.constants import (
    APP_NAME,
    APP_VERSION,
    MAX_RELEASE_RESPONSE_BYTES,
    RELEASES_ACCEPT_HEADER,
    RELEASES_API_URL,
    RELEASES_PAGE_URL,
    UPDATE_CHECK_INTERVAL_MS,
    UPDATE_CHECK_TIMEOUT_S,
)
from chatlite.core.enums import UpdateCheckPhase
from chatlite.core.exceptions import ReleaseLookupError, StateFileError
from chatlite.utils.paths import read_json, write_json_atomic

_log = logging.getLogger("chatlite.services.update_check")

_VERSION_PREFIX_RE = re.compile(r"^v", re.IGNORECASE)
_LEADING_DIGITS_RE = re.compile(r"\d+")


@dataclass(frozen=True)
class UpdateInfo:
    has_update: bool
    latest_version: str
    release_url: str


@dataclass(frozen=True)
class Release:
    tag_name: str
    html_url: str


@dataclass(frozen=True)
class UpdateCheckState:
    """Persisted as {lastCheck, latestVersion?, releaseUrl?}."""
    last_check_ms: int
    latest_version: Optional[str] = None
    release_url: Optional[str] = None

    def to_record(self) -> dict:
        record: dict = {"lastCheck": self.last_check_ms}
        if self.latest_version:
            record["latestVersion"] = self.latest_version
        if self.release_url:
            record["releaseUrl"] = self.release_url
        return record

    @classmethod
    def from_record(cls, data: Any) -> "UpdateCheckState":
        """Raises StateFileError when lastCheck is missing or not a number."""
        if not isinstance(data, dict):
            raise StateFileError("update state is not a JSON object")
        last = data.get("lastCheck")
        if isinstance(last, bool) or not isinstance(last, (int, float)) or not math.isfinite(last):
            raise StateFileError("update state has no numeric lastCheck")
        latest = data.get("latestVersion")
        url = data.get("releaseUrl")
        return cls(
            last_check_ms=int(last),
            latest_version=latest if isinstance(latest, str) and latest else None,
            release_url=url if isinstance(url, str) and url else None,
        )


# ----------------------------------------------------------------------
# Version comparison
# ----------------------------------------------------------------------

def strip_version_prefix(version: str) -> str:
    """'v0.1.1' -> '0.1.1'. Only one leading v/V is removed."""
    return _VERSION_PREFIX_RE.sub("", version.strip(), count=1)


def _version_parts(version: str) -> list[int]:
    parts = []
    for piece in strip_version_prefix(version).split("."):
        m = _LEADING_DIGITS_RE.match(piece)
        parts.append(int(m.group()) if m else 0)
    return parts


def is_newer(current: str, candidate: str) -> bool:
    """
    True if candidate is strictly newer than current.
    Component-wise integer comparison; missing or non-numeric parts count as 0.
    """
    c = _version_parts(current)
    n = _version_parts(candidate)
    for i in range(max(len(c), len(n))):
        a = c[i] if i < len(c) else 0
        b = n[i] if i < len(n) else 0
        if b != a:
            return b > a
    return False


# ----------------------------------------------------------------------
# Remote lookup
# ----------------------------------------------------------------------

def fetch_latest_release(
    url: str = RELEASES_API_URL,
    timeout: float = UPDATE_CHECK_TIMEOUT_S,
) -> Release:
    """
    GET the latest published release.
    Raises ReleaseLookupError on transport errors, non-2xx status,
    oversized or non-JSON bodies, or a missing tag_name/html_url.
    """
    req = urllib.request.Request(
        url,
        headers={
            "Accept": RELEASES_ACCEPT_HEADER,
            "User-Agent": f"{APP_NAME}/{APP_VERSION}",
        },
        method="GET",
    )
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            status = getattr(resp, "status", 200)
            if not 200 <= status < 300:
                raise ReleaseLookupError(f"release lookup returned HTTP {status}")
            raw = resp.read(MAX_RELEASE_RESPONSE_BYTES + 1)
    except urllib.error.HTTPError as exc:
        raise ReleaseLookupError(f"release lookup returned HTTP {exc.code}") from exc
    except (urllib.error.URLError, http.client.HTTPException, OSError) as exc:
        raise ReleaseLookupError(f"could not reach release endpoint: {exc}") from exc

    if len(raw) > MAX_RELEASE_RESPONSE_BYTES:
        raise ReleaseLookupError("release response too large")

    try:
        body = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ReleaseLookupError(f"release response is not JSON: {exc}") from exc

    return parse_release(body)


def parse_release(body: Any) -> Release:
    """Raises ReleaseLookupError unless body has non-empty tag_name and html_url."""
    if not isinstance(body, dict):
        raise ReleaseLookupError("release response is not a JSON object")
    tag = body.get("tag_name")
    page = body.get("html_url")
    if not isinstance(tag, str) or not strip_version_prefix(tag):
        raise ReleaseLookupError("release response has no tag_name")
    if not isinstance(page, str) or not page.strip():
        raise ReleaseLookupError("release response has no html_url")
    return Release(tag_name=tag.strip(), html_url=page.strip())


# ----------------------------------------------------------------------
# Checker
# ----------------------------------------------------------------------

def _now_ms() -> int:
    return int(time.time() * 1000)


class UpdateChecker:
    """
    One per installation. Owns update-check.json.
    fetcher and clock_ms are injectable for tests.
    """

    def __init__(
        self,
        state_path: Path,
        fetcher: Callable[[], Release] = fetch_latest_release,
        clock_ms: Callable[[], int] = _now_ms,
        interval_ms: int = UPDATE_CHECK_INTERVAL_MS,
        writer: Callable[[Path, Any], None] = write_json_atomic,
    ) -> None:
        self._path = state_path
        self._fetcher = fetcher
        self._clock_ms = clock_ms
        self._interval_ms = interval_ms
        self._writer = writer

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def load_state(self) -> Optional[UpdateCheckState]:
        """None when missing or unreadable."""
        if not self._path.exists():
            return None
        try:
            return UpdateCheckState.from_record(read_json(self._path))
        except (OSError, ValueError, StateFileError) as exc:
            _log.warning("update state unreadable, treating as absent: %s", exc)
            return None

    def phase(self, state: Optional[UpdateCheckState], now_ms: Optional[int] = None) -> UpdateCheckPhase:
        """Phase for an already-loaded state; None means no usable cache."""
        if state is None:
            return UpdateCheckPhase.FRESH
        now_ms = self._clock_ms() if now_ms is None else now_ms
        if now_ms - state.last_check_ms >= self._interval_ms:
            return UpdateCheckPhase.FRESH
        return UpdateCheckPhase.CACHED

    def should_check(self) -> bool:
        """Cheap pre-flight: True when check() would hit the network."""
        return self.phase(self.load_state()) == UpdateCheckPhase.FRESH

    # ------------------------------------------------------------------
    # Check
    # ------------------------------------------------------------------

    def check(self, current_version: str) -> UpdateInfo:
        """
        Never raises for lookup or storage failures; degrades to "no update".
        May block on network I/O in the FRESH phase.
        """
        now_ms = self._clock_ms()
        state = self.load_state()

        if self.phase(state, now_ms) == UpdateCheckPhase.CACHED:
            latest = state.latest_version or current_version
            return UpdateInfo(
                has_update=is_newer(current_version, latest),
                latest_version=latest,
                release_url=state.release_url or RELEASES_PAGE_URL,
            )

        last_check = max(now_ms, state.last_check_ms) if state else now_ms

        try:
            release = self._fetcher()
        except ReleaseLookupError as exc:
            _log.warning("update check failed: %s", exc)
            self._save(UpdateCheckState(
                last_check_ms=last_check,
                latest_version=state.latest_version if state else None,
                release_url=state.release_url if state else None,
            ))
            return UpdateInfo(
                has_update=False,
                latest_version=current_version,
                release_url=(state.release_url if state else None) or RELEASES_PAGE_URL,
            )

        latest = strip_version_prefix(release.tag_name)
        self._save(UpdateCheckState(
            last_check_ms=last_check,
            latest_version=latest,
            release_url=release.html_url,
        ))
        has_update = is_newer(current_version, latest)
        _log.info("update check: current=%s latest=%s update=%s", current_version, latest, has_update)
        return UpdateInfo(has_update=has_update, latest_version=latest, release_url=release.html_url)

    def _save(self, state: UpdateCheckState) -> None:
        try:
            self._writer(self._path, state.to_record())
        except OSError as exc:
            _log.warning("failed to save update state to %s: %s", self._path, exc)
