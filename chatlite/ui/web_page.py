"""
EnforcedWebPage — QWebEnginePage whose every navigation goes through a
NavigationEnforcer registered in the constructor, before the page can load
anything. Wiring only: routing lives in chatlite.navigation.
"""
from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import QUrl
from PyQt6.QtWebEngineCore import (
    QWebEngineNewWindowRequest,
    QWebEnginePage,
    QWebEngineProfile,
)

from chatlite.core.constants import PLACEHOLDER_URLS, PROFILE_DIR, PROFILE_NAME
from chatlite.core.enums import AttemptKind
from chatlite.navigation.registry import SurfaceRegistry
from chatlite.navigation.urls import host_of

_log = logging.getLogger("chatlite.ui.web_page")


def url_string(url: QUrl) -> str:
    """
    Percent-encoded form of url for the navigation layer. QUrl.toString()
    decodes %20 and friends into literal characters, which the strict
    parser rightly refuses.
    """
    return bytes(url.toEncoded()).decode("ascii")


def create_profile(data_dir: Path, parent=None) -> QWebEngineProfile:
    """Named profile => cookies and storage persist under the data dir."""
    storage = data_dir / PROFILE_DIR
    storage.mkdir(parents=True, exist_ok=True)
    profile = QWebEngineProfile(PROFILE_NAME, parent)
    profile.setPersistentStoragePath(str(storage / "storage"))
    profile.setCachePath(str(storage / "cache"))
    profile.setPersistentCookiesPolicy(
        QWebEngineProfile.PersistentCookiesPolicy.ForcePersistentCookies
    )
    return profile


class EnforcedWebPage(QWebEnginePage):

    def __init__(
        self,
        profile: QWebEngineProfile,
        registry: SurfaceRegistry,
        surface_id: str,
        parent=None,
    ) -> None:
        super().__init__(profile, parent)
        # Must precede any load: an unregistered surface is a policy gap.
        self._handle = registry.register_enforcer(surface_id, self)
        self._enforcer = self._handle.enforcer
        self.newWindowRequested.connect(self._on_new_window_requested)
        self.loadFinished.connect(self._on_load_finished)
        self.featurePermissionRequested.connect(self._on_permission_requested)

    @property
    def surface_id(self) -> str:
        return self._handle.surface_id

    # NavigationSurface
    def load_url(self, url: str) -> None:
        self.setUrl(QUrl(url))

    def release(self) -> None:
        """Surface teardown. Any later navigation fails closed."""
        self._handle.unregister()

    # ------------------------------------------------------------------
    # QWebEnginePage overrides
    # ------------------------------------------------------------------

    def acceptNavigationRequest(self, url, nav_type, is_main_frame):
        raw = url_string(url)
        if not is_main_frame:
            # Subframes cannot replace the top-level document.
            return True
        if nav_type == QWebEnginePage.NavigationType.NavigationTypeTyped and raw in PLACEHOLDER_URLS:
            # App-initiated placeholder; web content cannot produce typed navigations.
            return True
        return self._enforcer.apply(AttemptKind.IN_PLACE_NAVIGATE, raw)

    def createWindow(self, window_type):
        # Returning None hands the request to newWindowRequested, which never opens it.
        return None

    def javaScriptConsoleMessage(self, level, message, line, source_id):
        _log.debug("[%s:console] level=%s %s:%s %s",
                   self.surface_id, level, host_of(source_id), line, message)

    # ------------------------------------------------------------------
    # Signal handlers
    # ------------------------------------------------------------------

    def _on_new_window_requested(self, request: QWebEngineNewWindowRequest) -> None:
        # Never calling request.openIn() denies the new window.
        self._enforcer.apply(AttemptKind.OPEN_NEW_TARGET, url_string(request.requestedUrl()))

    def _on_load_finished(self, ok: bool) -> None:
        current = url_string(self.url())
        if not ok:
            _log.warning("[%s] load failed: host=%r", self.surface_id, host_of(current))
        self._enforcer.on_load_finished(current, ok)

    def _on_permission_requested(self, origin: QUrl, feature) -> None:
        _log.info("[%s] permission denied: %s for host=%r",
                  self.surface_id, feature, origin.host())
        self.setFeaturePermission(
            origin, feature, QWebEnginePage.PermissionPolicy.PermissionDeniedByUser
        )
