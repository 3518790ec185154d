"""
WindowController — owns every ShellWindow, the shared web profile, the
SurfaceRegistry and the update check. Replaces a process-wide "main window"
variable: windows are looked up by surface id and passed explicitly.
"""
from __future__ import annotations

import itertools
import logging
import sys
from typing import Optional

from PyQt6.QtCore import QEvent, QObject, Qt, QUrl
from PyQt6.QtGui import QDesktopServices, QKeyEvent, QKeySequence
from PyQt6.QtWidgets import QApplication, QWidget

from chatlite.config.app_config import AppConfig
from chatlite.core.constants import APP_VERSION, RELEASES_PAGE_URL
from chatlite.core.enums import ShortcutAction
from chatlite.navigation.guard import open_external_if_safe
from chatlite.navigation.registry import SurfaceRegistry
from chatlite.services.update_check import UpdateChecker, UpdateInfo
from chatlite.services.window_state import WindowStateStore
from chatlite.shortcuts.dispatcher import KeyInput, ShortcutDispatcher
from chatlite.ui.main_window import ShellWindow
from chatlite.ui.update_worker import UpdateCheckWorker
from chatlite.ui.web_page import create_profile

_log = logging.getLogger("chatlite.ui.controller")


def open_in_system_browser(url: str) -> None:
    QDesktopServices.openUrl(QUrl(url))


def key_input_from_event(event: QKeyEvent) -> KeyInput:
    """
    On macOS Qt reports Command as ControlModifier and Control as
    MetaModifier, so primary/secondary line up with the dispatcher.
    """
    mods = event.modifiers()
    return KeyInput(
        key=QKeySequence(event.key()).toString().lower(),
        primary=bool(mods & Qt.KeyboardModifier.ControlModifier),
        secondary=bool(mods & Qt.KeyboardModifier.MetaModifier),
        alt=bool(mods & Qt.KeyboardModifier.AltModifier),
        shift=bool(mods & Qt.KeyboardModifier.ShiftModifier),
    )


class WindowController(QObject):

    def __init__(self, config: AppConfig, parent=None) -> None:
        super().__init__(parent)
        self.config = config
        self.profile = create_profile(config.data_dir, self)
        self.surfaces = SurfaceRegistry(
            open_external=open_in_system_browser,
            canonical_url=config.start_url,
        )
        self._dispatcher = ShortcutDispatcher()
        self._windows: dict[str, ShellWindow] = {}
        self._ids = itertools.count(1)
        self._update_checker = UpdateChecker(config.update_check_path)
        self._update_worker: Optional[UpdateCheckWorker] = None
        self._update_info: Optional[UpdateInfo] = None

        app = QApplication.instance()
        app.installEventFilter(self)
        # macOS apps stay alive with no windows open
        app.setQuitOnLastWindowClosed(sys.platform != "darwin")

    # ------------------------------------------------------------------
    # Window registry
    # ------------------------------------------------------------------

    def open_window(self, source: Optional[ShellWindow] = None) -> ShellWindow:
        """New window; cascades from source if given, else restores saved geometry."""
        store = WindowStateStore(self.config.window_state_path)
        geometry = source.current_geometry().cascaded() if source is not None else store.load()
        surface_id = f"window-{next(self._ids)}"
        window = ShellWindow(self, surface_id, geometry, store)
        self._windows[surface_id] = window
        if self._update_info is not None:
            window.set_update_info(self._update_info)
        window.show()
        _log.info("window opened: %s", surface_id)
        return window

    def window_closed(self, window: ShellWindow) -> None:
        self._windows.pop(window.surface_id, None)
        _log.info("window closed: %s", window.surface_id)

    def _on_application_activated(self) -> bool:
        """macOS keeps the app alive with no windows; activating it opens one."""
        if self._windows:
            return False
        self.open_window()
        return True

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def perform(self, action: ShortcutAction, window: Optional[ShellWindow]) -> None:
        if action == ShortcutAction.NEW_WINDOW:
            self.open_window(source=window)
            return
        if window is None:
            return
        if action == ShortcutAction.CLOSE_WINDOW:
            window.close()
        elif action == ShortcutAction.NEW_CHAT:
            window.new_chat()
        elif action == ShortcutAction.ZOOM_IN:
            window.zoom_in()
        elif action == ShortcutAction.ZOOM_OUT:
            window.zoom_out()
        elif action == ShortcutAction.TOGGLE_SIDEBAR:
            window.toggle_sidebar()
        elif action == ShortcutAction.TOGGLE_DEVTOOLS:
            if self.config.dev_mode:
                window.toggle_devtools()

    def eventFilter(self, obj, event):
        if event.type() == QEvent.Type.ApplicationActivate:
            self._on_application_activated()
            return False
        if event.type() != QEvent.Type.KeyPress or not isinstance(obj, QWidget):
            return False
        window = obj.window()
        if not isinstance(window, ShellWindow):
            return False
        action = self._dispatcher.dispatch(key_input_from_event(event), sys.platform)
        if action is None:
            return False
        self.perform(action, window)
        return True

    # ------------------------------------------------------------------
    # Update check
    # ------------------------------------------------------------------

    def start_update_check(self) -> None:
        if self._update_worker is not None and self._update_worker.isRunning():
            return
        self._update_worker = UpdateCheckWorker(self._update_checker, APP_VERSION, self)
        self._update_worker.result_ready.connect(self._on_update_result)
        self._update_worker.start()

    def _on_update_result(self, info: UpdateInfo) -> None:
        self._update_info = info
        for window in self._windows.values():
            window.set_update_info(info)

    def open_release_page(self) -> None:
        url = self._update_info.release_url if self._update_info else RELEASES_PAGE_URL
        open_external_if_safe(url, open_in_system_browser)

    def shutdown(self) -> None:
        # The lookup is bounded by its own timeout; the thread must not outlive us.
        if self._update_worker is not None:
            self._update_worker.wait()
