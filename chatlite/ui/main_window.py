"""
ShellWindow — one native window hosting one enforced web surface.
Layout, menu and geometry wiring only. Routing lives in chatlite.navigation,
shortcut mapping in chatlite.shortcuts, persistence in chatlite.services.
"""
from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Optional

from PyQt6.QtCore import QPoint, Qt, QTimer
from PyQt6.QtGui import QAction, QColor, QGuiApplication
from PyQt6.QtWebEngineWidgets import QWebEngineView
from PyQt6.QtWidgets import QMainWindow

from chatlite.core.constants import (
    APP_NAME,
    BACKGROUND_COLOR,
    MAX_ZOOM,
    MIN_WINDOW_HEIGHT,
    MIN_WINDOW_WIDTH,
    MIN_ZOOM,
    ZOOM_STEP,
)
from chatlite.core.enums import ShortcutAction
from chatlite.services.update_check import UpdateInfo
from chatlite.services.window_state import WindowGeometry, WindowStateStore
from chatlite.ui.web_page import EnforcedWebPage

if TYPE_CHECKING:
    from chatlite.ui.controller import WindowController

_log = logging.getLogger("chatlite.ui.main_window")

_DISPATCH_JS = "window.dispatchEvent(new CustomEvent({name!r}));"

# (label, action, shortcut used only where native accelerators apply)
_FILE_ACTIONS = [
    ("New Window", ShortcutAction.NEW_WINDOW, "Ctrl+N"),
    ("New Chat", ShortcutAction.NEW_CHAT, "Ctrl+Shift+N"),
]
_VIEW_ACTIONS = [
    ("Zoom In", ShortcutAction.ZOOM_IN, "Ctrl+="),
    ("Zoom Out", ShortcutAction.ZOOM_OUT, "Ctrl+-"),
    ("Toggle Sidebar", ShortcutAction.TOGGLE_SIDEBAR, ""),
]


class ShellWindow(QMainWindow):

    def __init__(
        self,
        controller: "WindowController",
        surface_id: str,
        geometry: WindowGeometry,
        store: WindowStateStore,
    ) -> None:
        super().__init__()
        self._controller = controller
        self._surface_id = surface_id
        self._store = store
        self._devtools: Optional[QWebEngineView] = None
        self._closing = False

        self.setWindowTitle(APP_NAME)
        self.setMinimumSize(MIN_WINDOW_WIDTH, MIN_WINDOW_HEIGHT)
        self.setAttribute(Qt.WidgetAttribute.WA_DeleteOnClose)
        self._apply_geometry(geometry)

        self._view = QWebEngineView(self)
        # Page registers its enforcer in __init__, before setPage/any load.
        self._page = EnforcedWebPage(controller.profile, controller.surfaces, surface_id, self._view)
        self._page.setBackgroundColor(QColor(BACKGROUND_COLOR))
        self._view.setPage(self._page)
        self.setCentralWidget(self._view)

        # Save debounce; the store decides when the quiet period is over
        self._save_timer = QTimer(self)
        self._save_timer.setSingleShot(True)
        self._save_timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._save_timer.timeout.connect(self._on_save_timer)

        self._build_menu_bar()
        # Placeholder first; the enforcer bootstraps it to the start URL.
        self._page.load_url("about:blank")

    @property
    def surface_id(self) -> str:
        return self._surface_id

    @property
    def page(self) -> EnforcedWebPage:
        return self._page

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def current_geometry(self) -> WindowGeometry:
        rect = self.normalGeometry() if self.isMaximized() else self.geometry()
        return WindowGeometry(
            width=max(rect.width(), 1),
            height=max(rect.height(), 1),
            x=rect.x(),
            y=rect.y(),
        )

    def _apply_geometry(self, geometry: WindowGeometry) -> None:
        self.resize(geometry.width, geometry.height)
        if geometry.x is None or geometry.y is None:
            return
        if QGuiApplication.screenAt(QPoint(geometry.x, geometry.y)) is None:
            _log.info("saved window position is off-screen; letting the platform place it")
            return
        self.move(geometry.x, geometry.y)

    def _persist_geometry(self) -> None:
        if self._closing:
            return
        self._store.schedule_save(self.current_geometry())
        self._save_timer.start(self._store.remaining_ms() or 0)

    def _on_save_timer(self) -> None:
        if self._store.poll():
            return
        remaining = self._store.remaining_ms()
        if remaining is not None:
            self._save_timer.start(remaining)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._persist_geometry()

    def moveEvent(self, event):
        super().moveEvent(event)
        self._persist_geometry()

    def closeEvent(self, event):
        self._closing = True
        self._save_timer.stop()
        self._store.flush(self.current_geometry())
        if self._devtools is not None:
            self._devtools.close()
        self._page.release()
        self._controller.window_closed(self)
        super().closeEvent(event)

    # ------------------------------------------------------------------
    # Actions (invoked by WindowController)
    # ------------------------------------------------------------------

    def new_chat(self) -> None:
        self._page.load_url(self._controller.config.start_url)

    def reload(self) -> None:
        self._view.reload()

    def zoom_in(self) -> None:
        self._set_zoom(self._view.zoomFactor() + ZOOM_STEP)

    def zoom_out(self) -> None:
        self._set_zoom(self._view.zoomFactor() - ZOOM_STEP)

    def _set_zoom(self, factor: float) -> None:
        self._view.setZoomFactor(round(min(MAX_ZOOM, max(MIN_ZOOM, factor)), 2))

    def toggle_sidebar(self) -> None:
        self._page.runJavaScript(_DISPATCH_JS.format(name="app:toggle-sidebar"))

    def toggle_devtools(self) -> None:
        if self._devtools is not None and self._devtools.isVisible():
            self._devtools.close()
            return
        if self._devtools is None:
            self._devtools = QWebEngineView()
            self._devtools.setWindowTitle(f"{APP_NAME} — Developer Tools")
            self._page.setDevToolsPage(self._devtools.page())
        self._devtools.show()

    # ------------------------------------------------------------------
    # Menu
    # ------------------------------------------------------------------

    def _build_menu_bar(self) -> None:
        native_shortcuts = sys.platform != "darwin"

        file_menu = self.menuBar().addMenu("File")
        for label, action, shortcut in _FILE_ACTIONS:
            file_menu.addAction(self._make_action(label, action, shortcut if native_shortcuts else ""))
        reload_action = QAction("Reload", self)
        if native_shortcuts:
            reload_action.setShortcut("Ctrl+R")
        reload_action.triggered.connect(self.reload)
        file_menu.addAction(reload_action)
        file_menu.addSeparator()
        file_menu.addAction(self._make_action(
            "Close Window", ShortcutAction.CLOSE_WINDOW, "Ctrl+W" if native_shortcuts else ""))

        view_menu = self.menuBar().addMenu("View")
        for label, action, shortcut in _VIEW_ACTIONS:
            view_menu.addAction(self._make_action(label, action, shortcut if native_shortcuts else ""))
        if self._controller.config.dev_mode:
            view_menu.addSeparator()
            view_menu.addAction(self._make_action(
                "Toggle Developer Tools", ShortcutAction.TOGGLE_DEVTOOLS,
                "Ctrl+Alt+L" if native_shortcuts else ""))

        help_menu = self.menuBar().addMenu("Help")
        check_action = QAction("Check for Updates…", self)
        check_action.triggered.connect(self._controller.start_update_check)
        help_menu.addAction(check_action)
        self._update_action = QAction("", self)
        self._update_action.setVisible(False)
        self._update_action.triggered.connect(self._controller.open_release_page)
        help_menu.addAction(self._update_action)

    def _make_action(self, label: str, action: ShortcutAction, shortcut: str) -> QAction:
        qaction = QAction(label, self)
        if shortcut:
            qaction.setShortcut(shortcut)
        qaction.triggered.connect(lambda checked, a=action: self._controller.perform(a, self))
        return qaction

    def set_update_info(self, info: UpdateInfo) -> None:
        self._update_action.setVisible(info.has_update)
        if info.has_update:
            self._update_action.setText(f"Update Available — v{info.latest_version}")
