"""
Tests for WindowController glue: key event translation, action routing,
macOS re-activation and shutdown. Controller methods are exercised on
lightweight stand-ins so no web profile or real window is created.
"""
import os
import unittest
from types import SimpleNamespace

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtCore import QEvent, Qt
from PyQt6.QtGui import QKeyEvent
from PyQt6.QtWidgets import QApplication

from chatlite.core.enums import ShortcutAction
from chatlite.shortcuts.dispatcher import dispatch
from chatlite.ui.controller import WindowController, key_input_from_event

CTRL = Qt.KeyboardModifier.ControlModifier
SHIFT = Qt.KeyboardModifier.ShiftModifier
ALT = Qt.KeyboardModifier.AltModifier
META = Qt.KeyboardModifier.MetaModifier


def _key(key, modifiers):
    return QKeyEvent(QEvent.Type.KeyPress, key.value, modifiers)


class Recorder:
    """Records every method call made on it."""

    def __init__(self):
        self.calls = []

    def __getattr__(self, name):
        def method(*args, **kwargs):
            self.calls.append((name, args, kwargs))
        return method


class TestKeyInputFromEvent(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.app = QApplication.instance() or QApplication([])

    def test_shift_n_is_new_chat_on_mac(self):
        key_input = key_input_from_event(_key(Qt.Key.Key_N, CTRL | SHIFT))
        self.assertEqual(key_input.key, "n")
        self.assertTrue(key_input.primary)
        self.assertTrue(key_input.shift)
        self.assertFalse(key_input.secondary)
        self.assertEqual(dispatch(key_input, "darwin"), ShortcutAction.NEW_CHAT)

    def test_close_window(self):
        key_input = key_input_from_event(_key(Qt.Key.Key_W, CTRL))
        self.assertEqual(dispatch(key_input, "darwin"), ShortcutAction.CLOSE_WINDOW)

    def test_zoom_keys(self):
        minus = key_input_from_event(_key(Qt.Key.Key_Minus, CTRL))
        equal = key_input_from_event(_key(Qt.Key.Key_Equal, CTRL))
        self.assertEqual(dispatch(minus, "darwin"), ShortcutAction.ZOOM_OUT)
        self.assertEqual(dispatch(equal, "darwin"), ShortcutAction.ZOOM_IN)

    def test_devtools_chord_uses_meta_as_secondary(self):
        key_input = key_input_from_event(_key(Qt.Key.Key_L, CTRL | ALT | META))
        self.assertTrue(key_input.secondary)
        self.assertTrue(key_input.alt)
        self.assertEqual(dispatch(key_input, "darwin"), ShortcutAction.TOGGLE_DEVTOOLS)

    def test_no_primary(self):
        key_input = key_input_from_event(_key(Qt.Key.Key_N, SHIFT))
        self.assertFalse(key_input.primary)
        self.assertIsNone(dispatch(key_input, "darwin"))


class TestPerform(unittest.TestCase):

    def setUp(self):
        self.opened = []
        self.controller = SimpleNamespace(
            config=SimpleNamespace(dev_mode=False),
            open_window=lambda source=None: self.opened.append(source),
        )
        self.window = Recorder()

    def perform(self, action, window):
        WindowController.perform(self.controller, action, window)

    def test_window_actions(self):
        for action, method in [
            (ShortcutAction.CLOSE_WINDOW, "close"),
            (ShortcutAction.NEW_CHAT, "new_chat"),
            (ShortcutAction.ZOOM_IN, "zoom_in"),
            (ShortcutAction.ZOOM_OUT, "zoom_out"),
            (ShortcutAction.TOGGLE_SIDEBAR, "toggle_sidebar"),
        ]:
            self.window.calls.clear()
            self.perform(action, self.window)
            self.assertEqual([c[0] for c in self.window.calls], [method])

    def test_new_window_cascades_from_source(self):
        self.perform(ShortcutAction.NEW_WINDOW, self.window)
        self.assertEqual(self.opened, [self.window])

    def test_new_window_without_focus(self):
        self.perform(ShortcutAction.NEW_WINDOW, None)
        self.assertEqual(self.opened, [None])

    def test_window_action_without_window_ignored(self):
        self.perform(ShortcutAction.CLOSE_WINDOW, None)
        self.assertEqual(self.opened, [])

    def test_devtools_only_in_dev_mode(self):
        self.perform(ShortcutAction.TOGGLE_DEVTOOLS, self.window)
        self.assertEqual(self.window.calls, [])
        self.controller.config.dev_mode = True
        self.perform(ShortcutAction.TOGGLE_DEVTOOLS, self.window)
        self.assertEqual([c[0] for c in self.window.calls], ["toggle_devtools"])


class TestApplicationActivate(unittest.TestCase):

    def setUp(self):
        self.opened = []
        self.controller = SimpleNamespace(
            _windows={},
            open_window=lambda source=None: self.opened.append(source),
        )

    def test_reopens_when_no_windows(self):
        self.assertTrue(WindowController._on_application_activated(self.controller))
        self.assertEqual(len(self.opened), 1)

    def test_no_reopen_with_windows_open(self):
        self.controller._windows["window-1"] = object()
        self.assertFalse(WindowController._on_application_activated(self.controller))
        self.assertEqual(self.opened, [])

    def test_event_filter_routes_activation(self):
        self.controller._on_application_activated = (
            lambda: WindowController._on_application_activated(self.controller)
        )
        event = QEvent(QEvent.Type.ApplicationActivate)
        self.assertFalse(WindowController.eventFilter(self.controller, None, event))
        self.assertEqual(len(self.opened), 1)


class TestShutdown(unittest.TestCase):

    def test_waits_for_worker_without_timeout(self):
        worker = Recorder()
        WindowController.shutdown(SimpleNamespace(_update_worker=worker))
        self.assertEqual(worker.calls, [("wait", (), {})])

    def test_no_worker(self):
        WindowController.shutdown(SimpleNamespace(_update_worker=None))


if __name__ == "__main__":
    unittest.main()
