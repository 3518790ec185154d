"""
UpdateCheckWorker — QThread wrapper for UpdateChecker.check().
Delivers the result via signal; failures are logged and absorbed.
No dialogs. Never blocks window creation.
"""
import logging

from PyQt6.QtCore import QThread, pyqtSignal

from chatlite.services.update_check import UpdateChecker

_log = logging.getLogger("chatlite.ui.update_worker")


class UpdateCheckWorker(QThread):
    result_ready = pyqtSignal(object)   # UpdateInfo

    def __init__(self, checker: UpdateChecker, current_version: str, parent=None) -> None:
        super().__init__(parent)
        self._checker = checker
        self._current_version = current_version

    def run(self) -> None:
        try:
            info = self._checker.check(self._current_version)
        except Exception as exc:
            _log.warning("update worker error: %s", exc)
            return
        self.result_ready.emit(info)
