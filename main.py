"""
ChatGPT-Lite entry point.
Resolves config, prepares Chromium flags, opens the first window and kicks
off the background update check. No business logic here.
"""
import logging
import os
import sys

from chatlite.config.app_config import ENV_CHROMIUM_FLAGS, chromium_flags, load_config
from chatlite.core.constants import APP_NAME, APP_VERSION, ORGANIZATION_NAME
from chatlite.core.exceptions import ConfigError

_log = logging.getLogger("chatlite.main")


def main() -> int:
    try:
        config = load_config()
    except ConfigError as exc:
        print(f"{APP_NAME}: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    # Keep the embedded login usable: must be set before QtWebEngine starts.
    os.environ[ENV_CHROMIUM_FLAGS] = chromium_flags(os.environ.get(ENV_CHROMIUM_FLAGS, ""))

    from PyQt6.QtWidgets import QApplication
    from chatlite.ui.controller import WindowController

    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(APP_VERSION)
    app.setOrganizationName(ORGANIZATION_NAME)

    controller = WindowController(config)
    controller.open_window()
    controller.start_update_check()
    _log.info("%s %s started, data dir: %s", APP_NAME, APP_VERSION, config.data_dir)

    result = app.exec()
    controller.shutdown()
    return result


if __name__ == "__main__":
    sys.exit(main())
