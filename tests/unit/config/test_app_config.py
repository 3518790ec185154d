# tests/unit/config/test_app_config.py
import logging
import unittest
from pathlib import Path

from chatlite.config.app_config import (
    ENV_DATA_DIR,
    ENV_DEV,
    ENV_LOG_LEVEL,
    ENV_START_URL,
    chromium_flags,
    load_config,
)
from chatlite.core.constants import CANONICAL_URL
from chatlite.core.exceptions import ConfigError


class TestLoadConfig(unittest.TestCase):

    def test_defaults(self):
        config = load_config({})
        self.assertEqual(config.data_dir, Path.home() / ".chatlite")
        self.assertFalse(config.dev_mode)
        self.assertEqual(config.log_level, logging.INFO)
        self.assertEqual(config.start_url, CANONICAL_URL)

    def test_data_dir_override(self):
        config = load_config({ENV_DATA_DIR: "/tmp/chatlite-test"})
        self.assertEqual(config.data_dir, Path("/tmp/chatlite-test"))
        self.assertEqual(config.window_state_path, Path("/tmp/chatlite-test/window-state.json"))
        self.assertEqual(config.update_check_path, Path("/tmp/chatlite-test/update-check.json"))

    def test_dev_flag(self):
        for value in ("1", "true", "YES", " on "):
            self.assertTrue(load_config({ENV_DEV: value}).dev_mode, value)
        for value in ("", "0", "false", "nope"):
            self.assertFalse(load_config({ENV_DEV: value}).dev_mode, value)

    def test_log_level(self):
        self.assertEqual(load_config({ENV_LOG_LEVEL: "debug"}).log_level, logging.DEBUG)
        self.assertEqual(load_config({ENV_LOG_LEVEL: ""}).log_level, logging.INFO)

    def test_unknown_log_level(self):
        with self.assertRaises(ConfigError):
            load_config({ENV_LOG_LEVEL: "chatty"})

    def test_trusted_start_url(self):
        url = "https://chatgpt.com/?model=auto"
        self.assertEqual(load_config({ENV_START_URL: url}).start_url, url)

    def test_untrusted_start_url_ignored(self):
        with self.assertLogs("chatlite.config.app_config", level="WARNING"):
            config = load_config({ENV_START_URL: "https://evil.example/"})
        self.assertEqual(config.start_url, CANONICAL_URL)

    def test_config_is_frozen(self):
        config = load_config({})
        with self.assertRaises(AttributeError):
            config.dev_mode = True


class TestChromiumFlags(unittest.TestCase):

    def test_adds_switch(self):
        flags = chromium_flags()
        self.assertTrue(flags.startswith("--disable-features="))
        self.assertIn("BlockThirdPartyCookies", flags)

    def test_preserves_existing(self):
        flags = chromium_flags("--foo --bar")
        self.assertEqual(flags.split()[:2], ["--foo", "--bar"])

    def test_idempotent(self):
        once = chromium_flags("--foo")
        self.assertEqual(chromium_flags(once), once)


if __name__ == "__main__":
    unittest.main()
