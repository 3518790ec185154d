# tests/unit/navigation/test_guard.py
import unittest
from chatlite.navigation.guard import ExternalUrlGuard, is_safe_for_external_open, open_external_if_safe


class TestIsSafeForExternalOpen(unittest.TestCase):

    def test_web_schemes_allowed(self):
        self.assertTrue(is_safe_for_external_open("https://example.com/"))
        self.assertTrue(is_safe_for_external_open("http://example.com/page"))

    def test_script_and_local_schemes_refused(self):
        self.assertFalse(is_safe_for_external_open("javascript:alert(1)"))
        self.assertFalse(is_safe_for_external_open("file:///etc/passwd"))
        self.assertFalse(is_safe_for_external_open("data:text/html,hi"))
        self.assertFalse(is_safe_for_external_open("vscode://file/x"))
        self.assertFalse(is_safe_for_external_open("ftp://example.com/"))

    def test_malformed(self):
        self.assertFalse(is_safe_for_external_open("not a url"))
        self.assertFalse(is_safe_for_external_open(""))

    def test_reserved_tlds_refused(self):
        self.assertFalse(is_safe_for_external_open("https://evil.example/"))
        self.assertFalse(is_safe_for_external_open("https://x.invalid/"))
        self.assertFalse(is_safe_for_external_open("http://host.test/"))

    def test_reserved_label_elsewhere_is_fine(self):
        self.assertTrue(is_safe_for_external_open("https://example.com/"))
        self.assertTrue(is_safe_for_external_open("https://test.org/"))

    def test_custom_schemes(self):
        guard = ExternalUrlGuard(schemes=["https"])
        self.assertFalse(guard.is_safe_for_external_open("http://example.com/"))


class TestOpenExternalIfSafe(unittest.TestCase):

    def setUp(self):
        self.opened = []

    def test_safe_url_opened(self):
        self.assertTrue(open_external_if_safe("https://example.com/", self.opened.append))
        self.assertEqual(self.opened, ["https://example.com/"])

    def test_unsafe_url_not_opened(self):
        self.assertFalse(open_external_if_safe("file:///tmp/x", self.opened.append))
        self.assertEqual(self.opened, [])


if __name__ == "__main__":
    unittest.main()
