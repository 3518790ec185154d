# tests/unit/navigation/test_surface_registry.py
import unittest

from chatlite.core.enums import AttemptKind
from chatlite.core.exceptions import SurfaceRegistrationError
from chatlite.navigation.registry import SurfaceRegistry


class FakeSurface:
    def __init__(self):
        self.loaded = []

    def load_url(self, url):
        self.loaded.append(url)


class TestSurfaceRegistry(unittest.TestCase):

    def setUp(self):
        self.opened = []
        self.registry = SurfaceRegistry(open_external=self.opened.append)

    def test_register_and_lookup(self):
        handle = self.registry.register_enforcer("window-1", FakeSurface())
        self.assertIn("window-1", self.registry)
        self.assertIs(self.registry.lookup("window-1"), handle.enforcer)
        self.assertEqual(handle.surface_id, "window-1")

    def test_duplicate_id_rejected(self):
        self.registry.register_enforcer("window-1", FakeSurface())
        with self.assertRaises(SurfaceRegistrationError):
            self.registry.register_enforcer("window-1", FakeSurface())

    def test_unknown_lookup_raises(self):
        with self.assertRaises(SurfaceRegistrationError):
            self.registry.lookup("nope")

    def test_unregister_detaches_and_is_idempotent(self):
        handle = self.registry.register_enforcer("window-1", FakeSurface())
        handle.unregister()
        handle.unregister()
        self.assertNotIn("window-1", self.registry)
        self.assertFalse(handle.enforcer.active)
        self.assertFalse(handle.enforcer.apply(AttemptKind.IN_PLACE_NAVIGATE, "https://chatgpt.com/"))

    def test_id_reusable_after_unregister(self):
        self.registry.register_enforcer("window-1", FakeSurface()).unregister()
        self.registry.register_enforcer("window-1", FakeSurface())
        self.assertEqual(len(self.registry), 1)

    def test_enforcers_are_independent(self):
        s1, s2 = FakeSurface(), FakeSurface()
        h1 = self.registry.register_enforcer("window-1", s1)
        h2 = self.registry.register_enforcer("window-2", s2)
        h1.enforcer.apply(AttemptKind.OPEN_NEW_TARGET, "https://chatgpt.com/a")
        self.assertEqual(s1.loaded, ["https://chatgpt.com/a"])
        self.assertEqual(s2.loaded, [])
        h1.unregister()
        self.assertTrue(h2.enforcer.active)
        self.assertEqual(self.registry.surface_ids(), ["window-2"])

    def test_shared_opener(self):
        handle = self.registry.register_enforcer("window-1", FakeSurface())
        handle.enforcer.apply(AttemptKind.OPEN_NEW_TARGET, "https://example.com/")
        self.assertEqual(self.opened, ["https://example.com/"])


if __name__ == "__main__":
    unittest.main()
