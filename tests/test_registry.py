import unittest

from svhier.registry import Registry


class TestRegistry(unittest.TestCase):
    def setUp(self):
        self.registry = Registry("widget")

    def test_register_and_create(self):
        """Classes are instantiated with the keyword arguments given to create()."""

        @self.registry.register("gear")
        class Gear:
            def __init__(self, teeth=8):
                self.teeth = teeth

        self.assertEqual(self.registry.create("gear").teeth, 8)
        self.assertEqual(self.registry.create("gear", teeth=12).teeth, 12)

    def test_decorator_returns_class(self):
        @self.registry.register("gear")
        class Gear:
            pass

        self.assertIs(self.registry.get("gear"), Gear)

    def test_add_registers_object_as_is(self):
        item = object()
        self.assertIs(self.registry.add("thing", item), item)
        self.assertIs(self.registry.get("thing"), item)

    def test_unknown_key_lists_available(self):
        self.registry.add("b", 1)
        self.registry.add("a", 2)
        with self.assertRaises(KeyError) as ctx:
            self.registry.get("zzz")
        message = str(ctx.exception)
        self.assertIn("widget", message)
        self.assertIn("zzz", message)
        self.assertIn("a, b", message)

    def test_create_unknown_key(self):
        with self.assertRaises(KeyError):
            self.registry.create("nonexistent")

    def test_duplicate_key_rejected_for_both_forms(self):
        self.registry.add("dup", 1)
        with self.assertRaises(ValueError) as ctx:
            @self.registry.register("dup")
            class Dup:
                pass
        self.assertIn("already registered", str(ctx.exception))
        with self.assertRaises(ValueError):
            self.registry.add("dup", 2)

    def test_keys_in_registration_order(self):
        for key in ("z", "a", "m"):
            self.registry.add(key, key)
        self.assertEqual(self.registry.keys(), ["z", "a", "m"])
        self.assertEqual(len(self.registry), 3)
        self.assertIn("a", self.registry)
        self.assertNotIn("b", self.registry)


class TestBuiltinRegistries(unittest.TestCase):
    def test_frontends(self):
        from svhier.frontend import frontend_registry
        import svhier  # noqa: F401  registers the built-in front-ends
        self.assertIn("verible", frontend_registry)
        self.assertIn("slang", frontend_registry)

    def test_renderers(self):
        from svhier.renderers import renderer_registry
        for key in ("text", "markdown", "csv", "json"):
            self.assertIn(key, renderer_registry)

    def test_vocabularies(self):
        from svhier.vocabulary import SLANG, VERIBLE, vocabulary_registry
        self.assertIs(vocabulary_registry.get("verible"), VERIBLE)
        self.assertIs(vocabulary_registry.get("slang"), SLANG)


if __name__ == '__main__':
    unittest.main()
