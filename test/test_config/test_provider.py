"""
Tests for configuration providers.
"""

import threading
import unittest

from kyuubi.config import ConfigProvider, MapConfigProvider


class TestMapConfigProvider(unittest.TestCase):
    """Test suite for MapConfigProvider."""

    def test_present_and_absent(self):
        provider = MapConfigProvider({"kyuubi.a": "1"})
        self.assertEqual(provider.get("kyuubi.a"), "1")
        self.assertIsNone(provider.get("kyuubi.b"))

    def test_reads_live_mapping(self):
        settings = {}
        provider = MapConfigProvider(settings, threading.RLock())
        settings["kyuubi.a"] = "1"
        self.assertEqual(provider.get("kyuubi.a"), "1")

    def test_is_a_config_provider(self):
        self.assertIsInstance(MapConfigProvider({}), ConfigProvider)

    def test_abstract_provider_cannot_be_instantiated(self):
        with self.assertRaises(TypeError):
            ConfigProvider()


if __name__ == "__main__":
    unittest.main()
