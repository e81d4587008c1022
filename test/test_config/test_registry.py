"""
Test suite for ConfigRegistry.
Tests registration, uniqueness, introspection and thread safety.
"""

import threading
import unittest

import pytest

from kyuubi.config import ConfigBuilder, ConfigRegistry, KYUUBI_CONF_ENTRIES, get_config_registry
from kyuubi.config import kyuubi_conf
from kyuubi.core.exceptions import ConfigurationError, DuplicateKeyError


def _entry(key, default=1):
    return ConfigBuilder(key).int_conf().create_with_default(default)


class TestConfigRegistry(unittest.TestCase):
    """Test suite for ConfigRegistry."""

    def setUp(self):
        self.registry = ConfigRegistry("test")

    def test_register_and_get(self):
        entry = _entry("test.a")
        returned = self.registry.register(entry)

        self.assertIs(returned, entry)
        self.assertIs(self.registry.get("test.a"), entry)
        self.assertIn("test.a", self.registry)
        self.assertEqual(len(self.registry), 1)

    def test_get_unknown_key(self):
        self.assertIsNone(self.registry.get("test.unknown"))

    def test_duplicate_key_is_rejected(self):
        first = _entry("test.a", 1)
        self.registry.register(first)

        with self.assertRaises(DuplicateKeyError) as context:
            self.registry.register(_entry("test.a", 2))

        self.assertIsInstance(context.exception, ConfigurationError)
        self.assertIn("test.a", str(context.exception))
        # the original entry is kept
        self.assertIs(self.registry.get("test.a"), first)

    def test_entries_and_keys_sorted(self):
        for key in ("test.c", "test.a", "test.b"):
            self.registry.register(_entry(key))

        self.assertEqual(self.registry.keys(), ["test.a", "test.b", "test.c"])
        self.assertEqual([e.key for e in self.registry.entries()], ["test.a", "test.b", "test.c"])
        self.assertEqual([e.key for e in self.registry], ["test.a", "test.b", "test.c"])

    def test_describe(self):
        self.registry.register(
            ConfigBuilder("test.timeout").doc("A timeout").version("1.0.0")
            .time_conf().create_with_default(20000)
        )
        self.assertEqual(self.registry.describe(), [{
            'key': "test.timeout",
            'type': "duration",
            'default': "PT20S",
            'doc': "A timeout",
            'version': "1.0.0",
        }])

    def test_concurrent_registration_of_same_key(self):
        """Exactly one of many racing registrations of one key succeeds."""
        outcomes = []
        barrier = threading.Barrier(16)

        def worker():
            entry = _entry("test.race")
            barrier.wait()
            try:
                self.registry.register(entry)
                outcomes.append("ok")
            except DuplicateKeyError:
                outcomes.append("duplicate")

        threads = [threading.Thread(target=worker) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(outcomes.count("ok"), 1)
        self.assertEqual(outcomes.count("duplicate"), 15)


class TestKyuubiCatalogue:
    def test_process_registry(self):
        assert get_config_registry() is KYUUBI_CONF_ENTRIES

    def test_catalogue_keys_are_prefixed(self):
        assert len(KYUUBI_CONF_ENTRIES) >= 31
        assert all(key.startswith("kyuubi.") for key in KYUUBI_CONF_ENTRIES.keys())

    def test_declared_entries_are_registered(self):
        assert KYUUBI_CONF_ENTRIES.get("kyuubi.frontend.bind.port") is kyuubi_conf.FRONTEND_BIND_PORT
        assert KYUUBI_CONF_ENTRIES.get("kyuubi.kinit.principal") is kyuubi_conf.SERVER_PRINCIPAL

    def test_redeclaring_catalogue_key_fails(self):
        with pytest.raises(DuplicateKeyError):
            kyuubi_conf.build_conf("frontend.bind.port").int_conf().create_with_default(10009)

    def test_build_conf_with_own_registry(self):
        registry = ConfigRegistry("other")
        entry = kyuubi_conf.build_conf("frontend.bind.port", registry).int_conf().create_with_default(1)
        assert registry.get("kyuubi.frontend.bind.port") is entry
        assert KYUUBI_CONF_ENTRIES.get("kyuubi.frontend.bind.port") is not entry


if __name__ == "__main__":
    unittest.main()
