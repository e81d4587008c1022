"""
Shared pytest configuration and fixtures for the configuration tests.
"""

import pytest

from kyuubi.config import ConfigBuilder, ConfigRegistry, KyuubiConf


def pytest_configure(config):
    config.addinivalue_line("markers", "concurrency: tests exercising multiple threads")


@pytest.fixture
def registry():
    """A fresh registry, independent of the process-wide catalogue."""
    return ConfigRegistry("test")


@pytest.fixture
def build(registry):
    """Build entries registered into the test registry."""
    def _build(key: str) -> ConfigBuilder:
        return ConfigBuilder("test." + key).on_create(registry.register)
    return _build


@pytest.fixture
def conf():
    """A configuration that ignores the process environment."""
    return KyuubiConf(load_sys_default=False)


@pytest.fixture
def properties_file(tmp_path):
    """Write a kyuubi-defaults.conf file and return its path."""
    def _write(content: str, name: str = "kyuubi-defaults.conf"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write
