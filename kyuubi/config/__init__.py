"""
Configuration management system for the Kyuubi server.

This module provides:
- Core entry, builder, registry and provider infrastructure
- KyuubiConf, the per-instance settings store
- The catalogue of declared Kyuubi parameters
"""

# Core infrastructure
from .core import (
    ConversionPair, Validator, ValuesValidator, ConfigProvider, MapConfigProvider,
    ConfigEntry, OptionalConfigEntry, ConfigBuilder, TypedConfigBuilder, EntrySpec, ConfigRegistry
)

# Settings store and catalogue
from .kyuubi_conf import KyuubiConf, KYUUBI_CONF_ENTRIES, build_conf


def get_config_registry() -> ConfigRegistry:
    """Get the process-wide registry of Kyuubi configuration entries."""
    return KYUUBI_CONF_ENTRIES


__all__ = [
    # Core infrastructure
    'ConversionPair',
    'Validator',
    'ValuesValidator',
    'ConfigProvider',
    'MapConfigProvider',
    'ConfigEntry',
    'OptionalConfigEntry',
    'ConfigBuilder',
    'TypedConfigBuilder',
    'EntrySpec',
    'ConfigRegistry',

    # Settings store and catalogue
    'KyuubiConf',
    'KYUUBI_CONF_ENTRIES',
    'build_conf',

    # Convenience functions
    'get_config_registry'
]
