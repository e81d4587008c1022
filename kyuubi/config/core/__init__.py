"""
Core configuration management components.

This module provides the foundational components for configuration management:
- ConversionPair: String conversion of typed values
- Validator: Predicates attached to configuration entries
- ConfigEntry: Declared, typed configuration parameters
- ConfigBuilder: Fluent declaration of configuration entries
- ConfigRegistry: Central catalogue of declared entries
- ConfigProvider: Read-only lookup used when resolving entries
"""

from .converters import ConversionPair
from .validator import Validator, ValuesValidator
from .provider import ConfigProvider, MapConfigProvider
from .entry import ConfigEntry, OptionalConfigEntry
from .builder import ConfigBuilder, TypedConfigBuilder, EntrySpec
from .registry import ConfigRegistry

__all__ = [
    # Conversion
    'ConversionPair',

    # Validators
    'Validator',
    'ValuesValidator',

    # Providers
    'ConfigProvider',
    'MapConfigProvider',

    # Entries
    'ConfigEntry',
    'OptionalConfigEntry',

    # Builders
    'ConfigBuilder',
    'TypedConfigBuilder',
    'EntrySpec',

    # Registry
    'ConfigRegistry'
]
