"""
Configuration entry exceptions for the Kyuubi system.
"""

from typing import Any

from .base import ConfigurationError


class DuplicateKeyError(ConfigurationError):
    """Raised when two declarations register the same configuration key."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(
            config_key=key,
            reason="duplicate config entry, the key has already been registered"
        )


class ConfigParseError(ConfigurationError):
    """Raised when a raw string cannot be converted to the entry's type."""

    def __init__(self, key: str, raw_value: str, expected_type: str):
        self.key = key
        self.raw_value = raw_value
        self.expected_type = expected_type
        super().__init__(
            config_key=key,
            config_value=raw_value,
            reason=f"value should be of type {expected_type}"
        )


class ConfigValidationError(ConfigurationError):
    """Raised when a parsed value fails one of the entry's validators."""

    def __init__(self, key: str, value: Any, message: str):
        self.key = key
        self.value = value
        self.message = message
        super().__init__(config_key=key, config_value=str(value), reason=message)
