"""
Configuration entries.

An entry is the declarative unit of the configuration system: a key with its
documentation, its string conversion pair, its validators and its default
policy. Entries are immutable; the store only ever holds raw strings and the
entry resolves them to typed values.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Tuple

from kyuubi.core.exceptions import ConfigParseError, ConfigValidationError
from .provider import ConfigProvider
from .validator import Validator, first_failure


@dataclass(frozen=True)
class ConfigEntry:
    """
    A typed configuration parameter with a concrete default value.

    Resolution against a provider:
    1. Raw string for `key` if present, else the converted default
    2. Transform, then parse (ConfigParseError on failure)
    3. Validators in declaration order (ConfigValidationError on first failure)
    """
    key: str
    type_name: str
    parser: Callable[[str], Any]
    converter: Callable[[Any], str]
    default: Any = None
    doc: str = ""
    version: str = ""
    transform: Optional[Callable[[str], str]] = None
    validators: Tuple[Validator, ...] = field(default_factory=tuple)

    has_default = True

    @property
    def default_value_string(self) -> Optional[str]:
        return self.converter(self.default)

    def value_of(self, raw: str) -> Any:
        """Transform, parse and validate a raw string for this entry."""
        value = self.transform(raw) if self.transform is not None else raw
        try:
            parsed = self.parser(value)
        except (ValueError, TypeError) as e:
            raise ConfigParseError(self.key, raw, self.type_name) from e

        message = first_failure(self.validators, self.key, parsed)
        if message is not None:
            raise ConfigValidationError(self.key, parsed, message)
        return parsed

    def read_from(self, provider: ConfigProvider) -> Any:
        raw = provider.get(self.key)
        if raw is None:
            raw = self.default_value_string
        return self.value_of(raw)

    def describe(self) -> dict:
        return {
            'key': self.key,
            'type': self.type_name,
            'default': self.default_value_string,
            'doc': self.doc,
            'version': self.version,
        }

    def __str__(self):
        return (f"ConfigEntry(key={self.key}, defaultValue={self.default_value_string}, "
                f"doc={self.doc}, version={self.version})")


@dataclass(frozen=True)
class OptionalConfigEntry(ConfigEntry):
    """A configuration parameter without default; resolves to None when unset."""

    has_default = False

    @property
    def default_value_string(self) -> Optional[str]:
        return None

    def read_from(self, provider: ConfigProvider) -> Any:
        raw = provider.get(self.key)
        if raw is None:
            return None
        return self.value_of(raw)

    def to_string(self, value: Any) -> Optional[str]:
        """Convert an optional value, None staying None."""
        return None if value is None else self.converter(value)
