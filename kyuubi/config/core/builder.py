"""
Fluent builders for configuration entries.

    EXAMPLE_PORT = (ConfigBuilder("kyuubi.example.port")
                    .doc("Port of the example service.")
                    .version("1.0.0")
                    .int_conf()
                    .check_value(lambda p: p > 1024, "Invalid Port number")
                    .create_with_default(10009))

The untyped `ConfigBuilder` collects metadata; selecting a type returns a
`TypedConfigBuilder`, whose terminal calls build the immutable entry and hand
it to the `on_create` callback (usually `ConfigRegistry.register`).
"""

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Iterable, List, Optional, Type

from kyuubi.core.exceptions import ConfigParseError, ConfigValidationError
from . import converters
from .converters import ConversionPair
from .entry import ConfigEntry, OptionalConfigEntry
from .validator import Validator, ValuesValidator


@dataclass
class EntrySpec:
    """Everything collected by the builders before an entry is created."""
    key: str
    doc: str = ""
    version: str = ""
    on_create: Optional[Callable[[ConfigEntry], Any]] = None
    transform: Optional[Callable[[str], str]] = None
    validators: List[Validator] = field(default_factory=list)


def _compose(first: Optional[Callable[[str], str]], second: Callable[[str], str]) -> Callable[[str], str]:
    if first is None:
        return second
    return lambda value: second(first(value))


class ConfigBuilder:
    """Collects the key and metadata of an entry."""

    def __init__(self, key: str):
        self.spec = EntrySpec(key)

    @property
    def key(self) -> str:
        return self.spec.key

    def doc(self, text: str) -> "ConfigBuilder":
        self.spec.doc = text
        return self

    def version(self, text: str) -> "ConfigBuilder":
        self.spec.version = text
        return self

    def on_create(self, callback: Callable[[ConfigEntry], Any]) -> "ConfigBuilder":
        self.spec.on_create = callback
        return self

    def bool_conf(self) -> "TypedConfigBuilder":
        return TypedConfigBuilder(self.spec, converters.BOOLEAN)

    def int_conf(self) -> "TypedConfigBuilder":
        return TypedConfigBuilder(self.spec, converters.INT)

    def long_conf(self) -> "TypedConfigBuilder":
        return TypedConfigBuilder(self.spec, converters.LONG)

    def time_conf(self) -> "TypedConfigBuilder":
        """Duration in milliseconds, written as ISO-8601 (``PT1H``) or plain millis."""
        return TypedConfigBuilder(self.spec, converters.TIME)

    def string_conf(self) -> "TypedConfigBuilder":
        return TypedConfigBuilder(self.spec, converters.STRING)


class TypedConfigBuilder:
    """Collects conversion, transformation and validation of an entry."""

    def __init__(self, spec: EntrySpec, pair: ConversionPair):
        self.spec = replace(spec, validators=list(spec.validators))
        self.pair = pair

    def transform(self, fn: Callable[[str], str]) -> "TypedConfigBuilder":
        """Apply `fn` to the raw string before parsing, after any earlier transform."""
        self.spec.transform = _compose(self.spec.transform, fn)
        return self

    def check_value(self, predicate: Callable[[Any], bool], message: str) -> "TypedConfigBuilder":
        self.spec.validators.append(Validator(predicate, message))
        return self

    def check_values(self, valid_values: Iterable[Any]) -> "TypedConfigBuilder":
        """Only accept values contained in `valid_values`."""
        self.spec.validators.append(ValuesValidator(valid_values))
        return self

    def _build(self, entry_class: Type[ConfigEntry], default: Any = None) -> ConfigEntry:
        return entry_class(
            key=self.spec.key,
            type_name=self.pair.type_name,
            parser=self.pair.parser,
            converter=self.pair.converter,
            default=default,
            doc=self.spec.doc,
            version=self.spec.version,
            transform=self.spec.transform,
            validators=tuple(self.spec.validators),
        )

    def _created(self, entry: ConfigEntry) -> ConfigEntry:
        if self.spec.on_create is not None:
            self.spec.on_create(entry)
        return entry

    def create_with_default(self, default: Any) -> ConfigEntry:
        """
        Create an entry with a concrete default.

        The default must read back unchanged through the entry, so a default
        altered by the transform is rejected.

        Raises:
            ConfigParseError, ConfigValidationError: If the default is not a valid value
        """
        entry = self._build(ConfigEntry, default)
        try:
            default_string = None if default is None else entry.default_value_string
        except (ValueError, TypeError) as e:
            raise ConfigParseError(entry.key, repr(default), entry.type_name) from e
        if not isinstance(default_string, str):
            raise ConfigParseError(entry.key, repr(default), entry.type_name)

        if entry.value_of(default_string) != default:
            raise ConfigValidationError(
                entry.key, default,
                f"default value does not read back unchanged from '{default_string}'"
            )
        return self._created(entry)

    def create_with_default_string(self, default: str) -> ConfigEntry:
        """Create an entry whose default is parsed from `default`."""
        parsing_entry = self._build(OptionalConfigEntry)
        return self.create_with_default(parsing_entry.value_of(default))

    def create_optional(self) -> OptionalConfigEntry:
        return self._created(self._build(OptionalConfigEntry))
