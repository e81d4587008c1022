"""
Process environment and properties-file helpers.
"""

import os
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from kyuubi.core.exceptions import ConfigurationError

KYUUBI_CONF_DIR = "KYUUBI_CONF_DIR"
KYUUBI_HOME = "KYUUBI_HOME"
KYUUBI_CONF_FILE_NAME = "kyuubi-defaults.conf"


def get_system_properties(env: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Return the ambient properties of the process (a copy of the environment)."""
    return dict(os.environ if env is None else env)


def get_default_properties_file(env: Optional[Mapping[str, str]] = None) -> Optional[Path]:
    """
    Locate the defaults file.

    `$KYUUBI_CONF_DIR/kyuubi-defaults.conf` wins over
    `$KYUUBI_HOME/conf/kyuubi-defaults.conf`. Returns None when neither
    variable is set.
    """
    env = os.environ if env is None else env
    conf_dir = env.get(KYUUBI_CONF_DIR)
    if conf_dir:
        return Path(conf_dir) / KYUUBI_CONF_FILE_NAME
    home = env.get(KYUUBI_HOME)
    if home:
        return Path(home) / "conf" / KYUUBI_CONF_FILE_NAME
    return None


_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_ESCAPE_PATTERN = re.compile(r"\\(u[0-9a-fA-F]{4}|u|.|$)", re.DOTALL)
_BLANKS = " \t\f"


def _decode_escape(match) -> str:
    escaped = match.group(1)
    if escaped.startswith("u"):
        if len(escaped) != 5:
            raise ValueError(f"malformed \\uxxxx encoding in {match.string!r}")
        return chr(int(escaped[1:], 16))
    return _ESCAPES.get(escaped, escaped)


def _unescape(text: str) -> str:
    """Decode `\\t`, `\\n`, `\\r`, `\\f` and `\\uXXXX`; any other escaped char stands for itself."""
    return _ESCAPE_PATTERN.sub(_decode_escape, text)


def _ends_with_escape(text: str) -> bool:
    return (len(text) - len(text.rstrip("\\"))) % 2 == 1


def _strip_value(value: str) -> str:
    stripped = value.strip(_BLANKS)
    # an escaped trailing blank belongs to the value
    if len(stripped) < len(value.lstrip(_BLANKS)) and _ends_with_escape(stripped):
        stripped = value.lstrip(_BLANKS)[:len(stripped) + 1]
    return stripped


def _split_property(line: str):
    # key and value are separated by the first unescaped '=', ':' or blank
    index = 0
    while index < len(line):
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char in "=:" or char in _BLANKS:
            key = line[:index]
            rest = line[index:].lstrip(_BLANKS)
            if rest[:1] in ("=", ":"):
                rest = rest[1:]
            return key, rest
        index += 1
    return line, ""


def parse_properties(text: str) -> Dict[str, str]:
    """
    Parse Java-properties style text.

    Supports `key=value`, `key: value` and `key value` lines, `#` and `!`
    comments and trailing-backslash line continuation. Escapes are decoded in
    keys and values as `java.util.Properties` does, and values are trimmed.

    Raises:
        ValueError: On a malformed `\\uXXXX` escape
    """
    properties: Dict[str, str] = {}
    pending = ""
    for raw_line in text.splitlines():
        line = raw_line.lstrip(_BLANKS)
        if not pending and (not line or line[0] in "#!"):
            continue
        if _ends_with_escape(line):
            pending += line[:-1]
            continue
        _add_property(properties, pending + line)
        pending = ""
    if pending:
        _add_property(properties, pending)
    return properties


def _add_property(properties: Dict[str, str], line: str):
    key, value = _split_property(line)
    properties[_unescape(key)] = _unescape(_strip_value(value))


def _flatten(data: Mapping[str, Any], prefix: str = "") -> Dict[str, str]:
    flat: Dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(_flatten(value, full_key))
        elif isinstance(value, bool):
            flat[full_key] = "true" if value else "false"
        elif value is not None:
            flat[full_key] = str(value)
    return flat


def get_properties_from_file(path: Optional[Path]) -> Dict[str, str]:
    """
    Load key/value pairs from a properties file.

    YAML files (`.yaml`, `.yml`) are flattened to dotted keys. A missing file
    yields an empty mapping.

    Raises:
        ConfigurationError: If the file cannot be read or parsed
    """
    if path is None:
        return {}
    path = Path(path)
    if not path.is_file():
        return {}

    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(text) or {}
            if not isinstance(data, Mapping):
                raise ConfigurationError(config_key=str(path), reason="YAML defaults must be a mapping")
            return _flatten(data)
        return parse_properties(text)
    except (OSError, UnicodeDecodeError, ValueError, yaml.YAMLError) as e:
        raise ConfigurationError(config_key=str(path), reason=f"failed to load properties: {e}") from e
