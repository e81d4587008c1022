"""
String conversion pairs for configuration values.

Every supported value type has a parser (``str -> T``) and a converter
(``T -> str``) such that ``parser(converter(v)) == v`` for every valid ``v``.
Parsers raise ``ValueError`` on malformed input; the entry turns that into a
``ConfigParseError`` carrying the key.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable

INT_MIN, INT_MAX = -(2 ** 31), 2 ** 31 - 1
LONG_MIN, LONG_MAX = -(2 ** 63), 2 ** 63 - 1

_INTEGER_PATTERN = re.compile(r"[+-]?\d+")

# ISO-8601 duration restricted to days and time fields, e.g. PT1H, P7D, PT0.1S
_DURATION_PATTERN = re.compile(
    r"([-+]?)P"
    r"(?:([-+]?\d+)D)?"
    r"(?:T(?=[-+]?\d)(?:([-+]?\d+)H)?(?:([-+]?\d+)M)?(?:([-+]?\d+)(?:[.,](\d{0,9}))?S)?)?",
    re.IGNORECASE,
)

_NANOS_PER_SECOND = 10 ** 9
_NANOS_PER_MILLI = 10 ** 6


@dataclass(frozen=True)
class ConversionPair:
    """Bidirectional string conversion for one value type."""
    type_name: str
    parser: Callable[[str], Any]
    converter: Callable[[Any], str]


def _to_number(value: str, type_name: str, lower: int, upper: int) -> int:
    trimmed = value.strip()
    if not _INTEGER_PATTERN.fullmatch(trimmed):
        raise ValueError(f"{value!r} is not a valid {type_name}")
    number = int(trimmed)
    if number < lower or number > upper:
        raise ValueError(f"{value!r} is out of range for {type_name}")
    return number


def to_int(value: str) -> int:
    return _to_number(value, "int", INT_MIN, INT_MAX)


def to_long(value: str) -> int:
    return _to_number(value, "long", LONG_MIN, LONG_MAX)


def to_boolean(value: str) -> bool:
    """Parse ``true``/``false`` (case-insensitive, surrounding blanks ignored)."""
    lower = value.strip().lower()
    if lower == "true":
        return True
    if lower == "false":
        return False
    raise ValueError(f"{value!r} is not a valid boolean")


def boolean_to_string(value: bool) -> str:
    return "true" if value else "false"


def number_to_string(value: int) -> str:
    return str(int(value))


def time_from_string(value: str) -> int:
    """
    Parse a duration into milliseconds.

    Accepts an ISO-8601 duration (``PT1H``, ``P7D``, ``PT0.5S``) or a plain
    number of milliseconds.
    """
    trimmed = value.strip()
    match = _DURATION_PATTERN.fullmatch(trimmed)
    if match and any(match.group(i) is not None for i in range(2, 6)):
        sign, days, hours, minutes, seconds, fraction = match.groups()
        total_seconds = (int(days or 0) * 86400 + int(hours or 0) * 3600
                         + int(minutes or 0) * 60 + int(seconds or 0))
        nanos = int(fraction.ljust(9, "0")) if fraction else 0
        if seconds is not None and seconds.startswith("-"):
            nanos = -nanos
        total_nanos = total_seconds * _NANOS_PER_SECOND + nanos
        if sign == "-":
            total_nanos = -total_nanos
        return total_nanos // _NANOS_PER_MILLI
    try:
        return to_long(trimmed)
    except ValueError:
        raise ValueError(f"{value!r} is not a valid duration") from None


def time_to_string(millis: int) -> str:
    """Render milliseconds as an ISO-8601 duration, e.g. 3600000 -> ``PT1H``."""
    millis = int(millis)
    if millis < 0:
        return "-" + time_to_string(-millis)
    if millis == 0:
        return "PT0S"

    seconds, ms = divmod(millis, 1000)
    hours, seconds = divmod(seconds, 3600)
    minutes, seconds = divmod(seconds, 60)

    text = "PT"
    if hours:
        text += f"{hours}H"
    if minutes:
        text += f"{minutes}M"
    if seconds or ms:
        text += str(seconds)
        if ms:
            text += "." + f"{ms:03d}".rstrip("0")
        text += "S"
    return text


def _identity(value: str) -> str:
    return value


BOOLEAN = ConversionPair("boolean", to_boolean, boolean_to_string)
INT = ConversionPair("int", to_int, number_to_string)
LONG = ConversionPair("long", to_long, number_to_string)
TIME = ConversionPair("duration", time_from_string, time_to_string)
STRING = ConversionPair("string", _identity, _identity)
