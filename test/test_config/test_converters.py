"""
Tests for the string conversion pairs.
"""

import pytest

from kyuubi.config.core import converters
from kyuubi.config.core.converters import (
    BOOLEAN, INT, LONG, STRING, TIME, time_from_string, time_to_string
)


class TestRoundTrip:
    @pytest.mark.parametrize("pair, value", [
        (BOOLEAN, True),
        (BOOLEAN, False),
        (INT, 0),
        (INT, converters.INT_MIN),
        (INT, converters.INT_MAX),
        (LONG, converters.LONG_MAX),
        (LONG, -42),
        (TIME, 0),
        (TIME, 100),
        (TIME, 3600000),
        (TIME, 7 * 24 * 3600 * 1000),
        (TIME, 90061001),
        (TIME, -1500),
        (STRING, ""),
        (STRING, "embedded_zookeeper"),
    ])
    def test_parser_inverts_converter(self, pair, value):
        assert pair.parser(pair.converter(value)) == value


class TestBoolean:
    @pytest.mark.parametrize("raw", ["true", "TRUE", " True "])
    def test_true(self, raw):
        assert BOOLEAN.parser(raw) is True

    @pytest.mark.parametrize("raw", ["false", "False", "FALSE "])
    def test_false(self, raw):
        assert BOOLEAN.parser(raw) is False

    @pytest.mark.parametrize("raw", ["yes", "1", "", "truthy"])
    def test_rejects_other_strings(self, raw):
        with pytest.raises(ValueError):
            BOOLEAN.parser(raw)

    def test_converter(self):
        assert BOOLEAN.converter(True) == "true"
        assert BOOLEAN.converter(False) == "false"


class TestNumbers:
    def test_int_parses_trimmed(self):
        assert INT.parser(" 10009 ") == 10009
        assert INT.parser("+5") == 5
        assert INT.parser("-5") == -5

    @pytest.mark.parametrize("raw", ["abc", "1.5", "", "1e3"])
    def test_int_rejects_malformed(self, raw):
        with pytest.raises(ValueError):
            INT.parser(raw)

    def test_int_rejects_out_of_range(self):
        with pytest.raises(ValueError, match="out of range"):
            INT.parser(str(2 ** 31))

    def test_long_accepts_beyond_int(self):
        assert LONG.parser(str(2 ** 31)) == 2 ** 31

    def test_long_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            LONG.parser(str(2 ** 63))


class TestTime:
    @pytest.mark.parametrize("raw, millis", [
        ("PT1H", 3600000),
        ("pt1h", 3600000),
        ("P1D", 86400000),
        ("P1DT1H", 90000000),
        ("PT20S", 20000),
        ("PT0.1S", 100),
        ("PT1M30S", 90000),
        ("-PT1S", -1000),
        ("60000", 60000),
        (" 15000 ", 15000),
    ])
    def test_parses(self, raw, millis):
        assert time_from_string(raw) == millis

    @pytest.mark.parametrize("raw", ["P", "PT", "P1DT", "pt", "PT-", "P1DTS", "1h", "one hour", ""])
    def test_rejects_malformed(self, raw):
        with pytest.raises(ValueError, match="duration"):
            time_from_string(raw)

    @pytest.mark.parametrize("millis, text", [
        (0, "PT0S"),
        (100, "PT0.1S"),
        (3600000, "PT1H"),
        (10800000, "PT3H"),
        (90000, "PT1M30S"),
        (604800000, "PT168H"),
    ])
    def test_renders_iso_8601(self, millis, text):
        assert time_to_string(millis) == text
