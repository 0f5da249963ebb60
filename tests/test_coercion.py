"""
Unit tests for value coercion.
"""

from datetime import date, datetime, time, timedelta, timezone

import pytest

from calckit.fields.coercion import (
    INVALID_DATE,
    INVALID_TIME,
    MISSING,
    Sentinel,
    coerce,
    is_sentinel,
    parse_number_list,
    to_date,
    to_flag,
    to_number,
    to_time,
)
from calckit.fields.schemas import FieldKind


class TestSentinels:
    def test_sentinels_are_falsy(self):
        assert not MISSING
        assert not INVALID_DATE
        assert not INVALID_TIME

    def test_repr_names_the_sentinel(self):
        assert repr(MISSING) == "<MISSING>"

    def test_is_sentinel(self):
        assert is_sentinel(Sentinel.INVALID_DATE)
        assert not is_sentinel(0.0)
        assert not is_sentinel("")


class TestToNumber:
    @pytest.mark.parametrize("raw,expected", [
        ("1.75", 1.75),
        ("  42 ", 42.0),
        (3, 3.0),
        (2.5, 2.5),
        (True, 1.0),
        (False, 0.0),
        ("-1e3", -1000.0),
    ])
    def test_parses(self, raw, expected):
        assert to_number(raw) == expected

    @pytest.mark.parametrize("raw", ["", "   ", "abc", "1,5", None, "nan", "inf", "-inf", [1]])
    def test_unusable_values_are_missing(self, raw):
        assert to_number(raw) is MISSING

    def test_integer_too_large_for_float_is_missing(self):
        assert to_number(10 ** 400) is MISSING

    def test_sentinel_input_stays_missing(self):
        assert to_number(INVALID_DATE) is MISSING


class TestToFlag:
    @pytest.mark.parametrize("raw", [True, "true", "TRUE", "1", "yes", "on", "checked", 1, 2.5, -1])
    def test_truthy(self, raw):
        assert to_flag(raw) is True

    @pytest.mark.parametrize("raw", [False, "false", "0", "no", "off", "", 0, 0.0, None, "maybe"])
    def test_falsy(self, raw):
        assert to_flag(raw) is False


class TestToDate:
    def test_iso_calendar_date_is_not_shifted(self):
        assert to_date("2024-03-10") == date(2024, 3, 10)

    def test_first_of_year_stays_on_the_same_day(self):
        assert to_date("2024-01-01") == date(2024, 1, 1)

    def test_aware_datetime_uses_local_calendar(self):
        moment = datetime(2024, 3, 10, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
        assert to_date(moment) == moment.astimezone().date()

    def test_iso_datetime_string_with_zulu(self):
        moment = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)
        assert to_date("2024-03-10T12:00:00Z") == moment.astimezone().date()

    def test_date_passes_through(self):
        assert to_date(date(2020, 2, 29)) == date(2020, 2, 29)

    @pytest.mark.parametrize("raw", ["", "   ", "2024-02-30", "not a date", None, 20240101])
    def test_invalid(self, raw):
        assert to_date(raw) is INVALID_DATE


class TestToTime:
    def test_parses_hours_and_minutes(self):
        assert to_time("08:30") == time(8, 30)

    def test_parses_seconds(self):
        assert to_time("17:45:10") == time(17, 45, 10)

    @pytest.mark.parametrize("raw", ["08:00+01:00", time(8, 0, tzinfo=timezone(timedelta(hours=-5)))])
    def test_offset_is_dropped(self, raw):
        value = to_time(raw)
        assert value == time(8, 0)
        assert value.tzinfo is None

    @pytest.mark.parametrize("raw", ["", "25:00", "noon", None, 830])
    def test_invalid(self, raw):
        assert to_time(raw) is INVALID_TIME


class TestCoerce:
    def test_number(self):
        assert coerce("70", FieldKind.NUMBER) == 70.0

    def test_text_passes_through(self):
        assert coerce("12, 18, 24", FieldKind.TEXT) == "12, 18, 24"

    def test_text_none_becomes_empty(self):
        assert coerce(None, FieldKind.TEXT) == ""

    def test_select_keeps_option_value(self):
        assert coerce("imperial", FieldKind.SELECT) == "imperial"

    def test_checkbox(self):
        assert coerce("on", FieldKind.CHECKBOX) is True

    def test_date(self):
        assert coerce("2024-01-01", FieldKind.DATE) == date(2024, 1, 1)

    def test_time(self):
        assert coerce("bad", FieldKind.TIME) is INVALID_TIME


class TestParseNumberList:
    def test_mixed_separators(self):
        assert parse_number_list("12, 18; 24\t7  3") == [12.0, 18.0, 24.0, 7.0, 3.0]

    def test_discards_unparsable_tokens(self):
        assert parse_number_list("4, x, 6,, 8, nan") == [4.0, 6.0, 8.0]

    def test_blank(self):
        assert parse_number_list("") == []
        assert parse_number_list(None) == []

    def test_single_number(self):
        assert parse_number_list(5) == [5.0]
