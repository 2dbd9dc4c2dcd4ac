"""Unit tests for the provider date and clock-time encodings.

These cover the three time formats WorldWeatherOnline mixes in its payloads:
ISO calendar dates, 12-hour clock strings (with their 'No ...' sentinels) and
HMM/HHMM integers.
"""

from datetime import date, timedelta

import pytest
from wwo_time import (
    NO_EVENT,
    format_clock,
    format_date,
    parse_date,
    parse_time12,
    parse_time_hmm,
)


@pytest.mark.parametrize("text, expected_clock", [
    ("3:04 PM", "15:04"),
    ("12:00 AM", "00:00"),
    ("12:30 PM", "12:30"),
    ("12:59 AM", "00:59"),
    ("1:00 AM", "01:00"),
    ("07:15 AM", "07:15"),
    ("11:59 PM", "23:59"),
])
def test_time12_converts_to_24_hour_clock(text, expected_clock):
    """Verifies that 12-hour clock strings follow the usual 12 to 24 hour conversion."""
    assert format_clock(parse_time12(text)) == expected_clock


@pytest.mark.parametrize("text", ["No moonrise", "No moonset", "No sunrise", "No sunset"])
def test_time12_sentinel_is_distinct_from_midnight(text):
    """Ensures 'No ...' sentinels decode to NO_EVENT, never to a zero duration."""
    value = parse_time12(text)

    assert value == NO_EVENT
    assert value != timedelta(0)
    assert value < timedelta(0)
    assert parse_time12("12:00 AM") == timedelta(0)


def test_time12_rejects_garbage():
    """Checks that a string which is neither a clock time nor a sentinel is an error."""
    with pytest.raises(ValueError):
        parse_time12("noon-ish")


@pytest.mark.parametrize("text, expected", [
    ("0", timedelta(0)),
    ("930", timedelta(hours=9, minutes=30)),
    ("1830", timedelta(hours=18, minutes=30)),
    ("2359", timedelta(hours=23, minutes=59)),
    ("300", timedelta(hours=3)),
])
def test_time_hmm_splits_hours_and_minutes(text, expected):
    """Verifies HMM/HHMM integers decode as (value // 100) hours plus (value % 100) minutes."""
    assert parse_time_hmm(text) == expected


def test_time_hmm_all_valid_clock_values():
    """Sweeps every valid HHMM value and checks the formatted clock matches the digits."""
    for hours in range(24):
        for minutes in range(60):
            value = hours * 100 + minutes
            assert format_clock(parse_time_hmm(str(value))) == f"{hours:02d}:{minutes:02d}"


@pytest.mark.parametrize("text", ["", "-100", "9:30", "abc"])
def test_time_hmm_rejects_non_digits(text):
    with pytest.raises(ValueError):
        parse_time_hmm(text)


@pytest.mark.parametrize("text", ["2024-03-09", "1999-12-31", "2000-02-29", "2031-01-01"])
def test_date_reformats_to_same_string(text):
    """Ensures decoding then reformatting a YYYY-MM-DD date is the identity."""
    value = parse_date(text)

    assert isinstance(value, date)
    assert format_date(value) == text


def test_date_rejects_invalid_day():
    with pytest.raises(ValueError):
        parse_date("2023-02-29")


def test_format_clock_renders_no_event():
    assert format_clock(NO_EVENT) == "--:--"
