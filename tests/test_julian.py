from __future__ import annotations

from datetime import date, timedelta

import pytest

from amlich.core.julian import (
    InvalidDateError,
    SolarDate,
    from_julian_day,
    is_valid_solar_date,
    to_julian_day,
    validate_solar_date,
    weekday_of,
)


def test_j2000_epoch():
    assert to_julian_day(1, 1, 2000) == 2451545
    assert from_julian_day(2451545) == SolarDate(1, 1, 2000)


def test_first_day_of_common_era_is_julian_calendar():
    assert to_julian_day(1, 1, 1) == 1721424


def test_calendar_switchover_has_no_gap():
    assert to_julian_day(4, 10, 1582) == 2299160
    assert to_julian_day(15, 10, 1582) == 2299161
    assert from_julian_day(2299160) == SolarDate(4, 10, 1582)
    assert from_julian_day(2299161) == SolarDate(15, 10, 1582)


def test_round_trip_every_civil_day_years_1_to_3000():
    lo = to_julian_day(1, 1, 1)
    hi = to_julian_day(31, 12, 3000)
    prev = None
    for jd in range(lo, hi + 1):
        s = from_julian_day(jd)
        assert to_julian_day(s.day, s.month, s.year) == jd
        assert 1 <= s.month <= 12
        assert 1 <= s.day <= 31
        if prev is not None:
            # civil dates only move forward
            assert (s.year, s.month, s.day) > prev
        prev = (s.year, s.month, s.day)
    assert from_julian_day(hi) == SolarDate(31, 12, 3000)


def test_consecutive_gregorian_days_differ_by_one():
    d = date(1582, 10, 15)
    end = date(3000, 12, 31)
    prev = to_julian_day(d.day, d.month, d.year)
    while d < end:
        d += timedelta(days=1)
        jd = to_julian_day(d.day, d.month, d.year)
        assert jd == prev + 1
        prev = jd


def test_julian_calendar_leap_rule_before_switchover():
    # 1500 is a leap year in the Julian calendar
    assert to_julian_day(1, 3, 1500) - to_julian_day(28, 2, 1500) == 2
    # 1900 is not a leap year in the Gregorian one
    assert to_julian_day(1, 3, 1900) - to_julian_day(28, 2, 1900) == 1


def test_solar_date_helpers():
    s = SolarDate(22, 1, 2023)
    assert s.tz_offset == 7.0
    assert s.to_date() == date(2023, 1, 22)
    assert s.isoformat() == "2023-01-22"


def test_is_valid_solar_date():
    assert is_valid_solar_date(29, 2, 2024)
    assert is_valid_solar_date(29, 2, 2000)
    assert is_valid_solar_date(29, 2, 1500)
    assert is_valid_solar_date(4, 10, 1582)
    assert is_valid_solar_date(15, 10, 1582)

    assert not is_valid_solar_date(29, 2, 2023)
    assert not is_valid_solar_date(29, 2, 1900)
    assert not is_valid_solar_date(31, 4, 2023)
    assert not is_valid_solar_date(10, 10, 1582)
    assert not is_valid_solar_date(1, 13, 2023)
    assert not is_valid_solar_date(0, 1, 2023)
    assert not is_valid_solar_date(32, 1, 2023)


def test_validate_solar_date_raises_value_error():
    assert validate_solar_date(1, 1, 2023) == SolarDate(1, 1, 2023)
    with pytest.raises(InvalidDateError):
        validate_solar_date(30, 2, 2023)
    with pytest.raises(ValueError):
        validate_solar_date(1, 0, 2023)


def test_weekday_of_matches_gregorian_dates_and_crosses_1582():
    for d in (date(2000, 1, 1), date(2023, 1, 22), date(1970, 1, 1)):
        assert weekday_of(to_julian_day(d.day, d.month, d.year)) == d.weekday()
    # Thursday 4 Oct 1582, Friday 15 Oct 1582
    assert weekday_of(to_julian_day(4, 10, 1582)) == 3
    assert weekday_of(to_julian_day(15, 10, 1582)) == 4
