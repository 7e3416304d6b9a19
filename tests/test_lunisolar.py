from __future__ import annotations

from datetime import date, timedelta

import pytest

from amlich.core.julian import SolarDate
from amlich.core.lunisolar import (
    InvalidLunarDateError,
    LunarDate,
    lunar_dates_between,
    lunar_month_length,
    lunar_to_solar,
    lunar_to_solar_date,
    solar_to_lunar,
    solar_to_lunar_date,
)


def test_solar_to_lunar_reference_dates_2023():
    assert solar_to_lunar(1, 1, 2023) == LunarDate(10, 12, 2022)
    assert solar_to_lunar(21, 1, 2023) == LunarDate(30, 12, 2022)
    assert solar_to_lunar(22, 1, 2023) == LunarDate(1, 1, 2023)
    assert solar_to_lunar(19, 2, 2023) == LunarDate(29, 1, 2023)
    assert solar_to_lunar(20, 2, 2023) == LunarDate(1, 2, 2023)
    assert solar_to_lunar(21, 3, 2023) == LunarDate(30, 2, 2023)
    assert solar_to_lunar(22, 3, 2023) == LunarDate(1, 2, 2023, is_leap=True)
    assert solar_to_lunar(20, 4, 2023) == LunarDate(1, 3, 2023)


def test_leap_month_days_are_flagged():
    ld = solar_to_lunar(5, 4, 2023)
    assert (ld.month, ld.year, ld.is_leap) == (2, 2023, True)

    ld = solar_to_lunar(5, 6, 2020)
    assert (ld.month, ld.year, ld.is_leap) == (4, 2020, True)

    assert solar_to_lunar(1, 8, 2025) == LunarDate(8, 6, 2025, is_leap=True)


def test_solar_to_lunar_date_accepts_date():
    assert solar_to_lunar_date(date(2023, 1, 22)) == LunarDate(1, 1, 2023)


@pytest.mark.parametrize(
    "year,expected",
    [
        (2020, date(2020, 1, 25)),
        (2021, date(2021, 2, 12)),
        (2022, date(2022, 2, 1)),
        (2023, date(2023, 1, 22)),
        (2024, date(2024, 2, 10)),
        (2025, date(2025, 1, 29)),
        (2026, date(2026, 2, 17)),
    ],
)
def test_lunar_new_year(year, expected):
    assert lunar_to_solar_date(1, 1, year) == expected
    assert solar_to_lunar_date(expected) == LunarDate(1, 1, year)


def test_timezone_changes_lunar_new_year():
    # Vietnam (UTC+7) vs China (UTC+8)
    assert lunar_to_solar_date(1, 1, 1985, tz=7.0) == date(1985, 1, 21)
    assert lunar_to_solar_date(1, 1, 1985, tz=8.0) == date(1985, 2, 20)
    assert lunar_to_solar_date(1, 1, 2007, tz=7.0) == date(2007, 2, 17)
    assert lunar_to_solar_date(1, 1, 2007, tz=8.0) == date(2007, 2, 18)


def test_lunar_to_solar_returns_solar_date_with_offset():
    assert lunar_to_solar(1, 2, 2023, is_leap=True) == SolarDate(22, 3, 2023, 7.0)
    assert lunar_to_solar(1, 1, 2007, tz=8.0) == SolarDate(18, 2, 2007, 8.0)


def test_round_trip_1800_to_2199():
    d = date(1800, 1, 1)
    end = date(2200, 1, 1)
    while d < end:
        ld = solar_to_lunar(d.day, d.month, d.year)
        assert 1 <= ld.day <= 30
        assert 1 <= ld.month <= 12
        if ld.day >= 29:
            assert ld.day <= lunar_month_length(ld.month, ld.year, ld.is_leap)
        assert lunar_to_solar_date(ld.day, ld.month, ld.year, ld.is_leap) == d
        d += timedelta(days=1)


def test_lunar_days_advance_by_one_or_restart():
    prev = None
    for _d, ld in lunar_dates_between(date(2020, 1, 1), date(2024, 1, 1)):
        if prev is not None:
            assert ld.day == prev.day + 1 or (ld.day == 1 and prev.day in (29, 30))
        prev = ld


def test_lunar_dates_between_is_half_open():
    rows = list(lunar_dates_between(date(2023, 1, 20), date(2023, 1, 23)))
    assert [d for d, _ in rows] == [date(2023, 1, 20), date(2023, 1, 21), date(2023, 1, 22)]
    assert rows[-1][1] == LunarDate(1, 1, 2023)
    assert list(lunar_dates_between(date(2023, 1, 1), date(2023, 1, 1))) == []


def test_lunar_month_length():
    assert lunar_month_length(1, 2023) == 29
    assert lunar_month_length(2, 2023) == 30
    assert lunar_month_length(2, 2023, is_leap=True) == 29


def test_lunar_to_solar_rejects_missing_dates():
    # 2023 has a leap month 2, not 3
    with pytest.raises(InvalidLunarDateError):
        lunar_to_solar(1, 3, 2023, is_leap=True)
    # no leap month in 2024
    with pytest.raises(InvalidLunarDateError):
        lunar_to_solar(1, 1, 2024, is_leap=True)
    # month 1 of 2023 has 29 days
    with pytest.raises(InvalidLunarDateError):
        lunar_to_solar(30, 1, 2023)
    with pytest.raises(InvalidLunarDateError):
        lunar_to_solar(1, 13, 2023)
    with pytest.raises(ValueError):
        lunar_to_solar(0, 1, 2023)


@pytest.mark.parametrize(
    "day,month,year",
    [
        (13, 4, 1877),
        (16, 3, 1885),
        (7, 5, 2054),
        (9, 4, 2062),
    ],
)
def test_day_before_late_new_moon_is_last_day_of_month(day, month, year):
    # the mean-lunation estimate lands one lunation ahead on these days
    d = date(year, month, day)
    before = solar_to_lunar_date(d - timedelta(days=1))
    ld = solar_to_lunar_date(d)
    after = solar_to_lunar_date(d + timedelta(days=1))

    assert ld.day == 30
    assert (ld.month, ld.year, ld.is_leap) == (before.month, before.year, before.is_leap)
    assert before.day == 29
    assert after.day == 1
    assert lunar_month_length(ld.month, ld.year, ld.is_leap) == 30
    assert lunar_to_solar_date(ld.day, ld.month, ld.year, ld.is_leap) == d


def test_leap_month_11_keeps_its_lunar_year():
    assert solar_to_lunar(22, 12, 2033) == LunarDate(1, 11, 2033, is_leap=True)
    assert lunar_to_solar_date(1, 11, 2033, is_leap=True) == date(2033, 12, 22)
    assert lunar_to_solar_date(1, 11, 2033) < date(2033, 12, 22)
