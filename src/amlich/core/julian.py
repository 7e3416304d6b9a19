# src/amlich/core/julian.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from .config import DEFAULT_TZ_OFFSET_HOURS, GREGORIAN_SWITCH_JDN


class InvalidDateError(ValueError):
    """Raised at the input boundary for a day/month/year that is not a civil date."""


@dataclass(frozen=True)
class SolarDate:
    """
    Civil date as seen in the observer's time zone.

    Dates before 1582-10-15 are Julian-calendar dates, later ones Gregorian.
    """
    day: int
    month: int
    year: int
    tz_offset: float = DEFAULT_TZ_OFFSET_HOURS

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


def to_julian_day(day: int, month: int, year: int) -> int:
    """
    Julian Day Number of a civil date.

    Uses the Gregorian formula, falling back to the Julian-calendar one when the
    result lands before the 1582 switchover. Month/day are not range-checked.
    """
    a = (14 - month) // 12
    y = year + 4800 - a
    m = month + 12 * a - 3
    jd = day + (153 * m + 2) // 5 + 365 * y + y // 4 - y // 100 + y // 400 - 32045
    if jd < GREGORIAN_SWITCH_JDN:
        jd = day + (153 * m + 2) // 5 + 365 * y + y // 4 - 32083
    return jd


def from_julian_day(jd: int) -> SolarDate:
    """Inverse of to_julian_day."""
    if jd >= GREGORIAN_SWITCH_JDN:
        a = jd + 32044
        b = (4 * a + 3) // 146097
        c = a - (b * 146097) // 4
    else:
        b = 0
        c = jd + 32082
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = b * 100 + d - 4800 + m // 10
    return SolarDate(day=day, month=month, year=year)


def julian_day_of(d: date) -> int:
    return to_julian_day(d.day, d.month, d.year)


def is_valid_solar_date(day: int, month: int, year: int) -> bool:
    """
    True when (day, month, year) names a real civil date.

    A date is valid iff it survives the JDN round trip, which rejects 30 Feb,
    31 Apr and the ten days dropped in October 1582.
    """
    if not (1 <= month <= 12) or not (1 <= day <= 31):
        return False
    back = from_julian_day(to_julian_day(day, month, year))
    return (back.day, back.month, back.year) == (day, month, year)


def validate_solar_date(day: int, month: int, year: int) -> SolarDate:
    if not is_valid_solar_date(day, month, year):
        raise InvalidDateError(f"invalid solar date: {day:02d}/{month:02d}/{year}")
    return SolarDate(day=day, month=month, year=year)


def weekday_of(jdn: int) -> int:
    """Day of week, Monday=0 as date.weekday(). Valid on both sides of 1582."""
    return int(jdn) % 7
