# src/amlich/core/lunisolar.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator, Tuple

from .astronomy import new_moon_day
from .config import DEFAULT_TZ_OFFSET_HOURS, NEW_MOON_EPOCH_JD, SYNODIC_MONTH
from .julian import SolarDate, from_julian_day, to_julian_day
from .leap_month import leap_month_offset
from .solstice_anchor import lunar_month_11

log = logging.getLogger(__name__)


class InvalidLunarDateError(ValueError):
    """Raised when a lunar day/month/leap combination does not exist."""


# ============================================================
# Public types
# ============================================================

@dataclass(frozen=True)
class LunarDate:
    """
    Vietnamese lunar date.

    is_leap marks the inserted intercalary month only; the regular month
    carrying the same number has is_leap=False.
    """
    day: int
    month: int
    year: int
    is_leap: bool = False


# ============================================================
# Solar -> lunar
# ============================================================

def _month_start_for(day_number: int, tz: float) -> int:
    k = math.floor((day_number - NEW_MOON_EPOCH_JD) / SYNODIC_MONTH)
    # the mean-lunation estimate can overshoot by one lunation near a new moon
    for j in (k + 1, k, k - 1):
        month_start = new_moon_day(j, tz)
        if month_start <= day_number:
            break
    return month_start


def solar_to_lunar(day: int, month: int, year: int, tz: float = DEFAULT_TZ_OFFSET_HOURS) -> LunarDate:
    """
    Solar (civil) date -> Vietnamese lunar date for an observer at UTC+tz.

    Input is not validated; see julian.validate_solar_date for the boundary check.
    """
    day_number = to_julian_day(day, month, year)
    month_start = _month_start_for(day_number, tz)

    a11 = lunar_month_11(year, tz)
    b11 = a11
    if a11 >= month_start:
        lunar_year = year
        a11 = lunar_month_11(year - 1, tz)
    else:
        lunar_year = year + 1
        b11 = lunar_month_11(year + 1, tz)

    lunar_day = day_number - month_start + 1
    diff = math.floor((month_start - a11) / 29)
    is_leap = False
    lunar_month = diff + 11
    if b11 - a11 > 365:
        leap_diff = leap_month_offset(a11, tz)
        if diff >= leap_diff:
            lunar_month = diff + 10
            if diff == leap_diff:
                is_leap = True
    if lunar_month > 12:
        lunar_month = lunar_month - 12
    # months 11/12 right after the anchor still belong to the previous lunar year
    if lunar_month >= 11 and diff < 4:
        lunar_year -= 1

    return LunarDate(day=lunar_day, month=lunar_month, year=lunar_year, is_leap=is_leap)


def solar_to_lunar_date(d: date, tz: float = DEFAULT_TZ_OFFSET_HOURS) -> LunarDate:
    return solar_to_lunar(d.day, d.month, d.year, tz)


def lunar_dates_between(
    start: date,
    end: date,
    tz: float = DEFAULT_TZ_OFFSET_HOURS,
) -> Iterator[Tuple[date, LunarDate]]:
    """Convert every day of [start, end)."""
    d = start
    while d < end:
        yield d, solar_to_lunar_date(d, tz)
        d += timedelta(days=1)


# ============================================================
# Lunar -> solar
# ============================================================

def _lunation_index_of_month(month: int, year: int, is_leap: bool, tz: float) -> int:
    """Lunation index k of the new moon starting the given lunar month."""
    if month < 11:
        a11 = lunar_month_11(year - 1, tz)
        b11 = lunar_month_11(year, tz)
    else:
        a11 = lunar_month_11(year, tz)
        b11 = lunar_month_11(year + 1, tz)

    k = math.floor(0.5 + (a11 - NEW_MOON_EPOCH_JD) / SYNODIC_MONTH)
    off = (month - 11) % 12

    if b11 - a11 > 365:
        leap_off = leap_month_offset(a11, tz)
        leap_month = (leap_off - 2) % 12 or 12
        if is_leap and month != leap_month:
            raise InvalidLunarDateError(
                f"lunar year {year} has no leap month {month} (leap month is {leap_month})"
            )
        if is_leap or off >= leap_off:
            off += 1
    elif is_leap:
        raise InvalidLunarDateError(f"lunar year {year} has no leap month")

    return k + off


def lunar_month_length(
    month: int,
    year: int,
    is_leap: bool = False,
    tz: float = DEFAULT_TZ_OFFSET_HOURS,
) -> int:
    """Length (29 or 30 days) of a lunar month."""
    k = _lunation_index_of_month(month, year, is_leap, tz)
    return new_moon_day(k + 1, tz) - new_moon_day(k, tz)


def lunar_to_solar(
    day: int,
    month: int,
    year: int,
    is_leap: bool = False,
    tz: float = DEFAULT_TZ_OFFSET_HOURS,
) -> SolarDate:
    """
    Vietnamese lunar date -> solar (civil) date.

    Raises InvalidLunarDateError for a month/day/leap combination that does not
    exist in that lunar year.
    """
    if not (1 <= month <= 12):
        raise InvalidLunarDateError(f"lunar month out of range: {month}")
    if not (1 <= day <= 30):
        raise InvalidLunarDateError(f"lunar day out of range: {day}")

    k = _lunation_index_of_month(month, year, is_leap, tz)
    month_start = new_moon_day(k, tz)
    length = new_moon_day(k + 1, tz) - month_start
    if day > length:
        raise InvalidLunarDateError(
            f"lunar month {month}{' (leap)' if is_leap else ''}/{year} has only {length} days"
        )

    out = from_julian_day(month_start + day - 1)
    log.debug("lunar_to_solar %d/%d/%d leap=%s tz=%s -> %s", day, month, year, is_leap, tz, out)
    return SolarDate(day=out.day, month=out.month, year=out.year, tz_offset=tz)


def lunar_to_solar_date(
    day: int,
    month: int,
    year: int,
    is_leap: bool = False,
    tz: float = DEFAULT_TZ_OFFSET_HOURS,
) -> date:
    return lunar_to_solar(day, month, year, is_leap, tz).to_date()

