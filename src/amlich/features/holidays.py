# src/amlich/features/holidays.py
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date
from typing import List, Literal

from amlich.core.config import DEFAULT_TZ_OFFSET_HOURS
from amlich.core.julian import SolarDate, is_valid_solar_date
from amlich.core.lunisolar import (
    InvalidLunarDateError,
    LunarDate,
    lunar_to_solar,
    lunar_to_solar_date,
    solar_to_lunar,
)
from amlich.features.config import (
    LUNAR_HOLIDAYS,
    SOLAR_HOLIDAYS,
    holiday_key,
    parse_holiday_key,
)

HolidayKind = Literal["solar", "lunar"]


@dataclass(frozen=True)
class Holiday:
    name: str
    icon: str
    kind: HolidayKind


@dataclass(frozen=True)
class UpcomingHoliday:
    date: date
    holiday: Holiday

    @property
    def date_label(self) -> str:
        return f"{self.date.day}/{self.date.month}/{self.date.year}"


def solar_holiday(day: int, month: int) -> Holiday | None:
    info = SOLAR_HOLIDAYS.get(holiday_key(month, day))
    if info is None:
        return None
    return Holiday(name=info.name, icon=info.icon, kind="solar")


def lunar_holiday(ld: LunarDate) -> Holiday | None:
    """
    Lunar holiday on a lunar date. Leap months carry no holidays.
    """
    if ld.is_leap:
        return None
    info = LUNAR_HOLIDAYS.get(holiday_key(ld.month, ld.day))
    if info is None:
        return None
    return Holiday(name=info.name, icon=info.icon, kind="lunar")


def holidays_for_date(
    day: int,
    month: int,
    year: int,
    tz: float = DEFAULT_TZ_OFFSET_HOURS,
) -> List[Holiday]:
    """Solar holidays first, then lunar ones."""
    out: List[Holiday] = []
    s = solar_holiday(day, month)
    if s is not None:
        out.append(s)
    l = lunar_holiday(solar_to_lunar(day, month, year, tz))
    if l is not None:
        out.append(l)
    return out


def tet_date(year: int, tz: float = DEFAULT_TZ_OFFSET_HOURS) -> date:
    """Solar date of Tết Nguyên Đán (lunar 1/1) of lunar year `year`."""
    return lunar_to_solar_date(1, 1, year, False, tz)


def _as_date(s: SolarDate) -> date | None:
    """None when the civil date has no datetime.date (year 10000, Julian-only 29 Feb)."""
    if not (MINYEAR <= s.year <= MAXYEAR):
        return None
    if s.month == 2 and s.day == 29 and not calendar.isleap(s.year):
        return None
    return s.to_date()


def _lunar_holiday_dates(lunar_year: int, tz: float) -> List[UpcomingHoliday]:
    out: List[UpcomingHoliday] = []
    for key, info in LUNAR_HOLIDAYS.items():
        month, day = parse_holiday_key(key)
        try:
            s = lunar_to_solar(day, month, lunar_year, False, tz)
        except InvalidLunarDateError:
            # e.g. day 30 in a 29-day month
            continue
        d = _as_date(s)
        if d is None:
            continue
        out.append(UpcomingHoliday(date=d, holiday=Holiday(info.name, info.icon, "lunar")))
    return out


def _solar_holiday_dates(year: int) -> List[UpcomingHoliday]:
    out: List[UpcomingHoliday] = []
    for key, info in SOLAR_HOLIDAYS.items():
        month, day = parse_holiday_key(key)
        if not is_valid_solar_date(day, month, year):
            continue
        out.append(UpcomingHoliday(date=date(year, month, day), holiday=Holiday(info.name, info.icon, "solar")))
    return out


def upcoming_holidays(
    today: date,
    limit: int = 6,
    tz: float = DEFAULT_TZ_OFFSET_HOURS,
) -> List[UpcomingHoliday]:
    """
    Solar and lunar holidays on or after `today`, soonest first.

    Lunar year Y-1 is included because its month 12 (Ông Táo) lands in
    January/February of solar year Y.
    """
    if limit <= 0:
        return []

    candidates: List[UpcomingHoliday] = []
    for y in (today.year, today.year + 1):
        if y <= MAXYEAR:
            candidates.extend(_solar_holiday_dates(y))
    for ly in (today.year - 1, today.year, today.year + 1):
        candidates.extend(_lunar_holiday_dates(ly, tz))

    out = [c for c in candidates if c.date >= today]
    out.sort(key=lambda c: (c.date, c.holiday.kind != "solar", c.holiday.name))
    return out[:limit]
