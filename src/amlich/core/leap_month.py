# src/amlich/core/leap_month.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from .astronomy import new_moon_day, sun_longitude
from .config import LEAP_SCAN_LIMIT, NEW_MOON_EPOCH_JD, SYNODIC_MONTH
from .solstice_anchor import lunar_month_11

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeapWindow:
    """
    Lunations between two consecutive month-11 anchors.

    start_jdn / end_jdn:
        new moon days of month 11 in `anchor_year` and `anchor_year + 1`.
    leap_offset:
        position of the leap lunation after start (1..13), None for a 12-month window.
    """
    anchor_year: int
    start_jdn: int
    end_jdn: int
    leap_offset: Optional[int]

    @property
    def is_leap(self) -> bool:
        return self.leap_offset is not None

    @property
    def leap_month_no(self) -> Optional[int]:
        """Number shared by the leap month and the regular month before it."""
        if self.leap_offset is None:
            return None
        return (self.leap_offset - 2) % 12 or 12

    @property
    def leap_lunar_year(self) -> Optional[int]:
        """Lunar year label of the leap month (months 11/12 belong to the anchor year)."""
        no = self.leap_month_no
        if no is None:
            return None
        return self.anchor_year if no >= 11 else self.anchor_year + 1


def leap_month_offset(a11: int, tz: float, *, limit: int = LEAP_SCAN_LIMIT) -> int:
    """
    Position (1..13) of the leap lunation after the month-11 new moon a11.

    The leap month is the first lunation whose start shares its solar sector
    with the previous one, i.e. the first month without a principal term.
    """
    k = math.floor((a11 - NEW_MOON_EPOCH_JD) / SYNODIC_MONTH + 0.5)
    i = 1
    arc = sun_longitude(new_moon_day(k + i, tz), tz)
    while True:
        last = arc
        i += 1
        arc = sun_longitude(new_moon_day(k + i, tz), tz)
        if arc == last or i >= limit:
            break
    if arc != last:
        log.warning(
            "leap month scan hit its bound without a repeated sector: a11=%d tz=%s limit=%d",
            a11, tz, limit,
        )
    return i - 1


def leap_window(anchor_year: int, tz: float) -> LeapWindow:
    a11 = lunar_month_11(anchor_year, tz)
    b11 = lunar_month_11(anchor_year + 1, tz)
    offset = leap_month_offset(a11, tz) if b11 - a11 > 365 else None
    log.debug("leap_window anchor=%d tz=%s days=%d leap_offset=%s", anchor_year, tz, b11 - a11, offset)
    return LeapWindow(anchor_year=anchor_year, start_jdn=a11, end_jdn=b11, leap_offset=offset)


def leap_window_for_year(lunar_year: int, tz: float) -> Optional[LeapWindow]:
    """
    Anchor window holding the leap month labelled with `lunar_year`, or None.

    A lunar year overlaps two anchor windows: leap months 1..10 come from the
    window opened in the previous solar year, leap 11/12 from its own.
    """
    for anchor_year in (lunar_year - 1, lunar_year):
        w = leap_window(anchor_year, tz)
        if w.is_leap and w.leap_lunar_year == lunar_year:
            return w
    return None


def leap_month_for_year(lunar_year: int, tz: float) -> Optional[int]:
    """Number of the leap month labelled with `lunar_year`, or None."""
    w = leap_window_for_year(lunar_year, tz)
    return None if w is None else w.leap_month_no
