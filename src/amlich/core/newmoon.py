# src/amlich/core/newmoon.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import List, Protocol

from .astronomy import new_moon_day, sun_longitude
from .julian import from_julian_day, to_julian_day

UTC = timezone.utc

# Unix epoch as a Julian date (UT).
_UNIX_EPOCH_JD = 2440587.5
_LUNATION0_JD = 2415020.75933
_MEAN_LUNATION = 29.53058868


class NewMoonReference(Protocol):
    def new_moons_utc_between(self, start_utc: datetime, end_utc: datetime) -> List[datetime]: ...
    def sun_ecliptic_longitude_deg(self, dt_utc: datetime) -> float: ...


@dataclass(frozen=True)
class NewMoonComparison:
    """
    One reference new moon against the series.

    - k: lunation index used by core.astronomy
    - reference_jdn / series_jdn: local civil day of the new moon
    - reference_sector / series_sector: 30° solar sector at local midnight of series_jdn
    """
    k: int
    reference_utc: datetime
    reference_jdn: int
    series_jdn: int
    reference_sector: int
    series_sector: int

    @property
    def day_delta(self) -> int:
        return self.series_jdn - self.reference_jdn

    @property
    def ok(self) -> bool:
        return self.day_delta == 0 and self.reference_sector == self.series_sector


def julian_date_of(dt_utc: datetime) -> float:
    if dt_utc.tzinfo is None:
        raise ValueError("dt_utc must be timezone-aware")
    secs = (dt_utc.astimezone(UTC) - datetime(1970, 1, 1, tzinfo=UTC)).total_seconds()
    return _UNIX_EPOCH_JD + secs / 86400.0


def lunation_index(dt_utc: datetime) -> int:
    """Nearest lunation index k for a new moon instant."""
    return round((julian_date_of(dt_utc) - _LUNATION0_JD) / _MEAN_LUNATION)


def local_midnight_utc(jdn: int, tz: float) -> datetime:
    d = from_julian_day(jdn)
    return datetime(d.year, d.month, d.day, tzinfo=UTC) - timedelta(hours=tz)


def compare_new_moons(
    ref: NewMoonReference,
    start_utc: datetime,
    end_utc: datetime,
    tz: float,
) -> List[NewMoonComparison]:
    """
    Compare new_moon_day / sun_longitude against an ephemeris over [start_utc, end_utc).
    """
    out: List[NewMoonComparison] = []
    for t in ref.new_moons_utc_between(start_utc, end_utc):
        local = t.astimezone(UTC) + timedelta(hours=tz)
        ref_jdn = to_julian_day(local.day, local.month, local.year)

        k = lunation_index(t)
        series_jdn = new_moon_day(k, tz)

        ref_deg = ref.sun_ecliptic_longitude_deg(local_midnight_utc(series_jdn, tz))
        out.append(
            NewMoonComparison(
                k=k,
                reference_utc=t,
                reference_jdn=ref_jdn,
                series_jdn=series_jdn,
                reference_sector=int(ref_deg // 30) % 12,
                series_sector=sun_longitude(series_jdn, tz),
            )
        )
    return out
