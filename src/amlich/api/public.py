from __future__ import annotations

import logging
import time
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from amlich.core.astronomy import solar_term
from amlich.core.config import config_from_env
from amlich.core.julian import (
    InvalidDateError,
    SolarDate,
    is_valid_solar_date,
    julian_day_of,
    to_julian_day,
    validate_solar_date,
    weekday_of,
)
from amlich.core.leap_month import leap_month_for_year
from amlich.core.lunisolar import (
    InvalidLunarDateError,
    LunarDate,
    lunar_month_length,
    lunar_to_solar,
    solar_to_lunar,
)
from amlich.features.canchi import (
    day_stem_branch,
    month_stem_branch,
    stem_branch_name,
    year_branch,
    zodiac_animal,
)
from amlich.features.config import (
    WEEKDAYS,
    format_lunar_day_label,
    format_lunar_label,
    lunar_month_display_name,
    solar_term_name,
)
from amlich.features.holidays import Holiday, holidays_for_date, tet_date, upcoming_holidays

router = APIRouter(prefix="/api/v1", tags=["public"])

log = logging.getLogger("amlich.api.public")

TZ_MIN = -12.0
TZ_MAX = 14.0
UPCOMING_LIMIT_MAX = 50


# ============================================================
# Response Models
# ============================================================
class LunarOut(BaseModel):
    year: int
    month: int
    day: int
    leap: bool = Field(default=False, description="true inside the intercalary month")
    label: str
    month_name: str


class CanChiOut(BaseModel):
    year: str
    month: str
    day: str


class ZodiacOut(BaseModel):
    en: str
    vi: str
    branch: str


class HolidayOut(BaseModel):
    name: str
    icon: str
    kind: str


class DayResponse(BaseModel):
    date: str
    tz: float
    weekday: str
    jdn: int
    lunar: LunarOut
    can_chi: CanChiOut
    zodiac: ZodiacOut
    solar_term: str
    holidays: List[HolidayOut] = Field(default_factory=list)


class SolarOut(BaseModel):
    date: str
    tz: float
    jdn: int
    weekday: str
    lunar_month_length: int


# ============================================================
# Helpers: parsing & tz
# ============================================================
def _parse_iso_date(s: str) -> date:
    try:
        return date.fromisoformat(s)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"Invalid date format: {s} (expected YYYY-MM-DD)") from e


def _parse_date_any(x: str | date) -> date:
    if isinstance(x, date):
        return x
    return _parse_iso_date(str(x))


def _resolve_tz(tz: Optional[float]) -> float:
    v = config_from_env().tz_offset_hours if tz is None else float(tz)
    if not (TZ_MIN <= v <= TZ_MAX):
        raise HTTPException(status_code=422, detail=f"tz offset out of range: {v} (expected {TZ_MIN}..{TZ_MAX})")
    return v


def _validated(day: int, month: int, year: int) -> None:
    try:
        validate_solar_date(day, month, year)
    except InvalidDateError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


def _lunar_dict(ld: LunarDate) -> Dict[str, Any]:
    return {
        "year": int(ld.year),
        "month": int(ld.month),
        "day": int(ld.day),
        "leap": bool(ld.is_leap),
        "label": format_lunar_label(ld.day, ld.month, ld.year, ld.is_leap),
        "month_name": lunar_month_display_name(ld.month, ld.is_leap),
    }


def _holiday_dict(h: Holiday) -> Dict[str, str]:
    return {"name": h.name, "icon": h.icon, "kind": h.kind}


# =========================================================
# Public JSON API (function-style, HTTP-ready)
# =========================================================
def get_calendar_day(date_: str | date, *, tz: Optional[float] = None) -> dict:
    d = _parse_date_any(date_)
    _validated(d.day, d.month, d.year)
    tz_v = _resolve_tz(tz)

    jdn = julian_day_of(d)
    ld = solar_to_lunar(d.day, d.month, d.year, tz_v)

    return {
        "date": d.isoformat(),
        "tz": tz_v,
        "weekday": WEEKDAYS[weekday_of(jdn)],
        "jdn": jdn,
        "lunar": _lunar_dict(ld),
        "can_chi": {
            "year": stem_branch_name(ld.year),
            "month": month_stem_branch(ld.month, ld.year).name,
            "day": day_stem_branch(jdn).name,
        },
        "zodiac": {
            "en": zodiac_animal(ld.year, "en"),
            "vi": zodiac_animal(ld.year, "vi"),
            "branch": year_branch(ld.year),
        },
        "solar_term": solar_term_name(solar_term(jdn, tz_v)),
        "holidays": [_holiday_dict(h) for h in holidays_for_date(d.day, d.month, d.year, tz_v)],
    }


def get_calendar_month(year: int, month: int, *, tz: Optional[float] = None) -> dict:
    """
    Month view: one row per solar day. The header describes the lunar month
    covering the 15th of the solar month.
    """
    if not (1 <= int(month) <= 12):
        raise HTTPException(status_code=422, detail=f"month out of range: {month}")
    if not (1 <= int(year) <= 9999):
        raise HTTPException(status_code=422, detail=f"year out of range: {year}")
    tz_v = _resolve_tz(tz)

    mid = solar_to_lunar(15, month, year, tz_v)
    header = f"Tháng {mid.month} năm {stem_branch_name(mid.year)} ({year_branch(mid.year)})"

    days: List[dict] = []
    # Julian month lengths before 1582, no 5..14 Oct 1582
    for day in range(1, 32):
        if not is_valid_solar_date(day, month, year):
            continue
        ld = solar_to_lunar(day, month, year, tz_v)
        days.append(
            {
                "date": SolarDate(day, month, year).isoformat(),
                "lunar": _lunar_dict(ld),
                "lunar_day_label": format_lunar_day_label(ld.day, ld.month),
                "special": ld.day in (1, 15),
                "holidays": [_holiday_dict(h) for h in holidays_for_date(day, month, year, tz_v)],
            }
        )

    return {
        "meta": {"tz": tz_v},
        "year": int(year),
        "month": int(month),
        "header": header,
        "leap_month": leap_month_for_year(mid.year, tz_v),
        "days": days,
    }


def convert_solar_to_lunar(day: int, month: int, year: int, *, tz: Optional[float] = None) -> dict:
    """
    Solar -> lunar for raw day/month/year input. The converter does not check
    its input, so this is where 30/02 or 10/10/1582 is rejected.
    """
    _validated(day, month, year)
    tz_v = _resolve_tz(tz)
    ld = solar_to_lunar(day, month, year, tz_v)
    return {
        "solar": {"day": int(day), "month": int(month), "year": int(year)},
        "tz": tz_v,
        "lunar": _lunar_dict(ld),
        "can_chi": stem_branch_name(ld.year),
        "zodiac": zodiac_animal(ld.year, "en"),
    }


def convert_lunar_to_solar(
    day: int,
    month: int,
    year: int,
    *,
    leap: bool = False,
    tz: Optional[float] = None,
) -> dict:
    tz_v = _resolve_tz(tz)
    try:
        s = lunar_to_solar(day, month, year, leap, tz_v)
    except InvalidLunarDateError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    jdn = to_julian_day(s.day, s.month, s.year)
    return {
        "date": s.isoformat(),
        "tz": tz_v,
        "jdn": jdn,
        "weekday": WEEKDAYS[weekday_of(jdn)],
        "lunar_month_length": lunar_month_length(month, year, leap, tz_v),
    }


def get_tet(year: int, *, tz: Optional[float] = None) -> dict:
    tz_v = _resolve_tz(tz)
    d = tet_date(year, tz_v)
    return {
        "year": int(year),
        "date": d.isoformat(),
        "can_chi": stem_branch_name(year),
        "zodiac": zodiac_animal(year, "en"),
        "label": f"Tết {year} ({year_branch(year)})",
    }


def get_upcoming_holidays(today: str | date, *, limit: int = 6, tz: Optional[float] = None) -> dict:
    d = _parse_date_any(today)
    tz_v = _resolve_tz(tz)
    rows = upcoming_holidays(d, limit=limit, tz=tz_v)
    return {
        "from": d.isoformat(),
        "holidays": [
            {"date": r.date.isoformat(), "date_label": r.date_label, **_holiday_dict(r.holiday)}
            for r in rows
        ],
    }


# ============================================================
# Endpoints
# ============================================================
@router.get("/calendar/day", response_model=DayResponse)
def get_day_endpoint(
    date_str: str = Query(..., alias="date", description="YYYY-MM-DD"),
    tz: Optional[float] = Query(None, ge=TZ_MIN, le=TZ_MAX, description="UTC offset (hours)"),
    timing: bool = Query(False, description="log elapsed time"),
) -> Dict[str, Any]:
    t0 = time.perf_counter()
    res = get_calendar_day(date_str, tz=tz)
    if timing:
        log.warning("timing /calendar/day date=%s tz=%s total=%.4fs", date_str, tz, time.perf_counter() - t0)
    return res


@router.get("/calendar/month")
def get_month_endpoint(
    year: int = Query(..., ge=1, le=9999),
    month: int = Query(..., ge=1, le=12),
    tz: Optional[float] = Query(None, ge=TZ_MIN, le=TZ_MAX),
) -> Dict[str, Any]:
    return get_calendar_month(year, month, tz=tz)


@router.get("/convert/solar-to-lunar")
def solar_to_lunar_endpoint(
    year: int = Query(...),
    month: int = Query(...),
    day: int = Query(...),
    tz: Optional[float] = Query(None, ge=TZ_MIN, le=TZ_MAX),
) -> Dict[str, Any]:
    return convert_solar_to_lunar(day, month, year, tz=tz)


@router.get("/convert/lunar-to-solar", response_model=SolarOut)
def lunar_to_solar_endpoint(
    year: int = Query(..., ge=1, le=9998),
    month: int = Query(..., ge=1, le=12),
    day: int = Query(..., ge=1, le=30),
    leap: bool = Query(False),
    tz: Optional[float] = Query(None, ge=TZ_MIN, le=TZ_MAX),
) -> Dict[str, Any]:
    return convert_lunar_to_solar(day, month, year, leap=leap, tz=tz)


@router.get("/tet")
def tet_endpoint(
    year: int = Query(..., ge=1, le=9998),
    tz: Optional[float] = Query(None, ge=TZ_MIN, le=TZ_MAX),
) -> Dict[str, Any]:
    return get_tet(year, tz=tz)


@router.get("/holidays/upcoming")
def upcoming_endpoint(
    date_str: str = Query(..., alias="date", description="YYYY-MM-DD"),
    limit: int = Query(6, ge=1, le=UPCOMING_LIMIT_MAX),
    tz: Optional[float] = Query(None, ge=TZ_MIN, le=TZ_MAX),
) -> Dict[str, Any]:
    return get_upcoming_holidays(date_str, limit=limit, tz=tz)
