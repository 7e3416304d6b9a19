# src/amlich/core/config.py
from __future__ import annotations

import os
from dataclasses import dataclass

# Vietnam civil time (ICT, UTC+7). The calendar is defined for this meridian.
DEFAULT_TZ_OFFSET_HOURS: float = 7.0

# Mean synodic month (days) and the lunation-0 epoch used by the new moon series.
SYNODIC_MONTH: float = 29.530588853
NEW_MOON_EPOCH_JD: float = 2415021.076998695
MONTH11_EPOCH_JD: int = 2415021

# First JDN of the Gregorian calendar (1582-10-15).
GREGORIAN_SWITCH_JDN: int = 2299161

LEAP_SCAN_LIMIT: int = 14

ENV_TZ_OFFSET = "AMLICH_TZ_OFFSET"


@dataclass(frozen=True)
class LunarConfig:
    """
    Converter defaults.

    tz_offset_hours:
        Observer offset from UTC in hours. Any real value is accepted;
        +7 yields the Vietnamese calendar, +8 the Chinese one.
    """
    tz_offset_hours: float = DEFAULT_TZ_OFFSET_HOURS


def tz_offset_from_env(default: float = DEFAULT_TZ_OFFSET_HOURS) -> float:
    """
    Read AMLICH_TZ_OFFSET (hours). Empty or unparsable values fall back to default.
    """
    v = os.environ.get(ENV_TZ_OFFSET, "").strip()
    if not v:
        return default
    try:
        return float(v)
    except ValueError:
        return default


def config_from_env() -> LunarConfig:
    return LunarConfig(tz_offset_hours=tz_offset_from_env())
