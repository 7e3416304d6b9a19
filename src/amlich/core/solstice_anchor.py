# src/amlich/core/solstice_anchor.py
from __future__ import annotations

import logging
import math
from functools import lru_cache

from .astronomy import new_moon_day, sun_longitude
from .config import MONTH11_EPOCH_JD, SYNODIC_MONTH
from .julian import to_julian_day

log = logging.getLogger(__name__)


@lru_cache(maxsize=512)
def lunar_month_11(year: int, tz: float) -> int:
    """
    JDN of the new moon that starts lunar month 11 of solar year `year`.

    Month 11 is the lunation containing the winter solstice. The estimate taken
    from Dec 31 can land on the December new moon after the solstice; a sun
    sector >= 9 (past 270°) means it did, so step back one lunation.
    """
    off = to_julian_day(31, 12, year) - MONTH11_EPOCH_JD
    k = math.floor(off / SYNODIC_MONTH)
    nm = new_moon_day(k, tz)
    if sun_longitude(nm, tz) >= 9:
        nm = new_moon_day(k - 1, tz)
    log.debug("lunar_month_11 year=%d tz=%s k=%d -> jdn=%d", year, tz, k, nm)
    return nm
