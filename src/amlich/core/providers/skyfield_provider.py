from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Tuple, Union
import logging

from skyfield.api import Loader
from skyfield import almanac
from skyfield.framelib import ecliptic_frame

log = logging.getLogger(__name__)

# almanac.moon_phases: 0=new, 1=first quarter, 2=full, 3=last quarter
_NEW_MOON_PHASE = 0


# ----------------------------
# Ephemeris path resolution
# ----------------------------
def _project_data_dir() -> Path:
    return Path(__file__).resolve().parents[4] / "data"


def _default_ephemeris_path() -> Path:
    """
    Prefer de440s (longer coverage) if present; otherwise fall back to de421.
    """
    data_dir = _project_data_dir()
    p440s = data_dir / "de440s.bsp"
    p421 = data_dir / "de421.bsp"
    return p440s if p440s.exists() else p421


def _resolve_ephemeris_path(
    *,
    ephemeris_path: Optional[Path],
    ephemeris: Optional[Union[str, Path]],
) -> Path:
    """
    Resolution priority:
      1) ephemeris_path (Path) if provided
      2) ephemeris (str|Path): absolute path as is, bare name under the data dir
      3) default: de440s if present else de421
    """
    if ephemeris_path is not None:
        return ephemeris_path

    if ephemeris is not None:
        p = ephemeris if isinstance(ephemeris, Path) else Path(ephemeris)
        if p.is_absolute():
            return p
        return _project_data_dir() / p

    return _default_ephemeris_path()


@dataclass(frozen=True)
class SkyfieldProvider:
    """
    JPL-ephemeris reference for the low-precision series in core.astronomy.

    Only used to cross-check new moon days; the converter never depends on it.
    """

    ephemeris_path: Optional[Path] = None
    ephemeris: Optional[Union[str, Path]] = None

    def __post_init__(self) -> None:
        resolved = _resolve_ephemeris_path(
            ephemeris_path=self.ephemeris_path,
            ephemeris=self.ephemeris,
        )
        object.__setattr__(self, "ephemeris_path", resolved)

        if not self.ephemeris_path.exists():
            data_dir = _project_data_dir()
            candidates = [data_dir / "de440s.bsp", data_dir / "de421.bsp"]
            cand_str = "\n".join(f"  - {p}" for p in candidates)
            raise FileNotFoundError(
                f"Ephemeris not found: {self.ephemeris_path}\n"
                f"Place one of the following files under {data_dir}:\n"
                f"{cand_str}\n"
                "Or pass ephemeris='de421.bsp' / ephemeris_path=Path(...)."
            )

        loader = Loader(str(self.ephemeris_path.parent))
        eph = loader(self.ephemeris_path.name)
        ts = loader.timescale()

        object.__setattr__(self, "_eph", eph)
        object.__setattr__(self, "_ts", ts)
        object.__setattr__(self, "_earth", eph["earth"])
        object.__setattr__(self, "_sun", eph["sun"])

        start_utc, end_utc = self._compute_ephemeris_utc_range()
        object.__setattr__(self, "_ephem_start_utc", start_utc)
        object.__setattr__(self, "_ephem_end_utc", end_utc)

    def _compute_ephemeris_utc_range(self) -> Tuple[datetime, datetime]:
        """
        Coverage from the SPK segments, so out-of-range requests fail early
        with a readable message instead of deep inside Skyfield.
        """
        segments = getattr(self._eph, "spk", None)
        if segments is None or not getattr(segments, "segments", None):
            return (
                datetime.min.replace(tzinfo=timezone.utc),
                datetime.max.replace(tzinfo=timezone.utc),
            )

        segs = segments.segments
        start_jd = max(s.start_jd for s in segs)
        end_jd = min(s.end_jd for s in segs)

        start_utc = self._ts.tt_jd(start_jd).utc_datetime().replace(tzinfo=timezone.utc)
        end_utc = self._ts.tt_jd(end_jd).utc_datetime().replace(tzinfo=timezone.utc)
        return start_utc, end_utc

    # ---- time helpers ----
    def _as_utc(self, dt_utc: datetime) -> datetime:
        if dt_utc.tzinfo is None:
            raise ValueError("dt_utc must be timezone-aware")
        return dt_utc.astimezone(timezone.utc)

    def _check_ephemeris_range(self, dt_utc: datetime) -> None:
        dt = self._as_utc(dt_utc)
        start = self._ephem_start_utc
        end = self._ephem_end_utc

        if dt < start or dt > end:
            raise ValueError(
                "Requested datetime is outside ephemeris coverage.\n"
                f"  requested: {dt.isoformat()}\n"
                f"  ephemeris: {self.ephemeris_path}\n"
                f"  coverage : {start.isoformat()} .. {end.isoformat()}\n"
                "Hint: use de440s.bsp (place it under ./data or pass ephemeris='de440s.bsp')."
            )

    def _t(self, dt_utc: datetime):
        self._check_ephemeris_range(dt_utc)
        return self._ts.from_datetime(self._as_utc(dt_utc))

    # ---- public API ----
    def sun_ecliptic_longitude_deg(self, dt_utc: datetime) -> float:
        """Apparent solar longitude (ecliptic of date), degrees in [0, 360)."""
        t = self._t(dt_utc)
        obs = self._earth.at(t).observe(self._sun).apparent()
        _lat, lon, _dist = obs.frame_latlon(ecliptic_frame)
        return float(lon.degrees % 360.0)

    def new_moons_utc_between(self, start_utc: datetime, end_utc: datetime) -> List[datetime]:
        """New moon instants in [start_utc, end_utc)."""
        t0 = self._t(start_utc)
        t1 = self._t(end_utc)
        times, phases = almanac.find_discrete(t0, t1, almanac.moon_phases(self._eph))

        out: List[datetime] = []
        for t, ph in zip(times, phases):
            if int(ph) != _NEW_MOON_PHASE:
                continue
            dt = t.utc_datetime()
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=timezone.utc)
            out.append(dt)

        if not out:
            log.warning(
                "no new moon found: start_utc=%s end_utc=%s",
                start_utc.isoformat(),
                end_utc.isoformat(),
            )
        return out
