from __future__ import annotations

"""
New moon check script.

Compares the truncated new moon / solar sector series of amlich.core.astronomy
against the JPL ephemeris (Skyfield) and prints every lunation where the civil
day or the 30° sector differs.

Uses:
- amlich.core.newmoon.compare_new_moons
- amlich.core.providers.skyfield_provider.SkyfieldProvider
"""

import argparse
from datetime import datetime, timedelta, timezone

from amlich.core.julian import from_julian_day
from amlich.core.newmoon import compare_new_moons
from amlich.core.providers.skyfield_provider import SkyfieldProvider

from tools.common import (
    add_common_args,
    add_ephemeris_args,
    dump_json,
    resolve_date_range,
    resolve_ephemeris,
    resolve_tz,
    skip,
)

UTC = timezone.utc


def main() -> None:
    parser = argparse.ArgumentParser(description="New moon (sóc) series vs ephemeris check")
    add_common_args(parser)
    add_ephemeris_args(parser)
    args = parser.parse_args()

    start, end = resolve_date_range(args)
    if start is None or end is None:
        parser.error("--date or --start/--end required")

    eph = resolve_ephemeris(args.ephemeris, args.ephemeris_path)
    if eph.skip_reason:
        skip(eph.skip_reason)

    tz = resolve_tz(args)
    provider = SkyfieldProvider(ephemeris=eph.name, ephemeris_path=eph.path)

    rows = compare_new_moons(
        provider,
        datetime(start.year, start.month, start.day, tzinfo=UTC),
        datetime(end.year, end.month, end.day, tzinfo=UTC) + timedelta(days=1),
        tz,
    )
    bad = [r for r in rows if not r.ok]

    if args.json:
        dump_json(
            {
                "tz": tz,
                "lunations": len(rows),
                "mismatches": [
                    {
                        "k": r.k,
                        "reference_utc": r.reference_utc.isoformat(),
                        "reference_date": from_julian_day(r.reference_jdn).isoformat(),
                        "series_date": from_julian_day(r.series_jdn).isoformat(),
                        "day_delta": r.day_delta,
                        "reference_sector": r.reference_sector,
                        "series_sector": r.series_sector,
                    }
                    for r in bad
                ],
            }
        )
        return

    for r in rows if args.verbose else bad:
        flag = "OK " if r.ok else "NG "
        print(
            f"{flag}k={r.k} ref={r.reference_utc.isoformat()} "
            f"ref_day={from_julian_day(r.reference_jdn).isoformat()} "
            f"series_day={from_julian_day(r.series_jdn).isoformat()} "
            f"sector ref={r.reference_sector} series={r.series_sector}"
        )
    print(f"lunations={len(rows)} mismatches={len(bad)} tz={tz}")


if __name__ == "__main__":
    main()
