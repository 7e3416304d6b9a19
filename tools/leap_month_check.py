from __future__ import annotations

"""
Leap month check script.

Uses:
- amlich.core.leap_month.leap_window_for_year
- amlich.core.julian.from_julian_day
"""

import argparse

from amlich.core.julian import from_julian_day
from amlich.core.leap_month import leap_window_for_year
from amlich.features.canchi import stem_branch_name
from amlich.features.config import lunar_month_display_name

from tools.common import add_common_args, resolve_date_range, resolve_tz, dump_json


def _years_from_args(args, start, end) -> list[int]:
    if args.year:
        return [int(args.year)]
    if start and end:
        return list(range(start.year, end.year + 1))
    return []


def main() -> None:
    parser = argparse.ArgumentParser(description="Leap month (tháng nhuận) check")
    add_common_args(parser)
    parser.add_argument("--year", type=int, help="target lunar year")
    args = parser.parse_args()

    start, end = resolve_date_range(args)
    years = _years_from_args(args, start, end)
    if not years:
        parser.error("--year or --date or --start/--end required")

    tz = resolve_tz(args)

    out_rows = []
    for year in years:
        w = leap_window_for_year(year, tz)
        leap_no = None if w is None else w.leap_month_no
        row = {
            "year": int(year),
            "can_chi": stem_branch_name(year),
            "leap_month": leap_no,
            "month_name": lunar_month_display_name(leap_no, True) if leap_no else None,
        }

        if args.verbose and w is not None:
            row["window"] = {
                "anchor_year": w.anchor_year,
                "start": from_julian_day(w.start_jdn).isoformat(),
                "end": from_julian_day(w.end_jdn).isoformat(),
                "days": w.end_jdn - w.start_jdn,
                "leap_offset": w.leap_offset,
            }

        out_rows.append(row)

        if not args.json:
            if leap_no is None:
                print(f"{year} ({row['can_chi']}): leap=none")
            else:
                print(f"{year} ({row['can_chi']}): leap month={leap_no} {row['month_name']}")
            if "window" in row:
                print(f"  window={row['window']}")

    if args.json:
        dump_json({"tz": tz, "years": out_rows})


if __name__ == "__main__":
    main()
