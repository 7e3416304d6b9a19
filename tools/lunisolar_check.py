from __future__ import annotations

"""
Solar -> lunar check script.

Uses:
- amlich.core.lunisolar.lunar_dates_between
- amlich.features.canchi.stem_branch_name
- amlich.features.config.format_lunar_label / lunar_month_display_name
"""

import argparse
from datetime import timedelta

from amlich.core.lunisolar import lunar_dates_between
from amlich.features.canchi import stem_branch_name
from amlich.features.config import format_lunar_label, lunar_month_display_name

from tools.common import add_common_args, resolve_date_range, resolve_tz, dump_json


def main() -> None:
    parser = argparse.ArgumentParser(description="Solar -> lunar (âm lịch) check")
    add_common_args(parser)
    args = parser.parse_args()

    start, end = resolve_date_range(args)
    if start is None or end is None:
        parser.error("--date or --start/--end required")

    tz = resolve_tz(args)

    rows = []
    first = True
    for cur, l in lunar_dates_between(start, end + timedelta(days=1), tz):
        label = format_lunar_label(l.day, l.month, l.year, l.is_leap)
        month_name = lunar_month_display_name(l.month, l.is_leap)

        if args.json:
            rows.append(
                {
                    "date": cur.isoformat(),
                    "year": int(l.year),
                    "month": int(l.month),
                    "day": int(l.day),
                    "leap": bool(l.is_leap),
                    "label": label,
                    "month_name": month_name,
                    "can_chi": stem_branch_name(l.year),
                }
            )
        else:
            sep = ""
            if not first and int(l.day) == 1:
                sep = "\n"
            print(f"{sep}{cur.isoformat()}  L={label}  {month_name} năm {stem_branch_name(l.year)}")
        first = False

    if args.json:
        dump_json({"tz": tz, "rows": rows})


if __name__ == "__main__":
    main()
