from __future__ import annotations

import argparse
import json
import os
import sys
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional, Tuple

from amlich.core.config import config_from_env

DEFAULT_EPHEMERIS = "de421.bsp"

ENV_EPHEMERIS = "AMLICH_EPHEMERIS"
ENV_EPHEMERIS_PATH = "AMLICH_EPHEMERIS_PATH"


@dataclass(frozen=True)
class EphemerisConfig:
    name: str
    path: Optional[Path]
    skip_reason: Optional[str]


def add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--date", help="YYYY-MM-DD")
    parser.add_argument("--start", help="YYYY-MM-DD")
    parser.add_argument("--end", help="YYYY-MM-DD")
    parser.add_argument("--tz", type=float, default=None, help="UTC offset in hours (default: AMLICH_TZ_OFFSET or 7)")
    parser.add_argument("--json", action="store_true")
    parser.add_argument("--verbose", action="store_true")


def add_ephemeris_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--ephemeris", default="")
    parser.add_argument("--ephemeris-path", default="")


def resolve_tz(args: argparse.Namespace) -> float:
    return config_from_env().tz_offset_hours if args.tz is None else float(args.tz)


def parse_date(s: str) -> date:
    return date.fromisoformat(s)


def resolve_ephemeris(name_arg: str, path_arg: str) -> EphemerisConfig:
    name = (name_arg or "").strip() or os.environ.get(ENV_EPHEMERIS, "").strip() or DEFAULT_EPHEMERIS

    path_raw = (path_arg or "").strip() or os.environ.get(ENV_EPHEMERIS_PATH, "").strip()
    if path_raw:
        p = Path(path_raw).expanduser()
        if p.exists():
            return EphemerisConfig(name=name, path=p, skip_reason=None)
        return EphemerisConfig(name=name, path=None, skip_reason=f"ephemeris_path not found: {p}")

    local = Path("data") / name
    if local.exists():
        return EphemerisConfig(name=name, path=local, skip_reason=None)

    return EphemerisConfig(
        name=name,
        path=None,
        skip_reason=(
            "ephemeris not found. set AMLICH_EPHEMERIS_PATH or provide --ephemeris-path, "
            "or place data/<ephemeris>."
        ),
    )


def resolve_date_range(args: argparse.Namespace) -> Tuple[Optional[date], Optional[date]]:
    if args.start and args.end:
        return parse_date(args.start), parse_date(args.end)
    if args.date:
        d = parse_date(args.date)
        return d, d
    return None, None


def dump_json(obj: object) -> None:
    print(json.dumps(obj, ensure_ascii=False, indent=2))


def skip(msg: str) -> None:
    print(f"SKIP: {msg}")
    sys.exit(0)
