# src/amlich/features/canchi.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from amlich.features.config import (
    CAN,
    CHI,
    STEM_BRANCH_EPOCH_YEAR,
    ZODIAC_ANIMALS_EN,
    ZODIAC_ANIMALS_VI,
)

ZodiacLang = Literal["en", "vi"]


@dataclass(frozen=True)
class StemBranch:
    """
    One position of the sexagenary cycle.

    - stem: index into CAN (0..9)
    - branch: index into CHI (0..11)
    """
    stem: int
    branch: int

    @property
    def name(self) -> str:
        return f"{CAN[self.stem]} {CHI[self.branch]}"

    def __str__(self) -> str:
        return self.name


def year_stem_branch(lunar_year: int) -> StemBranch:
    # Python's % is a floor-mod, so years before 4 AD stay in range.
    n = int(lunar_year) - STEM_BRANCH_EPOCH_YEAR
    return StemBranch(stem=n % 10, branch=n % 12)


def stem_branch_name(lunar_year: int) -> str:
    """Can Chi name of a lunar year, e.g. 2023 -> 'Quý Mão'."""
    return year_stem_branch(lunar_year).name


def year_branch(lunar_year: int) -> str:
    """Earthly branch of a lunar year, e.g. 2020 -> 'Tý'."""
    return CHI[year_stem_branch(lunar_year).branch]


def zodiac_animal(lunar_year: int, lang: ZodiacLang = "en") -> str:
    """
    Zodiac animal of a lunar year, e.g. 2020 -> 'Rat'.

    lang="vi" returns the Vietnamese animal name ('Chuột').
    """
    idx = year_stem_branch(lunar_year).branch
    if lang == "en":
        return ZODIAC_ANIMALS_EN[idx]
    if lang == "vi":
        return ZODIAC_ANIMALS_VI[idx]
    raise ValueError(f"lang must be 'en' or 'vi' (got {lang!r})")


def month_stem_branch(lunar_month: int, lunar_year: int) -> StemBranch:
    """
    Can Chi of a lunar month. Month 1 is always a Dần month; its stem follows
    the year stem (Giáp/Kỷ years start with Bính Dần, and so on).
    """
    m = int(lunar_month)
    return StemBranch(stem=(int(lunar_year) * 12 + m + 3) % 10, branch=(m + 1) % 12)


def day_stem_branch(jdn: int) -> StemBranch:
    """Can Chi of the civil day with Julian Day Number jdn."""
    return StemBranch(stem=(int(jdn) + 9) % 10, branch=(int(jdn) + 1) % 12)
