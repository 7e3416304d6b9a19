from __future__ import annotations

import pytest

from amlich.core.julian import to_julian_day
from amlich.features.canchi import (
    StemBranch,
    day_stem_branch,
    month_stem_branch,
    stem_branch_name,
    year_branch,
    year_stem_branch,
    zodiac_animal,
)


def test_year_names():
    assert stem_branch_name(1984) == "Giáp Tý"
    assert stem_branch_name(2020) == "Canh Tý"
    assert stem_branch_name(2023) == "Quý Mão"
    assert stem_branch_name(2024) == "Giáp Thìn"
    assert stem_branch_name(2025) == "Ất Tỵ"


def test_years_before_epoch():
    assert stem_branch_name(4) == "Giáp Tý"
    assert stem_branch_name(3) == "Quý Hợi"
    assert stem_branch_name(0) == "Canh Thân"
    assert year_stem_branch(-56) == year_stem_branch(4)
    assert zodiac_animal(-1) == "Goat"


def test_zodiac_animal():
    assert zodiac_animal(2020) == "Rat"
    assert zodiac_animal(2023) == "Cat"
    assert zodiac_animal(2023, "vi") == "Mèo"
    assert zodiac_animal(2024, "vi") == "Rồng"
    assert year_branch(2020) == "Tý"
    with pytest.raises(ValueError):
        zodiac_animal(2020, "fr")


def test_cycles_repeat():
    for y in range(-200, 3000):
        assert zodiac_animal(y) == zodiac_animal(y + 12)
        assert stem_branch_name(y) == stem_branch_name(y + 60)
        sb = year_stem_branch(y)
        assert 0 <= sb.stem <= 9
        assert 0 <= sb.branch <= 11
        # stem and branch share parity
        assert sb.stem % 2 == sb.branch % 2


def test_month_stem_branch():
    # Quý year starts with Giáp Dần
    assert month_stem_branch(1, 2023).name == "Giáp Dần"
    # Giáp year starts with Bính Dần
    assert month_stem_branch(1, 2024).name == "Bính Dần"
    assert month_stem_branch(11, 2023).branch == 0
    assert month_stem_branch(12, 2023).name.endswith("Sửu")


def test_day_stem_branch():
    assert day_stem_branch(to_julian_day(1, 1, 2000)).name == "Mậu Ngọ"
    assert day_stem_branch(2451545 + 60) == day_stem_branch(2451545)


def test_stem_branch_str():
    assert str(StemBranch(0, 0)) == "Giáp Tý"
