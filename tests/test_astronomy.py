from __future__ import annotations

from amlich.core.astronomy import new_moon_day, new_moon_jd, solar_term, sun_longitude
from amlich.core.julian import to_julian_day
from amlich.core.solstice_anchor import lunar_month_11


def test_sun_longitude_sectors_mid_season():
    # ~280 deg, ~99 deg, ~188 deg
    assert sun_longitude(to_julian_day(1, 1, 2023), 7.0) == 9
    assert sun_longitude(to_julian_day(1, 7, 2023), 7.0) == 3
    assert sun_longitude(to_julian_day(1, 10, 2023), 7.0) == 6


def test_sun_longitude_stays_in_range():
    start = to_julian_day(1, 1, 1800)
    for jdn in range(start, start + 3 * 365 * 100, 37):
        assert 0 <= sun_longitude(jdn, 7.0) <= 11
        assert 0 <= solar_term(jdn, 7.0) <= 23


def test_solar_term_index():
    # Hạ Chí (90 deg) .. Tiểu Thử (105 deg)
    assert solar_term(to_julian_day(1, 7, 2023), 7.0) == 6
    # Đông Chí (270 deg) .. Tiểu Hàn (285 deg)
    assert solar_term(to_julian_day(1, 1, 2023), 7.0) == 18


def test_new_moon_day_tet_2023():
    # new moon 2023-01-21 20:53 UTC
    k = 1522
    assert new_moon_day(k, 7.0) == to_julian_day(22, 1, 2023)
    assert new_moon_day(k, 0.0) == to_julian_day(21, 1, 2023)
    assert abs(new_moon_jd(k) - 2459966.37) < 0.05


def test_lunations_are_29_or_30_days():
    for k in range(-1200, 2400):
        n = new_moon_day(k + 1, 7.0) - new_moon_day(k, 7.0)
        assert n in (29, 30)


def test_lunar_month_11_contains_winter_solstice():
    for year in range(1900, 2101):
        a11 = lunar_month_11(year, 7.0)
        dec = to_julian_day(31, 12, year)
        assert dec - 60 < a11 <= dec
        # the anchor starts before the sun reaches 270 deg
        assert sun_longitude(a11, 7.0) < 9


def test_lunar_month_11_is_memoised():
    lunar_month_11.cache_clear()
    lunar_month_11(2023, 7.0)
    lunar_month_11(2023, 7.0)
    assert lunar_month_11.cache_info().hits >= 1
