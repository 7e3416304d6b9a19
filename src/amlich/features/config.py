# src/amlich/features/config.py
from __future__ import annotations

"""
Feature-level tables.

- Can Chi: 10 heavenly stems (can), 12 earthly branches (chi)
- 12 zodiac animals (Vietnamese cycle: the Cat takes the Rabbit's place)
- 24 solar terms (tiết khí), index 0 = spring equinox
- lunar month display names
- solar / lunar holidays keyed "MM-DD"

All tables are tuples / read-only mappings built once at import.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

# ============================================================
# Can Chi
#   index = (lunar_year - 4) mod 10 / mod 12
#   4 AD is Giáp Tý, the start of a sexagenary cycle.
# ============================================================

STEM_BRANCH_EPOCH_YEAR = 4

CAN: Tuple[str, ...] = (
    "Giáp", "Ất", "Bính", "Đinh", "Mậu",
    "Kỷ", "Canh", "Tân", "Nhâm", "Quý",
)

CHI: Tuple[str, ...] = (
    "Tý", "Sửu", "Dần", "Mão", "Thìn", "Tỵ",
    "Ngọ", "Mùi", "Thân", "Dậu", "Tuất", "Hợi",
)

ZODIAC_ANIMALS_EN: Tuple[str, ...] = (
    "Rat", "Ox", "Tiger", "Cat", "Dragon", "Snake",
    "Horse", "Goat", "Monkey", "Rooster", "Dog", "Pig",
)

ZODIAC_ANIMALS_VI: Tuple[str, ...] = (
    "Chuột", "Trâu", "Hổ", "Mèo", "Rồng", "Rắn",
    "Ngựa", "Dê", "Khỉ", "Gà", "Chó", "Lợn",
)

# ============================================================
# 24 solar terms
# ============================================================

SOLAR_TERMS: Tuple[str, ...] = (
    "Xuân Phân", "Thanh Minh", "Cốc Vũ", "Lập Hạ", "Tiểu Mãn", "Mang Chủng",
    "Hạ Chí", "Tiểu Thử", "Đại Thử", "Lập Thu", "Xử Thử", "Bạch Lộ",
    "Thu Phân", "Hàn Lộ", "Sương Giáng", "Lập Đông", "Tiểu Tuyết", "Đại Tuyết",
    "Đông Chí", "Tiểu Hàn", "Đại Hàn", "Lập Xuân", "Vũ Thủy", "Kinh Trập",
)

# ============================================================
# Lunar months
# ============================================================

LUNAR_MONTH_NAMES: Tuple[str, ...] = (
    "Giêng", "Hai", "Ba", "Tư", "Năm", "Sáu",
    "Bảy", "Tám", "Chín", "Mười", "Mười Một", "Chạp",
)

LEAP_SUFFIX = "nhuận"

WEEKDAYS: Tuple[str, ...] = (
    "Thứ Hai", "Thứ Ba", "Thứ Tư", "Thứ Năm", "Thứ Sáu", "Thứ Bảy", "Chủ Nhật",
)


# ============================================================
# Holidays
# ============================================================

@dataclass(frozen=True)
class HolidayInfo:
    name: str
    icon: str


SOLAR_HOLIDAYS: Mapping[str, HolidayInfo] = MappingProxyType({
    "01-01": HolidayInfo("Tết Dương Lịch", "🎊"),
    "02-14": HolidayInfo("Valentine", "💝"),
    "03-08": HolidayInfo("Quốc tế Phụ nữ", "👩"),
    "04-30": HolidayInfo("Giải phóng miền Nam", "🇻🇳"),
    "05-01": HolidayInfo("Quốc tế Lao động", "⚒️"),
    "06-01": HolidayInfo("Quốc tế Thiếu nhi", "👶"),
    "09-02": HolidayInfo("Quốc khánh", "🇻🇳"),
    "10-20": HolidayInfo("Ngày Phụ nữ VN", "👩"),
    "11-20": HolidayInfo("Ngày Nhà giáo VN", "👨‍🏫"),
    "12-24": HolidayInfo("Giáng sinh", "🎄"),
    "12-25": HolidayInfo("Giáng sinh", "🎅"),
})

LUNAR_HOLIDAYS: Mapping[str, HolidayInfo] = MappingProxyType({
    "01-01": HolidayInfo("Tết Nguyên Đán", "🎊"),
    "01-15": HolidayInfo("Tết Nguyên Tiêu", "🏮"),
    "03-10": HolidayInfo("Giỗ Tổ Hùng Vương", "🙏"),
    "04-15": HolidayInfo("Phật Đản", "🙏"),
    "05-05": HolidayInfo("Tết Đoan Ngọ", "🎋"),
    "07-15": HolidayInfo("Vu Lan", "🙏"),
    "08-15": HolidayInfo("Tết Trung Thu", "🥮"),
    "12-23": HolidayInfo("Ông Táo chầu trời", "🏠"),
})


def holiday_key(month: int, day: int) -> str:
    return f"{int(month):02d}-{int(day):02d}"


def parse_holiday_key(key: str) -> Tuple[int, int]:
    """'MM-DD' -> (month, day)"""
    mm, dd = key.split("-")
    return int(mm), int(dd)


# ============================================================
# Labels
# ============================================================

def lunar_month_name(month: int) -> str:
    m = int(month)
    if not (1 <= m <= 12):
        raise ValueError(f"invalid lunar month: {month}")
    return LUNAR_MONTH_NAMES[m - 1]


def lunar_month_display_name(month: int, is_leap: bool) -> str:
    base = f"Tháng {lunar_month_name(month)}"
    return f"{base} {LEAP_SUFFIX}" if is_leap else base


def format_lunar_label(day: int, month: int, year: int, is_leap: bool) -> str:
    """dd/mm/yyyy, with ' (nhuận)' for a leap month."""
    suffix = f" ({LEAP_SUFFIX})" if is_leap else ""
    return f"{int(day):02d}/{int(month):02d}/{int(year)}{suffix}"


def format_lunar_day_label(day: int, month: int) -> str:
    """Month grid cell: 'd/m' on the 1st and 15th, bare 'd' otherwise."""
    if day in (1, 15):
        return f"{day}/{month}"
    return f"{day}"


def solar_term_name(index: int) -> str:
    return SOLAR_TERMS[int(index) % 24]
