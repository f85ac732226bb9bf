"""Pure Jalali calendar calculations with no UI dependencies.

Gregorian <-> Jalali conversion works on a day count since a fixed epoch,
decomposed through the 33-year Jalali cycle (12053 days) and the
400/100/4-year Gregorian cycles.  Invalid input never raises: the
conversions return the ``(0, 0, 0)`` sentinel instead.
"""

from __future__ import annotations

from typing import NamedTuple

MIN_YEAR = 1
MAX_YEAR = 3000
# Gregorian year containing the last day of Jalali year MAX_YEAR
MAX_GREGORIAN_YEAR = 3622

# Cumulative days before each Gregorian month in a common year
_G_DAYS_BEFORE_MONTH = (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334)
_G_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

_JALALI_EPOCH_OFFSET = 355666
_GREGORIAN_EPOCH_OFFSET = -355668
_JALALI_YEAR_OFFSET = 1595
_JALALI_33_YEAR_DAYS = 12053
_JALALI_33_YEAR_LEAP_DAYS = 8
_GREGORIAN_400_YEAR_DAYS = 146097
_GREGORIAN_100_YEAR_DAYS = 36524
_FOUR_YEAR_DAYS = 1461
# First 6 Jalali months have 31 days
_FIRST_HALF_DAYS = 186

_JALALI_LEAP_REMAINDERS = frozenset((1, 5, 9, 13, 17, 22, 26, 30))

MONTH_NAMES = [
    "فروردین", "اردیبهشت", "خرداد", "تیر", "مرداد", "شهریور",
    "مهر", "آبان", "آذر", "دی", "بهمن", "اسفند",
]
MONTH_NAMES_SHORT = [
    "فرو", "ارد", "خرد", "تیر", "مرد", "شهر",
    "مهر", "آبا", "آذر", "دی", "بهم", "اسف",
]

# Indexed by the Sunday-based weekday (0=Sunday .. 6=Saturday)
WEEKDAY_NAMES = [
    "یکشنبه", "دوشنبه", "سه‌شنبه", "چهارشنبه", "پنجشنبه", "جمعه", "شنبه",
]
WEEKDAY_ABBR = ["ی", "د", "س", "چ", "پ", "ج", "ش"]

# Grid header, Saturday first
DAY_ABBR = ["ش", "ی", "د", "س", "چ", "پ", "ج"]

ORDINAL_SUFFIX = "ام"


class JalaliDate(NamedTuple):
    year: int
    month: int
    day: int

    @property
    def is_valid(self) -> bool:
        return self != INVALID_JALALI


class GregorianDate(NamedTuple):
    year: int
    month: int
    day: int

    @property
    def is_valid(self) -> bool:
        return self != INVALID_GREGORIAN


class TimeOfDay(NamedTuple):
    hour: int
    minute: int


INVALID_JALALI = JalaliDate(0, 0, 0)
INVALID_GREGORIAN = GregorianDate(0, 0, 0)


def _is_int(*values) -> bool:
    return all(isinstance(v, int) and not isinstance(v, bool) for v in values)


# ------------------------------------------------------------------
# Leap years and month lengths
# ------------------------------------------------------------------
def is_leap_jalali_year(jy: int) -> bool:
    """Return True if *jy* falls on a leap position of the 33-year cycle."""
    return jy % 33 in _JALALI_LEAP_REMAINDERS


def days_in_jalali_month(jy: int, jm: int) -> int:
    """Return the length of a Jalali month (31, 30, or 29/30 for Esfand)."""
    if jm <= 6:
        return 31
    if jm <= 11:
        return 30
    return 30 if is_leap_jalali_year(jy) else 29


def is_leap_gregorian_year(gy: int) -> bool:
    return (gy % 4 == 0 and gy % 100 != 0) or gy % 400 == 0


def days_in_gregorian_month(gy: int, gm: int) -> int:
    if gm == 2 and is_leap_gregorian_year(gy):
        return 29
    return _G_DAYS_IN_MONTH[gm - 1]


def is_valid_jalali(jy: int, jm: int, jd: int) -> bool:
    """Return True if the triple names a real Jalali day in [1, 3000]."""
    if not _is_int(jy, jm, jd):
        return False
    if not (MIN_YEAR <= jy <= MAX_YEAR and 1 <= jm <= 12):
        return False
    return 1 <= jd <= days_in_jalali_month(jy, jm)


def is_valid_gregorian(gy: int, gm: int, gd: int) -> bool:
    """Return True if the triple names a real Gregorian day.

    Only the calendar rules are checked here; ``gregorian_to_jalali``
    additionally rejects days outside Jalali years [1, 3000].
    """
    if not _is_int(gy, gm, gd):
        return False
    if not (MIN_YEAR <= gy <= MAX_GREGORIAN_YEAR and 1 <= gm <= 12):
        return False
    return 1 <= gd <= days_in_gregorian_month(gy, gm)


# ------------------------------------------------------------------
# Conversion
# ------------------------------------------------------------------
def gregorian_to_jalali(gy: int, gm: int, gd: int) -> JalaliDate:
    """Convert a Gregorian date to Jalali, or return ``INVALID_JALALI``."""
    if not is_valid_gregorian(gy, gm, gd):
        return INVALID_JALALI

    # The leap-day terms count through the *next* year once February is
    # over.  Counting through the previous year before March instead
    # (with 365 * that year) lands one day early: 2024-03-20 would come
    # out as 1402-12-29 rather than 1403-01-01.
    gy2 = gy + 1 if gm > 2 else gy
    days = (
        _JALALI_EPOCH_OFFSET
        + 365 * gy
        + (gy2 + 3) // 4
        - (gy2 + 99) // 100
        + (gy2 + 399) // 400
        + gd
        + _G_DAYS_BEFORE_MONTH[gm - 1]
    )

    jy = -_JALALI_YEAR_OFFSET + 33 * (days // _JALALI_33_YEAR_DAYS)
    days %= _JALALI_33_YEAR_DAYS
    jy += 4 * (days // _FOUR_YEAR_DAYS)
    days %= _FOUR_YEAR_DAYS
    if days > 365:
        jy += (days - 1) // 365
        days = (days - 1) % 365

    if days < _FIRST_HALF_DAYS:
        jm = 1 + days // 31
        jd = 1 + days % 31
    else:
        jm = 7 + (days - _FIRST_HALF_DAYS) // 30
        jd = 1 + (days - _FIRST_HALF_DAYS) % 30
    if not MIN_YEAR <= jy <= MAX_YEAR:
        return INVALID_JALALI
    return JalaliDate(jy, jm, jd)


def jalali_to_gregorian(jy: int, jm: int, jd: int) -> GregorianDate:
    """Convert a Jalali date to Gregorian, or return ``INVALID_GREGORIAN``."""
    if not is_valid_jalali(jy, jm, jd):
        return INVALID_GREGORIAN

    jy2 = jy + _JALALI_YEAR_OFFSET
    days = (
        _GREGORIAN_EPOCH_OFFSET
        + 365 * jy2
        + (jy2 // 33) * _JALALI_33_YEAR_LEAP_DAYS
        + (jy2 % 33 + 3) // 4
        + jd
    )
    if jm < 7:
        days += (jm - 1) * 31
    else:
        days += (jm - 7) * 30 + _FIRST_HALF_DAYS

    gy = 400 * (days // _GREGORIAN_400_YEAR_DAYS)
    days %= _GREGORIAN_400_YEAR_DAYS
    if days > _GREGORIAN_100_YEAR_DAYS:
        days -= 1
        gy += 100 * (days // _GREGORIAN_100_YEAR_DAYS)
        days %= _GREGORIAN_100_YEAR_DAYS
        if days >= 365:
            days += 1
    gy += 4 * (days // _FOUR_YEAR_DAYS)
    days %= _FOUR_YEAR_DAYS
    if days > 365:
        gy += (days - 1) // 365
        days = (days - 1) % 365

    gd = days + 1
    gm = 1
    while gm < 12 and gd > days_in_gregorian_month(gy, gm):
        gd -= days_in_gregorian_month(gy, gm)
        gm += 1
    return GregorianDate(gy, gm, gd)


class ConversionCache:
    """Per-owner memo of Gregorian -> Jalali conversions."""

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: dict[tuple[int, int, int], JalaliDate] = {}

    def to_jalali(self, gy: int, gm: int, gd: int) -> JalaliDate:
        key = (gy, gm, gd)
        result = self._entries.get(key)
        if result is None:
            result = gregorian_to_jalali(gy, gm, gd)
            self._entries[key] = result
        return result

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()


# ------------------------------------------------------------------
# Derived calendar facts
# ------------------------------------------------------------------
def gregorian_weekday(gy: int, gm: int, gd: int) -> int:
    """Return the Sunday-based weekday (0=Sunday .. 6=Saturday)."""
    # Sakamoto's method; valid for any proleptic Gregorian date
    offsets = (0, 3, 2, 5, 0, 3, 5, 1, 4, 6, 2, 4)
    y = gy - 1 if gm < 3 else gy
    return (y + y // 4 - y // 100 + y // 400 + offsets[gm - 1] + gd) % 7


def jalali_weekday(jy: int, jm: int, jd: int) -> int:
    """Return the Saturday-first weekday index (0=Saturday .. 6=Friday).

    Returns -1 for an invalid date.
    """
    g = jalali_to_gregorian(jy, jm, jd)
    if not g.is_valid:
        return -1
    return (gregorian_weekday(*g) + 1) % 7


def jalali_day_of_year(jy: int, jm: int, jd: int) -> int:
    """Return the 1-based day-of-year for a Jalali date (0 if invalid)."""
    if not is_valid_jalali(jy, jm, jd):
        return 0
    if jm <= 7:
        return (jm - 1) * 31 + jd
    return _FIRST_HALF_DAYS + (jm - 7) * 30 + jd


def jalali_month_range(jy: int, jm: int) -> tuple[GregorianDate, GregorianDate]:
    """Return the first and last Gregorian day covered by a Jalali month."""
    if not is_valid_jalali(jy, jm, 1):
        return INVALID_GREGORIAN, INVALID_GREGORIAN
    first = jalali_to_gregorian(jy, jm, 1)
    last = jalali_to_gregorian(jy, jm, days_in_jalali_month(jy, jm))
    return first, last


def month_name(jm: int) -> str:
    """Return the full Persian month name, or '' when out of range."""
    if _is_int(jm) and 1 <= jm <= 12:
        return MONTH_NAMES[jm - 1]
    return ""


def month_name_short(jm: int) -> str:
    if _is_int(jm) and 1 <= jm <= 12:
        return MONTH_NAMES_SHORT[jm - 1]
    return ""


def month_grid(jy: int, jm: int) -> list[list[int | None]]:
    """Return a 6×7 grid for the given Jalali month.

    Each cell is a day number (1–31) or None for empty slots.
    Weeks start on Saturday.
    Always 6 rows so the calendar height stays constant.
    """
    lead = jalali_weekday(jy, jm, 1)
    if lead < 0:
        return [[None] * 7 for _ in range(6)]
    cells: list[int | None] = [None] * lead
    cells.extend(range(1, days_in_jalali_month(jy, jm) + 1))
    cells.extend([None] * (42 - len(cells)))
    return [cells[i:i + 7] for i in range(0, 42, 7)]


def prev_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month earlier."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def next_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month later."""
    if month == 12:
        return year + 1, 1
    return year, month + 1
