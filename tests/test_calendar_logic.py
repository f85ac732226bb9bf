from datetime import date, timedelta

import pytest

from calendar_logic import (
    INVALID_GREGORIAN,
    INVALID_JALALI,
    ConversionCache,
    GregorianDate,
    JalaliDate,
    days_in_jalali_month,
    gregorian_to_jalali,
    gregorian_weekday,
    is_leap_jalali_year,
    is_valid_jalali,
    jalali_day_of_year,
    jalali_month_range,
    jalali_to_gregorian,
    jalali_weekday,
    month_grid,
    month_name,
    month_name_short,
    next_month,
    prev_month,
)

LEAP_REMAINDERS = {1, 5, 9, 13, 17, 22, 26, 30}


# --------------------------- anchors ---------------------------

def test_nowruz_1403_anchor():
    assert gregorian_to_jalali(2024, 3, 20) == (1403, 1, 1)
    assert jalali_to_gregorian(1403, 1, 1) == (2024, 3, 20)


@pytest.mark.parametrize("gregorian, jalali", [
    ((2024, 3, 19), (1402, 12, 29)),
    ((2025, 3, 20), (1403, 12, 30)),
    ((2025, 3, 21), (1404, 1, 1)),
    ((2023, 3, 21), (1402, 1, 1)),
    ((2024, 2, 29), (1402, 12, 10)),
    ((2013, 3, 21), (1392, 1, 1)),
    ((2013, 5, 5), (1392, 2, 15)),
    ((1979, 2, 11), (1357, 11, 22)),
])
def test_known_dates(gregorian, jalali):
    assert gregorian_to_jalali(*gregorian) == jalali
    assert jalali_to_gregorian(*jalali) == gregorian


def test_results_are_typed_named_tuples():
    j = gregorian_to_jalali(2024, 3, 20)
    assert isinstance(j, JalaliDate)
    assert (j.year, j.month, j.day) == (1403, 1, 1)
    assert j.is_valid
    g = jalali_to_gregorian(1403, 1, 1)
    assert isinstance(g, GregorianDate)
    assert g.is_valid


# ----------------- year-adjustment regression -----------------

def _divergent_gregorian_to_jalali(gy, gm, gd):
    """Conversion using the 'previous year before March' day count."""
    g_d_m = [0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334]
    gy2 = gy if gm > 2 else gy - 1
    days = (355666 + 365 * gy2 + (gy2 + 3) // 4 - (gy2 + 99) // 100
            + (gy2 + 399) // 400 + gd + g_d_m[gm - 1])
    jy = -1595 + 33 * (days // 12053)
    days %= 12053
    jy += 4 * (days // 1461)
    days %= 1461
    if days > 365:
        jy += (days - 1) // 365
        days = (days - 1) % 365
    if days < 186:
        return jy, 1 + days // 31, 1 + days % 31
    return jy, 7 + (days - 186) // 30, 1 + (days - 186) % 30


def test_divergent_year_adjustment_misses_anchor():
    # The alternate formulation is one day short at the anchor
    assert _divergent_gregorian_to_jalali(2024, 3, 20) == (1402, 12, 29)
    assert gregorian_to_jalali(2024, 3, 20) == (1403, 1, 1)


# From March onward the variants part ways only in Gregorian leap years
@pytest.mark.parametrize("gy", range(2000, 2100, 4))
def test_march_dates_in_leap_years_disagree_with_divergent_variant(gy):
    for gd in range(1, 32):
        assert gregorian_to_jalali(gy, 3, gd) != _divergent_gregorian_to_jalali(gy, 3, gd)


def test_consecutive_days_stay_consecutive():
    """Walking Gregorian days must walk Jalali days one at a time."""
    d = date(1990, 1, 1)
    prev = gregorian_to_jalali(d.year, d.month, d.day)
    while d < date(2060, 12, 31):
        d += timedelta(days=1)
        cur = gregorian_to_jalali(d.year, d.month, d.day)
        if prev.day < days_in_jalali_month(prev.year, prev.month):
            expected = (prev.year, prev.month, prev.day + 1)
        else:
            y, m = next_month(prev.year, prev.month)
            expected = (y, m, 1)
        assert cur == expected, d
        assert jalali_to_gregorian(*cur) == (d.year, d.month, d.day)
        prev = cur


def test_nowruz_follows_last_day_of_esfand():
    for jy in range(1300, 1500):
        last = jalali_to_gregorian(jy, 12, days_in_jalali_month(jy, 12))
        nowruz = jalali_to_gregorian(jy + 1, 1, 1)
        assert date(*nowruz) - date(*last) == timedelta(days=1)


# --------------------------- round trip ---------------------------

def test_round_trip_every_valid_jalali_date():
    for jy in range(1, 3001):
        for jm in range(1, 13):
            for jd in range(1, days_in_jalali_month(jy, jm) + 1):
                g = jalali_to_gregorian(jy, jm, jd)
                assert gregorian_to_jalali(*g) == (jy, jm, jd)


def test_range_ends():
    last = jalali_to_gregorian(3000, 12, 30)
    assert last.is_valid
    after = date(*last) + timedelta(days=1)
    assert gregorian_to_jalali(after.year, after.month, after.day) == INVALID_JALALI

    first = jalali_to_gregorian(1, 1, 1)
    before = date(*first) - timedelta(days=1)
    assert gregorian_to_jalali(before.year, before.month, before.day) == INVALID_JALALI


# --------------------------- leap rule ---------------------------

def test_leap_years_follow_33_year_pattern():
    for y in range(1, 201):
        assert is_leap_jalali_year(y) == (y % 33 in LEAP_REMAINDERS)


def test_leap_rule_matches_year_lengths():
    for jy in range(1, 3000):
        start = date(*jalali_to_gregorian(jy, 1, 1))
        end = date(*jalali_to_gregorian(jy + 1, 1, 1))
        assert (end - start).days == (366 if is_leap_jalali_year(jy) else 365), jy


@pytest.mark.parametrize("jy, jm, days", [
    (1403, 1, 31), (1403, 6, 31), (1403, 7, 30), (1403, 11, 30),
    (1403, 12, 30), (1402, 12, 29), (1399, 12, 30), (1400, 12, 29),
])
def test_days_in_month(jy, jm, days):
    assert days_in_jalali_month(jy, jm) == days


# --------------------------- invalid input ---------------------------

@pytest.mark.parametrize("args", [
    (0, 1, 1), (3623, 1, 1), (2024, 0, 1), (2024, 13, 1), (2024, 1, 0),
    (2024, 1, 32), (2023, 2, 29), (2024, 4, 31), ("2024", 3, 20),
    (2024.0, 3, 20), (True, 1, 1), (None, 1, 1),
])
def test_invalid_gregorian_returns_sentinel(args):
    result = gregorian_to_jalali(*args)
    assert result == (0, 0, 0)
    assert not result.is_valid


@pytest.mark.parametrize("args", [
    (0, 1, 1), (3001, 1, 1), (1403, 0, 1), (1403, 13, 1), (1403, 1, 0),
    (1403, 1, 32), (1403, 7, 31), (1402, 12, 30), ("1403", 1, 1),
])
def test_invalid_jalali_returns_sentinel(args):
    assert jalali_to_gregorian(*args) == INVALID_GREGORIAN


def test_is_valid_jalali():
    assert is_valid_jalali(1403, 12, 30)
    assert not is_valid_jalali(1402, 12, 30)
    assert not is_valid_jalali(1403, 1, False)


# --------------------------- derived facts ---------------------------

def test_weekdays():
    # 2024-03-20 was a Wednesday
    assert gregorian_weekday(2024, 3, 20) == 3
    # Saturday-first: Sat=0 .. Wed=4
    assert jalali_weekday(1403, 1, 1) == 4
    assert jalali_weekday(1402, 12, 30) == -1


def test_gregorian_weekday_matches_datetime():
    d = date(1900, 1, 1)
    for _ in range(3000):
        assert gregorian_weekday(d.year, d.month, d.day) == (d.weekday() + 1) % 7
        d += timedelta(days=17)


def test_day_of_year():
    assert jalali_day_of_year(1403, 1, 1) == 1
    assert jalali_day_of_year(1403, 7, 1) == 187
    assert jalali_day_of_year(1403, 12, 30) == 366
    assert jalali_day_of_year(1402, 12, 30) == 0


def test_month_range():
    assert jalali_month_range(1403, 1) == ((2024, 3, 20), (2024, 4, 19))
    assert jalali_month_range(1401, 8) == ((2022, 10, 23), (2022, 11, 21))
    assert jalali_month_range(1403, 13) == (INVALID_GREGORIAN, INVALID_GREGORIAN)


def test_month_grid_starts_on_saturday():
    grid = month_grid(1403, 1)
    assert len(grid) == 6
    assert all(len(row) == 7 for row in grid)
    assert grid[0] == [None, None, None, None, 1, 2, 3]
    days = [d for row in grid for d in row if d is not None]
    assert days == list(range(1, 32))


def test_month_grid_invalid_month_is_empty():
    grid = month_grid(0, 1)
    assert all(d is None for row in grid for d in row)


def test_month_names():
    assert month_name(1) == "فروردین"
    assert month_name(12) == "اسفند"
    assert month_name(0) == ""
    assert month_name_short(8) == "آبا"
    assert month_name_short(13) == ""


def test_prev_next_month_wrap():
    assert prev_month(1403, 1) == (1402, 12)
    assert prev_month(1403, 5) == (1403, 4)
    assert next_month(1403, 12) == (1404, 1)
    assert next_month(1403, 5) == (1403, 6)


def test_conversion_cache_is_per_instance():
    a = ConversionCache()
    b = ConversionCache()
    assert a.to_jalali(2024, 3, 20) == (1403, 1, 1)
    assert a.to_jalali(2024, 3, 20) == (1403, 1, 1)
    assert len(a) == 1
    assert len(b) == 0
    a.clear()
    assert len(a) == 0
