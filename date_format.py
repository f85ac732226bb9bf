"""Jalali date formatting with PHP ``date()``-style pattern letters.

Instants are resolved to civil time in a timezone (Tehran unless told
otherwise) before the Gregorian day is converted, so the Jalali date always
matches the wall clock of that zone.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, timezone as dt_timezone
from typing import Iterable, NamedTuple

from calendar_logic import (
    ORDINAL_SUFFIX,
    WEEKDAY_ABBR,
    WEEKDAY_NAMES,
    ConversionCache,
    days_in_gregorian_month,
    is_leap_gregorian_year,
    month_name,
)
from clock import resolve_instant
from digits import to_persian_digits

logger = logging.getLogger(__name__)

_MULTI_SPACE = re.compile(r"\s{2,}")

_TIME_UNITS = {
    "second": "ثانیه",
    "min": "دقیقه",
    "minute": "دقیقه",
    "hour": "ساعت",
    "day": "روز",
    "week": "هفته",
    "month": "ماه",
    "year": "سال",
}
_TIME_UNIT_RE = re.compile(
    r"\b(" + "|".join(sorted(_TIME_UNITS, key=len, reverse=True)) + r")s?\b",
    re.IGNORECASE,
)


class MonthEntry(NamedTuple):
    year: int
    month: int
    text: str
    value: str


def _utc_offset(dt: datetime, colon: bool) -> str:
    offset = dt.utcoffset()
    seconds = int(offset.total_seconds()) if offset is not None else 0
    sign = "-" if seconds < 0 else "+"
    hours, minutes = divmod(abs(seconds) // 60, 60)
    sep = ":" if colon else ""
    return f"{sign}{hours:02d}{sep}{minutes:02d}"


def _swatch(dt: datetime) -> str:
    # Internet time is defined on UTC+1
    utc = dt.astimezone(dt_timezone.utc)
    seconds = (utc.hour * 3600 + utc.minute * 60 + utc.second + 3600) % 86400
    return f"{int(seconds / 86.4):03d}"


def _gregorian_token(dt: datetime, ch: str) -> str:
    """Render a PHP date() letter from the civil Gregorian datetime.

    Unknown letters are returned unchanged.
    """
    if ch == "U":
        return str(int(dt.timestamp()))
    if ch == "e":
        return str(getattr(dt.tzinfo, "key", None) or dt.tzname() or "")
    if ch == "T":
        return dt.tzname() or ""
    if ch == "O":
        return _utc_offset(dt, colon=False)
    if ch == "P":
        return _utc_offset(dt, colon=True)
    if ch == "p":
        offset = dt.utcoffset()
        return "Z" if not offset else _utc_offset(dt, colon=True)
    if ch == "Z":
        offset = dt.utcoffset()
        return str(int(offset.total_seconds()) if offset is not None else 0)
    if ch == "u":
        return f"{dt.microsecond:06d}"
    if ch == "v":
        return f"{dt.microsecond // 1000:03d}"
    if ch == "z":
        return str(dt.timetuple().tm_yday - 1)
    if ch == "t":
        return str(days_in_gregorian_month(dt.year, dt.month))
    if ch == "L":
        return "1" if is_leap_gregorian_year(dt.year) else "0"
    if ch == "W":
        return f"{dt.isocalendar()[1]:02d}"
    if ch == "o":
        return str(dt.isocalendar()[0])
    if ch == "I":
        dst = dt.dst()
        return "1" if dst else "0"
    if ch == "B":
        return _swatch(dt)
    if ch == "c":
        return dt.isoformat(timespec="seconds")
    if ch == "r":
        return dt.strftime("%a, %d %b %Y %H:%M:%S ") + _utc_offset(dt, colon=False)
    return ch


def format_date(pattern: str, instant=None, timezone=None,
                persian_digits: bool = False, cache: ConversionCache | None = None) -> str:
    """Format *instant* as a Jalali date according to *pattern*.

    Pattern letters follow PHP's date(): ``Y y m n d j F M l D w N S`` come
    from the Jalali calendar, ``H G h g i s`` are always 24-hour, ``a A``
    produce nothing, and any other letter is rendered from the civil
    Gregorian datetime.  A backslash emits the next character literally.
    """
    dt = resolve_instant(instant, timezone)
    if cache is None:
        cache = ConversionCache()
    jy, jm, jd = cache.to_jalali(dt.year, dt.month, dt.day)
    if jy == 0:
        logger.debug("%s is outside the Jalali range, formatting zeros", dt.date())
    # Sunday-based weekday, as PHP's date('w')
    w = (dt.weekday() + 1) % 7

    out: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        i += 1
        if ch == "\\":
            if i < n:
                out.append(pattern[i])
                i += 1
            continue

        if ch == "Y":
            out.append(f"{jy:04d}")
        elif ch == "y":
            out.append(f"{jy:04d}"[-2:])
        elif ch == "m":
            out.append(f"{jm:02d}")
        elif ch == "n":
            out.append(str(jm))
        elif ch in "FM":
            out.append(month_name(jm))
        elif ch == "d":
            out.append(f"{jd:02d}")
        elif ch == "j":
            out.append(str(jd))
        elif ch == "l":
            out.append(WEEKDAY_NAMES[w])
        elif ch == "D":
            out.append(WEEKDAY_ABBR[w])
        elif ch == "w":
            out.append(str(w))
        elif ch == "N":
            out.append(str(7 if w == 0 else w))
        elif ch == "S":
            out.append(ORDINAL_SUFFIX)
        elif ch in "Hh":
            out.append(f"{dt.hour:02d}")
        elif ch in "Gg":
            out.append(str(dt.hour))
        elif ch == "i":
            out.append(f"{dt.minute:02d}")
        elif ch == "s":
            out.append(f"{dt.second:02d}")
        elif ch in "aA":
            continue
        else:
            out.append(_gregorian_token(dt, ch))

    # Dropped meridiem letters leave double spaces behind
    result = _MULTI_SPACE.sub(" ", "".join(out)).strip()
    return to_persian_digits(result) if persian_digits else result


def translate_time_units(text: str, persian_digits: bool = False) -> str:
    """Replace English time units ("5 mins", "2 days") with Persian words."""
    result = _TIME_UNIT_RE.sub(lambda m: _TIME_UNITS[m.group(1).lower()], text)
    return to_persian_digits(result) if persian_digits else result


def jalali_months(dates: Iterable, persian_digits: bool = False,
                  cache: ConversionCache | None = None) -> list[MonthEntry]:
    """Return the distinct Jalali months covering *dates*, newest first.

    *dates* may hold ``date`` objects (taken as civil days) or any instant
    accepted by :func:`clock.resolve_instant`.
    """
    if cache is None:
        cache = ConversionCache()
    months: dict[str, MonthEntry] = {}
    for value in dates:
        if isinstance(value, date) and not isinstance(value, datetime):
            g = (value.year, value.month, value.day)
        else:
            dt = resolve_instant(value)
            g = (dt.year, dt.month, dt.day)
        jy, jm, _jd = cache.to_jalali(*g)
        if jy == 0:
            logger.debug("Skipping %r: outside the Jalali range", value)
            continue
        key = f"{jy:04d}{jm:02d}"
        if key not in months:
            year_text = to_persian_digits(jy) if persian_digits else str(jy)
            months[key] = MonthEntry(jy, jm, f"{month_name(jm)} {year_text}", key)
    return [months[k] for k in sorted(months, reverse=True)]
