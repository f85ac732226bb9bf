"""Clock and timezone helpers anchored on ``Asia/Tehran``.

Everything that needs "now" or has to turn a caller-supplied instant into
a civil datetime goes through :func:`resolve_instant`, so the formatter and
the calendar widget agree on where civil day boundaries fall.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone, tzinfo
from typing import Callable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import parser as date_parser

from digits import to_ascii_digits

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "Asia/Tehran"


def get_timezone(tz: str | tzinfo | None = None) -> tzinfo:
    """Return a tzinfo for *tz*, falling back to the Tehran anchor."""
    if tz is None:
        return ZoneInfo(DEFAULT_TIMEZONE)
    if isinstance(tz, tzinfo):
        return tz
    try:
        return ZoneInfo(str(tz).strip())
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, using %s", tz, DEFAULT_TIMEZONE)
        return ZoneInfo(DEFAULT_TIMEZONE)


def now(tz: str | tzinfo | None = None) -> datetime:
    """Return the current aware datetime in *tz*."""
    return datetime.now(get_timezone(tz))


def _from_timestamp(value: float, tz: tzinfo) -> datetime:
    return datetime.fromtimestamp(value, tz=timezone.utc).astimezone(tz)


def _attach(value: datetime, tz: tzinfo) -> datetime:
    # Naive datetimes are civil time in the target zone, not UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def _fallback(zone: tzinfo, now_fn: Callable[[], datetime] | None) -> datetime:
    if now_fn is None:
        return datetime.now(zone)
    return _attach(now_fn(), zone)


def resolve_instant(instant=None, tz: str | tzinfo | None = None,
                    now_fn: Callable[[], datetime] | None = None) -> datetime:
    """Resolve *instant* into an aware civil datetime in *tz*.

    Accepts None (now), datetime, date, Unix timestamps (int, float or a
    numeric string) and free-form date strings.  Anything that cannot be
    understood resolves to now, read from *now_fn* when given; this
    function never raises.
    """
    zone = get_timezone(tz)
    if instant is None:
        return _fallback(zone, now_fn)

    try:
        if isinstance(instant, datetime):
            return _attach(instant, zone)
        if isinstance(instant, date):
            return datetime(instant.year, instant.month, instant.day, tzinfo=zone)
        if isinstance(instant, (int, float)) and not isinstance(instant, bool):
            return _from_timestamp(instant, zone)
        if isinstance(instant, str):
            text = to_ascii_digits(instant).strip()
            try:
                return _from_timestamp(float(text), zone)
            except ValueError:
                pass
            return _attach(date_parser.parse(text), zone)
    except (ValueError, OverflowError, OSError) as exc:
        # dateutil's ParserError is a ValueError
        logger.debug("Unparseable instant %r (%s), using now", instant, exc)
        return _fallback(zone, now_fn)

    logger.debug("Unsupported instant type %s, using now", type(instant).__name__)
    return _fallback(zone, now_fn)
