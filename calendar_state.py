"""Date-picker state machine: view month, selection and change events.

The tkinter widget drives one :class:`CalendarState`; every committed
mutation calls ``on_select`` synchronously with a :class:`ChangeEvent`.
Rejected commits, and commits that change nothing, leave the state
untouched and fire nothing.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Callable, NamedTuple

import clock
from calendar_logic import (
    MAX_YEAR,
    MIN_YEAR,
    GregorianDate,
    JalaliDate,
    TimeOfDay,
    days_in_jalali_month,
    gregorian_to_jalali,
    is_valid_jalali,
    jalali_to_gregorian,
    jalali_weekday,
    next_month,
    prev_month,
)
from digits import to_ascii_digits

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"[+-]?[0-9]+")


class ViewState(NamedTuple):
    year: int
    month: int


class Selection(NamedTuple):
    date: JalaliDate
    time: TimeOfDay


class DayCell(NamedTuple):
    day: int | None
    today: bool = False
    selected: bool = False


class ChangeEvent(NamedTuple):
    jalali: JalaliDate
    gregorian: GregorianDate
    time: TimeOfDay
    instant: datetime


def parse_int(value) -> int | None:
    """Parse user input (ASCII or Persian digits) as an int, or None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = to_ascii_digits(value).strip()
    if not _INT_RE.fullmatch(text):
        return None
    return int(text)


def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


class FieldTexts:
    """Text last written into each input field from the state.

    A commit whose field text still matches is a blur of an untouched
    field, not an edit.
    """

    __slots__ = ("_texts",)

    def __init__(self) -> None:
        self._texts: dict[str, str] = {}

    def mark(self, name: str, text: str) -> str:
        self._texts[name] = text
        return text

    def edited(self, name: str, text: str) -> bool:
        return self._texts.get(name) != text


class CalendarState:
    """View/selection state of one Jalali date picker."""

    def __init__(
        self,
        initial_instant=None,
        on_select: Callable[[ChangeEvent], None] | None = None,
        clock_fn: Callable[[], datetime] | None = None,
    ) -> None:
        self._clock = clock_fn or clock.now
        self._on_select = on_select
        self.view, self.selection = self._derive(
            self._clock() if initial_instant is None else initial_instant
        )

    def _derive(self, instant) -> tuple[ViewState, Selection]:
        dt = clock.resolve_instant(instant, now_fn=self._clock)
        j = gregorian_to_jalali(dt.year, dt.month, dt.day)
        if not j.is_valid:
            logger.debug("Instant %r is outside the Jalali range, using now", instant)
            dt = clock.resolve_instant(self._clock())
            j = gregorian_to_jalali(dt.year, dt.month, dt.day)
        return (
            ViewState(j.year, j.month),
            Selection(j, TimeOfDay(dt.hour, dt.minute)),
        )

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def selected_instant(self) -> datetime:
        """Return the selection as an aware datetime in the anchor zone."""
        g = jalali_to_gregorian(*self.selection.date)
        t = self.selection.time
        return datetime(g.year, g.month, g.day, t.hour, t.minute,
                        tzinfo=clock.get_timezone())

    def change_event(self) -> ChangeEvent:
        return ChangeEvent(
            jalali=self.selection.date,
            gregorian=jalali_to_gregorian(*self.selection.date),
            time=self.selection.time,
            instant=self.selected_instant(),
        )

    def _commit(self, selection: Selection) -> None:
        self.selection = selection
        if self._on_select is not None:
            self._on_select(self.change_event())

    # ------------------------------------------------------------------
    # Navigation (view only)
    # ------------------------------------------------------------------
    def navigate_prev_month(self) -> None:
        self.view = ViewState(*prev_month(*self.view))

    def navigate_next_month(self) -> None:
        self.view = ViewState(*next_month(*self.view))

    def navigate_year(self, direction: int) -> None:
        self.view = ViewState(self.view.year + direction, self.view.month)

    # ------------------------------------------------------------------
    # Committed edits
    # ------------------------------------------------------------------
    def select_day(self, day: int) -> bool:
        """Select *day* of the viewed month; False if it does not exist."""
        year, month = self.view
        if (isinstance(day, bool) or not isinstance(day, int)
                or not MIN_YEAR <= year <= MAX_YEAR
                or not 1 <= day <= days_in_jalali_month(year, month)):
            logger.debug("Rejected day %r for %d/%d", day, year, month)
            return False
        self._commit(self.selection._replace(date=JalaliDate(year, month, day)))
        return True

    def _set_date(self, year: int, month: int, day: int) -> bool:
        if not is_valid_jalali(year, month, day):
            logger.debug("Rejected date %d/%d/%d", year, month, day)
            return False
        self.view = ViewState(year, month)
        date = JalaliDate(year, month, day)
        if date != self.selection.date:
            self._commit(self.selection._replace(date=date))
        return True

    def _fit_day(self, year: int, month: int) -> int:
        # Esfand 30 and day 31 shrink to the last day of the target month
        if not MIN_YEAR <= year <= MAX_YEAR:
            return self.selection.date.day
        return min(self.selection.date.day, days_in_jalali_month(year, month))

    def set_year(self, text) -> bool:
        year = parse_int(text)
        if year is None:
            logger.debug("Rejected year input %r", text)
            return False
        year = _clamp(year, MIN_YEAR, MAX_YEAR)
        month = self.view.month
        return self._set_date(year, month, self._fit_day(year, month))

    def set_month(self, value) -> bool:
        month = parse_int(value)
        if month is None:
            logger.debug("Rejected month input %r", value)
            return False
        month = _clamp(month, 1, 12)
        year = self.view.year
        return self._set_date(year, month, self._fit_day(year, month))

    def set_day(self, text) -> bool:
        day = parse_int(text)
        if day is None:
            logger.debug("Rejected day input %r", text)
            return False
        day = _clamp(day, 1, 31)
        return self._set_date(self.view.year, self.view.month, day)

    def _set_time(self, time: TimeOfDay) -> bool:
        if time == self.selection.time:
            return False
        self._commit(self.selection._replace(time=time))
        return True

    def set_hour(self, value) -> bool:
        """Commit the hour; False when the clamped value is unchanged."""
        hour = parse_int(value)
        if hour is None:
            hour = self.selection.time.hour
        return self._set_time(self.selection.time._replace(hour=_clamp(hour, 0, 23)))

    def set_minute(self, value) -> bool:
        minute = parse_int(value)
        if minute is None:
            minute = self.selection.time.minute
        return self._set_time(self.selection.time._replace(minute=_clamp(minute, 0, 59)))

    def now(self) -> None:
        """Reset view and selection to the current instant."""
        self.view, selection = self._derive(self._clock())
        self._commit(selection)

    # ------------------------------------------------------------------
    # Month grid
    # ------------------------------------------------------------------
    def today(self) -> JalaliDate:
        dt = clock.resolve_instant(self._clock())
        return gregorian_to_jalali(dt.year, dt.month, dt.day)

    def month_cells(self, today: JalaliDate | None = None) -> list[DayCell]:
        """Return leading blanks then one cell per day of the viewed month."""
        year, month = self.view
        lead = jalali_weekday(year, month, 1)
        if lead < 0:
            return []
        if today is None:
            today = self.today()
        sel = self.selection.date
        cells = [DayCell(None)] * lead
        for day in range(1, days_in_jalali_month(year, month) + 1):
            d = JalaliDate(year, month, day)
            cells.append(DayCell(day, today=d == today, selected=d == sel))
        return cells
