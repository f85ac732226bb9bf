"""Jalali date/time picker widget (tkinter).

Text fields have two input channels: keystrokes only edit the text, while
focus-out, Return, and the Up/Down arrows commit it to the
:class:`~calendar_state.CalendarState` when the text differs from what the
widget last displayed.  A rejected commit puts the last valid value back
into the field.
"""

from __future__ import annotations

import logging
import tkinter as tk
from datetime import datetime
from tkinter import font as tkfont
from typing import Callable

from calendar_logic import DAY_ABBR, MONTH_NAMES, month_name
from calendar_state import CalendarState, ChangeEvent, DayCell, FieldTexts, parse_int
from digits import to_persian_digits

logger = logging.getLogger(__name__)

# Colours
ACCENT = "#0078D4"
SEL_BG = "#B3D7F2"
HEADER_BG = "#F3F3F3"
GRID_BG = "white"
WEEKEND_FG = "#CC0000"

_FONT_CANDIDATES = ("Vazirmatn", "Tahoma", "Segoe UI")


class _DayGrid:
    """Pre-allocated 6×7 pool of day labels, Saturday in the rightmost column."""

    __slots__ = ("frame", "headers", "cells")

    def __init__(self, parent: tk.Frame, fonts: dict, on_click) -> None:
        self.frame = tk.Frame(parent, bg=GRID_BG)

        self.headers: list[tk.Label] = []
        for col, abbr in enumerate(DAY_ABBR):
            fg = WEEKEND_FG if col == 6 else "#333333"
            lbl = tk.Label(
                self.frame, text=abbr, font=fonts["bold"], bg=GRID_BG, fg=fg, width=3,
            )
            lbl.grid(row=0, column=6 - col)
            self.headers.append(lbl)

        self.cells: list[tk.Label] = []
        for i in range(42):
            r, c = divmod(i, 7)
            cell = tk.Label(
                self.frame, font=fonts["normal"], bg=GRID_BG, width=3,
            )
            cell.grid(row=r + 1, column=6 - c, padx=1, pady=1)
            cell.bind("<Button-1>", on_click)
            self.cells.append(cell)


class CalendarWidget(tk.Frame):
    """Jalali date picker with an optional hour/minute selector."""

    def __init__(
        self,
        container: tk.Misc,
        initial_instant=None,
        show_time: bool = True,
        on_select: Callable[[ChangeEvent], None] | None = None,
        clock_fn: Callable[[], datetime] | None = None,
        title: str = "تاریخ",
    ) -> None:
        super().__init__(container, bg=GRID_BG)
        self.show_time = show_time
        self._on_select = on_select
        self.calendar = CalendarState(
            initial_instant, on_select=self._on_change, clock_fn=clock_fn,
        )

        self._setup_fonts()
        # Cell widget id -> day number for the month on display
        self._cell_days: dict[int, int] = {}
        self._texts = FieldTexts()

        self.day_var = tk.StringVar(self)
        self.month_var = tk.StringVar(self)
        self.year_var = tk.StringVar(self)
        self.hour_var = tk.StringVar(self)
        self.minute_var = tk.StringVar(self)

        self._build(title)
        self.refresh()

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------
    def _setup_fonts(self) -> None:
        families = tkfont.families(self)
        base = next((f for f in _FONT_CANDIDATES if f in families), "TkDefaultFont")
        self.font_normal = tkfont.Font(self, family=base, size=10)
        self.font_bold = tkfont.Font(self, family=base, size=10, weight="bold")
        self.font_header = tkfont.Font(self, family=base, size=11, weight="bold")
        self.font_nav = tkfont.Font(self, family=base, size=12, weight="bold")
        self._fonts = {"normal": self.font_normal, "bold": self.font_bold}

    # ------------------------------------------------------------------
    # Build (once)
    # ------------------------------------------------------------------
    def _build(self, title: str) -> None:
        header = tk.Frame(self, bg=HEADER_BG)
        header.pack(fill="x", pady=(0, 4))
        tk.Label(
            header, text=title, font=self.font_header, bg=HEADER_BG, fg="#333333",
        ).pack(side="right", padx=6)
        self.now_button = tk.Label(
            header, text="اکنون", font=self.font_bold, bg=HEADER_BG, fg=ACCENT,
            cursor="hand2",
        )
        self.now_button.pack(side="left", padx=6)
        self.now_button.bind("<Button-1>", lambda _e: self.calendar.now())

        if self.show_time:
            self._build_time_row()

        fields = tk.Frame(self, bg=GRID_BG)
        fields.pack(pady=2)
        # Packed right to left: day, month, year
        self.day_entry = self._make_entry(
            fields, self.day_var, 3, self._commit_day, self._step_day)
        self.day_entry.pack(side="right", padx=2)

        self.month_menu = tk.OptionMenu(
            fields, self.month_var, *MONTH_NAMES, command=self._commit_month,
        )
        self.month_menu.configure(font=self.font_normal, bg=GRID_BG, highlightthickness=0)
        self.month_menu.pack(side="right", padx=2)

        self.year_entry = self._make_entry(
            fields, self.year_var, 5, self._commit_year, self._step_year)
        self.year_entry.pack(side="right", padx=2)

        nav = tk.Frame(self, bg=GRID_BG)
        nav.pack(fill="x", pady=2)
        btn_prev = tk.Label(
            nav, text="▶", font=self.font_nav, bg=GRID_BG, cursor="hand2",
        )
        btn_prev.pack(side="right", padx=6)
        btn_prev.bind("<Button-1>", lambda _e: self._navigate(-1))

        btn_next = tk.Label(
            nav, text="◀", font=self.font_nav, bg=GRID_BG, cursor="hand2",
        )
        btn_next.pack(side="left", padx=6)
        btn_next.bind("<Button-1>", lambda _e: self._navigate(1))

        self.title_label = tk.Label(
            nav, font=self.font_header, bg=GRID_BG, fg="#333333",
        )
        self.title_label.pack(side="top")

        self._grid = _DayGrid(self, self._fonts, self._on_cell_click)
        self._grid.frame.pack(padx=4, pady=(2, 4))

    def _build_time_row(self) -> None:
        row = tk.Frame(self, bg=GRID_BG)
        row.pack(pady=2)
        tk.Label(row, text="زمان", font=self.font_bold, bg=GRID_BG).pack(side="right", padx=4)
        self.hour_spin = tk.Spinbox(
            row, from_=0, to=23, width=3, format="%02.0f", wrap=True,
            textvariable=self.hour_var, font=self.font_normal,
            command=self._commit_hour,
        )
        self.hour_spin.pack(side="right")
        tk.Label(row, text=":", font=self.font_bold, bg=GRID_BG).pack(side="right")
        self.minute_spin = tk.Spinbox(
            row, from_=0, to=59, width=3, format="%02.0f", wrap=True,
            textvariable=self.minute_var, font=self.font_normal,
            command=self._commit_minute,
        )
        self.minute_spin.pack(side="right")
        for spin, commit in ((self.hour_spin, self._commit_hour),
                             (self.minute_spin, self._commit_minute)):
            spin.bind("<FocusOut>", lambda _e, fn=commit: fn())
            spin.bind("<Return>", lambda _e, fn=commit: fn())

    def _make_entry(self, parent, var: tk.StringVar, width: int,
                    commit, step) -> tk.Entry:
        entry = tk.Entry(
            parent, textvariable=var, width=width, justify="center",
            font=self.font_normal,
        )
        entry.bind("<FocusOut>", lambda _e: commit())
        entry.bind("<Return>", lambda _e: commit())
        entry.bind("<Up>", lambda _e: step(1))
        entry.bind("<Down>", lambda _e: step(-1))
        return entry

    # ------------------------------------------------------------------
    # Refresh from state
    # ------------------------------------------------------------------
    def refresh(self) -> None:
        """Redraw fields, title, and day grid from the current state."""
        self._sync_fields()
        self._fill_days()

    def _show(self, name: str, text: str) -> None:
        getattr(self, f"{name}_var").set(self._texts.mark(name, text))

    def _sync_fields(self) -> None:
        view = self.calendar.view
        sel = self.calendar.selection
        self._show("day", to_persian_digits(sel.date.day))
        self._show("month", month_name(view.month))
        self._show("year", to_persian_digits(view.year))
        self._show("hour", f"{sel.time.hour:02d}")
        self._show("minute", f"{sel.time.minute:02d}")

    def _fill_days(self) -> None:
        view = self.calendar.view
        self.title_label.configure(
            text=f"{month_name(view.month)} {to_persian_digits(view.year)}")

        self._cell_days.clear()
        cells = self.calendar.month_cells()
        for i, cell in enumerate(self._grid.cells):
            info = cells[i] if i < len(cells) else DayCell(None)
            if info.day is None:
                cell.configure(text="", bg=GRID_BG, cursor="")
                continue
            bg, fg = self._day_colors(info, is_weekend=i % 7 == 6)
            cell.configure(
                text=to_persian_digits(info.day), bg=bg, fg=fg, cursor="hand2",
                font=self.font_bold if info.today else self.font_normal,
            )
            self._cell_days[id(cell)] = info.day

    # ------------------------------------------------------------------
    # Day colour logic
    # ------------------------------------------------------------------
    @staticmethod
    def _day_colors(cell: DayCell, is_weekend: bool) -> tuple[str, str]:
        if cell.selected:
            return ACCENT, "white"
        if cell.today:
            return SEL_BG, "black"
        if is_weekend:
            return GRID_BG, WEEKEND_FG
        return GRID_BG, "black"

    # ------------------------------------------------------------------
    # State change -> redraw, then notify the host
    # ------------------------------------------------------------------
    def _on_change(self, event: ChangeEvent) -> None:
        self.refresh()
        if self._on_select is not None:
            self._on_select(event)

    # ------------------------------------------------------------------
    # Navigation and clicks
    # ------------------------------------------------------------------
    def _navigate(self, direction: int) -> None:
        if direction < 0:
            self.calendar.navigate_prev_month()
        else:
            self.calendar.navigate_next_month()
        self._fill_days()
        self._show("month", month_name(self.calendar.view.month))
        self._show("year", to_persian_digits(self.calendar.view.year))

    def _on_cell_click(self, event: tk.Event) -> None:
        day = self._cell_days.get(id(event.widget))
        if day is not None:
            self.calendar.select_day(day)

    # ------------------------------------------------------------------
    # Commit channel
    # ------------------------------------------------------------------
    def _commit(self, name: str, setter: Callable[[str], object]) -> None:
        text = getattr(self, f"{name}_var").get()
        # Focus leaving an untouched field is not an edit
        if self._texts.edited(name, text):
            setter(text)
        # Puts back the last valid text after a rejected or no-op commit
        self.refresh()

    def _commit_day(self) -> None:
        self._commit("day", self.calendar.set_day)

    def _commit_year(self) -> None:
        self._commit("year", self.calendar.set_year)

    def _commit_month(self, name: str) -> None:
        self.month_var.set(name)
        self._commit("month", self._set_month_name)

    def _set_month_name(self, name: str) -> bool:
        if name not in MONTH_NAMES:
            return False
        return self.calendar.set_month(MONTH_NAMES.index(name) + 1)

    def _commit_hour(self) -> None:
        self._commit("hour", self.calendar.set_hour)

    def _commit_minute(self) -> None:
        self._commit("minute", self.calendar.set_minute)

    def _step(self, var: tk.StringVar, delta: int) -> None:
        value = parse_int(var.get())
        if value is not None:
            var.set(to_persian_digits(value + delta))

    def _step_day(self, delta: int) -> str:
        self._step(self.day_var, delta)
        self._commit_day()
        return "break"

    def _step_year(self, delta: int) -> str:
        self._step(self.year_var, delta)
        self._commit_year()
        return "break"

    # ------------------------------------------------------------------
    # Public accessors
    # ------------------------------------------------------------------
    def get_selected_date(self) -> datetime:
        return self.calendar.selected_instant()


def create_calendar_widget(
    container: tk.Misc,
    initial_instant=None,
    show_time: bool = True,
    on_select: Callable[[ChangeEvent], None] | None = None,
    **kwargs,
) -> CalendarWidget:
    """Build a :class:`CalendarWidget` and pack it into *container*."""
    widget = CalendarWidget(
        container, initial_instant=initial_instant, show_time=show_time,
        on_select=on_select, **kwargs,
    )
    widget.pack(fill="both", expand=True)
    return widget
