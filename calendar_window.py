"""Jalali calendar popup window (tkinter) positioned above the taskbar."""

from __future__ import annotations

import ctypes
import logging
import sys
import tkinter as tk
from tkinter import font as tkfont

import clock
from calendar_logic import gregorian_to_jalali, jalali_day_of_year
from calendar_state import ChangeEvent
from calendar_widget import GRID_BG, create_calendar_widget
from date_format import format_date
from digits import to_persian_digits
from settings import load_settings

logger = logging.getLogger(__name__)


class CalendarWindow:
    """Popup that hosts one calendar widget and shows the formatted selection."""

    def __init__(self, settings: dict | None = None) -> None:
        self.settings = settings if settings is not None else load_settings()

        self.root = tk.Tk()
        self.root.title(self._title())
        self.root.resizable(False, False)
        self.root.configure(bg=GRID_BG)
        if sys.platform == "win32":
            self.root.attributes("-toolwindow", True)
        self.root.attributes("-topmost", True)

        families = tkfont.families(self.root)
        base = "Tahoma" if "Tahoma" in families else "TkDefaultFont"
        self.font_footer = tkfont.Font(self.root, family=base, size=10)

        self.last_event: ChangeEvent | None = None

        outer = tk.Frame(self.root, bg=GRID_BG)
        outer.pack(padx=6, pady=4)
        self.widget = create_calendar_widget(
            outer,
            show_time=self.settings["show_time"],
            on_select=self._on_select,
        )
        self._footer_label = tk.Label(
            self.root, text=self._footer_text(), font=self.font_footer,
            bg=GRID_BG, fg="#555555",
        )
        self._footer_label.pack(pady=(0, 6))

        self.root.bind("<Escape>", lambda _e: self.hide())
        self.root.protocol("WM_DELETE_WINDOW", self.hide)
        self.root.withdraw()

    def _title(self) -> str:
        today = clock.now(self.settings["timezone"])
        j = gregorian_to_jalali(today.year, today.month, today.day)
        day = jalali_day_of_year(*j)
        if self.settings["persian_digits"]:
            return f"تقویم  روز {to_persian_digits(day)}"
        return f"Jalali Calendar  Day: {day}"

    # ------------------------------------------------------------------
    # Footer text
    # ------------------------------------------------------------------
    def _footer_text(self) -> str:
        instant = self.widget.get_selected_date()
        return format_date(
            self.settings["date_format"], instant,
            self.settings["timezone"], self.settings["persian_digits"],
        )

    def _on_select(self, event: ChangeEvent) -> None:
        self.last_event = event
        logger.debug("Selected %s (%s)", event.jalali, event.instant.isoformat())
        self._footer_label.configure(text=self._footer_text())

    # ------------------------------------------------------------------
    # Show / Hide / Toggle
    # ------------------------------------------------------------------
    def toggle(self) -> None:
        if self.root.state() == "withdrawn" or not self.root.winfo_viewable():
            self.show()
        else:
            self.hide()

    def show(self) -> None:
        self.root.title(self._title())
        self.widget.calendar.now()
        self.root.deiconify()
        self.root.update_idletasks()
        self._position_window()
        self.root.lift()
        self.root.focus_force()

    def hide(self) -> None:
        self.root.withdraw()

    def go_today(self) -> None:
        self.widget.calendar.now()

    # ------------------------------------------------------------------
    # Position bottom-right above taskbar
    # ------------------------------------------------------------------
    def _work_area(self) -> tuple[int, int]:
        if sys.platform == "win32":
            import ctypes.wintypes

            rect = ctypes.wintypes.RECT()
            ctypes.windll.user32.SystemParametersInfoW(0x0030, 0, ctypes.byref(rect), 0)
            return rect.right, rect.bottom
        return self.root.winfo_screenwidth(), self.root.winfo_screenheight() - 48

    def _position_window(self) -> None:
        self.root.update_idletasks()
        work_right, work_bottom = self._work_area()
        win_w = self.root.winfo_reqwidth()
        win_h = self.root.winfo_reqheight()
        x = work_right - win_w - 12
        y = work_bottom - win_h - 12
        self.root.geometry(f"{win_w}x{win_h}+{x}+{y}")
