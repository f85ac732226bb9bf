"""Entry point: glues pystray (daemon thread) with tkinter (main thread)."""

import ctypes
import logging
import sys
import threading

from calendar_window import CalendarWindow
from icon_gen import create_icon_image, today_jalali_day
from logging_setup import setup_logging
from settings import load_settings
from tray_icon import create_tray, tray_title

logger = logging.getLogger(__name__)


def main() -> None:
    settings = load_settings()
    setup_logging(level=settings["log_level"])

    # DPI awareness so positions / fonts are crisp on Hi-DPI monitors
    if sys.platform == "win32":
        try:
            ctypes.windll.shcore.SetProcessDpiAwareness(1)
        except (AttributeError, OSError):
            logger.debug("DPI awareness not available")

    cal_win = CalendarWindow(settings)

    # Callbacks marshalled onto the tkinter main thread
    def on_show() -> None:
        cal_win.root.after(0, cal_win.toggle)

    def on_today() -> None:
        cal_win.root.after(0, cal_win.go_today)

    def on_exit() -> None:
        def _quit() -> None:
            tray.stop()
            cal_win.root.destroy()
        cal_win.root.after(0, _quit)

    icon_image = create_icon_image(today_jalali_day(settings["timezone"]))
    title = tray_title(settings["persian_digits"], settings["timezone"])
    tray = create_tray(icon_image, on_show, on_exit, on_today=on_today, title=title)

    # Run pystray in a daemon thread so it doesn't block tkinter
    tray_thread = threading.Thread(target=tray.run, daemon=True)
    tray_thread.start()
    logger.info("Jalali calendar started (%s)", title)

    # tkinter main loop on the main thread
    cal_win.root.mainloop()


if __name__ == "__main__":
    main()
