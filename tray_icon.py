"""System-tray icon setup via pystray."""

from typing import Callable

import pystray
from PIL import Image
from pystray import Menu, MenuItem

from date_format import format_date

TOOLTIP_FORMAT = "l j F Y"


def tray_title(persian_digits: bool = False, timezone=None) -> str:
    """Return the tooltip text: today's Jalali date."""
    return format_date(TOOLTIP_FORMAT, None, timezone, persian_digits)


def _action(callback: Callable[[], None]):
    # pystray passes (icon, item) to menu actions
    return lambda _icon, _item: callback()


def create_tray(
    icon_image: Image.Image,
    on_show: Callable[[], None],
    on_exit: Callable[[], None],
    on_today: Callable[[], None] | None = None,
    title: str | None = None,
) -> pystray.Icon:
    """Build and return a pystray Icon (not yet started)."""
    entries = [MenuItem("Show Calendar", _action(on_show), default=True)]
    if on_today is not None:
        entries.append(MenuItem("Today", _action(on_today)))
    entries += [Menu.SEPARATOR, MenuItem("Exit", _action(on_exit))]
    return pystray.Icon(
        "jalali-calendar", icon_image, title or tray_title(), Menu(*entries),
    )
