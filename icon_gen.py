"""Tray icon: today's Jalali day number on a tear-off calendar page."""

import logging

from PIL import Image, ImageDraw, ImageFont

import clock
from calendar_logic import gregorian_to_jalali

logger = logging.getLogger(__name__)

ICON_SIZE = 64
STRIP_HEIGHT = 12
STRIP_COLOR = "#CC0000"
_FONT_FILES = ("tahomabd.ttf", "DejaVuSans-Bold.ttf")


def today_jalali_day(tz=None) -> int:
    """Return the day-of-month of today's Jalali date in *tz*."""
    now = clock.now(tz)
    return gregorian_to_jalali(now.year, now.month, now.day).day


def _truetype(size: int):
    for name in _FONT_FILES:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return None


def _fit_font(draw: ImageDraw.ImageDraw, text: str, max_w: int, max_h: int):
    """Largest TrueType font whose rendering of *text* fits the box."""
    for size in range(max_h * 2, 10, -1):
        font = _truetype(size)
        if font is None:
            logger.debug("No TrueType font found, using PIL default")
            return ImageFont.load_default()
        left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
        if right - left <= max_w and bottom - top <= max_h:
            return font
    return _truetype(10) or ImageFont.load_default()


def create_icon_image(day: int | None = None) -> Image.Image:
    """Return a 64×64 RGBA page with a red binding strip and *day* below it."""
    img = Image.new("RGBA", (ICON_SIZE, ICON_SIZE), "white")
    draw = ImageDraw.Draw(img)
    draw.rectangle((0, 0, ICON_SIZE - 1, STRIP_HEIGHT - 1), fill=STRIP_COLOR)

    text = str(day if day is not None else today_jalali_day())
    page_h = ICON_SIZE - STRIP_HEIGHT
    font = _fit_font(draw, text, ICON_SIZE - 4, page_h - 4)

    # Centre the inked pixels, not the font's advance box
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    x = (ICON_SIZE - (right - left)) / 2 - left
    y = STRIP_HEIGHT + (page_h - (bottom - top)) / 2 - top
    draw.text((x, y), text, fill="black", font=font)
    return img
