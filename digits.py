"""ASCII <-> Persian decimal digit substitution."""

PERSIAN_DIGITS = "۰۱۲۳۴۵۶۷۸۹"
ASCII_DIGITS = "0123456789"

_TO_PERSIAN = str.maketrans(ASCII_DIGITS, PERSIAN_DIGITS)
_TO_ASCII = str.maketrans(PERSIAN_DIGITS, ASCII_DIGITS)


def to_persian_digits(text) -> str:
    """Replace every ASCII digit in *text* with its Persian glyph."""
    return str(text).translate(_TO_PERSIAN)


def to_ascii_digits(text) -> str:
    """Replace every Persian digit glyph in *text* with its ASCII digit."""
    return str(text).translate(_TO_ASCII)
