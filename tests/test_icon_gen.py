import pytest

Image = pytest.importorskip("PIL.Image")

import icon_gen  # noqa: E402


def test_icon_size_and_mode():
    img = icon_gen.create_icon_image(17)
    assert img.size == (64, 64)
    assert img.mode == "RGBA"


def test_icon_has_red_strip_and_text():
    img = icon_gen.create_icon_image(30).convert("RGB")
    assert img.getpixel((32, 4)) == (204, 0, 0)
    body = [img.getpixel((x, y)) for x in range(64) for y in range(14, 64)]
    assert any(px != (255, 255, 255) for px in body)


def test_icon_defaults_to_today(monkeypatch):
    monkeypatch.setattr(icon_gen, "today_jalali_day", lambda tz=None: 5)
    assert icon_gen.create_icon_image().size == (64, 64)


def test_today_jalali_day_in_range():
    assert 1 <= icon_gen.today_jalali_day() <= 31
    assert 1 <= icon_gen.today_jalali_day("UTC") <= 31
