from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

TEHRAN = ZoneInfo("Asia/Tehran")


@pytest.fixture
def tehran():
    return TEHRAN


@pytest.fixture
def frozen_clock():
    """Return a factory for zero-argument clocks stuck at one Tehran instant."""

    def make(year=2024, month=3, day=20, hour=10, minute=30):
        fixed = datetime(year, month, day, hour, minute, tzinfo=TEHRAN)
        return lambda: fixed

    return make


@pytest.fixture
def tk_root():
    tk = pytest.importorskip("tkinter")
    try:
        root = tk.Tk()
    except tk.TclError as exc:
        pytest.skip(f"no display available: {exc}")
    root.withdraw()
    yield root
    root.destroy()


@pytest.fixture
def events():
    """Collects change events passed to an on_select callback."""

    class Recorder(list):
        def __call__(self, event):
            self.append(event)

    return Recorder()
