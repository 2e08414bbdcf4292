from datetime import datetime, timezone

import pytest

from cube.cache import WeatherSnapshot
from cube.config import Config
from cube.errors import FetchError, RenderError


T0 = datetime(2026, 1, 4, 12, 30, 14, tzinfo=timezone.utc)


class FakeWeatherSource:
    def __init__(self, snapshot=None, error=None):
        self.snapshot = snapshot or WeatherSnapshot(temperature=3.4)
        self.error = error
        self.calls = []

    def fetch(self, now):
        self.calls.append(now)
        if self.error:
            raise self.error
        return self.snapshot


class FakeMessageSource:
    def __init__(self, text="hello", error=None):
        self.text = text
        self.error = error
        self.calls = 0

    def fetch(self):
        self.calls += 1
        if self.error:
            raise self.error
        return self.text


class RecordingTarget:
    """Render target that records commands; optionally rejects one kind."""

    def __init__(self, width=128, height=64, fail_on=None):
        self.width = width
        self.height = height
        self.fail_on = fail_on
        self.commands = []

    def _record(self, name, *args, **kwargs):
        if name == self.fail_on:
            raise RenderError(f"{name} rejected")
        self.commands.append((name, args, kwargs))

    def clear(self, color=0):
        self._record("clear", color)

    def rectangle(self, top_left, size, *, fill=None, outline=None):
        self._record("rectangle", top_left, size, fill=fill, outline=outline)

    def line(self, start, end, *, color=1, width=1):
        self._record("line", start, end, color=color, width=width)

    def circle(self, center, diameter, *, fill=None, outline=None):
        self._record("circle", center, diameter, fill=fill, outline=outline)

    def text(self, position, text, *, font="small", color=1):
        self._record("text", position, text, font=font, color=color)

    def names(self):
        return [name for name, _, _ in self.commands]

    def texts(self):
        return [args[1] for name, args, _ in self.commands if name == "text"]


@pytest.fixture
def cfg(tmp_path):
    return Config(
        log_dir=str(tmp_path / "logs"),
        timezone="UTC",
        refresh_interval_sec=10,
        display_enabled=False,
        input_enabled=False,
    )


@pytest.fixture
def weather_source():
    return FakeWeatherSource()


@pytest.fixture
def message_source():
    return FakeMessageSource()


@pytest.fixture
def target():
    return RecordingTarget()


@pytest.fixture
def failing_weather():
    return FakeWeatherSource(error=FetchError("connection refused"))


@pytest.fixture
def failing_message():
    return FakeMessageSource(error=FetchError("connection refused"))
