"""Per-view drawing onto a monochrome render target.

The functions here only issue draw commands. Any state they depend on
(local time, cached weather, scroll offset) is passed in by the engine.
Coordinates follow a 128x64 panel; rectangles take a top-left corner and a
size, text takes a left-baseline position.
"""
import math
from datetime import datetime
from typing import Optional, Protocol, Tuple

from cube.cache import WeatherSnapshot

Point = Tuple[int, int]
Size = Tuple[int, int]

# Binary colour model
OFF = 0
ON = 1

FONT_SMALL = "small"
FONT_LARGE = "large"

UNAVAILABLE = "N/A"
NO_RAIN = "---"
NO_MESSAGE = "No message available."

# Characters of the mailbox message visible at once
MAILBOX_VISIBLE_CHARS = 20

# Seconds sweep on the clock view
TRACK_START = (10, 48)
TRACK_LENGTH = 108
MARKER_DIAMETER = 5

COMPASS_SECTORS = (
    (23, 67, "NE"),
    (68, 112, "E"),
    (113, 157, "SE"),
    (158, 202, "S"),
    (203, 247, "SW"),
    (248, 292, "W"),
    (293, 336, "NW"),
)


class RenderTarget(Protocol):
    """Primitive draw commands over on/off pixels.

    Implementations raise ``RenderError`` when a command cannot be drawn.
    """

    width: int
    height: int

    def clear(self, color: int = OFF) -> None: ...

    def rectangle(self, top_left: Point, size: Size, *, fill: Optional[int] = None,
                  outline: Optional[int] = None) -> None: ...

    def line(self, start: Point, end: Point, *, color: int = ON, width: int = 1) -> None: ...

    def circle(self, center: Point, diameter: int, *, fill: Optional[int] = None,
               outline: Optional[int] = None) -> None: ...

    def text(self, position: Point, text: str, *, font: str = FONT_SMALL,
             color: int = ON) -> None: ...


def compass_label(direction_deg: float) -> str:
    """Map a wind direction in degrees to one of eight compass labels."""
    if not math.isfinite(direction_deg) or not 0 <= direction_deg <= 360:
        return UNAVAILABLE
    d = int(direction_deg)
    if 0 <= d <= 22 or 337 <= d <= 360:
        return "N"
    for low, high, label in COMPASS_SECTORS:
        if low <= d <= high:
            return label
    return UNAVAILABLE


def clock_marker_x(second: int) -> int:
    """X position of the seconds marker; a full sweep takes one minute."""
    return TRACK_START[0] + int(TRACK_LENGTH * ((second + 1) / 60))


def rain_label(rain_in_x_hours: Optional[int]) -> str:
    if rain_in_x_hours is None:
        return NO_RAIN
    return f"{rain_in_x_hours}h"


def visible_window(text: str, offset: int, width: int = MAILBOX_VISIBLE_CHARS) -> str:
    return text[offset:offset + width]


def draw_blank(target: RenderTarget) -> None:
    target.clear(OFF)


def draw_clock(target: RenderTarget, local_time: datetime) -> None:
    """Bordered frame, date, time and a once-per-minute seconds sweep."""
    target.rectangle((0, 0), (target.width, target.height), fill=ON)
    target.rectangle((4, 4), (target.width - 8, target.height - 8), fill=OFF)

    target.text((32, 16), local_time.strftime("%Y-%m-%d"), font=FONT_SMALL)
    target.text((40, 35), local_time.strftime("%H:%M"), font=FONT_LARGE)

    x, y = TRACK_START
    target.line((x, y), (x + TRACK_LENGTH, y), color=ON, width=1)
    target.circle((clock_marker_x(local_time.second), y), MARKER_DIAMETER, fill=ON)


def draw_weather(target: RenderTarget, weather: WeatherSnapshot) -> None:
    target.rectangle((0, 0), (target.width, target.height), fill=ON)
    target.rectangle((2, 2), (target.width - 4, target.height - 4), fill=OFF)

    x = 6
    target.text(
        (x, 12),
        f"{weather.temperature:.0f}C  {weather.relative_humidity_percent:.0f}% "
        f"{weather.surface_pressure_hpa:.0f} hpa",
        font=FONT_SMALL,
    )
    target.text(
        (x, 24),
        f"{weather.wind_speed_km_h:.0f}km/h ({compass_label(weather.wind_direction_deg)})",
        font=FONT_SMALL,
    )
    target.line((x, 32), (120, 32), color=ON, width=1)
    target.text((x, 44), "Precipitation:", font=FONT_SMALL)
    target.text((x, 56), rain_label(weather.rain_in_x_hours), font=FONT_SMALL)


def draw_mailbox(target: RenderTarget, text: str, offset: int) -> None:
    """Header and footer bands with a sliding window over the message."""
    target.rectangle((0, 0), (target.width, 8), fill=ON)
    target.rectangle((0, target.height - 8), (target.width, 8), fill=ON)

    target.text((6, 26), "Message:", font=FONT_LARGE)
    target.text((6, 44), visible_window(text, offset), font=FONT_LARGE)

    # hide the partially drawn last glyph
    target.rectangle((122, 32), (target.width - 122, 15), fill=OFF)
