"""Display state engine: view selection, cached data, scrolling and sleep."""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from cube.cache import MessageSource, RefreshCache, WeatherSource
from cube.config import Config, resolve_timezone
from cube.errors import RenderError
from cube.events import Event
from cube.render import (
    NO_MESSAGE,
    RenderTarget,
    draw_blank,
    draw_clock,
    draw_mailbox,
    draw_weather,
)
from cube.view import View

log = logging.getLogger("engine")

# Mailbox scrolling: long dwell on the first character, then a steady pace
INITIAL_DWELL = timedelta(milliseconds=1500)
ADVANCE_EVERY = timedelta(milliseconds=200)


@dataclass(frozen=True)
class ScrollCursor:
    offset: int
    changed_at: datetime


def advance_cursor(cursor: ScrollCursor, text_length: int, now: datetime) -> ScrollCursor:
    """Move the cursor one character on when its dwell time is over.

    The cursor wraps to the start instead of reaching ``text_length``.
    """
    elapsed = now - cursor.changed_at
    if (cursor.offset != 0 and elapsed >= ADVANCE_EVERY) or elapsed >= INITIAL_DWELL:
        offset = cursor.offset + 1
        if offset >= text_length:
            return ScrollCursor(0, now)
        return ScrollCursor(offset, now)
    return cursor


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StateEngine:
    """Turns Tick/Navigate/ToggleSleep events into cache refreshes and drawing.

    All work for an event happens synchronously inside ``update``; fetch and
    render failures are logged and never escape it.
    """

    def __init__(self, cfg: Config, weather_source: WeatherSource,
                 message_source: MessageSource, now: Optional[datetime] = None):
        if now is None:
            now = _utcnow()
        self.cfg = cfg
        self.timezone = resolve_timezone(cfg.timezone)
        log.info(f"engine: using timezone {self.timezone}")

        self.view = View.CLOCK
        self.sleeping = False
        self.cache = RefreshCache(
            weather_source,
            message_source,
            timedelta(seconds=cfg.refresh_interval_sec),
        )
        self.cursor = ScrollCursor(0, now)
        self.time = now

    @property
    def local_time(self) -> datetime:
        return self.time.astimezone(self.timezone)

    def update(self, target: RenderTarget, event: Event, now: Optional[datetime] = None):
        """Handle a single event."""
        if now is None:
            now = _utcnow()

        if event is Event.TICK:
            self.time = now
            self.cache.maybe_refresh(now)
            try:
                self.render(target, now)
            except RenderError as e:
                log.error(f"engine: renderer failed: {e}")

        elif event is Event.NAVIGATE_UP:
            self.view = self.view.next()
            self.cursor = ScrollCursor(0, now)
            log.info(f"engine: navigate -> {self.view.value}")

        elif event is Event.NAVIGATE_DOWN:
            self.view = self.view.previous()
            self.cursor = ScrollCursor(0, now)
            log.info(f"engine: navigate <- {self.view.value}")

        elif event is Event.TOGGLE_SLEEP:
            self.sleeping = not self.sleeping
            log.info(f"engine: sleep mode {'on' if self.sleeping else 'off'}")

        else:
            raise ValueError(f"unknown event {event!r}")

    def render(self, target: RenderTarget, now: datetime):
        """Draw the current view, or a blank frame while sleeping."""
        if self.sleeping:
            draw_blank(target)
            return

        if self.view is View.CLOCK:
            draw_clock(target, self.local_time)
        elif self.view is View.WEATHER:
            draw_weather(target, self.cache.weather)
        elif self.view is View.MAILBOX:
            text = self.cache.message or NO_MESSAGE
            self.cursor = advance_cursor(self.cursor, len(text), now)
            draw_mailbox(target, text, self.cursor.offset)
        else:
            raise ValueError(f"unknown view {self.view!r}")
