"""Last-known-good cache for remote weather and mailbox data."""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Protocol

from cube.errors import FetchError

log = logging.getLogger("cache")


@dataclass(frozen=True)
class WeatherSnapshot:
    """Weather metrics for the current hour."""

    temperature: float = 0.0
    relative_humidity_percent: float = 0.0
    surface_pressure_hpa: float = 0.0
    wind_speed_km_h: float = 0.0
    wind_direction_deg: float = 0.0
    rain_in_x_hours: Optional[int] = None


class WeatherSource(Protocol):
    def fetch(self, now: datetime) -> WeatherSnapshot: ...


class MessageSource(Protocol):
    def fetch(self) -> str: ...


class RefreshCache:
    """Holds the latest weather and message and decides when to refetch.

    Both sources are queried on every due attempt. A failing source keeps
    its previous value; the other source is unaffected.
    """

    def __init__(self, weather_source: WeatherSource, message_source: MessageSource,
                 refresh_interval: timedelta = timedelta(seconds=10)):
        self.weather_source = weather_source
        self.message_source = message_source
        self.refresh_interval = refresh_interval
        self.last_fetch_at: Optional[datetime] = None
        self.weather = WeatherSnapshot()
        self.message: Optional[str] = None

    def is_due(self, now: datetime) -> bool:
        if self.last_fetch_at is None:
            return True
        return now - self.last_fetch_at > self.refresh_interval

    def maybe_refresh(self, now: datetime) -> bool:
        """Fetch both sources if the interval elapsed. Returns True on an attempt."""
        if not self.is_due(now):
            return False

        log.info(f"cache: fetching data, interval {self.refresh_interval.total_seconds():.0f}s")
        # Stamp first so a failing fetch is not retried on the next tick
        self.last_fetch_at = now

        try:
            self.weather = self.weather_source.fetch(now)
        except FetchError as e:
            log.error(f"cache: failed to fetch weather data: {e}")

        try:
            self.message = self.message_source.fetch()
        except FetchError as e:
            log.error(f"cache: failed to fetch message data: {e}")

        return True
