"""Hourly weather from the Open-Meteo forecast API."""
import logging
from datetime import datetime
from typing import List, Optional

import httpx
from pydantic import BaseModel, model_validator

from cube.cache import WeatherSnapshot
from cube.config import Config, resolve_timezone
from cube.errors import FetchError, HourIndexError

log = logging.getLogger("weather")


HOURLY_FIELDS = (
    "temperature_2m",
    "relative_humidity_2m",
    "rain",
    "snowfall",
    "wind_speed_10m",
    "wind_direction_10m",
    "showers",
    "surface_pressure",
)


class HourlySeries(BaseModel):
    """Parallel hourly arrays, one entry per timestamp in ``time``."""

    time: List[str]
    temperature_2m: List[float]
    relative_humidity_2m: List[float]
    rain: List[float]
    snowfall: List[float] = []
    wind_speed_10m: List[float]
    wind_direction_10m: List[float]
    showers: List[float] = []
    surface_pressure: List[float]

    @model_validator(mode="after")
    def _check_lengths(self):
        n = len(self.time)
        for name in ("temperature_2m", "relative_humidity_2m", "rain",
                     "wind_speed_10m", "wind_direction_10m", "surface_pressure"):
            if len(getattr(self, name)) != n:
                raise ValueError(f"hourly.{name} has {len(getattr(self, name))} entries, expected {n}")
        return self


class ForecastPayload(BaseModel):
    latitude: float = 0.0
    longitude: float = 0.0
    utc_offset_seconds: int = 0
    timezone: str = "GMT"
    hourly: HourlySeries


def snapshot_at(hourly: HourlySeries, hour: int) -> WeatherSnapshot:
    """Pick the metrics at ``hour`` and count hours until the next rain."""
    if hour < 0 or hour >= len(hourly.time):
        raise HourIndexError(f"hour index {hour} out of bounds ({len(hourly.time)} entries)")

    next_rain = next(
        (i for i in range(hour, len(hourly.rain)) if hourly.rain[i] > 0.0),
        None,
    )

    return WeatherSnapshot(
        temperature=hourly.temperature_2m[hour],
        relative_humidity_percent=hourly.relative_humidity_2m[hour],
        surface_pressure_hpa=hourly.surface_pressure[hour],
        wind_speed_km_h=hourly.wind_speed_10m[hour],
        wind_direction_deg=hourly.wind_direction_10m[hour],
        rain_in_x_hours=None if next_rain is None else next_rain - hour,
    )


class OpenMeteoClient:
    """Blocking client returning the snapshot for the current local hour.

    The series is requested in the configured timezone, so index 0 is local
    midnight today and the hour of day is the index.
    """

    def __init__(self, cfg: Config, client: Optional[httpx.Client] = None):
        self.cfg = cfg
        self.base_url = cfg.weather_base_url
        self.timezone = resolve_timezone(cfg.timezone)
        self.client = client or httpx.Client(timeout=cfg.http_timeout_sec)

    def _params(self) -> dict:
        return {
            "latitude": self.cfg.weather_latitude,
            "longitude": self.cfg.weather_longitude,
            "hourly": ",".join(HOURLY_FIELDS),
            "timezone": str(self.timezone),
            "forecast_days": self.cfg.weather_forecast_days,
        }

    def _get(self) -> ForecastPayload:
        try:
            response = self.client.get(self.base_url, params=self._params())
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise FetchError(f"fails to fetch weather data: {e}") from e
        except ValueError as e:
            raise FetchError(f"fails to decode weather data: {e}") from e

        try:
            return ForecastPayload.model_validate(data)
        except ValueError as e:
            raise FetchError(f"fails to parse weather data: {e}") from e

    def fetch(self, now: datetime) -> WeatherSnapshot:
        payload = self._get()
        hour = now.astimezone(self.timezone).hour
        snapshot = snapshot_at(payload.hourly, hour)
        log.debug(f"weather: {snapshot}")
        return snapshot

    def close(self):
        self.client.close()
