"""Configuration management for retro-cube.

Defaults are read from the environment when a ``Config`` is constructed,
so variables loaded from ``.env`` by the driver are picked up.
"""
import logging
import os
from pathlib import Path
from typing import Literal

import pytz
from pydantic import BaseModel, Field

log = logging.getLogger("config")


def env(name: str, default=None, cast=str):
    """Helper to read and cast environment variables."""
    v = os.getenv(name, default)
    if cast is bool:
        return str(v).lower() in ("1", "true", "yes", "on")
    return cast(v) if v is not None else v


def from_env(name: str, default=None, cast=str):
    """Field whose default is read from ``name`` at construction time."""
    return Field(default_factory=lambda: env(name, default, cast))


def _home_dir() -> Path:
    return Path(os.getenv("RETROCUBE_HOME", Path.home() / ".retrocube")).expanduser()


class Config(BaseModel):
    """Core configuration for the retro-cube status display."""

    # Logging output
    log_dir: str = Field(default_factory=lambda: env("LOG_DIR", str(_home_dir() / "logs")))
    log_max_bytes: int = from_env("LOG_MAX_BYTES", 1_000_000, int)
    log_backup_count: int = from_env("LOG_BACKUP_COUNT", 3, int)

    # Engine
    timezone: str = from_env("TIMEZONE", "UTC")
    refresh_interval_sec: int = from_env("REFETCH_INTERVAL_SECONDS", 10, int)
    tick_ms: int = from_env("TICK_MS", 10, int)

    # Display settings
    display_enabled: bool = from_env("DISPLAY_ENABLED", True, bool)
    display_width: int = from_env("DISPLAY_WIDTH", 128, int)
    display_height: int = from_env("DISPLAY_HEIGHT", 64, int)
    display_upside_down: bool = from_env("DISPLAY_UPSIDE_DOWN", True, bool)
    display_spi_baudrate: int = from_env("DISPLAY_SPI_BAUDRATE", 9_000_000, int)
    display_dc_pin: str = from_env("DISPLAY_DC_PIN", "D2")
    display_reset_pin: str = from_env("DISPLAY_RESET_PIN", "D3")
    display_cs_pin: str = from_env("DISPLAY_CS_PIN", "D8")
    frame_dump_path: str = from_env("FRAME_DUMP_PATH", "")

    # Desktop simulator window
    simulator_scale: int = from_env("SIMULATOR_SCALE", 4, int)

    # Rotary encoder and status LED
    input_enabled: bool = from_env("INPUT_ENABLED", True, bool)
    rotary_clk_pin: str = from_env("ROTARY_CLK_PIN", "D16")
    rotary_dt_pin: str = from_env("ROTARY_DT_PIN", "D15")
    rotary_sw_pin: str = from_env("ROTARY_SW_PIN", "D14")
    nav_debounce_ms: int = from_env("NAV_DEBOUNCE_MS", 144, int)
    led_pin: str = from_env("LED_PIN", "D26")

    # Weather (Open-Meteo)
    weather_base_url: str = from_env("WEATHER_BASE_URL", "https://api.open-meteo.com/v1/forecast")
    weather_latitude: float = from_env("WEATHER_LATITUDE", 52.52, float)
    weather_longitude: float = from_env("WEATHER_LONGITUDE", 13.41, float)
    weather_forecast_days: int = from_env("WEATHER_FORECAST_DAYS", 2, int)

    # Mailbox message
    message_provider: Literal["quote", "mailbox"] = from_env("MESSAGE_PROVIDER", "quote")
    quote_url: str = from_env(
        "QUOTE_URL",
        "http://api.forismatic.com/api/1.0/?method=getQuote&format=json&lang=en",
    )
    mailbox_url: str = from_env("MAILBOX_URL", "http://localhost:3000/")
    mailbox_username: str = from_env("MAILBOX_USERNAME", "admin")
    mailbox_password: str = from_env("MAILBOX_PASSWORD", "password")
    http_timeout_sec: int = from_env("HTTP_TIMEOUT_SEC", 10, int)

    # Logging
    log_level: str = from_env("LOG_LEVEL", "INFO")


def resolve_timezone(name: str):
    """Return the pytz timezone for ``name``, falling back to UTC."""
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError:
        log.warning(f"config: unknown timezone '{name}', using UTC")
        return pytz.UTC
