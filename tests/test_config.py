import logging

import pydantic
import pytest
import pytz
from dotenv import load_dotenv

from cube.config import Config, env, resolve_timezone
from cube.logging_setup import LOG_FILE, setup_logging


def test_env_casts(monkeypatch):
    monkeypatch.setenv("RC_INT", "42")
    monkeypatch.setenv("RC_BOOL", "yes")
    monkeypatch.delenv("RC_MISSING", raising=False)

    assert env("RC_INT", 1, int) == 42
    assert env("RC_BOOL", False, bool) is True
    assert env("RC_MISSING", 7, int) == 7
    assert env("RC_MISSING") is None


def test_dotenv_loaded_after_import_reaches_config(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text(
        "TIMEZONE=Europe/Berlin\n"
        "REFETCH_INTERVAL_SECONDS=30\n"
        "MAILBOX_PASSWORD=hunter2\n"
        "ROTARY_SW_PIN=D5\n"
        f"LOG_DIR={tmp_path / 'logs'}\n"
    )
    # registered so the values written by load_dotenv are undone afterwards
    for name in ("TIMEZONE", "REFETCH_INTERVAL_SECONDS", "MAILBOX_PASSWORD",
                 "ROTARY_SW_PIN", "LOG_DIR"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)

    import cube.main  # noqa: F401  config module already imported
    load_dotenv(tmp_path / ".env")
    cfg = Config()

    assert cfg.timezone == "Europe/Berlin"
    assert cfg.refresh_interval_sec == 30
    assert cfg.mailbox_password == "hunter2"
    assert cfg.rotary_sw_pin == "D5"
    assert cfg.log_dir == str(tmp_path / "logs")


def test_defaults_follow_environment_changes(tmp_path, monkeypatch):
    monkeypatch.setenv("TICK_MS", "25")
    assert Config(log_dir=str(tmp_path)).tick_ms == 25
    monkeypatch.setenv("TICK_MS", "40")
    assert Config(log_dir=str(tmp_path)).tick_ms == 40


def test_explicit_values_override_defaults(tmp_path):
    cfg = Config(log_dir=str(tmp_path), timezone="Asia/Tokyo", refresh_interval_sec=30)
    assert cfg.timezone == "Asia/Tokyo"
    assert cfg.refresh_interval_sec == 30
    assert cfg.display_width == 128
    assert cfg.display_height == 64


def test_invalid_message_provider(tmp_path):
    with pytest.raises(pydantic.ValidationError):
        Config(log_dir=str(tmp_path), message_provider="carrier-pigeon")


def test_resolve_timezone():
    assert resolve_timezone("Europe/Berlin").zone == "Europe/Berlin"
    assert resolve_timezone("Nowhere/Special") is pytz.UTC


def test_setup_logging_writes_file(tmp_path):
    log_dir = tmp_path / "logs"
    logger = setup_logging(str(log_dir), "debug")
    try:
        assert logger.level == logging.DEBUG
        logging.getLogger("engine").info("engine: hello")
        for handler in logger.handlers:
            handler.flush()
        assert "engine :: engine: hello" in (log_dir / LOG_FILE).read_text()
    finally:
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()


def test_setup_logging_rotates_file(tmp_path):
    log_dir = tmp_path / "logs"
    logger = setup_logging(str(log_dir), "info", max_bytes=200, backup_count=2)
    try:
        assert logging.getLogger("httpx").level == logging.WARNING
        for i in range(20):
            logging.getLogger("cache").info(f"cache: fetching data, attempt {i}")
        for handler in logger.handlers:
            handler.flush()
        assert (log_dir / f"{LOG_FILE}.1").exists()
        assert not (log_dir / f"{LOG_FILE}.3").exists()
    finally:
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
