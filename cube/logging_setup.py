"""Logging setup for retro-cube.

The device runs unattended from an SD card, so the log file is rotated.
"""
import logging
import logging.handlers
import os
import sys

LOG_FILE = "retrocube.log"

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "PIL")


def setup_logging(log_dir: str, level: str = "INFO", max_bytes: int = 1_000_000,
                  backup_count: int = 3):
    """Configure application logging to console and a rotating file."""
    os.makedirs(log_dir, exist_ok=True)

    logger = logging.getLogger()
    logger.handlers.clear()
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Format: timestamp level component :: message
    formatter = logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s :: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z"
    )

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    logger.addHandler(console)

    file_handler = logging.handlers.RotatingFileHandler(
        os.path.join(log_dir, LOG_FILE),
        maxBytes=max_bytes,
        backupCount=backup_count,
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    # One request per refresh interval would otherwise flood the file
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger
