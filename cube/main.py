"""retro-cube main application entry point."""
import logging
import signal
import time

from dotenv import load_dotenv

from controls.led import StatusLed
from controls.rotary import RotaryControls
from cube.config import Config
from cube.display import Display
from cube.events import Event
from cube.logging_setup import setup_logging
from cube.state import StateEngine
from sources.message import build_message_source
from sources.weather import OpenMeteoClient

log = logging.getLogger("main")


def load_config() -> Config:
    """Load ``.env`` into the environment, then build the configuration."""
    load_dotenv()
    cfg = Config()
    setup_logging(cfg.log_dir, cfg.log_level, cfg.log_max_bytes, cfg.log_backup_count)
    return cfg


def build_engine(cfg: Config):
    """Create the remote sources and the state engine that owns them."""
    weather = OpenMeteoClient(cfg)
    messages = build_message_source(cfg)
    engine = StateEngine(cfg, weather, messages)
    return engine, (weather, messages)


def main():
    """Main application loop."""
    cfg = load_config()
    log.info("retro-cube: starting...")

    # Initialize components
    led = StatusLed(cfg)
    led.init()
    led.blink_startup()

    display = Display(cfg)
    display.init()

    controls = RotaryControls(cfg)
    controls.init()

    engine, sources = build_engine(cfg)

    log.info("retro-cube: all components started")

    tick_sec = cfg.tick_ms / 1000.0
    try:
        while True:
            for event in controls.poll():
                engine.update(display, event)

            display.begin_frame()
            engine.update(display, Event.TICK)
            display.flush()

            time.sleep(tick_sec)
    finally:
        log.info("retro-cube: shutting down...")
        display.close()
        controls.close()
        led.off()
        for source in sources:
            source.close()


def _terminate(signum, frame):
    raise SystemExit(0)


def run():
    signal.signal(signal.SIGTERM, _terminate)
    try:
        main()
    except KeyboardInterrupt:
        log.info("retro-cube: stopped by user")


if __name__ == "__main__":
    run()
