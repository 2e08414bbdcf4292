import logging
import time

from cube.config import Config

log = logging.getLogger("controls")


class StatusLed:
    """Power LED on the front of the case, blinked once at startup."""

    def __init__(self, cfg: Config, pin=None, sleep=time.sleep):
        self.cfg = cfg
        self.pin = pin
        self.sleep = sleep

    def init(self):
        if self.pin is not None or not self.cfg.led_pin:
            return
        try:
            import board
            import digitalio
            self.pin = digitalio.DigitalInOut(getattr(board, self.cfg.led_pin))
            self.pin.direction = digitalio.Direction.OUTPUT
        except Exception as e:
            log.warning(f"led: init failed: {e}")
            self.pin = None

    def blink_startup(self):
        if self.pin is None:
            return
        self.pin.value = True
        self.sleep(1.0)
        self.pin.value = False
        self.sleep(1.0)
        self.pin.value = True

    def off(self):
        if self.pin is not None:
            self.pin.value = False
