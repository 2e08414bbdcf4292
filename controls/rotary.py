"""Rotary encoder and push button polling, mapped to engine events."""
import logging
import time
from typing import List, Optional

from cube.config import Config
from cube.events import Event

log = logging.getLogger("controls")


class RotaryControls:
    """Polls the encoder pins once per loop iteration.

    Turning the knob yields NAVIGATE_UP or NAVIGATE_DOWN depending on the
    phase between CLK and DT; pressing it yields TOGGLE_SLEEP. Events within
    ``nav_debounce_ms`` of the last navigation are dropped.
    """

    def __init__(self, cfg: Config, pins=None):
        self.cfg = cfg
        self.enabled = cfg.input_enabled
        self.debounce_ms = cfg.nav_debounce_ms
        self.clk = self.dt = self.sw = None
        if pins is not None:
            self.clk, self.dt, self.sw = pins
        self.last_clk = None
        self.last_sw = None
        self.last_nav_ms: Optional[float] = None

    def init(self):
        """Configure the encoder pins as pulled-up inputs."""
        if self.clk is None:
            if not self.enabled:
                log.info("controls: disabled")
                return
            try:
                self._create_pins()
            except Exception as e:
                log.warning(f"controls: init failed, running without input: {e}")
                self.enabled = False
                self.clk = self.dt = self.sw = None
                return

        self.last_clk = self.clk.value
        self.last_sw = self.sw.value
        self.last_nav_ms = time.monotonic() * 1000
        log.info("controls: initialized")

    def _create_pins(self):
        import board
        import digitalio

        def pull_up(name: str):
            pin = digitalio.DigitalInOut(getattr(board, name))
            pin.direction = digitalio.Direction.INPUT
            pin.pull = digitalio.Pull.UP
            return pin

        self.clk = pull_up(self.cfg.rotary_clk_pin)
        self.dt = pull_up(self.cfg.rotary_dt_pin)
        self.sw = pull_up(self.cfg.rotary_sw_pin)

    def _debounced(self, now_ms: float) -> bool:
        return self.last_nav_ms is None or now_ms - self.last_nav_ms > self.debounce_ms

    def poll(self, now_ms: Optional[float] = None) -> List[Event]:
        """Read the pins and return the events since the last poll."""
        if self.clk is None:
            return []
        if now_ms is None:
            now_ms = time.monotonic() * 1000

        events = []

        clk = self.clk.value
        dt = self.dt.value
        if clk != self.last_clk and self._debounced(now_ms):
            events.append(Event.NAVIGATE_UP if dt != clk else Event.NAVIGATE_DOWN)
            self.last_nav_ms = now_ms
        self.last_clk = clk

        # Button is active low
        sw = self.sw.value
        if sw != self.last_sw and not sw and self._debounced(now_ms):
            events.append(Event.TOGGLE_SLEEP)
        self.last_sw = sw

        return events

    def close(self):
        for pin in (self.clk, self.dt, self.sw):
            if pin is not None and hasattr(pin, "deinit"):
                pin.deinit()
        self.clk = self.dt = self.sw = None
