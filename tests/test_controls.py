import pytest

from controls.led import StatusLed
from controls.rotary import RotaryControls
from cube.config import Config
from cube.events import Event


class FakePin:
    def __init__(self, value=True):
        self.value = value


@pytest.fixture
def pins():
    return FakePin(True), FakePin(True), FakePin(True)


@pytest.fixture
def controls(cfg, pins):
    controls = RotaryControls(cfg, pins=pins)
    controls.init()
    return controls


def test_no_pins_no_events(cfg):
    controls = RotaryControls(cfg)
    controls.init()
    assert controls.poll() == []


def test_idle_pins_no_events(controls):
    start = controls.last_nav_ms
    assert controls.poll(start + 500) == []


def test_clockwise_turn_navigates_up(controls, pins):
    clk, dt, _ = pins
    clk.value = False
    dt.value = True
    assert controls.poll(controls.last_nav_ms + 200) == [Event.NAVIGATE_UP]


def test_counter_clockwise_turn_navigates_down(controls, pins):
    clk, dt, _ = pins
    clk.value = False
    dt.value = False
    assert controls.poll(controls.last_nav_ms + 200) == [Event.NAVIGATE_DOWN]


def test_turns_within_debounce_are_dropped(controls, pins):
    clk, dt, _ = pins
    start = controls.last_nav_ms

    clk.value = False
    assert controls.poll(start + 200) == [Event.NAVIGATE_UP]
    clk.value = True
    assert controls.poll(start + 250) == []
    clk.value = False
    assert controls.poll(start + 400) == [Event.NAVIGATE_UP]


def test_button_press_toggles_sleep_once(controls, pins):
    _, _, sw = pins
    start = controls.last_nav_ms

    sw.value = False
    assert controls.poll(start + 200) == [Event.TOGGLE_SLEEP]
    # held down
    assert controls.poll(start + 400) == []
    sw.value = True
    assert controls.poll(start + 600) == []


def test_led_blinks_on_startup(tmp_path):
    states = []

    class Pin:
        def __init__(self):
            self._value = False

        @property
        def value(self):
            return self._value

        @value.setter
        def value(self, v):
            self._value = v
            states.append(v)

    sleeps = []
    led = StatusLed(Config(log_dir=str(tmp_path)), pin=Pin(), sleep=sleeps.append)
    led.init()
    led.blink_startup()

    assert states == [True, False, True]
    assert sleeps == [1.0, 1.0]
    led.off()
    assert states[-1] is False


def test_led_without_pin_is_noop(tmp_path):
    led = StatusLed(Config(log_dir=str(tmp_path), led_pin=""))
    led.init()
    led.blink_startup()
    led.off()
