"""Event vocabulary accepted by the state engine."""
from enum import Enum


class Event(Enum):
    TICK = "tick"
    NAVIGATE_UP = "navigate_up"
    NAVIGATE_DOWN = "navigate_down"
    TOGGLE_SLEEP = "toggle_sleep"
