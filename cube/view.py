"""The cyclic set of screens shown by the device."""
from enum import Enum


class View(Enum):
    CLOCK = "clock"
    WEATHER = "weather"
    MAILBOX = "mailbox"

    def next(self) -> "View":
        return _NEXT[self]

    def previous(self) -> "View":
        return _PREVIOUS[self]


_NEXT = {
    View.CLOCK: View.WEATHER,
    View.WEATHER: View.MAILBOX,
    View.MAILBOX: View.CLOCK,
}

_PREVIOUS = {after: before for before, after in _NEXT.items()}
