"""Named time-point recorder for measuring elapsed time between events."""

from __future__ import annotations

import time


class EventTimer:
    """Records named instants and reports the seconds between them."""

    def __init__(self) -> None:
        self._events: dict[str, float] = {}

    def set_event(self, name: str) -> None:
        """Record (or overwrite) the current instant under name."""
        self._events[name] = time.perf_counter()

    def has_event(self, name: str) -> bool:
        return name in self._events

    def time_span(self, name_from: str, name_to: str) -> float:
        """Seconds elapsed from name_from to name_to."""
        return self._events[name_to] - self._events[name_from]