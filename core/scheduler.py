from __future__ import annotations
import threading
from typing import Callable, Optional

class Ticker:
    """
    Runs a callable at a fixed interval until a stop event is set.

    The wait starts after the callable returns, so slow ticks push later ones
    back; there is no catch-up.
    """

    def __init__(self, interval: float,
                 wait: Optional[Callable[[threading.Event, float], None]] = None) -> None:
        """
        Args:
            interval: Seconds between the end of one tick and the next
            wait: Replacement for Event.wait, used by tests to skip sleeping
        """
        self.interval = interval
        self._wait = wait or (lambda stop, timeout: stop.wait(timeout))

    def run(self, fn: Callable[[], object], stop: threading.Event) -> int:
        """
        Call fn repeatedly until stop is set.

        Returns:
            Number of completed calls
        """
        ticks = 0
        while not stop.is_set():
            fn()
            ticks += 1
            if stop.is_set():
                break
            self._wait(stop, self.interval)
        return ticks
