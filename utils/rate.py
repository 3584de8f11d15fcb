"""
Fixed-rate sleeper for periodic worker loops.
"""
import threading
import time
from typing import Optional


class Rate:
    """
    Drift-compensated loop rate.

    sleep() waits until the next period boundary. When a cycle overran its
    period the schedule restarts from now instead of bursting to catch up.
    An optional stop event cuts the sleep short for cooperative shutdown.
    """

    def __init__(self, frequency_hz: float, stop_event: Optional[threading.Event] = None):
        if frequency_hz <= 0:
            raise ValueError(f"Rate frequency must be positive, got {frequency_hz}")
        self.period = 1.0 / frequency_hz
        self._stop_event = stop_event
        self._next_tick = time.perf_counter() + self.period

    def sleep(self) -> bool:
        """
        Sleep until the next tick.

        Returns:
            bool: False if the stop event was set while (or before) sleeping
        """
        sleep_time = self._next_tick - time.perf_counter()
        if sleep_time > 0:
            if self._stop_event is not None:
                if self._stop_event.wait(sleep_time):
                    return False
            else:
                time.sleep(sleep_time)
            self._next_tick += self.period
        else:
            # Behind schedule, skip ahead
            self._next_tick = time.perf_counter() + self.period
        return self._stop_event is None or not self._stop_event.is_set()
