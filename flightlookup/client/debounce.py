"""
Keystroke debouncing.

A Debouncer delays a callback until its input has been quiet for a fixed
interval. Each trigger cancels the pending timer before arming a new
one, so only the most recent call ever fires.
"""

import logging
import threading
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

# (interval, function, args) -> object with start() and cancel()
TimerFactory = Callable[..., Any]


class Debouncer:
    """
    Per-field debounce timer.

    Args:
        delay_seconds: Quiet period before the callback runs
        callback: Called with the arguments of the last trigger()
        timer_factory: threading.Timer compatible factory; tests pass a
                       manual timer to fire deterministically
    """

    def __init__(
        self,
        delay_seconds: float,
        callback: Callable[..., None],
        timer_factory: TimerFactory = threading.Timer,
    ):
        self.delay_seconds = delay_seconds
        self.callback = callback
        self._timer_factory = timer_factory
        self._timer: Optional[Any] = None
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def trigger(self, *args: Any) -> None:
        """Restart the quiet period with new arguments."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            timer = self._timer_factory(self.delay_seconds, self._fire, args=(self._generation, args))
            if isinstance(timer, threading.Timer):
                timer.daemon = True
            self._timer = timer
        timer.start()

    def cancel(self) -> None:
        """Drop any pending call."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._generation += 1

    def _fire(self, generation: int, args: tuple) -> None:
        with self._lock:
            # A timer that raced its own cancel() must not run
            if generation != self._generation:
                return
            self._timer = None
        try:
            self.callback(*args)
        except Exception:
            logger.exception('Debounced callback failed')
