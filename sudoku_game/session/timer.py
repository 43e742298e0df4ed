"""Cancellable periodic timer driving the game clock."""

from __future__ import annotations
import threading
from typing import Callable, Optional


class RepeatingTimer:
    """
    Calls ``callback`` every ``interval`` seconds on a background thread
    until cancelled.

    A cancelled timer never fires again and cannot be restarted; create a new
    one instead.
    """

    def __init__(self, interval: float, callback: Callable[[], None]):
        if interval <= 0:
            raise ValueError(f"Interval must be positive, got {interval}")
        self.interval = interval
        self.callback = callback
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._cancelled = False

    def start(self) -> None:
        with self._lock:
            if self._cancelled:
                raise RuntimeError("Cannot restart a cancelled timer")
            if self._timer is None:
                self._schedule()

    def cancel(self) -> None:
        with self._lock:
            self._cancelled = True
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    @property
    def active(self) -> bool:
        return self._timer is not None and not self._cancelled

    def _schedule(self) -> None:
        self._timer = threading.Timer(self.interval, self._run)
        self._timer.daemon = True
        self._timer.start()

    def _run(self) -> None:
        with self._lock:
            if self._cancelled:
                return
        self.callback()
        with self._lock:
            if not self._cancelled:
                self._schedule()
