"""One-shot timers that run a close action when an I/O operation takes too long."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

_log = logging.getLogger(__name__)


class IoTimer:
    """A timer that calls ``close`` once if it expires before it is cancelled."""

    def __init__(self, name: str, close: Callable[[], None]) -> None:
        self.name = name
        self._close = close
        self._lock = threading.Lock()
        self._active = False
        self._expired = False
        self._timer: Optional[threading.Timer] = None

    @classmethod
    def create(cls, name: str, timeout_ms: int, close: Callable[[], None]) -> "IoTimer":
        """Create a timer and start it with a timeout in milliseconds."""
        timer = cls(name, close)
        timer._start(timeout_ms)
        return timer

    def _start(self, timeout_ms: int) -> None:
        self._active = True
        self._timer = threading.Timer(max(timeout_ms, 0) / 1000.0, self._on_timeout)
        self._timer.daemon = True
        try:
            self._timer.start()
        except RuntimeError:
            self._active = False

    def _on_timeout(self) -> None:
        with self._lock:
            if not self._active:
                return
            self._active = False
            self._expired = True
        _log.debug("Timer %s expired", self.name)
        try:
            self._close()
        except Exception as ex:  # the close action must not kill the timer thread
            _log.warning("Caught exception while closing: %s", ex)

    def cancel(self) -> None:
        """Stop the timer; the close action will not run afterwards."""
        with self._lock:
            if self._active:
                self._active = False
                _log.debug("Canceled timer %s", self.name)
        if self._timer is not None:
            self._timer.cancel()

    def is_expired(self) -> bool:
        return self._expired

    def is_active(self) -> bool:
        return self._active


class TimerGuard:
    """Owns an optional timer and cancels it when the guarded block ends."""

    def __init__(self, timer: Optional[IoTimer] = None) -> None:
        self.timer = timer

    def cancel(self) -> None:
        if self.timer is not None:
            self.timer.cancel()

    def __enter__(self) -> "TimerGuard":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cancel()


def create_guard(
    name: str, timeout_ms: int, close: Optional[Callable[[], None]]
) -> TimerGuard:
    """Return a guard around a started timer, or an empty guard.

    No timer is started when there is nothing to close or the timeout is
    not positive.
    """
    if close is None or timeout_ms <= 0:
        return TimerGuard()
    return TimerGuard(IoTimer.create(name, timeout_ms, close))