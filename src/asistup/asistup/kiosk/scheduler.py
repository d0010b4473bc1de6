from __future__ import annotations

import threading
from typing import Callable, Protocol


class TimeoutHandle(Protocol):
    def cancel(self) -> None:
        raise NotImplementedError


class Scheduler(Protocol):
    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> TimeoutHandle:
        raise NotImplementedError


class ThreadingScheduler(Scheduler):
    """Runs callbacks on daemon ``threading.Timer`` threads."""

    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> TimeoutHandle:
        timer = threading.Timer(delay_seconds, callback)
        timer.daemon = True
        timer.start()
        return timer
