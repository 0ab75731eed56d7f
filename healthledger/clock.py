"""
Host clocks supplying ledger timestamps.
"""

import time
from typing import Protocol


class Clock(Protocol):
    def now(self) -> int: ...


class SystemClock:
    """Unix time in whole seconds."""

    def now(self) -> int:
        return int(time.time())


class ManualClock:
    """Settable clock for tests and replays. Never moves backwards."""

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError("Clock cannot start before the epoch")
        self._now = start

    def now(self) -> int:
        return self._now

    def set(self, value: int) -> None:
        if value < self._now:
            raise ValueError(f"Clock is monotonic: {value} < {self._now}")
        self._now = value

    def advance(self, seconds: int = 1) -> int:
        self.set(self._now + seconds)
        return self._now
