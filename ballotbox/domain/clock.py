import time
from abc import ABC, abstractmethod


class Clock(ABC):
    """Source of the current time, in integer Unix seconds."""

    @abstractmethod
    def now(self) -> int:
        ...


class SystemClock(Clock):
    def now(self) -> int:
        return int(time.time())


class FixedClock(Clock):
    """A clock that only moves when told to. Used by tests and replays."""

    def __init__(self, now: int):
        self.current = now

    def now(self) -> int:
        return self.current

    def set(self, now: int):
        if now < self.current:
            raise ValueError("Clock cannot move backwards")
        self.current = now
