"""Wall-clock source for the frame driver."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from time_dilation_clock.config import ANGULAR_RESOLUTION, TICKS_PER_SECOND


@dataclass(frozen=True)
class ClockReading:
    hour: int
    minute: int
    second: int
    fraction: float = 0.0

    @property
    def subsecond_ticks(self) -> int:
        return min(TICKS_PER_SECOND - 1, max(0, int(self.fraction * TICKS_PER_SECOND)))

    @property
    def sec3600(self) -> int:
        return (self.second * TICKS_PER_SECOND + self.subsecond_ticks) % ANGULAR_RESOLUTION


class Clock(Protocol):
    def now(self) -> ClockReading: ...


class SystemClock:
    """Local time from the operating system."""

    def now(self) -> ClockReading:
        t = datetime.now()
        return ClockReading(
            hour=t.hour,
            minute=t.minute,
            second=t.second,
            fraction=t.microsecond / 1_000_000,
        )
