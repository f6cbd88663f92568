from __future__ import annotations

from typing import List, Sequence

import pytest

from time_dilation_clock.clock import ClockReading
from time_dilation_clock.config import ClockConfig
from time_dilation_clock.driver import ClockFace, DilationEngine, FrameDriver
from time_dilation_clock.render import RecordingRenderer


class FakeClock:
    """Replays fixed readings, repeating the last one once exhausted."""

    def __init__(self, readings: Sequence[ClockReading]) -> None:
        if not readings:
            raise ValueError("need at least one reading")
        self.readings: List[ClockReading] = list(readings)
        self.calls = 0

    def now(self) -> ClockReading:
        reading = self.readings[min(self.calls, len(self.readings) - 1)]
        self.calls += 1
        return reading


def minutes(*values: int, second: int = 0, fraction: float = 0.0) -> List[ClockReading]:
    return [ClockReading(hour=10, minute=m, second=second, fraction=fraction) for m in values]


@pytest.fixture(scope="session")
def config() -> ClockConfig:
    return ClockConfig()


@pytest.fixture(scope="session")
def engine(config: ClockConfig) -> DilationEngine:
    cx, cy = config.center
    return DilationEngine.build(cx, cy, config)


@pytest.fixture(scope="session")
def face(config: ClockConfig) -> ClockFace:
    cx, cy = config.center
    return ClockFace.build(cx, cy, config.display_radius)


@pytest.fixture
def make_driver(config: ClockConfig, engine: DilationEngine, face: ClockFace):
    def _make(readings, *, cfg: ClockConfig = None, quit_after=None, shared_engine=True):
        cfg = cfg or config
        renderer = RecordingRenderer(quit_after=quit_after, keep_frames=1)
        return FrameDriver(
            config=cfg,
            clock=FakeClock(readings),
            renderer=renderer,
            face=face,
            engine=engine if shared_engine else None,
        )

    return _make
