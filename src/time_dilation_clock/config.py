"""Physical constants, table geometry and runtime knobs.

The full-scale clock has a circumference of 17987547480 m, so the tip of a
second hand sweeping it once per 60 s moves at exactly the speed of light.
The radius is split into RADIUS_SAMPLES concentric points and the sweep into
ANGULAR_RESOLUTION steps (60 ticks per second x 60 seconds).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

SPEED_OF_LIGHT_M_S = 299792458.0
FULL_CIRCUMFERENCE_M = 17987547480.0
REVOLUTION_PERIOD_S = 60.0

RADIUS_SAMPLES = 500
TICKS_PER_SECOND = 60
SECONDS_PER_MINUTE = 60
ANGULAR_RESOLUTION = TICKS_PER_SECOND * SECONDS_PER_MINUTE

# Face tables
HOUR_MARKS = 12
MINUTE_MARKS = 60
DEGREE_MARKS = 360

# min3600 is held as a 32-bit counter; stop two revolutions short of it.
INT_CEILING = int(np.iinfo(np.int32).max)
INT_SAFETY_MARGIN = 2 * ANGULAR_RESOLUTION
FLOAT_CEILING = float(np.finfo(np.float64).max)
FLOAT_SAFETY_FRACTION = 0.5

FULL_RADIUS_M = FULL_CIRCUMFERENCE_M / (2.0 * math.pi)
STEP_RADIUS_M = FULL_RADIUS_M / RADIUS_SAMPLES

DEFAULT_WIDTH = 1410
DEFAULT_HEIGHT = 1010


@dataclass(frozen=True)
class ClockConfig:
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    fps: float = 60.0
    numerals: bool = False
    stats: bool = True
    headless: bool = False
    max_frames: Optional[int] = None
    int_ceiling: int = INT_CEILING
    float_safety_fraction: float = FLOAT_SAFETY_FRACTION
    log_level: int = logging.INFO
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        # The dilation plot needs RADIUS_SAMPLES px of radius inside the window.
        min_side = 2 * (RADIUS_SAMPLES + 4)
        if self.width < min_side or self.height < min_side:
            raise ValueError(f"window must be at least {min_side}x{min_side}")
        if self.int_ceiling <= INT_SAFETY_MARGIN:
            raise ValueError("int_ceiling must exceed two revolutions")
        if not 0.0 < self.float_safety_fraction <= 1.0:
            raise ValueError("float_safety_fraction must be in (0, 1]")

    @property
    def center(self) -> Tuple[int, int]:
        return self.width // 2, self.height // 2

    @property
    def display_radius(self) -> int:
        return self.height // 2 - 4
