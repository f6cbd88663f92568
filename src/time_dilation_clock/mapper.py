"""Per-frame mapping of dilated elapsed time onto the radius table.

Each radius sample advances through the 3600-index space at its own dilated
rate. Elapsed time is counted in ticks (1/60 s) since the run started:
``sec3600`` is the position within the current minute and ``min3600`` the
whole minutes seen so far, times 3600.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple

import numpy as np

from time_dilation_clock.config import (
    ANGULAR_RESOLUTION,
    FLOAT_CEILING,
    FLOAT_SAFETY_FRACTION,
    INT_CEILING,
    INT_SAFETY_MARGIN,
    TICKS_PER_SECOND,
)
from time_dilation_clock.errors import IndexOutOfRangeDefect, RangeOverflowGuard
from time_dilation_clock.geometry import round_half_up

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

UNINITIALIZED = "uninitialized"
TRACKING = "tracking"


@dataclass
class DilationState:
    """Run state owned by the frame driver. Never reset during a run."""

    min3600: int = 0
    last_min: int = -1
    time_elapsed: int = 0
    int_ceiling: int = INT_CEILING

    @property
    def phase(self) -> str:
        return UNINITIALIZED if self.last_min == -1 else TRACKING

    def observe_minute(self, minute: int) -> bool:
        """Record the wall-clock minute; returns True on a rollover."""
        if not 0 <= minute < 60:
            raise ValueError(f"minute must be in [0, 59] (got {minute})")

        if self.phase == UNINITIALIZED:
            self.last_min = minute
            return False

        if minute == self.last_min:
            return False

        if self.min3600 > self.int_ceiling - ANGULAR_RESOLUTION:
            raise RangeOverflowGuard(
                f"min3600={self.min3600} cannot advance past {self.int_ceiling}"
            )
        self.min3600 += ANGULAR_RESOLUTION
        self.last_min = minute
        self.time_elapsed += 1
        logger.debug(f"Minute rollover to {minute}: min3600={self.min3600}")
        return True


def check_revolution_guard(min3600: int, int_ceiling: int = INT_CEILING) -> None:
    if min3600 > int_ceiling - INT_SAFETY_MARGIN:
        raise RangeOverflowGuard(
            f"min3600={min3600} is within {INT_SAFETY_MARGIN} of the integer limit {int_ceiling}"
        )


def check_accumulator_guard(
    dilated_seconds: npt.NDArray[np.float64],
    safety_fraction: float = FLOAT_SAFETY_FRACTION,
) -> None:
    limit = FLOAT_CEILING * safety_fraction
    if not np.all(np.isfinite(dilated_seconds)) or np.any(np.abs(dilated_seconds) >= limit):
        raise RangeOverflowGuard(f"dilated time accumulator reached {limit:g}")


def wrap_indices(
    raw_index: npt.NDArray[np.int64],
    resolution: int = ANGULAR_RESOLUTION,
) -> Tuple[npt.NDArray[np.int64], npt.NDArray[np.int64]]:
    """
    Fold raw tick counts back into one lap of the table.

    Returns:
        (index, revolutions) where ``index`` lies in [0, resolution) and
        ``revolutions`` counts the full laps removed.
    """
    revolutions = raw_index // resolution
    index = np.where(raw_index >= 1, raw_index - revolutions * resolution, raw_index)
    if np.any((index < 0) | (index >= resolution)):
        bad = raw_index[(index < 0) | (index >= resolution)]
        raise IndexOutOfRangeDefect(f"raw indices {bad[:5].tolist()} wrap outside [0, {resolution})")
    return index, revolutions


@dataclass(frozen=True)
class FrameMapping:
    dilated_seconds: np.ndarray
    index: np.ndarray
    revolutions: np.ndarray
    points: np.ndarray


class TemporalIndexMapper:
    """Reads the immutable tables and turns elapsed ticks into plot pixels."""

    def __init__(
        self,
        factors: npt.NDArray[np.float64],
        radius_table: npt.NDArray[np.int32],
        *,
        int_ceiling: int = INT_CEILING,
        float_safety_fraction: float = FLOAT_SAFETY_FRACTION,
    ) -> None:
        if radius_table.ndim != 3 or radius_table.shape[2] != 2:
            raise ValueError(f"radius table must have shape (samples, steps, 2), got {radius_table.shape}")
        if factors.shape[0] != radius_table.shape[0]:
            raise ValueError(
                f"{factors.shape[0]} dilation factors for {radius_table.shape[0]} radius rows"
            )

        self.factors = factors
        self.radius_table = radius_table
        self.resolution = radius_table.shape[1]
        self.int_ceiling = int_ceiling
        self.float_safety_fraction = float_safety_fraction
        self._rows = np.arange(radius_table.shape[0])

    def map(self, sec3600: int, min3600: int) -> FrameMapping:
        if not 0 <= sec3600 < self.resolution:
            raise ValueError(f"sec3600 must be in [0, {self.resolution}) (got {sec3600})")
        if min3600 < 0:
            raise ValueError(f"min3600 must be non-negative (got {min3600})")

        check_revolution_guard(min3600, self.int_ceiling)

        ticks = float(sec3600 + min3600)
        dilated_seconds = (self.factors / float(TICKS_PER_SECOND)) * ticks
        check_accumulator_guard(dilated_seconds, self.float_safety_fraction)

        raw_index = round_half_up(dilated_seconds * TICKS_PER_SECOND).astype(np.int64)
        index, revolutions = wrap_indices(raw_index, self.resolution)
        points = self.radius_table[self._rows, index]
        return FrameMapping(
            dilated_seconds=dilated_seconds,
            index=index,
            revolutions=revolutions,
            points=points,
        )
