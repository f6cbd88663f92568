"""Velocity model and relativistic dilation for the radius samples."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import numpy as np

from time_dilation_clock.config import (
    FULL_CIRCUMFERENCE_M,
    RADIUS_SAMPLES,
    REVOLUTION_PERIOD_S,
    SPEED_OF_LIGHT_M_S,
)
from time_dilation_clock.errors import DomainError

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

CALIBRATION_TOLERANCE = 1e-3


def step_radius(full_circumference: float, samples: int = RADIUS_SAMPLES) -> float:
    """Distance between neighbouring radius samples on the full-scale clock."""
    return full_circumference / (2.0 * math.pi * samples)


def generate_velocity_table(
    full_circumference: float = FULL_CIRCUMFERENCE_M,
    full_revolution_period_seconds: float = REVOLUTION_PERIOD_S,
    samples: int = RADIUS_SAMPLES,
) -> npt.NDArray[np.float64]:
    """
    Tangential speed of each radius sample, innermost first.

    Sample ``i`` (1-indexed) sits at ``step_radius * i`` and sweeps a circle of
    ``2*pi*step_radius*i`` once per period. The 2*pi cancels against the one
    inside ``step_radius``, so the circumference is evaluated as
    ``full_circumference * i / samples``; this keeps the outermost sample at
    exactly ``full_circumference / period`` instead of a rounding step above it.
    """
    if samples <= 0:
        raise ValueError(f"samples must be positive (got {samples})")
    if full_revolution_period_seconds <= 0:
        raise ValueError("revolution period must be positive")

    index = np.arange(1, samples + 1, dtype=np.float64)
    circumference = full_circumference * index / samples
    velocities = circumference / full_revolution_period_seconds
    velocities.flags.writeable = False
    return velocities


def calibrate_velocity_table(
    velocities: npt.NDArray[np.float64],
    c: float = SPEED_OF_LIGHT_M_S,
    tolerance: float = CALIBRATION_TOLERANCE,
) -> None:
    """Check that the outermost sample moves at light speed and none exceed it."""
    if velocities.size == 0:
        raise DomainError("velocity table is empty")
    peak = float(velocities[-1])
    if not abs(peak - c) <= tolerance:
        raise DomainError(f"outermost sample moves at {peak:.6f} m/s, expected {c:.0f} m/s")
    if not np.all(np.abs(velocities) <= c):
        raise DomainError("velocity table holds samples above light speed")
    logger.info(f"Velocity table calibrated: {velocities[0]:.6f} .. {peak:.6f} m/s")


def time_dilation_factor(v: float, c: float = SPEED_OF_LIGHT_M_S) -> float:
    """Time contraction ``sqrt(1 - (v/c)^2)`` seen by a stationary observer."""
    # Written positively so NaN fails the check too.
    if not abs(v) <= c:
        raise DomainError(f"velocity {v} m/s exceeds light speed {c} m/s")
    ratio = v / c
    radicand = 1.0 - ratio * ratio
    return math.sqrt(radicand)


def time_dilation_factors(
    velocities: npt.NDArray[np.float64],
    c: float = SPEED_OF_LIGHT_M_S,
) -> npt.NDArray[np.float64]:
    """Vectorized ``time_dilation_factor`` over a whole velocity table."""
    velocities = np.asarray(velocities, dtype=np.float64)
    if not np.all(np.abs(velocities) <= c):
        raise DomainError("velocity table holds samples above light speed or NaN")
    ratio = velocities / c
    radicand = 1.0 - ratio * ratio
    factors = np.sqrt(radicand)
    factors.flags.writeable = False
    return factors
