"""Quantized circle tables for the clock face and the dilation plot.

Every table starts at 12 o'clock and runs clockwise in screen coordinates
(y grows downward). Point ``k`` of an ``N`` point table sits at

    theta = pi/2 + 2*pi*k/N
    (x, y) = (cx - r*cos(theta), cy - r*sin(theta))

rounded to the nearest pixel, exact halves going up (toward +inf) so every
table places tie cells the same way. Tables are returned read-only.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Tuple

import numpy as np

from time_dilation_clock.config import ANGULAR_RESOLUTION, RADIUS_SAMPLES

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

PIXEL_DTYPE = np.int32


def _unit_circle(resolution: int) -> Tuple[np.ndarray, np.ndarray]:
    if resolution <= 0:
        raise ValueError(f"resolution must be positive (got {resolution})")
    theta = np.pi / 2.0 + 2.0 * np.pi * np.arange(resolution, dtype=np.float64) / resolution
    return np.cos(theta), np.sin(theta)


def round_half_up(values: np.ndarray) -> np.ndarray:
    return np.floor(np.asarray(values, dtype=np.float64) + 0.5)


def _freeze(table: np.ndarray) -> np.ndarray:
    table.flags.writeable = False
    return table


def generate_angular_table(
    radius: float,
    center_x: int,
    center_y: int,
    resolution: int,
) -> npt.NDArray[np.int32]:
    """
    Points evenly spaced around a circle, index 0 at the top.

    Args:
        radius: Circle radius in pixels.
        center_x: x coordinate of the circle center.
        center_y: y coordinate of the circle center.
        resolution: Number of points (12, 60, 360 or 3600 on the clock).

    Returns:
        Read-only array of shape (resolution, 2) holding integer (x, y) pixels.
    """
    cos, sin = _unit_circle(resolution)
    xs = round_half_up(center_x - radius * cos)
    ys = round_half_up(center_y - radius * sin)
    return _freeze(np.stack((xs, ys), axis=-1).astype(PIXEL_DTYPE))


def generate_radius_table(
    center_x: int,
    center_y: int,
    samples: int = RADIUS_SAMPLES,
    resolution: int = ANGULAR_RESOLUTION,
) -> npt.NDArray[np.int32]:
    """
    Angular tables for every integer radius 0..samples-1 about one center.

    Row ``r`` is exactly ``generate_angular_table(r, center_x, center_y,
    resolution)``, so row 0 is the center repeated. The result is a single
    contiguous array of shape (samples, resolution, 2).
    """
    if samples <= 0:
        raise ValueError(f"samples must be positive (got {samples})")

    start = time.perf_counter()
    cos, sin = _unit_circle(resolution)
    radii = np.arange(samples, dtype=np.float64)[:, np.newaxis]

    table = np.empty((samples, resolution, 2), dtype=PIXEL_DTYPE)
    table[..., 0] = round_half_up(center_x - radii * cos)
    table[..., 1] = round_half_up(center_y - radii * sin)

    logger.info(
        f"Built radius table {table.shape} ({table.nbytes / 2**20:.1f} MiB) "
        f"in {time.perf_counter() - start:.3f}s"
    )
    return _freeze(table)
