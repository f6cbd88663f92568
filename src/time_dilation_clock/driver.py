"""Frame driver: wall clock in, clock face and dilation plot out."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

from time_dilation_clock.clock import Clock, ClockReading
from time_dilation_clock.config import (
    ANGULAR_RESOLUTION,
    DEGREE_MARKS,
    FULL_CIRCUMFERENCE_M,
    FULL_RADIUS_M,
    HOUR_MARKS,
    MINUTE_MARKS,
    RADIUS_SAMPLES,
    REVOLUTION_PERIOD_S,
    SPEED_OF_LIGHT_M_S,
    STEP_RADIUS_M,
    TICKS_PER_SECOND,
    ClockConfig,
)
from time_dilation_clock.errors import RangeOverflowGuard
from time_dilation_clock.geometry import generate_angular_table, generate_radius_table
from time_dilation_clock.mapper import DilationState, FrameMapping, TemporalIndexMapper
from time_dilation_clock.physics import (
    calibrate_velocity_table,
    generate_velocity_table,
    time_dilation_factors,
)
from time_dilation_clock.render import Renderer

logger = logging.getLogger(__name__)

STOP_QUIT = "quit"
STOP_FRAME_LIMIT = "frame limit"
STOP_OVERFLOW = "overflow guard"


@dataclass(frozen=True)
class ClockFace:
    """Read-only face tables, one per hand or numeral ring."""

    cx: int
    cy: int
    radius: int
    hour_hand: np.ndarray
    minute_hand: np.ndarray
    second_hand: np.ndarray
    degree_hand: np.ndarray
    hour_numerals: np.ndarray
    minute_numerals: np.ndarray

    @classmethod
    def build(cls, cx: int, cy: int, radius: int) -> ClockFace:
        return cls(
            cx=cx,
            cy=cy,
            radius=radius,
            hour_hand=generate_angular_table(radius - 100, cx, cy, HOUR_MARKS),
            minute_hand=generate_angular_table(radius - 70, cx, cy, MINUTE_MARKS),
            second_hand=generate_angular_table(radius, cx, cy, ANGULAR_RESOLUTION),
            # Alternate 1-degree second hand, kept for parity but not drawn.
            degree_hand=generate_angular_table(radius, cx, cy, DEGREE_MARKS),
            hour_numerals=generate_angular_table(radius - 50, cx, cy, HOUR_MARKS),
            minute_numerals=generate_angular_table(radius - 20, cx, cy, MINUTE_MARKS),
        )


@dataclass(frozen=True)
class DilationEngine:
    """Startup products of the velocity model and the radius table."""

    velocities: np.ndarray
    factors: np.ndarray
    radius_table: np.ndarray
    mapper: TemporalIndexMapper

    @classmethod
    def build(cls, cx: int, cy: int, config: ClockConfig) -> DilationEngine:
        velocities = generate_velocity_table(
            FULL_CIRCUMFERENCE_M, REVOLUTION_PERIOD_S, RADIUS_SAMPLES
        )
        calibrate_velocity_table(velocities, SPEED_OF_LIGHT_M_S)
        factors = time_dilation_factors(velocities, SPEED_OF_LIGHT_M_S)
        radius_table = generate_radius_table(cx, cy, RADIUS_SAMPLES, ANGULAR_RESOLUTION)
        mapper = TemporalIndexMapper(
            factors,
            radius_table,
            int_ceiling=config.int_ceiling,
            float_safety_fraction=config.float_safety_fraction,
        )
        return cls(velocities=velocities, factors=factors, radius_table=radius_table, mapper=mapper)


def stats_lines(time_elapsed: int) -> List[str]:
    return [
        f"Radius step * {RADIUS_SAMPLES}: {STEP_RADIUS_M:.10f}m",
        f"Radius: {FULL_RADIUS_M:.10f}m",
        f"Circumference: {FULL_CIRCUMFERENCE_M:.0f}m",
        f"Circumference/{REVOLUTION_PERIOD_S:.0f}: {SPEED_OF_LIGHT_M_S:.0f} m/s",
        f"Circumference steps: {ANGULAR_RESOLUTION} ({TICKS_PER_SECOND} FPS)",
        f"Scale: 1:{STEP_RADIUS_M:.9f}",
        f"Min elapsed: [{time_elapsed:06d}]",
    ]


@dataclass
class FrameDriver:
    config: ClockConfig
    clock: Clock
    renderer: Renderer
    face: Optional[ClockFace] = None
    engine: Optional[DilationEngine] = None
    state: DilationState = field(init=False)
    frames: int = field(default=0, init=False)
    last_mapping: Optional[FrameMapping] = field(default=None, init=False)

    def __post_init__(self) -> None:
        cx, cy = self.config.center
        start = time.perf_counter()
        if self.face is None:
            self.face = ClockFace.build(cx, cy, self.config.display_radius)
        if self.engine is None:
            self.engine = DilationEngine.build(cx, cy, self.config)
        self.state = DilationState(int_ceiling=self.config.int_ceiling)
        logger.info(f"Clock tables ready in {time.perf_counter() - start:.3f}s")

    def step(self) -> FrameMapping:
        """Render one frame; raises RangeOverflowGuard before drawing if a limit is near."""
        reading = self.clock.now()
        self.state.observe_minute(reading.minute)
        mapping = self.engine.mapper.map(reading.sec3600, self.state.min3600)

        r = self.renderer
        r.clear_frame()
        if self.config.stats:
            self._draw_stats()
        self._draw_face(reading)

        r.set_color("dilation")
        r.set_pixels(mapping.points.tolist())
        r.present_frame()

        self.frames += 1
        self.last_mapping = mapping
        return mapping

    def run(self, max_frames: Optional[int] = None) -> Dict[str, object]:
        if max_frames is None:
            max_frames = self.config.max_frames

        reason = STOP_QUIT
        while True:
            if max_frames is not None and self.frames >= max_frames:
                reason = STOP_FRAME_LIMIT
                break
            try:
                self.step()
            except RangeOverflowGuard as exc:
                logger.warning(f"Stopping: {exc}")
                reason = STOP_OVERFLOW
                break
            if self.renderer.poll_quit_requested():
                reason = STOP_QUIT
                break
            self.renderer.pace()

        logger.info(f"Run ended after {self.frames} frames ({reason})")
        return {
            "frames": self.frames,
            "minutes_elapsed": self.state.time_elapsed,
            "min3600": self.state.min3600,
            "stop_reason": reason,
        }

    def close(self) -> None:
        self.renderer.close()

    # ---------- drawing ----------
    def _draw_stats(self) -> None:
        r = self.renderer
        r.set_color("text")
        for row, text in enumerate(stats_lines(self.state.time_elapsed)):
            r.draw_text(5, 5 + 25 * row, text)

    def _draw_face(self, reading: ClockReading) -> None:
        r = self.renderer
        face = self.face
        cx, cy = face.cx, face.cy

        r.set_color("face")
        r.draw_circle(cx, cy, face.radius + 2)

        if self.config.numerals:
            for j, (x, y) in enumerate(face.minute_numerals.tolist()):
                r.draw_text(x, y, str(j or MINUTE_MARKS), centered=True)
            for j, (x, y) in enumerate(face.hour_numerals.tolist()):
                r.draw_text(x, y, str(j or HOUR_MARKS), centered=True)

        r.set_color("hands")
        hx, hy = face.hour_hand[reading.hour % HOUR_MARKS]
        r.draw_line(cx, cy, int(hx), int(hy))
        mx, my = face.minute_hand[reading.minute % MINUTE_MARKS]
        r.draw_line(cx, cy, int(mx), int(my))

        r.set_color("second")
        sx, sy = face.second_hand[reading.sec3600]
        r.draw_line(cx, cy, int(sx), int(sy))
