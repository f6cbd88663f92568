"""Time dilation clock.

An analog clock whose second hand, scaled up to a circumference of
17987547480 m, sweeps its tip at the speed of light. The radius is split into
500 samples; each one advances a green dot around the face at its own
relativistically dilated rate, while the blue second hand follows the real
wall clock. Only kinematic dilation is modelled, no forces.

Modes:
- clock: live pygame window (or --headless for a fixed number of frames).
- calibrate: print the velocity model and verify the light-speed sample.
- tables: build every lookup table and report its size.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from time_dilation_clock.clock import SystemClock
from time_dilation_clock.config import (
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    FULL_CIRCUMFERENCE_M,
    RADIUS_SAMPLES,
    REVOLUTION_PERIOD_S,
    SPEED_OF_LIGHT_M_S,
    ClockConfig,
)
from time_dilation_clock.driver import ClockFace, DilationEngine, FrameDriver
from time_dilation_clock.errors import DomainError
from time_dilation_clock.logging_config import setup_logging
from time_dilation_clock.physics import (
    calibrate_velocity_table,
    generate_velocity_table,
    step_radius,
    time_dilation_factors,
)
from time_dilation_clock.render import PygameRenderer, RecordingRenderer

logger = logging.getLogger(__name__)


# ---------- utility mode: calibration ----------
def run_calibration(verbose: bool) -> int:
    velocities = generate_velocity_table(FULL_CIRCUMFERENCE_M, REVOLUTION_PERIOD_S, RADIUS_SAMPLES)
    factors = time_dilation_factors(velocities, SPEED_OF_LIGHT_M_S)

    print(f"step radius: {step_radius(FULL_CIRCUMFERENCE_M, RADIUS_SAMPLES):.10f} m")
    print("sample | velocity (m/s)        | dilation factor")
    print("-------+-----------------------+----------------")
    rows = range(RADIUS_SAMPLES) if verbose else (0, 1, RADIUS_SAMPLES // 2 - 1, RADIUS_SAMPLES - 1)
    for i in rows:
        print(f"{i + 1:6d} | {velocities[i]:21.6f} | {factors[i]:.12f}")

    try:
        calibrate_velocity_table(velocities, SPEED_OF_LIGHT_M_S)
    except DomainError as exc:
        print(f"\nLight-speed calibration FAILED: {exc}")
        return 1

    print("\nLight-speed calibration PASSED.")
    return 0


# ---------- utility mode: table report ----------
def run_tables(config: ClockConfig) -> int:
    cx, cy = config.center
    face = ClockFace.build(cx, cy, config.display_radius)
    engine = DilationEngine.build(cx, cy, config)

    named = [
        ("hour hand", face.hour_hand),
        ("minute hand", face.minute_hand),
        ("second hand", face.second_hand),
        ("degree hand", face.degree_hand),
        ("hour numerals", face.hour_numerals),
        ("minute numerals", face.minute_numerals),
        ("velocities", engine.velocities),
        ("dilation factors", engine.factors),
        ("radius table", engine.radius_table),
    ]
    for name, table in named:
        print(f"- {name}: shape={table.shape} dtype={table.dtype} bytes={table.nbytes}")
    return 0


# ---------- CLI ----------
def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Time dilation clock")
    p.add_argument(
        "--mode",
        choices=["clock", "calibrate", "tables"],
        default="clock",
        help="clock: live face; calibrate: check the velocity model; tables: report table sizes",
    )
    p.add_argument("--width", type=int, default=DEFAULT_WIDTH, help="Window width in pixels")
    p.add_argument("--height", type=int, default=DEFAULT_HEIGHT, help="Window height in pixels")
    p.add_argument("--fps", type=float, default=60.0, help="Frame rate cap (0 = ~1 ms idle per frame)")
    p.add_argument("--numerals", action="store_true", help="Draw hour and minute numerals")
    p.add_argument("--no-stats", action="store_true", help="Hide the text overlay")
    p.add_argument("--headless", action="store_true", help="Run without a window (needs --max-frames)")
    p.add_argument("--max-frames", type=int, default=None, help="Stop after this many frames")
    p.add_argument("--verbose", action="store_true", help="Debug logging and full calibration table")
    p.add_argument("--log-file", default=None, help="Also write the log to this file")
    return p


def config_from_args(args: argparse.Namespace) -> ClockConfig:
    return ClockConfig(
        width=args.width,
        height=args.height,
        fps=args.fps,
        numerals=args.numerals,
        stats=not args.no_stats,
        headless=args.headless,
        max_frames=args.max_frames,
        log_level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=args.log_file,
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.headless and args.max_frames is None and args.mode == "clock":
        parser.error("--headless requires --max-frames")

    try:
        config = config_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    setup_logging(level=config.log_level, log_file=config.log_file)

    if args.mode == "calibrate":
        raise SystemExit(run_calibration(verbose=args.verbose))

    if args.mode == "tables":
        raise SystemExit(run_tables(config))

    if config.headless:
        renderer = RecordingRenderer()
    else:
        renderer = PygameRenderer(config.width, config.height, fps=config.fps)

    try:
        driver = FrameDriver(config=config, clock=SystemClock(), renderer=renderer)
    except DomainError as exc:
        logger.error(f"Startup failed: {exc}")
        renderer.close()
        raise SystemExit(2)

    try:
        summary = driver.run()
        print("Time dilation clock run complete")
        print(f"- frames: {summary['frames']}")
        print(f"- minutes elapsed: {summary['minutes_elapsed']}")
        print(f"- min3600: {summary['min3600']}")
        print(f"- stopped by: {summary['stop_reason']}")
    except KeyboardInterrupt:
        print("Interrupted by user.")
    finally:
        driver.close()


if __name__ == "__main__":
    main(sys.argv[1:])
