"""Error kinds raised by the dilation engine."""

from __future__ import annotations


class ClockError(Exception):
    """Base class for every error the clock raises on purpose."""


class DomainError(ClockError, ValueError):
    """A velocity at or above light speed reached the dilation math."""


class RangeOverflowGuard(ClockError, OverflowError):
    """An accumulator is within the safety margin of its numeric ceiling."""


class IndexOutOfRangeDefect(ClockError, AssertionError):
    """A wrapped lookup index fell outside the angular table."""
