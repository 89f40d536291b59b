"""Coordinate conversion helpers.

Coordinates are stored as signed integers in micro-degrees.
"""

from __future__ import annotations

import math

MICRO_DEGREES_PER_DEGREE: int = 1_000_000


def degrees_to_micro(degrees: float) -> int:
    """Convert decimal degrees to micro-degrees, rounding halves toward +inf."""
    if not math.isfinite(degrees):
        raise ValueError(f"Coordinate must be finite, got {degrees!r}")
    scaled = degrees * MICRO_DEGREES_PER_DEGREE
    return math.floor(scaled + 0.5)


def format_coord(micro_degrees: int) -> str:
    """Render micro-degrees as decimal degrees with three decimals."""
    return f"{micro_degrees / MICRO_DEGREES_PER_DEGREE:.3f}"
