from __future__ import annotations

import math

import pytest

from atmos_registry.core.domain.geo import degrees_to_micro, format_coord


@pytest.mark.parametrize(
    ("degrees", "expected"),
    [
        (0.0, 0),
        (40.7128, 40_712_800),
        (-74.006, -74_006_000),
        (90.0, 90_000_000),
        (-180.0, -180_000_000),
        # Halves round toward +inf.
        (-0.0000005, 0),
        (-0.0000015, -1),
    ],
)
def test_degrees_to_micro(degrees: float, expected: int) -> None:
    assert degrees_to_micro(degrees) == expected


@pytest.mark.parametrize("degrees", [math.nan, math.inf, -math.inf])
def test_degrees_to_micro_rejects_non_finite(degrees: float) -> None:
    with pytest.raises(ValueError):
        degrees_to_micro(degrees)


def test_format_coord_three_decimals() -> None:
    assert format_coord(40_712_800) == "40.713"
    assert format_coord(-74_006_000) == "-74.006"
    assert format_coord(0) == "0.000"
