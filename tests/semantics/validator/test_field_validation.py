"""
Semantic test: field validation boundaries.

Invariant:
A record is valid only if its text fields are non-empty and bounded,
collection_date is positive, altitude_min <= altitude_max, coordinates are
inside the micro-degree ranges (inclusive) and status is a known status.
"""

from __future__ import annotations

from typing import Any

import pytest

from atmos_registry.core.domain.validator import (
    TextLimits,
    valid_identity,
    valid_ipfs_hash,
    valid_text_fields,
    validate,
)


def _args(**overrides: Any) -> dict[str, Any]:
    args: dict[str, Any] = {
        "name": "Temperature Data",
        "description": "Atmospheric dataset",
        "data_type": "temperature",
        "collection_date": 1_640_995_200,
        "altitude_min": 1000,
        "altitude_max": 5000,
        "latitude": 40_000_000,
        "longitude": -74_000_000,
        "ipfs_hash": "QmTestHash123",
        "status": "active",
    }
    args.update(overrides)
    return args


def test_baseline_is_valid() -> None:
    assert validate(**_args())


@pytest.mark.parametrize("latitude", [90_000_000, -90_000_000, 0])
def test_latitude_bounds_are_inclusive(latitude: int) -> None:
    assert validate(**_args(latitude=latitude))


@pytest.mark.parametrize("latitude", [90_000_001, -90_000_001])
def test_latitude_outside_bounds_is_rejected(latitude: int) -> None:
    assert not validate(**_args(latitude=latitude))


@pytest.mark.parametrize("longitude", [180_000_000, -180_000_000])
def test_longitude_bounds_are_inclusive(longitude: int) -> None:
    assert validate(**_args(longitude=longitude))


@pytest.mark.parametrize("longitude", [180_000_001, -180_000_001])
def test_longitude_outside_bounds_is_rejected(longitude: int) -> None:
    assert not validate(**_args(longitude=longitude))


def test_inverted_altitude_range_is_rejected() -> None:
    assert not validate(**_args(altitude_min=5000, altitude_max=1000))


def test_flat_altitude_range_is_valid() -> None:
    assert validate(**_args(altitude_min=3000, altitude_max=3000))


def test_zero_collection_date_is_rejected() -> None:
    assert not validate(**_args(collection_date=0))


@pytest.mark.parametrize("field", ["name", "description", "data_type"])
def test_empty_text_field_is_rejected(field: str) -> None:
    assert not validate(**_args(**{field: ""}))


def test_empty_ipfs_hash_is_allowed() -> None:
    assert validate(**_args(ipfs_hash=""))


def test_non_ascii_ipfs_hash_is_rejected() -> None:
    assert not valid_ipfs_hash("Qmé")


def test_unknown_status_is_rejected() -> None:
    assert validate(**_args(status="deprecated"))
    assert not validate(**_args(status="archived"))


def test_text_limits_are_enforced() -> None:
    limits = TextLimits(name=5, description=10, data_type=3, ipfs_hash=4)

    assert valid_text_fields("abcde", "x", "abc", limits)
    assert not valid_text_fields("abcdef", "x", "abc", limits)
    assert valid_ipfs_hash("QmAB", limits)
    assert not valid_ipfs_hash("QmABC", limits)


def test_utf8_text_is_accepted() -> None:
    assert validate(**_args(name="Ozoné profile — Arctic"))


def test_identity_must_be_non_empty_string() -> None:
    assert valid_identity("ST1SJ3DTE5DN7X54YDH5D64R3BCB6A2AG2ZQ8YPD5")
    assert not valid_identity("")
    assert not valid_identity(None)
