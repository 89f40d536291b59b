"""Field validation rules for dataset records.

Every function here is a pure predicate: no state, no side effects, no
exceptions for bad input. Callers translate a ``False`` into
``RejectReason.INVALID_PARAMS``.
"""

from __future__ import annotations

from dataclasses import dataclass

from atmos_registry.core.domain.types import DATASET_STATUSES

LATITUDE_MIN: int = -90_000_000
LATITUDE_MAX: int = 90_000_000
LONGITUDE_MIN: int = -180_000_000
LONGITUDE_MAX: int = 180_000_000


@dataclass(frozen=True, slots=True)
class TextLimits:
    """Maximum lengths for bounded text fields."""

    name: int = 100
    description: int = 500
    data_type: int = 50
    ipfs_hash: int = 100


DEFAULT_TEXT_LIMITS = TextLimits()


def _bounded_text(value: str, max_len: int) -> bool:
    return 0 < len(value) <= max_len


def valid_text_fields(
    name: str,
    description: str,
    data_type: str,
    limits: TextLimits = DEFAULT_TEXT_LIMITS,
) -> bool:
    """Return True if the descriptive text fields are non-empty and bounded."""
    return (
        _bounded_text(name, limits.name)
        and _bounded_text(description, limits.description)
        and _bounded_text(data_type, limits.data_type)
    )


def valid_ipfs_hash(ipfs_hash: str, limits: TextLimits = DEFAULT_TEXT_LIMITS) -> bool:
    """Empty is allowed; otherwise ASCII only and bounded."""
    return len(ipfs_hash) <= limits.ipfs_hash and ipfs_hash.isascii()


def valid_identity(identity: object) -> bool:
    """Return True for a usable owner / caller identity."""
    return isinstance(identity, str) and bool(identity)


# pylint: disable=too-many-arguments,too-many-positional-arguments,too-many-return-statements
def validate(
    name: str,
    description: str,
    data_type: str,
    collection_date: int,
    altitude_min: int,
    altitude_max: int,
    latitude: int,
    longitude: int,
    ipfs_hash: str,
    status: str,
    limits: TextLimits = DEFAULT_TEXT_LIMITS,
) -> bool:
    """Check well-formedness and range constraints of a full record.

    Returns False when a text field is empty or too long, ``collection_date``
    is zero, the altitude range is inverted or negative, a coordinate is out
    of range, ``ipfs_hash`` is too long or non-ASCII, or ``status`` is not a
    known status.
    """
    if not valid_text_fields(name, description, data_type, limits):
        return False
    if collection_date <= 0:
        return False
    if altitude_min < 0 or altitude_max < altitude_min:
        return False
    if not LATITUDE_MIN <= latitude <= LATITUDE_MAX:
        return False
    if not LONGITUDE_MIN <= longitude <= LONGITUDE_MAX:
        return False
    if not valid_ipfs_hash(ipfs_hash, limits):
        return False
    return status in DATASET_STATUSES
