"""Core shared data models and schemas.

This module defines the canonical Pydantic models for dataset registration
input, metadata updates, administrative backfill, the stored record view and
pagination results. These types are treated as schema definitions and mirror
the JSON Schemas under ``core/schemas``.

Only type-level constraints live here (strict scalars, unsigned integers,
closed enums). Range and cross-field rules are enforced by
``core.domain.validator`` so that they surface as ``InvalidParams`` result
values instead of exceptions.
"""

# pylint: disable=missing-class-docstring
from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

DatasetStatus = Literal["active", "deprecated"]

DATASET_STATUSES: frozenset[str] = frozenset({"active", "deprecated"})

# ---------------------------------------------------------------------------
# Mutation inputs
# ---------------------------------------------------------------------------


class DatasetFields(BaseModel):
    """Caller-supplied fields for ``register``."""

    name: str
    description: str
    data_type: str

    collection_date: int = Field(..., ge=0)
    altitude_min: int = Field(..., ge=0)
    altitude_max: int = Field(..., ge=0)

    # micro-degrees
    latitude: int
    longitude: int

    ipfs_hash: str = ""
    is_public: bool

    model_config = ConfigDict(extra="forbid", strict=True)


class DatasetImport(DatasetFields):
    """Administrative backfill payload.

    Unlike ``register``, identity, ownership, freeze state, creation time and
    status are supplied verbatim by the caller.
    """

    id: int = Field(..., ge=0)
    owner: str
    metadata_frozen: bool = False
    created_at: int = Field(..., ge=0)
    status: str = "active"


class MetadataUpdate(BaseModel):
    """Descriptive fields replaced by ``update_metadata``."""

    name: str
    description: str
    data_type: str
    is_public: bool

    model_config = ConfigDict(extra="forbid", strict=True)


# ---------------------------------------------------------------------------
# Read models
# ---------------------------------------------------------------------------


class DatasetRecord(BaseModel):
    """Read view of a stored dataset record."""

    id: int = Field(..., ge=1)
    owner: str = Field(..., min_length=1)

    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    data_type: str = Field(..., min_length=1)

    collection_date: int = Field(..., ge=1)
    altitude_min: int = Field(..., ge=0)
    altitude_max: int = Field(..., ge=0)
    latitude: int = Field(..., ge=-90_000_000, le=90_000_000)
    longitude: int = Field(..., ge=-180_000_000, le=180_000_000)

    ipfs_hash: str
    is_public: bool
    metadata_frozen: bool
    created_at: int = Field(..., ge=0)
    status: DatasetStatus

    model_config = ConfigDict(extra="forbid", frozen=True)


class IdPage(BaseModel):
    """One page of dataset identifiers plus the resumable cursor."""

    items: list[Annotated[int, Field(ge=1)]]
    next_offset: int | None = Field(default=None, ge=0)

    model_config = ConfigDict(extra="forbid", frozen=True)
