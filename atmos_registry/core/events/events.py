"""
Domain event models.

These events represent immutable facts about committed registry mutations
and rejected requests. They are consumed by loggers, recorders, and
monitoring pipelines; nothing in the registry reads them back.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class DatasetRegisteredEvent:
    ts: int
    dataset_id: int
    owner: str
    data_type: str


@dataclass(frozen=True, slots=True)
class DatasetImportedEvent:
    ts: int
    dataset_id: int
    owner: str
    imported_by: str
    counter: int


@dataclass(frozen=True, slots=True)
class MetadataUpdatedEvent:
    ts: int
    dataset_id: int
    owner: str


@dataclass(frozen=True, slots=True)
class MetadataFrozenEvent:
    ts: int
    dataset_id: int
    owner: str
    prev_state: str
    next_state: str


@dataclass(frozen=True, slots=True)
class OwnershipTransferredEvent:
    ts: int
    dataset_id: int
    prev_owner: str
    new_owner: str


@dataclass(frozen=True, slots=True)
class AdminChangedEvent:
    ts: int
    prev_admin: str
    new_admin: str


@dataclass(frozen=True, slots=True)
class PauseChangedEvent:
    ts: int
    paused: bool
    changed_by: str


@dataclass(frozen=True, slots=True)
class MutationRejectedEvent:
    ts: int
    operation: str
    caller: str
    reason: str
    code: int
    dataset_id: int | None = None


RegistryEvent = Union[
    DatasetRegisteredEvent,
    DatasetImportedEvent,
    MetadataUpdatedEvent,
    MetadataFrozenEvent,
    OwnershipTransferredEvent,
    AdminChangedEvent,
    PauseChangedEvent,
    MutationRejectedEvent,
]

# Events that record a committed state change (everything but rejections).
COMMITTED_EVENT_TYPES: tuple[type, ...] = (
    DatasetRegisteredEvent,
    DatasetImportedEvent,
    MetadataUpdatedEvent,
    MetadataFrozenEvent,
    OwnershipTransferredEvent,
    AdminChangedEvent,
    PauseChangedEvent,
)
