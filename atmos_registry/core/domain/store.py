"""Primary dataset store.

Holds the authoritative ``id -> DatasetEntry`` map. Entries are immutable;
a mutation replaces the whole entry so that rollback only needs the previous
object.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable

from atmos_registry.core.domain.mutability import EDITABLE, FROZEN
from atmos_registry.core.domain.types import DatasetRecord

# ---------------------------------------------------------------------------
# Internal record model
#
# Not part of the JSON-schema surface. ``DatasetRecord`` is the read view.
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class DatasetEntry:
    """Stored dataset record with an explicit mutability state."""

    id: int
    owner: str

    name: str
    description: str
    data_type: str

    collection_date: int
    altitude_min: int
    altitude_max: int
    latitude: int
    longitude: int

    ipfs_hash: str
    is_public: bool

    created_at: int
    status: str

    mutability: str = EDITABLE

    @property
    def metadata_frozen(self) -> bool:
        return self.mutability == FROZEN

    def with_changes(self, **changes: object) -> DatasetEntry:
        return replace(self, **changes)

    def to_record(self) -> DatasetRecord:
        return DatasetRecord(
            id=self.id,
            owner=self.owner,
            name=self.name,
            description=self.description,
            data_type=self.data_type,
            collection_date=self.collection_date,
            altitude_min=self.altitude_min,
            altitude_max=self.altitude_max,
            latitude=self.latitude,
            longitude=self.longitude,
            ipfs_hash=self.ipfs_hash,
            is_public=self.is_public,
            metadata_frozen=self.metadata_frozen,
            created_at=self.created_at,
            status=self.status,
        )


class DatasetStore:
    """Map from dataset identifier to stored entry."""

    def __init__(self) -> None:
        self._entries: dict[int, DatasetEntry] = {}

    def get(self, dataset_id: int) -> DatasetEntry | None:
        return self._entries.get(dataset_id)

    def contains(self, dataset_id: int) -> bool:
        return dataset_id in self._entries

    def put(self, entry: DatasetEntry) -> DatasetEntry | None:
        """Write an entry and return the one it replaced, if any."""
        previous = self._entries.get(entry.id)
        self._entries[entry.id] = entry
        return previous

    def discard(self, dataset_id: int) -> None:
        """Drop an entry. Used only to undo a creation inside a transaction."""
        self._entries.pop(dataset_id, None)

    def ids(self) -> Iterable[int]:
        return sorted(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
