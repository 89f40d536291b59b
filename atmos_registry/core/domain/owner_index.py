"""Per-owner secondary index of dataset identifiers.

Each owner maps to a bounded, duplicate-free sequence of identifiers kept in
insertion order (oldest first). A hash set mirrors every sequence so that
membership checks are O(1); removal stays a linear scan over at most
``capacity`` entries.
"""

from __future__ import annotations

from dataclasses import dataclass

from atmos_registry.core.domain.reject_reasons import RejectReason

DEFAULT_OWNER_INDEX_CAPACITY: int = 1000


@dataclass(slots=True)
class IndexAddOutcome:
    """Result of ``OwnerIndex.add``.

    - added: the identifier was appended (False for an idempotent no-op)
    - reject_reason: set when the sequence is full
    """

    added: bool
    reject_reason: str | None


class OwnerIndex:
    """Owner identity -> ordered identifier sequence."""

    def __init__(self, capacity: int = DEFAULT_OWNER_INDEX_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._capacity = capacity
        self._entries: dict[str, list[int]] = {}
        self._members: dict[str, set[int]] = {}

    @property
    def capacity(self) -> int:
        return self._capacity

    def add(self, owner: str, dataset_id: int) -> IndexAddOutcome:
        """Append ``dataset_id`` to the owner's sequence.

        Adding an identifier that is already present is a successful no-op.
        """
        members = self._members.get(owner)
        if members is not None and dataset_id in members:
            return IndexAddOutcome(added=False, reject_reason=None)

        entry = self._entries.get(owner)
        if entry is not None and len(entry) >= self._capacity:
            return IndexAddOutcome(added=False, reject_reason=RejectReason.CAPACITY_EXCEEDED)

        self._entries.setdefault(owner, []).append(dataset_id)
        self._members.setdefault(owner, set()).add(dataset_id)
        return IndexAddOutcome(added=True, reject_reason=None)

    def remove(self, owner: str, dataset_id: int) -> int | None:
        """Remove ``dataset_id`` from the owner's sequence.

        Returns:
            The position the identifier occupied, or None if it was absent.
        """
        members = self._members.get(owner)
        if members is None or dataset_id not in members:
            return None

        entry = self._entries[owner]
        position = entry.index(dataset_id)
        del entry[position]
        members.discard(dataset_id)

        if not entry:
            del self._entries[owner]
            del self._members[owner]
        return position

    def restore(self, owner: str, position: int, dataset_id: int) -> None:
        """Reinsert an identifier at a previous position (rollback only)."""
        entry = self._entries.get(owner)
        if entry is None:
            entry = []
            self._entries[owner] = entry
            self._members[owner] = set()
        entry.insert(position, dataset_id)
        self._members[owner].add(dataset_id)

    def ids_for(self, owner: str) -> list[int]:
        """Return a copy of the owner's sequence (empty if unknown)."""
        return list(self._entries.get(owner, ()))

    def contains(self, owner: str, dataset_id: int) -> bool:
        members = self._members.get(owner)
        return members is not None and dataset_id in members

    def size(self, owner: str) -> int:
        return len(self._entries.get(owner, ()))

    def owners(self) -> list[str]:
        return list(self._entries)
