"""
Semantic test: owner index maintenance.

Invariant:
An owner's sequence is append-only in insertion order, never holds
duplicates, never exceeds its capacity, and removal preserves the relative
order of the remaining identifiers.
"""

from __future__ import annotations

from atmos_registry.core.domain.owner_index import OwnerIndex
from atmos_registry.core.domain.reject_reasons import RejectReason


def test_add_preserves_insertion_order() -> None:
    index = OwnerIndex()
    for dataset_id in (3, 1, 2):
        assert index.add("alice", dataset_id).reject_reason is None

    assert index.ids_for("alice") == [3, 1, 2]


def test_add_is_idempotent() -> None:
    index = OwnerIndex()
    first = index.add("alice", 7)
    second = index.add("alice", 7)

    assert first.added and first.reject_reason is None
    assert not second.added and second.reject_reason is None
    assert index.ids_for("alice") == [7]


def test_unknown_owner_lists_empty() -> None:
    assert OwnerIndex().ids_for("nobody") == []


def test_capacity_is_enforced() -> None:
    index = OwnerIndex(capacity=1000)
    for dataset_id in range(1, 1001):
        assert index.add("alice", dataset_id).reject_reason is None

    outcome = index.add("alice", 1001)

    assert outcome.reject_reason == RejectReason.CAPACITY_EXCEEDED
    assert not outcome.added
    assert index.size("alice") == 1000
    assert not index.contains("alice", 1001)


def test_readding_existing_id_at_capacity_is_not_an_error() -> None:
    index = OwnerIndex(capacity=2)
    index.add("alice", 1)
    index.add("alice", 2)

    assert index.add("alice", 2).reject_reason is None


def test_capacity_is_per_owner() -> None:
    index = OwnerIndex(capacity=1)
    index.add("alice", 1)

    assert index.add("bob", 2).reject_reason is None


def test_remove_preserves_relative_order() -> None:
    index = OwnerIndex()
    for dataset_id in (1, 2, 3, 4):
        index.add("alice", dataset_id)

    position = index.remove("alice", 2)

    assert position == 1
    assert index.ids_for("alice") == [1, 3, 4]


def test_remove_absent_id_is_noop() -> None:
    index = OwnerIndex()
    index.add("alice", 1)

    assert index.remove("alice", 99) is None
    assert index.remove("bob", 1) is None
    assert index.ids_for("alice") == [1]


def test_restore_reinserts_at_previous_position() -> None:
    index = OwnerIndex()
    for dataset_id in (1, 2, 3):
        index.add("alice", dataset_id)

    position = index.remove("alice", 2)
    assert position is not None
    index.restore("alice", position, 2)

    assert index.ids_for("alice") == [1, 2, 3]
    assert index.contains("alice", 2)


def test_list_is_a_copy() -> None:
    index = OwnerIndex()
    index.add("alice", 1)

    ids = index.ids_for("alice")
    ids.append(99)

    assert index.ids_for("alice") == [1]
