"""
Semantic test: administrative import.

Invariant:
Only the admin may import. Imported records are stored verbatim, indexed
under their owner, and the counter only ever moves forward.
"""

from __future__ import annotations

from registry_factories import ADMIN, WALLET_1, WALLET_3, dataset_fields, dataset_import

from atmos_registry.core.domain.reject_reasons import RejectReason
from atmos_registry.core.events.events import DatasetImportedEvent
from atmos_registry.core.registry.registry import DatasetRegistry


def _register_n(registry: DatasetRegistry, n: int) -> None:
    for _ in range(n):
        assert registry.register(WALLET_1, dataset_fields()).ok


def test_import_beyond_counter_scenario(registry: DatasetRegistry) -> None:
    _register_n(registry, 10)

    assert registry.import_dataset(ADMIN, dataset_import(50, WALLET_3)).value == 50
    assert registry.get_count() == 50

    second = registry.import_dataset(ADMIN, dataset_import(50, WALLET_3))
    assert second.reason == RejectReason.ALREADY_EXISTS
    assert second.code == 409


def test_register_after_import_continues_from_counter(registry: DatasetRegistry) -> None:
    _register_n(registry, 2)
    registry.import_dataset(ADMIN, dataset_import(7, WALLET_3))

    assert registry.register(WALLET_1, dataset_fields()).value == 8


def test_gap_fill_keeps_counter(registry: DatasetRegistry) -> None:
    registry.import_dataset(ADMIN, dataset_import(20, WALLET_3))

    assert registry.import_dataset(ADMIN, dataset_import(5, WALLET_3)).ok
    assert registry.get_count() == 20
    assert registry.get_owner_ids(WALLET_3) == [20, 5]


def test_gap_ids_are_paged_but_not_fetchable(registry: DatasetRegistry) -> None:
    registry.import_dataset(ADMIN, dataset_import(3, WALLET_3))

    assert registry.page_ids(0, 10).items == [1, 2, 3]
    assert registry.get(1).reason == RejectReason.NOT_FOUND
    assert [record.id for record in registry.get_many([1, 2, 3])] == [3]


def test_import_is_verbatim(registry: DatasetRegistry) -> None:
    payload = dataset_import(
        4,
        WALLET_3,
        metadata_frozen=True,
        created_at=1_234,
        status="deprecated",
        ipfs_hash="",
    )

    registry.import_dataset(ADMIN, payload)
    record = registry.get(4).unwrap()

    assert record.owner == WALLET_3
    assert record.metadata_frozen is True
    assert record.created_at == 1_234
    assert record.status == "deprecated"
    assert registry.update_metadata(WALLET_3, 4, "n", "d", "t", True).reason == RejectReason.METADATA_FROZEN


def test_non_admin_cannot_import(registry: DatasetRegistry) -> None:
    result = registry.import_dataset(WALLET_1, dataset_import(1, WALLET_1))

    assert result.reason == RejectReason.NOT_AUTHORIZED
    assert registry.get_count() == 0


def test_import_rejects_zero_id_and_invalid_fields(registry: DatasetRegistry) -> None:
    assert registry.import_dataset(ADMIN, dataset_import(0, WALLET_3)).reason == RejectReason.INVALID_PARAMS
    assert (
        registry.import_dataset(ADMIN, dataset_import(2, WALLET_3, status="archived")).reason
        == RejectReason.INVALID_PARAMS
    )
    assert (
        registry.import_dataset(ADMIN, dataset_import(2, WALLET_3, latitude=90_000_001)).reason
        == RejectReason.INVALID_PARAMS
    )
    assert registry.import_dataset(ADMIN, dataset_import(2, "")).reason == RejectReason.INVALID_PARAMS
    assert registry.get_count() == 0


def test_invalid_params_checked_before_existence(registry: DatasetRegistry) -> None:
    registry.import_dataset(ADMIN, dataset_import(1, WALLET_3))

    result = registry.import_dataset(ADMIN, dataset_import(1, WALLET_3, name=""))

    assert result.reason == RejectReason.INVALID_PARAMS


def test_import_publishes_event(registry: DatasetRegistry, sink) -> None:
    registry.import_dataset(ADMIN, dataset_import(9, WALLET_3))

    event = sink.of_type(DatasetImportedEvent)[0]
    assert (event.dataset_id, event.owner, event.imported_by, event.counter) == (9, WALLET_3, ADMIN, 9)
