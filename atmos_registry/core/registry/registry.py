"""Dataset registry facade.

``DatasetRegistry`` wires one ``RegistryState`` to its mutation coordinator
and exposes the full external API. Reads go straight to the store, the owner
index or the paginator; writes go through the coordinator.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from atmos_registry.core.domain.pagination import page_id_range, page_sequence
from atmos_registry.core.domain.reject_reasons import RejectReason
from atmos_registry.core.domain.types import (
    DatasetFields,
    DatasetImport,
    DatasetRecord,
    IdPage,
    MetadataUpdate,
)
from atmos_registry.core.events.sinks.null_event_bus import NullEventBus
from atmos_registry.core.ports.ledger_clock import SystemLedgerClock
from atmos_registry.core.registry.coordinator import MutationCoordinator
from atmos_registry.core.registry.results import RegistryResult, accept, reject
from atmos_registry.core.registry.state import RegistryState

if TYPE_CHECKING:
    from atmos_registry.core.events.event_bus import EventBus
    from atmos_registry.core.ports.ledger_clock import LedgerClock
    from atmos_registry.core.registry.registry_config import RegistryConfig


class DatasetRegistry:
    """Atmospheric dataset metadata registry."""

    def __init__(
        self,
        state: RegistryState,
        *,
        event_bus: EventBus | None = None,
        clock: LedgerClock | None = None,
    ) -> None:
        self._state = state
        self._event_bus = event_bus if event_bus is not None else NullEventBus()
        self._clock = clock if clock is not None else SystemLedgerClock()
        self._coordinator = MutationCoordinator(state, self._event_bus, self._clock)

    @classmethod
    def from_config(
        cls,
        cfg: RegistryConfig,
        *,
        event_bus: EventBus | None = None,
        clock: LedgerClock | None = None,
    ) -> DatasetRegistry:
        return cls(RegistryState.from_config(cfg), event_bus=event_bus, clock=clock)

    @property
    def state(self) -> RegistryState:
        return self._state

    # ---- Reads ----
    # Every read holds ``state.lock`` so it observes committed state only.
    def get(self, dataset_id: int) -> RegistryResult[DatasetRecord]:
        with self._state.lock:
            entry = self._state.store.get(dataset_id)
        if entry is None:
            return reject(RejectReason.NOT_FOUND)
        return accept(entry.to_record())

    def get_many(self, dataset_ids: Iterable[int]) -> list[DatasetRecord]:
        """Fetch records in the given order, skipping unknown identifiers."""
        records: list[DatasetRecord] = []
        with self._state.lock:
            for dataset_id in dataset_ids:
                entry = self._state.store.get(dataset_id)
                if entry is not None:
                    records.append(entry.to_record())
        return records

    def get_owner_ids(self, owner: str) -> list[int]:
        with self._state.lock:
            return self._state.owner_index.ids_for(owner)

    def get_count(self) -> int:
        with self._state.lock:
            return self._state.counter

    def get_admin(self) -> str:
        with self._state.lock:
            return self._state.admin

    def is_paused(self) -> bool:
        with self._state.lock:
            return self._state.paused

    def page_ids(self, offset: int, limit: int) -> IdPage:
        with self._state.lock:
            counter = self._state.counter
        return page_id_range(counter, offset, limit, self._state.max_page_size)

    def page_owner_ids(self, owner: str, offset: int, limit: int) -> IdPage:
        with self._state.lock:
            ids = self._state.owner_index.ids_for(owner)
        return page_sequence(ids, offset, limit, self._state.max_page_size)

    def latest_ids(self, count: int) -> list[int]:
        """Most recent identifiers, newest first, at most one page."""
        with self._state.lock:
            top = self._state.counter
        n = min(max(count, 0), top, self._state.max_page_size)
        return list(range(top, top - n, -1))

    # ---- Writes ----
    def register(self, caller: str, fields: DatasetFields) -> RegistryResult[int]:
        return self._coordinator.register(caller, fields)

    # pylint: disable=too-many-arguments,too-many-positional-arguments
    def update_metadata(
        self,
        caller: str,
        dataset_id: int,
        name: str,
        description: str,
        data_type: str,
        is_public: bool,
    ) -> RegistryResult[bool]:
        update = MetadataUpdate(
            name=name,
            description=description,
            data_type=data_type,
            is_public=is_public,
        )
        return self._coordinator.update_metadata(caller, dataset_id, update)

    def freeze_metadata(self, caller: str, dataset_id: int) -> RegistryResult[bool]:
        return self._coordinator.freeze_metadata(caller, dataset_id)

    def transfer(self, caller: str, dataset_id: int, new_owner: str) -> RegistryResult[bool]:
        return self._coordinator.transfer(caller, dataset_id, new_owner)

    def import_dataset(self, caller: str, payload: DatasetImport) -> RegistryResult[int]:
        return self._coordinator.import_dataset(caller, payload)

    def set_admin(self, caller: str, new_admin: str) -> RegistryResult[str]:
        return self._coordinator.set_admin(caller, new_admin)

    def set_paused(self, caller: str, paused: bool) -> RegistryResult[bool]:
        return self._coordinator.set_paused(caller, paused)
