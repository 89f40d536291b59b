"""Mutation coordinator implementing authorization, pause gating and
atomic writes for every state-changing registry operation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from atmos_registry.core.domain import mutability
from atmos_registry.core.domain.reject_reasons import RejectReason, error_code
from atmos_registry.core.domain.store import DatasetEntry
from atmos_registry.core.domain.validator import valid_identity, valid_text_fields, validate
from atmos_registry.core.events.events import (
    AdminChangedEvent,
    DatasetImportedEvent,
    DatasetRegisteredEvent,
    MetadataFrozenEvent,
    MetadataUpdatedEvent,
    MutationRejectedEvent,
    OwnershipTransferredEvent,
    PauseChangedEvent,
)
from atmos_registry.core.registry.results import RegistryResult, accept, reject
from atmos_registry.core.registry.transaction import RegistryTransaction

if TYPE_CHECKING:
    from atmos_registry.core.domain.types import DatasetFields, DatasetImport, MetadataUpdate
    from atmos_registry.core.events.event_bus import EventBus
    from atmos_registry.core.ports.ledger_clock import LedgerClock
    from atmos_registry.core.registry.state import RegistryState

LOGGER = logging.getLogger(__name__)


class MutationCoordinator:
    """Single entry point for registry writes.

    Every operation runs the same gate sequence (pause, existence,
    authorization, mutability, field validation, index capacity) and then
    applies its writes inside one ``RegistryTransaction``. A reject at any
    step leaves the state untouched and is returned, never raised.

    Mutations hold ``state.lock`` from the first gate until the event is
    published, so readers taking the same lock only see committed state.
    """

    def __init__(
        self,
        state: RegistryState,
        event_bus: EventBus,
        clock: LedgerClock,
    ) -> None:
        self._state = state
        self._event_bus = event_bus
        self._clock = clock

    # ---------------------------------------------------------------------
    # Gates
    # ---------------------------------------------------------------------

    def _blocked_by_pause(self, caller: str) -> bool:
        # The admin bypasses the pause gate.
        return self._state.paused and caller != self._state.admin

    def _reject(
        self,
        operation: str,
        caller: str,
        reason: str,
        dataset_id: int | None = None,
    ) -> RegistryResult:
        if reason == RejectReason.CAPACITY_EXCEEDED:
            reason = RejectReason.INVALID_PARAMS

        LOGGER.info(
            "Registry mutation rejected",
            extra={"operation": operation, "caller": caller, "reason": reason, "dataset_id": dataset_id},
        )
        self._event_bus.emit(
            MutationRejectedEvent(
                ts=self._clock.now(),
                operation=operation,
                caller=caller,
                reason=reason,
                code=error_code(reason),
                dataset_id=dataset_id,
            )
        )
        return reject(reason)

    def _owned_entry(
        self,
        operation: str,
        caller: str,
        dataset_id: int,
    ) -> tuple[DatasetEntry | None, RegistryResult | None]:
        """Resolve an entry the caller owns, or the reject for it."""
        if self._blocked_by_pause(caller):
            return None, self._reject(operation, caller, RejectReason.CONTRACT_PAUSED, dataset_id)

        entry = self._state.store.get(dataset_id)
        if entry is None:
            return None, self._reject(operation, caller, RejectReason.NOT_FOUND, dataset_id)
        if caller != entry.owner:
            return None, self._reject(operation, caller, RejectReason.NOT_AUTHORIZED, dataset_id)
        return entry, None

    # ---------------------------------------------------------------------
    # Dataset lifecycle
    # ---------------------------------------------------------------------

    def register(self, caller: str, fields: DatasetFields) -> RegistryResult[int]:
        """Create a record owned by ``caller`` and return its new identifier."""
        with self._state.lock:
            if self._blocked_by_pause(caller):
                return self._reject("register", caller, RejectReason.CONTRACT_PAUSED)

            state = self._state
            if not valid_identity(caller) or not validate(
                fields.name,
                fields.description,
                fields.data_type,
                fields.collection_date,
                fields.altitude_min,
                fields.altitude_max,
                fields.latitude,
                fields.longitude,
                fields.ipfs_hash,
                "active",
                state.text_limits,
            ):
                return self._reject("register", caller, RejectReason.INVALID_PARAMS)

            dataset_id = state.counter + 1
            if state.store.contains(dataset_id):
                return self._reject("register", caller, RejectReason.ALREADY_EXISTS, dataset_id)

            now = self._clock.now()
            entry = DatasetEntry(
                id=dataset_id,
                owner=caller,
                name=fields.name,
                description=fields.description,
                data_type=fields.data_type,
                collection_date=fields.collection_date,
                altitude_min=fields.altitude_min,
                altitude_max=fields.altitude_max,
                latitude=fields.latitude,
                longitude=fields.longitude,
                ipfs_hash=fields.ipfs_hash,
                is_public=fields.is_public,
                created_at=now,
                status="active",
                mutability=mutability.EDITABLE,
            )

            with RegistryTransaction(state) as tx:
                tx.put_entry(entry)
                outcome = tx.index_add(caller, dataset_id)
                if outcome.reject_reason is not None:
                    tx.rollback()
                    return self._reject("register", caller, outcome.reject_reason, dataset_id)
                tx.set_counter(dataset_id)
                tx.commit()

            LOGGER.debug("Dataset registered", extra={"dataset_id": dataset_id, "owner": caller})
            self._event_bus.emit(
                DatasetRegisteredEvent(
                    ts=now,
                    dataset_id=dataset_id,
                    owner=caller,
                    data_type=fields.data_type,
                )
            )
            return accept(dataset_id)

    def update_metadata(
        self,
        caller: str,
        dataset_id: int,
        update: MetadataUpdate,
    ) -> RegistryResult[bool]:
        """Replace name, description, data type and visibility of an editable record."""
        with self._state.lock:
            entry, rejected = self._owned_entry("update_metadata", caller, dataset_id)
            if entry is None:
                return rejected  # type: ignore[return-value]

            if not mutability.allows_metadata_update(entry.mutability):
                return self._reject("update_metadata", caller, RejectReason.METADATA_FROZEN, dataset_id)

            if not valid_text_fields(
                update.name,
                update.description,
                update.data_type,
                self._state.text_limits,
            ):
                return self._reject("update_metadata", caller, RejectReason.INVALID_PARAMS, dataset_id)

            with RegistryTransaction(self._state) as tx:
                tx.put_entry(
                    entry.with_changes(
                        name=update.name,
                        description=update.description,
                        data_type=update.data_type,
                        is_public=update.is_public,
                    )
                )
                tx.commit()

            self._event_bus.emit(
                MetadataUpdatedEvent(ts=self._clock.now(), dataset_id=dataset_id, owner=caller)
            )
            return accept(True)

    def freeze_metadata(self, caller: str, dataset_id: int) -> RegistryResult[bool]:
        """Make descriptive metadata permanently immutable. Idempotent."""
        with self._state.lock:
            entry, rejected = self._owned_entry("freeze_metadata", caller, dataset_id)
            if entry is None:
                return rejected  # type: ignore[return-value]

            prev_state = entry.mutability
            if not mutability.is_valid_transition(prev_state, mutability.FROZEN):
                return self._reject("freeze_metadata", caller, RejectReason.INVALID_PARAMS, dataset_id)
            if prev_state == mutability.FROZEN:
                return accept(True)

            with RegistryTransaction(self._state) as tx:
                tx.put_entry(entry.with_changes(mutability=mutability.FROZEN))
                tx.commit()

            self._event_bus.emit(
                MetadataFrozenEvent(
                    ts=self._clock.now(),
                    dataset_id=dataset_id,
                    owner=caller,
                    prev_state=prev_state,
                    next_state=mutability.FROZEN,
                )
            )
            return accept(True)

    def transfer(self, caller: str, dataset_id: int, new_owner: str) -> RegistryResult[bool]:
        """Move ownership and reindex; allowed for editable and frozen records."""
        with self._state.lock:
            entry, rejected = self._owned_entry("transfer", caller, dataset_id)
            if entry is None:
                return rejected  # type: ignore[return-value]

            if not valid_identity(new_owner) or not mutability.allows_transfer(entry.mutability):
                return self._reject("transfer", caller, RejectReason.INVALID_PARAMS, dataset_id)

            prev_owner = entry.owner
            with RegistryTransaction(self._state) as tx:
                tx.put_entry(entry.with_changes(owner=new_owner))
                tx.index_remove(prev_owner, dataset_id)
                outcome = tx.index_add(new_owner, dataset_id)
                if outcome.reject_reason is not None:
                    tx.rollback()
                    return self._reject("transfer", caller, outcome.reject_reason, dataset_id)
                tx.commit()

            self._event_bus.emit(
                OwnershipTransferredEvent(
                    ts=self._clock.now(),
                    dataset_id=dataset_id,
                    prev_owner=prev_owner,
                    new_owner=new_owner,
                )
            )
            return accept(True)

    # ---------------------------------------------------------------------
    # Administration
    # ---------------------------------------------------------------------

    def import_dataset(self, caller: str, payload: DatasetImport) -> RegistryResult[int]:
        """Backfill a record verbatim under an explicit identifier (admin only).

        The counter only moves forward, so past identifiers and gaps below
        the counter can both be filled.
        """
        with self._state.lock:
            if self._blocked_by_pause(caller):
                return self._reject("import", caller, RejectReason.CONTRACT_PAUSED, payload.id)

            state = self._state
            if caller != state.admin:
                return self._reject("import", caller, RejectReason.NOT_AUTHORIZED, payload.id)

            if (
                payload.id == 0
                or not valid_identity(payload.owner)
                or not validate(
                    payload.name,
                    payload.description,
                    payload.data_type,
                    payload.collection_date,
                    payload.altitude_min,
                    payload.altitude_max,
                    payload.latitude,
                    payload.longitude,
                    payload.ipfs_hash,
                    payload.status,
                    state.text_limits,
                )
            ):
                return self._reject("import", caller, RejectReason.INVALID_PARAMS, payload.id)

            if state.store.contains(payload.id):
                return self._reject("import", caller, RejectReason.ALREADY_EXISTS, payload.id)

            next_state = mutability.from_frozen_flag(payload.metadata_frozen)
            if not mutability.is_valid_transition(None, next_state):
                return self._reject("import", caller, RejectReason.INVALID_PARAMS, payload.id)

            entry = DatasetEntry(
                id=payload.id,
                owner=payload.owner,
                name=payload.name,
                description=payload.description,
                data_type=payload.data_type,
                collection_date=payload.collection_date,
                altitude_min=payload.altitude_min,
                altitude_max=payload.altitude_max,
                latitude=payload.latitude,
                longitude=payload.longitude,
                ipfs_hash=payload.ipfs_hash,
                is_public=payload.is_public,
                created_at=payload.created_at,
                status=payload.status,
                mutability=next_state,
            )

            with RegistryTransaction(state) as tx:
                tx.put_entry(entry)
                outcome = tx.index_add(payload.owner, payload.id)
                if outcome.reject_reason is not None:
                    tx.rollback()
                    return self._reject("import", caller, outcome.reject_reason, payload.id)
                if payload.id > state.counter:
                    tx.set_counter(payload.id)
                tx.commit()

            self._event_bus.emit(
                DatasetImportedEvent(
                    ts=self._clock.now(),
                    dataset_id=payload.id,
                    owner=payload.owner,
                    imported_by=caller,
                    counter=state.counter,
                )
            )
            return accept(payload.id)

    def set_admin(self, caller: str, new_admin: str) -> RegistryResult[str]:
        with self._state.lock:
            prev_admin = self._state.admin
            if caller != prev_admin:
                return self._reject("set_admin", caller, RejectReason.NOT_AUTHORIZED)
            if not valid_identity(new_admin):
                return self._reject("set_admin", caller, RejectReason.INVALID_PARAMS)

            with RegistryTransaction(self._state) as tx:
                tx.set_admin(new_admin)
                tx.commit()

            LOGGER.info("Registry admin changed", extra={"prev_admin": prev_admin, "new_admin": new_admin})
            self._event_bus.emit(
                AdminChangedEvent(ts=self._clock.now(), prev_admin=prev_admin, new_admin=new_admin)
            )
            return accept(new_admin)

    def set_paused(self, caller: str, paused: bool) -> RegistryResult[bool]:
        with self._state.lock:
            if caller != self._state.admin:
                return self._reject("set_paused", caller, RejectReason.NOT_AUTHORIZED)

            with RegistryTransaction(self._state) as tx:
                tx.set_paused(paused)
                tx.commit()

            LOGGER.info("Registry pause flag set", extra={"paused": paused, "caller": caller})
            self._event_bus.emit(
                PauseChangedEvent(ts=self._clock.now(), paused=paused, changed_by=caller)
            )
            return accept(paused)
