"""Registry-wide state.

One ``RegistryState`` object holds everything a registry instance owns: the
primary store, the owner index, the identifier counter, the admin identity
and the pause flag. It is passed explicitly to every operation; there are no
module-level singletons.

Writes go through ``RegistryTransaction`` while holding ``lock``. Readers
take the same lock so they never see a transaction that has not committed.
"""

from __future__ import annotations

import threading

from atmos_registry.core.domain.owner_index import OwnerIndex
from atmos_registry.core.domain.store import DatasetStore
from atmos_registry.core.domain.validator import TextLimits
from atmos_registry.core.registry.registry_config import RegistryConfig


class RegistryState:
    """Mutable registry context owned by the mutation coordinator."""

    def __init__(
        self,
        *,
        admin: str,
        paused: bool = False,
        owner_index_capacity: int = 1000,
        max_page_size: int = 50,
        text_limits: TextLimits | None = None,
    ) -> None:
        self.store = DatasetStore()
        self.owner_index = OwnerIndex(capacity=owner_index_capacity)

        # Highest identifier ever assigned; never decreases.
        self.counter: int = 0
        self.admin: str = admin
        self.paused: bool = paused

        # Guards every read and every transaction. Reentrant so event sinks
        # may read the registry while a mutation is publishing.
        self.lock = threading.RLock()

        self.max_page_size = max_page_size
        self.text_limits = text_limits if text_limits is not None else TextLimits()

    @classmethod
    def from_config(cls, cfg: RegistryConfig) -> RegistryState:
        return cls(
            admin=cfg.admin,
            paused=cfg.paused,
            owner_index_capacity=cfg.owner_index_capacity,
            max_page_size=cfg.max_page_size,
            text_limits=cfg.limits(),
        )

    def fingerprint(self) -> tuple[object, ...]:
        """Hashable snapshot of all observable state (used to assert no-ops)."""
        records = tuple(self.store.get(i) for i in self.store.ids())
        index = tuple(
            (owner, tuple(self.owner_index.ids_for(owner)))
            for owner in sorted(self.owner_index.owners())
        )
        return (self.counter, self.admin, self.paused, records, index)
