"""Undo-log transaction over ``RegistryState``.

Every write made through a ``RegistryTransaction`` journals an inverse
action. Leaving the ``with`` block without ``commit()`` (an early return on
a reject, or an exception) replays the journal in reverse, restoring the
state exactly.

Usage:
    with RegistryTransaction(state) as tx:
        tx.put_entry(entry)
        outcome = tx.index_add(owner, entry.id)
        if outcome.reject_reason is not None:
            return reject(...)      # rolled back on exit
        tx.commit()
"""

from __future__ import annotations

from types import TracebackType
from typing import Callable

from atmos_registry.core.domain.owner_index import IndexAddOutcome
from atmos_registry.core.domain.store import DatasetEntry
from atmos_registry.core.registry.state import RegistryState


class RegistryTransaction:
    """Journaled write set applied directly to live state."""

    def __init__(self, state: RegistryState) -> None:
        self._state = state
        self._undo: list[Callable[[], None]] = []
        self._committed = False
        self._rolled_back = False

    def __enter__(self) -> RegistryTransaction:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if not self._committed:
            self.rollback()

    @property
    def committed(self) -> bool:
        return self._committed

    @property
    def rolled_back(self) -> bool:
        return self._rolled_back

    # ---- Writes ----
    def put_entry(self, entry: DatasetEntry) -> None:
        store = self._state.store
        previous = store.put(entry)
        if previous is None:
            self._undo.append(lambda: store.discard(entry.id))
        else:
            self._undo.append(lambda: store.put(previous))

    def index_add(self, owner: str, dataset_id: int) -> IndexAddOutcome:
        index = self._state.owner_index
        outcome = index.add(owner, dataset_id)
        if outcome.added:
            self._undo.append(lambda: index.remove(owner, dataset_id))
        return outcome

    def index_remove(self, owner: str, dataset_id: int) -> None:
        index = self._state.owner_index
        position = index.remove(owner, dataset_id)
        if position is not None:
            self._undo.append(lambda: index.restore(owner, position, dataset_id))

    def set_counter(self, value: int) -> None:
        previous = self._state.counter
        self._state.counter = value
        self._undo.append(lambda: setattr(self._state, "counter", previous))

    def set_admin(self, admin: str) -> None:
        previous = self._state.admin
        self._state.admin = admin
        self._undo.append(lambda: setattr(self._state, "admin", previous))

    def set_paused(self, paused: bool) -> None:
        previous = self._state.paused
        self._state.paused = paused
        self._undo.append(lambda: setattr(self._state, "paused", previous))

    # ---- Completion ----
    def commit(self) -> None:
        if self._rolled_back:
            raise RuntimeError("Cannot commit a rolled-back transaction")
        self._committed = True
        self._undo.clear()

    def rollback(self) -> None:
        if self._committed or self._rolled_back:
            return
        while self._undo:
            self._undo.pop()()
        self._rolled_back = True
