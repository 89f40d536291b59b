"""Shared fixtures for registry semantic tests."""

from __future__ import annotations

from typing import Any, Callable

import pytest
from registry_factories import ADMIN, START_TIME

from atmos_registry.core.events.event_bus import EventBus
from atmos_registry.core.events.sinks.null_event_bus import CollectingSink
from atmos_registry.core.ports.ledger_clock import ManualLedgerClock
from atmos_registry.core.registry.registry import DatasetRegistry
from atmos_registry.core.registry.state import RegistryState


@pytest.fixture
def clock() -> ManualLedgerClock:
    return ManualLedgerClock(start=START_TIME)


@pytest.fixture
def sink() -> CollectingSink:
    return CollectingSink()


@pytest.fixture
def make_registry(
    clock: ManualLedgerClock,
    sink: CollectingSink,
) -> Callable[..., DatasetRegistry]:
    def _make(**state_kwargs: Any) -> DatasetRegistry:
        state = RegistryState(admin=ADMIN, **state_kwargs)
        return DatasetRegistry(state, event_bus=EventBus(sinks=[sink]), clock=clock)

    return _make


@pytest.fixture
def registry(make_registry: Callable[..., DatasetRegistry]) -> DatasetRegistry:
    return make_registry()
