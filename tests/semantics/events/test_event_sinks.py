"""
Semantic test: registry events.

Invariant:
Committed mutations publish exactly one event each, in commit order, and
the file recorder writes one JSON object per event.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from registry_factories import ADMIN, START_TIME, WALLET_1, WALLET_2, dataset_fields

from atmos_registry.core.events.event_bus import EventBus
from atmos_registry.core.events.events import (
    AdminChangedEvent,
    DatasetRegisteredEvent,
    MetadataFrozenEvent,
    MetadataUpdatedEvent,
    MutationRejectedEvent,
    PauseChangedEvent,
)
from atmos_registry.core.events.sinks.file_recorder import FileRecorderSink
from atmos_registry.core.events.sinks.null_event_bus import NullEventBus
from atmos_registry.core.events.sinks.sink_logging import LoggingEventSink
from atmos_registry.core.ports.ledger_clock import ManualLedgerClock
from atmos_registry.core.registry.registry import DatasetRegistry
from atmos_registry.core.registry.state import RegistryState


def test_events_follow_commit_order(registry: DatasetRegistry, sink) -> None:
    registry.register(WALLET_1, dataset_fields())
    registry.update_metadata(WALLET_1, 1, "n", "d", "t", False)
    registry.set_paused(ADMIN, True)
    registry.set_admin(ADMIN, WALLET_2)

    assert [type(event) for event in sink.events] == [
        DatasetRegisteredEvent,
        MetadataUpdatedEvent,
        PauseChangedEvent,
        AdminChangedEvent,
    ]
    registered = sink.events[0]
    assert (registered.ts, registered.dataset_id, registered.owner) == (START_TIME, 1, WALLET_1)


def test_file_recorder_writes_json_lines(tmp_path: Path) -> None:
    out = tmp_path / "events" / "registry.jsonl"
    bus = EventBus(sinks=[FileRecorderSink(out)])
    registry = DatasetRegistry(
        RegistryState(admin=ADMIN),
        event_bus=bus,
        clock=ManualLedgerClock(start=10),
    )

    registry.register(WALLET_1, dataset_fields())
    registry.freeze_metadata(WALLET_2, 1)
    bus.close()

    lines = [json.loads(line) for line in out.read_text(encoding="utf-8").splitlines()]
    assert [line["event_type"] for line in lines] == ["DatasetRegisteredEvent", "MutationRejectedEvent"]
    assert lines[0]["dataset_id"] == 1
    assert lines[1]["reason"] == "NotAuthorized"
    assert lines[1]["code"] == 401


def test_logging_sink_levels(caplog) -> None:
    sink = LoggingEventSink(logging.getLogger("atmos_registry.test"))

    with caplog.at_level(logging.INFO, logger="atmos_registry.test"):
        sink.on_event(PauseChangedEvent(ts=1, paused=True, changed_by=ADMIN))
        sink.on_event(
            MutationRejectedEvent(ts=2, operation="register", caller=WALLET_1, reason="ContractPaused", code=503)
        )

    assert [record.levelno for record in caplog.records] == [logging.INFO, logging.WARNING]


def test_bus_counts_and_closes_once() -> None:
    bus = NullEventBus()
    bus.emit(PauseChangedEvent(ts=1, paused=False, changed_by=ADMIN))
    bus.close()
    bus.close()

    assert bus.emitted == 1


def test_default_registry_uses_null_bus() -> None:
    registry = DatasetRegistry(RegistryState(admin=ADMIN), clock=ManualLedgerClock(start=5))

    assert registry.register(WALLET_1, dataset_fields()).value == 1
    assert registry.get(1).unwrap().created_at == 5


def test_collecting_sink_splits_commits_from_rejections(registry: DatasetRegistry, sink) -> None:
    registry.register(WALLET_1, dataset_fields())
    registry.transfer(WALLET_2, 1, WALLET_2)
    registry.freeze_metadata(WALLET_1, 1)

    assert [type(event) for event in sink.committed()] == [DatasetRegisteredEvent, MetadataFrozenEvent]
    assert [(event.operation, event.code) for event in sink.rejections()] == [("transfer", 401)]
