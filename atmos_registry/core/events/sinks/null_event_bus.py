"""
In-process sinks that keep nothing or keep everything.
"""
from __future__ import annotations

from typing import TypeVar

from atmos_registry.core.events.event_bus import EventBus
from atmos_registry.core.events.events import COMMITTED_EVENT_TYPES, MutationRejectedEvent, RegistryEvent

E = TypeVar("E")


class _NullSink:
    def on_event(self, event: RegistryEvent) -> None:
        return


class NullEventBus(EventBus):
    """EventBus that drops every registry event (tests, dry runs)."""

    def __init__(self) -> None:
        super().__init__(sinks=[_NullSink()])


class CollectingSink:
    """Keeps every received event in memory, in order."""

    def __init__(self) -> None:
        self.events: list[RegistryEvent] = []

    def on_event(self, event: RegistryEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: type[E]) -> list[E]:
        return [event for event in self.events if isinstance(event, event_type)]

    def committed(self) -> list[RegistryEvent]:
        """Events for mutations that changed state."""
        return [event for event in self.events if isinstance(event, COMMITTED_EVENT_TYPES)]

    def rejections(self) -> list[MutationRejectedEvent]:
        return self.of_type(MutationRejectedEvent)
