"""
Synchronous registry event bus.

Events are dispatched in emission order, after the mutation that produced
them has committed.
"""
from __future__ import annotations

from typing import Iterable

from atmos_registry.core.events.event_sink import EventSink
from atmos_registry.core.events.events import RegistryEvent


class EventBus:
    """Fans registry events out to registered sinks."""

    def __init__(self, sinks: Iterable[EventSink] | None = None) -> None:
        self._sinks: list[EventSink] = list(sinks) if sinks is not None else []
        self._emitted = 0
        self._closed = False

    @property
    def emitted(self) -> int:
        """Number of events emitted so far."""
        return self._emitted

    def register(self, sink: EventSink) -> None:
        self._sinks.append(sink)

    def emit(self, event: RegistryEvent) -> None:
        if self._closed:
            raise RuntimeError("EventBus is closed")
        self._emitted += 1
        for sink in self._sinks:
            sink.on_event(event)

    def close(self) -> None:
        """Close every sink that exposes close(); safe to call twice."""
        if self._closed:
            return

        for sink in self._sinks:
            close_fn = getattr(sink, "close", None)
            if callable(close_fn):
                close_fn()

        self._closed = True
