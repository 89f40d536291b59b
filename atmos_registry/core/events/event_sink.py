"""
Registry event sink protocol.
"""
from __future__ import annotations

from typing import Protocol

from atmos_registry.core.events.events import RegistryEvent


class EventSink(Protocol):
    """Receives every registry event, in emission order.

    Events arrive while the registry lock is held; a sink may read the
    registry but must not mutate it. Sinks holding a resource may also
    define ``close()``; ``EventBus.close`` calls it once.
    """

    def on_event(self, event: RegistryEvent) -> None: ...
