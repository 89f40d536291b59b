"""
Logging sink for registry events.
"""
from __future__ import annotations

import logging

from atmos_registry.core.events.events import MutationRejectedEvent, RegistryEvent
from atmos_registry.core.events.sinks.file_recorder import event_to_json_obj


class LoggingEventSink:
    """Logs registry events; rejections at WARNING, everything else at INFO."""

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def on_event(self, event: RegistryEvent) -> None:
        level = logging.WARNING if isinstance(event, MutationRejectedEvent) else logging.INFO
        self._logger.log(level, "registry_event", extra={"event": event_to_json_obj(event)})
