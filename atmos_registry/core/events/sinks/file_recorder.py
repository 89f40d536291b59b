"""
Append-only JSON lines recorder for registry events.
"""
from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from atmos_registry.core.events.events import RegistryEvent


def event_to_json_obj(event: RegistryEvent) -> dict[str, Any]:
    """Flatten an event into a JSON object tagged with its type name."""
    return {"event_type": type(event).__name__, **asdict(event)}


class FileRecorderSink:
    """Writes each event as one JSON line."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = self._path.open("a", encoding="utf-8")
        self._closed = False

    @property
    def path(self) -> Path:
        return self._path

    def on_event(self, event: RegistryEvent) -> None:
        self._fh.write(json.dumps(event_to_json_obj(event), sort_keys=True) + "\n")
        self._fh.flush()

    def close(self) -> None:
        if self._closed:
            return
        self._fh.flush()
        self._fh.close()
        self._closed = True
