"""Ledger time source.

The registry never reads wall-clock time directly. ``created_at`` comes from
whatever commit layer hosts it, exposed through this port.
"""

from __future__ import annotations

import time
from typing import Protocol


class LedgerClock(Protocol):
    def now(self) -> int:
        """Current ledger time as an integer."""


class SystemLedgerClock:
    """UNIX time in whole seconds."""

    def now(self) -> int:
        return int(time.time())


class ManualLedgerClock:
    """Explicitly driven clock for tests and script replay."""

    def __init__(self, start: int = 0) -> None:
        self._now = start

    def now(self) -> int:
        return self._now

    def set(self, value: int) -> None:
        # Ledger time never regresses.
        self._now = max(self._now, value)

    def advance(self, delta: int = 1) -> int:
        if delta < 0:
            raise ValueError("delta must be non-negative")
        self._now += delta
        return self._now
