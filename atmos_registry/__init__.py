"""Public API for the atmos_registry package.

Only symbols imported here are considered part of the stable,
supported external interface.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

# ----------------------------------------------------------------------
# Domain Types
# ----------------------------------------------------------------------
from atmos_registry.core.domain.geo import degrees_to_micro, format_coord
from atmos_registry.core.domain.reject_reasons import ERROR_CODES, RejectReason
from atmos_registry.core.domain.types import (
    DatasetFields,
    DatasetImport,
    DatasetRecord,
    IdPage,
    MetadataUpdate,
)

# ----------------------------------------------------------------------
# Events
# ----------------------------------------------------------------------
from atmos_registry.core.events.event_bus import EventBus
from atmos_registry.core.events.sinks.null_event_bus import NullEventBus

# ----------------------------------------------------------------------
# Ports
# ----------------------------------------------------------------------
from atmos_registry.core.ports.ledger_clock import (
    LedgerClock,
    ManualLedgerClock,
    SystemLedgerClock,
)

# ----------------------------------------------------------------------
# Registry API
# ----------------------------------------------------------------------
from atmos_registry.core.registry.registry import DatasetRegistry
from atmos_registry.core.registry.registry_config import RegistryConfig
from atmos_registry.core.registry.results import RegistryResult
from atmos_registry.core.registry.state import RegistryState

# ----------------------------------------------------------------------
# Public API definition
# ----------------------------------------------------------------------

__all__ = [
    # Registry
    "DatasetRegistry",
    "RegistryConfig",
    "RegistryResult",
    "RegistryState",

    # Domain
    "DatasetFields",
    "DatasetImport",
    "DatasetRecord",
    "IdPage",
    "MetadataUpdate",
    "RejectReason",
    "ERROR_CODES",
    "degrees_to_micro",
    "format_coord",

    # Events / ports
    "EventBus",
    "NullEventBus",
    "LedgerClock",
    "ManualLedgerClock",
    "SystemLedgerClock",

    # Version
    "__version__",
]

# ----------------------------------------------------------------------
# Package version
# ----------------------------------------------------------------------

try:
    __version__ = version("atmos-registry")
except PackageNotFoundError:
    __version__ = "0.0.0"
