from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterable

from atmos_registry.core.domain.geo import format_coord

if TYPE_CHECKING:
    from atmos_registry.core.domain.types import DatasetRecord
    from atmos_registry.core.registry.registry import DatasetRegistry

LATEST_DATASETS_SHOWN = 4


# ---------------------------------------------------------------------------
# Data models
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RegistrySummary:
    counter: int
    stored: int
    owner_count: int
    frozen: int
    public: int
    paused: bool
    admin: str
    latest: list[DatasetRecord]
    reject_counts: dict[str, int] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Summary builder
# ---------------------------------------------------------------------------

def summarize_registry(
    registry: DatasetRegistry,
    *,
    results: Iterable[dict[str, Any]] = (),
    latest: int = LATEST_DATASETS_SHOWN,
) -> RegistrySummary:
    state = registry.state
    with state.lock:
        records = registry.get_many(state.store.ids())
        owner_count = len(state.owner_index.owners())

    reject_counts: dict[str, int] = {}
    for result in results:
        reason = result.get("error")
        if isinstance(reason, str):
            reject_counts[reason] = reject_counts.get(reason, 0) + 1

    return RegistrySummary(
        counter=registry.get_count(),
        stored=len(records),
        owner_count=owner_count,
        frozen=sum(1 for record in records if record.metadata_frozen),
        public=sum(1 for record in records if record.is_public),
        paused=registry.is_paused(),
        admin=registry.get_admin(),
        latest=registry.get_many(registry.latest_ids(latest)),
        reject_counts=reject_counts,
    )


# ---------------------------------------------------------------------------
# Pretty printer
# ---------------------------------------------------------------------------

def print_registry_summary(summary: RegistrySummary) -> None:
    print(f"Admin: {summary.admin}")
    print(f"Paused: {'yes' if summary.paused else 'no'}")
    print(f"Dataset counter: {summary.counter}")
    print(f"Stored datasets: {summary.stored} ({summary.public} public, {summary.frozen} frozen)")
    print(f"Owners: {summary.owner_count}")
    print()

    if summary.reject_counts:
        print("Rejections:")
        for reason, count in sorted(summary.reject_counts.items()):
            print(f"  - {reason}: {count}")
        print()

    print("Latest datasets:")
    if not summary.latest:
        print("  (none)")
    for record in summary.latest:
        print(
            f"  - #{record.id} {record.name} [{record.data_type}] | "
            f"{format_coord(record.latitude)}, {format_coord(record.longitude)} | "
            f"{record.altitude_min}-{record.altitude_max} m | "
            f"owner {record.owner}"
            f"{' | frozen' if record.metadata_frozen else ''}"
        )
