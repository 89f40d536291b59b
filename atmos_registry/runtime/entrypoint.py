from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from atmos_registry.core.events.event_bus import EventBus
from atmos_registry.core.events.sinks.file_recorder import FileRecorderSink
from atmos_registry.core.events.sinks.sink_logging import LoggingEventSink
from atmos_registry.core.ports.ledger_clock import ManualLedgerClock
from atmos_registry.core.registry.registry import DatasetRegistry
from atmos_registry.core.registry.registry_config import RegistryConfig
from atmos_registry.runtime.prometheus_metrics import RegistryMetricsClient
from atmos_registry.runtime.script_runner import ScriptError, ScriptRunner, load_script
from atmos_registry.runtime.summary import print_registry_summary, summarize_registry

LOGGER = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _load_json(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(path)
    return json.loads(path.read_text(encoding="utf-8"))


def _build_event_bus(events_out: Path | None) -> EventBus:
    bus = EventBus(sinks=[LoggingEventSink(logging.getLogger("atmos_registry.events"))])
    if events_out is not None:
        bus.register(FileRecorderSink(events_out))
    return bus


def _push_metrics(registry: DatasetRegistry, results: list[dict[str, Any]]) -> None:
    metrics = RegistryMetricsClient()
    if not metrics.is_enabled():
        return
    try:
        metrics.record_summary(summarize_registry(registry, results=results))
        metrics.push_all(job="atmos_registry_replay")
    except Exception:
        LOGGER.exception("Prometheus push failed")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Replay a registry operation script against a fresh registry"
    )

    parser.add_argument(
        "--config",
        type=Path,
        required=True,
        help="Path to registry JSON config (admin, limits).",
    )

    parser.add_argument(
        "--script",
        type=Path,
        required=True,
        help="Path to JSON list of operations to replay.",
    )

    parser.add_argument(
        "--start-time",
        type=int,
        default=0,
        help="Initial ledger time used for created_at.",
    )

    parser.add_argument(
        "--events-out",
        type=Path,
        default=None,
        help="Append registry events as JSON lines to this file.",
    )

    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print a registry summary after replay.",
    )

    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    # ------------------------------------------------------------------
    # Load config + script
    # ------------------------------------------------------------------

    try:
        cfg = RegistryConfig.from_json_obj(_load_json(args.config))
        steps = load_script(args.script)
    except (FileNotFoundError, json.JSONDecodeError, ValidationError, ScriptError) as error:
        print(f"Error: {error}", file=sys.stderr)
        return 2

    # ------------------------------------------------------------------
    # Replay
    # ------------------------------------------------------------------

    clock = ManualLedgerClock(start=args.start_time)
    event_bus = _build_event_bus(args.events_out)
    registry = DatasetRegistry.from_config(cfg, event_bus=event_bus, clock=clock)
    runner = ScriptRunner(registry, clock)

    results: list[dict[str, Any]] = []
    try:
        for index, step in enumerate(steps):
            result = runner.run_step(step, index)
            results.append(result)
            print(json.dumps(result, sort_keys=True))
    except ScriptError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 2
    finally:
        event_bus.close()

    if args.summary:
        print()
        print_registry_summary(summarize_registry(registry, results=results))

    _push_metrics(registry, results)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
