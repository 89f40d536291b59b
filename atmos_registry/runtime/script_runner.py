"""Replay of JSON operation scripts against a registry.

A script is a JSON list of steps:

    [
      {"op": "register", "caller": "wallet_1", "args": {"name": "...", ...}},
      {"op": "freeze_metadata", "caller": "wallet_1", "args": {"id": 1}},
      {"op": "page_ids", "args": {"offset": 0, "limit": 20}},
      {"op": "advance_time", "args": {"seconds": 600}}
    ]

Register and import args may carry ``latitude_deg`` / ``longitude_deg`` in
decimal degrees instead of micro-degree integers.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping

from atmos_registry.core.domain.geo import degrees_to_micro
from atmos_registry.core.domain.types import DatasetFields, DatasetImport
from atmos_registry.core.ports.ledger_clock import ManualLedgerClock
from atmos_registry.core.registry.registry import DatasetRegistry


class ScriptError(ValueError):
    """Raised for a malformed script or step."""


@dataclass(frozen=True, slots=True)
class ScriptStep:
    op: str
    caller: str = ""
    args: Mapping[str, Any] = field(default_factory=dict)


def load_script(path: Path) -> list[ScriptStep]:
    if not path.exists():
        raise FileNotFoundError(path)
    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ScriptError("script must be a JSON list of steps")
    return [parse_step(item, index) for index, item in enumerate(raw)]


def parse_step(raw: Any, index: int) -> ScriptStep:
    if not isinstance(raw, dict) or not isinstance(raw.get("op"), str):
        raise ScriptError(f"step {index}: expected an object with a string 'op'")
    args = raw.get("args", {})
    if not isinstance(args, dict):
        raise ScriptError(f"step {index}: 'args' must be an object")
    return ScriptStep(op=raw["op"], caller=str(raw.get("caller", "")), args=args)


def _json_bool(args: Mapping[str, Any], key: str) -> bool:
    value = args[key]
    if not isinstance(value, bool):
        raise TypeError(f"'{key}' must be a JSON boolean, got {value!r}")
    return value


def _with_micro_coords(args: Mapping[str, Any]) -> dict[str, Any]:
    normalized = dict(args)
    for axis in ("latitude", "longitude"):
        deg_key = f"{axis}_deg"
        if deg_key in normalized:
            normalized[axis] = degrees_to_micro(float(normalized.pop(deg_key)))
    return normalized


class ScriptRunner:
    """Dispatches script steps to a ``DatasetRegistry``."""

    def __init__(self, registry: DatasetRegistry, clock: ManualLedgerClock) -> None:
        self._registry = registry
        self._clock = clock
        self._handlers: dict[str, Callable[[ScriptStep], Any]] = {
            "register": self._register,
            "import": self._import,
            "update_metadata": self._update_metadata,
            "freeze_metadata": lambda s: registry.freeze_metadata(s.caller, int(s.args["id"])),
            "transfer": lambda s: registry.transfer(s.caller, int(s.args["id"]), str(s.args["new_owner"])),
            "set_admin": lambda s: registry.set_admin(s.caller, str(s.args["new_admin"])),
            "set_paused": lambda s: registry.set_paused(s.caller, _json_bool(s.args, "paused")),
            "get": lambda s: registry.get(int(s.args["id"])),
            "get_count": lambda s: registry.get_count(),
            "get_admin": lambda s: registry.get_admin(),
            "get_owner_ids": lambda s: registry.get_owner_ids(str(s.args["owner"])),
            "page_ids": lambda s: registry.page_ids(int(s.args.get("offset", 0)), int(s.args["limit"])),
            "page_owner_ids": lambda s: registry.page_owner_ids(
                str(s.args["owner"]), int(s.args.get("offset", 0)), int(s.args["limit"])
            ),
            "advance_time": lambda s: clock.advance(int(s.args.get("seconds", 1))),
        }

    @property
    def operations(self) -> list[str]:
        return sorted(self._handlers)

    def run_step(self, step: ScriptStep, index: int) -> dict[str, Any]:
        handler = self._handlers.get(step.op)
        if handler is None:
            raise ScriptError(f"step {index}: unknown op '{step.op}'")
        try:
            outcome = handler(step)
        except KeyError as error:
            raise ScriptError(f"step {index} ({step.op}): missing arg {error}") from error
        except (TypeError, ValueError) as error:
            raise ScriptError(f"step {index} ({step.op}): {error}") from error

        to_json = getattr(outcome, "to_json_obj", None)
        if callable(to_json):
            payload = to_json()
        else:
            dump = getattr(outcome, "model_dump", None)
            payload = {"ok": True, "value": dump(mode="json") if callable(dump) else outcome}
        return {"step": index, "op": step.op, **payload}

    def run(self, steps: list[ScriptStep]) -> list[dict[str, Any]]:
        return [self.run_step(step, index) for index, step in enumerate(steps)]

    def _register(self, step: ScriptStep) -> Any:
        fields = DatasetFields.model_validate(_with_micro_coords(step.args))
        return self._registry.register(step.caller, fields)

    def _import(self, step: ScriptStep) -> Any:
        payload = DatasetImport.model_validate(_with_micro_coords(step.args))
        return self._registry.import_dataset(step.caller, payload)

    def _update_metadata(self, step: ScriptStep) -> Any:
        args = step.args
        return self._registry.update_metadata(
            step.caller,
            int(args["id"]),
            str(args["name"]),
            str(args["description"]),
            str(args["data_type"]),
            _json_bool(args, "is_public"),
        )
