from __future__ import annotations

import pytest
from pydantic import ValidationError
from registry_factories import ADMIN, WALLET_1, dataset_fields

from atmos_registry.core.domain.reject_reasons import RejectReason
from atmos_registry.core.domain.validator import DEFAULT_TEXT_LIMITS
from atmos_registry.core.ports.ledger_clock import ManualLedgerClock
from atmos_registry.core.registry.registry import DatasetRegistry
from atmos_registry.core.registry.registry_config import RegistryConfig


def test_defaults() -> None:
    cfg = RegistryConfig.from_json_obj({"admin": ADMIN})

    assert cfg.paused is False
    assert cfg.max_page_size == 50
    assert cfg.owner_index_capacity == 1000
    assert cfg.limits() == DEFAULT_TEXT_LIMITS


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"admin": ""},
        {"admin": f" {ADMIN}"},
        {"admin": ADMIN, "max_page_size": 0},
        {"admin": ADMIN, "owner_index_capacity": 0},
        {"admin": ADMIN, "text_limits": {"name": 0}},
        {"admin": ADMIN, "text_limits": {"title": 10}},
        {"admin": ADMIN, "network": "testnet"},
    ],
)
def test_invalid_config_is_rejected(payload: dict) -> None:
    with pytest.raises(ValidationError):
        RegistryConfig.from_json_obj(payload)


def test_registry_built_from_config_applies_limits() -> None:
    cfg = RegistryConfig.from_json_obj(
        {"admin": ADMIN, "paused": True, "text_limits": {"name": 5}}
    )
    registry = DatasetRegistry.from_config(cfg, clock=ManualLedgerClock(start=1))

    assert registry.is_paused()
    assert registry.get_admin() == ADMIN
    assert registry.register(WALLET_1, dataset_fields()).reason == RejectReason.CONTRACT_PAUSED

    registry.set_paused(ADMIN, False)
    assert registry.register(WALLET_1, dataset_fields(name="Temperature")).reason == RejectReason.INVALID_PARAMS
    assert registry.register(WALLET_1, dataset_fields(name="Temp")).value == 1
