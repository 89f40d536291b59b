from __future__ import annotations

import json
import logging
import os

from prometheus_client import CollectorRegistry, Gauge, push_to_gateway

from atmos_registry.runtime.summary import RegistrySummary

LOGGER = logging.getLogger(__name__)


class RegistryMetricsClient:
    """Pushgateway client for registry replay jobs.

    Expected environment:
    - PROMETHEUS_PUSHGATEWAY_URL: URL to the Pushgateway.

    Optional:
    - PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON: JSON object of string labels
      used as grouping key, e.g. {"network": "testnet"}.

    Metrics delivery is a side-effect; callers must not fail because of it.
    """

    def __init__(self, pushgateway_url: str | None = None) -> None:
        self._pushgateway_url = pushgateway_url or os.environ.get("PROMETHEUS_PUSHGATEWAY_URL")
        self._grouping_key = self._load_grouping_key()
        self._registry = CollectorRegistry()
        self._gauges: dict[str, Gauge] = {}

    def is_enabled(self) -> bool:
        return self._pushgateway_url is not None

    @property
    def collector_registry(self) -> CollectorRegistry:
        return self._registry

    @staticmethod
    def _load_grouping_key() -> dict[str, str]:
        raw = os.environ.get("PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON")
        if not raw:
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            LOGGER.warning(
                "Invalid PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON; ignoring"
            )
            return {}

        if not isinstance(data, dict):
            return {}

        return {
            key: value
            for key, value in data.items()
            if isinstance(key, str) and isinstance(value, str)
        }

    def set_gauge(self, *, name: str, value: float, labels: dict[str, str] | None = None) -> None:
        labels = labels or {}
        gauge = self._gauges.get(name)
        if gauge is None:
            gauge = Gauge(
                name,
                documentation=name,
                labelnames=sorted(labels),
                registry=self._registry,
            )
            self._gauges[name] = gauge

        if labels:
            gauge.labels(**labels).set(value)
        else:
            gauge.set(value)

    def record_summary(self, summary: RegistrySummary) -> None:
        self.set_gauge(name="atmos_registry_dataset_counter", value=float(summary.counter))
        self.set_gauge(name="atmos_registry_stored_datasets", value=float(summary.stored))
        self.set_gauge(name="atmos_registry_owners", value=float(summary.owner_count))
        self.set_gauge(name="atmos_registry_frozen_datasets", value=float(summary.frozen))
        self.set_gauge(name="atmos_registry_paused", value=1.0 if summary.paused else 0.0)
        for reason, count in summary.reject_counts.items():
            self.set_gauge(
                name="atmos_registry_rejections",
                value=float(count),
                labels={"reason": reason},
            )

    def push_all(self, *, job: str) -> None:
        if not self._pushgateway_url:
            return

        push_to_gateway(
            gateway=self._pushgateway_url,
            job=job,
            registry=self._registry,
            grouping_key=self._grouping_key,
        )

        LOGGER.info(
            "Prometheus metrics pushed",
            extra={"job": job, "grouping_key": self._grouping_key},
        )
