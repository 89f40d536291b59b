"""Explicit result values returned by registry operations.

Domain failures are never raised. Every operation returns a
``RegistryResult`` carrying either a value or a reject reason.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from atmos_registry.core.domain.reject_reasons import error_code

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class RegistryResult(Generic[T]):
    value: T | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.reason is None

    @property
    def code(self) -> int | None:
        """Numeric error code, None on success."""
        return None if self.reason is None else error_code(self.reason)

    def unwrap(self) -> T:
        """Return the value or raise ``RuntimeError`` for a rejected result."""
        if self.reason is not None:
            raise RuntimeError(f"Registry operation rejected: {self.reason} ({self.code})")
        return self.value  # type: ignore[return-value]

    def to_json_obj(self) -> dict[str, object]:
        if self.reason is None:
            value: object = self.value
            dump = getattr(value, "model_dump", None)
            if callable(dump):
                value = dump(mode="json")
            return {"ok": True, "value": value}
        return {"ok": False, "error": self.reason, "code": self.code}


def accept(value: T) -> RegistryResult[T]:
    return RegistryResult(value=value)


def reject(reason: str) -> RegistryResult[T]:
    return RegistryResult(reason=reason)
