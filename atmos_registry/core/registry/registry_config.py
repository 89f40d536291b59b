"""Registry configuration model.

Parses the JSON configuration block for a registry instance into a validated
object and exposes the derived limits the domain layer consumes.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from atmos_registry.core.domain.owner_index import DEFAULT_OWNER_INDEX_CAPACITY
from atmos_registry.core.domain.pagination import DEFAULT_MAX_PAGE_SIZE
from atmos_registry.core.domain.validator import DEFAULT_TEXT_LIMITS, TextLimits


class TextLimitsConfig(BaseModel):
    """Maximum lengths for bounded text fields."""

    name: int = Field(default=DEFAULT_TEXT_LIMITS.name, ge=1)
    description: int = Field(default=DEFAULT_TEXT_LIMITS.description, ge=1)
    data_type: int = Field(default=DEFAULT_TEXT_LIMITS.data_type, ge=1)
    ipfs_hash: int = Field(default=DEFAULT_TEXT_LIMITS.ipfs_hash, ge=0)

    model_config = ConfigDict(extra="forbid")

    def to_text_limits(self) -> TextLimits:
        return TextLimits(
            name=self.name,
            description=self.description,
            data_type=self.data_type,
            ipfs_hash=self.ipfs_hash,
        )


class RegistryConfig(BaseModel):
    """Structured registry configuration.

    JSON example:
        {
          "admin": "SP1K2XGT5RNGT42N49BH936VDF8NXWNZJY15BPV4F",
          "max_page_size": 50,
          "owner_index_capacity": 1000,
          "text_limits": {"name": 100}
        }
    """

    admin: str = Field(..., min_length=1)
    paused: bool = False

    max_page_size: int = Field(default=DEFAULT_MAX_PAGE_SIZE, ge=1)
    owner_index_capacity: int = Field(default=DEFAULT_OWNER_INDEX_CAPACITY, ge=1)

    text_limits: TextLimitsConfig = Field(default_factory=TextLimitsConfig)

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def from_json_obj(cls, registry_obj: dict[str, Any]) -> RegistryConfig:
        """Create a RegistryConfig instance from a JSON-compatible object."""
        return cls.model_validate(registry_obj)

    @model_validator(mode="after")
    def validate_consistency(self) -> RegistryConfig:
        """Reject configurations that could never hold a valid admin identity."""
        if self.admin.strip() != self.admin:
            raise ValueError("admin must not contain leading or trailing whitespace")
        return self

    def limits(self) -> TextLimits:
        return self.text_limits.to_text_limits()
