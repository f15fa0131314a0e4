"""
Document registry configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Memory bounds for the in-process document registry
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RegistrySettings(BaseSettings):
    """Registry capacity, expiry and ingestion concurrency."""

    model_config = SettingsConfigDict(
        env_prefix="REGISTRY_",
        case_sensitive=False,
        extra="ignore",
    )

    max_documents: int | None = Field(
        default=100,
        description="Registered documents kept before least-recently-used eviction (None or empty = unbounded)",
        ge=1,
    )
    ttl_seconds: float | None = Field(
        default=None,
        description="Seconds since last access after which a document expires (None or empty = never)",
        gt=0,
    )
    max_concurrent_ingestions: int = Field(
        default=4,
        description="Uploads indexed at the same time",
        ge=1,
    )

    @field_validator("max_documents", "ttl_seconds", mode="before")
    @classmethod
    def _parse_unbounded(cls, value):
        """Read an empty, "none" or "null" environment value as None."""
        if isinstance(value, str) and value.strip().lower() in ("", "none", "null"):
            return None
        return value
