"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from exam_helper.configs.base import BaseSettings
from exam_helper.configs.providers import ProviderSettings
from exam_helper.configs.registry import RegistrySettings
from exam_helper.configs.retrieval import RetrievalSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    provider: ProviderSettings = Field(default_factory=ProviderSettings)
    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)
    registry: RegistrySettings = Field(default_factory=RegistrySettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from exam_helper.configs import get_settings
        settings = get_settings()
    """
    return Settings()
