"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    ServiceCache,
    get_registry,
    get_service_cache,
    get_settings_dependency,
    get_study_service,
)

__all__ = [
    "ServiceCache",
    "get_registry",
    "get_service_cache",
    "get_settings_dependency",
    "get_study_service",
]
