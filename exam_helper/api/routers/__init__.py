"""API routers."""

from .documents import router as documents_router
from .health import router as health_router
from .study import router as study_router

__all__ = [
    "documents_router",
    "health_router",
    "study_router",
]
