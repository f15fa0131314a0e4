"""Application services."""

from .study_service import StudyService

__all__ = ["StudyService"]
