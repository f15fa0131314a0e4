"""
Dependency injection container.

Factory functions for FastAPI dependencies. Long-lived collaborators
(registry, embedding client, synthesizer) are built once and shared by
every request.

Dependencies: exam_helper.configs, exam_helper.application, exam_helper.boundary
System role: DI container for service injection
"""

from functools import lru_cache

from fastapi import Depends

from exam_helper.application.services import StudyService
from exam_helper.boundary.vdb import DocumentRegistry
from exam_helper.configs import Settings, get_settings


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings
        self._registry = None
        self._embedding_task = None
        self._document_pipeline = None
        self._retriever = None
        self._synthesizer = None
        self._study_service = None

    @property
    def settings(self) -> Settings:
        """Get settings (process settings unless given explicitly)."""
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def registry(self) -> DocumentRegistry:
        """Get cached document registry."""
        if self._registry is None:
            registry_settings = self.settings.registry
            self._registry = DocumentRegistry(
                max_documents=registry_settings.max_documents,
                ttl_seconds=registry_settings.ttl_seconds,
            )
        return self._registry

    @property
    def embedding_task(self):
        """Get cached embedding client."""
        if self._embedding_task is None:
            from exam_helper.core.document_processing.tasks import EmbeddingTask
            self._embedding_task = EmbeddingTask(settings=self.settings.provider)
        return self._embedding_task

    @property
    def document_pipeline(self):
        """Get cached document pipeline."""
        if self._document_pipeline is None:
            from exam_helper.core.document_processing import DocumentPipeline
            self._document_pipeline = DocumentPipeline(
                registry=self.registry,
                embedding_task=self.embedding_task,
                settings=self.settings.retrieval,
                max_concurrent_ingestions=self.settings.registry.max_concurrent_ingestions,
            )
        return self._document_pipeline

    @property
    def retriever(self):
        """Get cached retriever."""
        if self._retriever is None:
            from exam_helper.core.retriever import Retriever
            self._retriever = Retriever(
                registry=self.registry,
                embedding_task=self.embedding_task,
                default_top_k=self.settings.retrieval.top_k,
            )
        return self._retriever

    @property
    def synthesizer(self):
        """Get cached answer synthesizer."""
        if self._synthesizer is None:
            from exam_helper.core.answering import AnswerSynthesizer
            self._synthesizer = AnswerSynthesizer(settings=self.settings.provider)
        return self._synthesizer

    @property
    def study_service(self) -> StudyService:
        """Get cached study service."""
        if self._study_service is None:
            self._study_service = StudyService(
                pipeline=self.document_pipeline,
                retriever=self.retriever,
                synthesizer=self.synthesizer,
            )
        return self._study_service

    def clear(self) -> None:
        """Drop all registered documents and cached instances."""
        if self._registry is not None:
            self._registry.clear()
        self._registry = None
        self._embedding_task = None
        self._document_pipeline = None
        self._retriever = None
        self._synthesizer = None
        self._study_service = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_registry(cache: ServiceCache = Depends(get_service_cache)) -> DocumentRegistry:
    """
    Get the process-wide document registry.

    Args:
        cache: Service cache (injected via Depends)

    Returns:
        DocumentRegistry: Shared registry instance
    """
    return cache.registry


def get_study_service(cache: ServiceCache = Depends(get_service_cache)) -> StudyService:
    """
    Get study service instance.

    Model clients are built on the first provider call, so document
    lookups run before missing credentials surface as ConfigError.

    Args:
        cache: Service cache (injected via Depends)

    Returns:
        StudyService: Study service with shared pipeline and retriever
    """
    return cache.study_service
