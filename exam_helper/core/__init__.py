"""
Core business logic module.

Contains domain business logic, exception hierarchy, and core components.
All business rules and domain-specific logic reside here.
"""

from exam_helper.core.exceptions import (
    ConfigError,
    DocumentProcessingError,
    EmbeddingError,
    ExamHelperException,
    GenerationError,
    NotFoundError,
    ParsingError,
    UnsupportedTypeError,
    ValidationError,
)

__all__ = [
    "ExamHelperException",
    "ConfigError",
    "ValidationError",
    "UnsupportedTypeError",
    "NotFoundError",
    "DocumentProcessingError",
    "ParsingError",
    "EmbeddingError",
    "GenerationError",
]
