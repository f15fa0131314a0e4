"""
Document processing pipeline for ingestion.

Parses, chunks, embeds and indexes uploaded study documents.

Dependencies: langchain_community, langchain_google_genai, numpy, pydantic
System role: Document ingestion pipeline entrypoint
"""

from .entrypoint import DocumentPipeline
from .models import PipelineResult

__all__ = [
    "DocumentPipeline",
    "PipelineResult",
]
