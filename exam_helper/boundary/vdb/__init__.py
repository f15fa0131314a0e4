"""
Vector database boundary layer.

Provides the in-memory per-document vector index and the registry that
owns the indices.
- VectorIndex: brute-force cosine similarity over one document's chunks
- DocumentRegistry: document ID -> index map with bounded lifetime

Dependencies: numpy
System role: Vector store adapter for RAG retrieval
"""

from exam_helper.boundary.vdb.document_registry import DocumentRegistry, RegisteredDocument
from exam_helper.boundary.vdb.vector_index import ScoredChunk, VectorIndex
from exam_helper.boundary.vdb.vector_schemas import VectorMetadata, VectorSearchResult

__all__ = [
    "DocumentRegistry",
    "RegisteredDocument",
    "ScoredChunk",
    "VectorIndex",
    "VectorMetadata",
    "VectorSearchResult",
]
