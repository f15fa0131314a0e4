"""
Vector database schemas.

Pydantic models for retrieval results and their citation metadata.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from pydantic import BaseModel, Field


class VectorMetadata(BaseModel):
    """Citation metadata attached to each retrieved chunk."""

    doc_id: str = Field(description="Owning document ID")
    chunk_index: int = Field(description="Sequence index of the chunk in its document")
    page: int | None = Field(default=None, description="Page number in source document")
    source_name: str = Field(description="Display name of the source document")


class VectorSearchResult(BaseModel):
    """Single ranked result from a retrieval."""

    chunk_id: str = Field(description="Chunk identifier")
    content: str = Field(description="Chunk text content")
    metadata: VectorMetadata = Field(description="Chunk metadata")
    similarity_score: float = Field(description="Cosine similarity (-1.0 to 1.0)")
