"""
Chunk domain model.

Represents one bounded span of a document's text with its page provenance
and, once indexed, its embedding vector.

Dependencies: pydantic
System role: Document chunk data structure
"""

from pydantic import BaseModel, ConfigDict, Field


class Chunk(BaseModel):
    """Immutable document chunk with optional embedding vector."""

    model_config = ConfigDict(frozen=True)

    document_id: str = Field(description="ID of the owning document")
    index: int = Field(description="Sequence index in original-text order", ge=0)
    content: str = Field(description="Chunk text content")
    page: int | None = Field(default=None, description="Page number the chunk's span mostly falls on")
    start_index: int = Field(default=0, description="Character offset of the chunk in the document text", ge=0)
    embedding: tuple[float, ...] | None = Field(default=None, description="Embedding vector")

    @property
    def chunk_id(self) -> str:
        """Stable identifier derived from owner and position."""
        return f"{self.document_id}:{self.index}"

    def with_embedding(self, embedding: list[float]) -> "Chunk":
        """Return a copy of this chunk carrying the given embedding."""
        return self.model_copy(update={"embedding": tuple(float(v) for v in embedding)})
