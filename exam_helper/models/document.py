"""
Document domain models and schemas.

Response schema for document upload.

Dependencies: pydantic
System role: Document API contracts
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UploadResponse(BaseModel):
    """Response schema for an indexed upload."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    doc_id: str = Field(description="Opaque document identifier")
    name: str = Field(description="Display name of the document")
    chunk_count: int = Field(description="Number of indexed chunks")
