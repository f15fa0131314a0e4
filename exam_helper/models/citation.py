"""
Citation domain model.

Represents a citation to source document for grounded answers.

Dependencies: pydantic
System role: Citation data structure
"""

from pydantic import BaseModel, Field


class Citation(BaseModel):
    """Citation model for source attribution."""

    source: str = Field(description="Source document display name")
    page: int | None = Field(default=None, description="Page number in source")
