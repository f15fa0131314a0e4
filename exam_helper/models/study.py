"""
Study domain models and schemas.

Request/response schemas for summary, important questions and Q&A.
Request fields are optional at the schema level so missing values reach
the service and fail with the application's own ValidationError.

Dependencies: pydantic
System role: Study API contracts
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from exam_helper.models.citation import Citation


class DocumentRequest(BaseModel):
    """Request schema for document-wide operations."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    doc_id: str | None = Field(default=None, description="Document ID returned by upload")


class AskRequest(DocumentRequest):
    """Request schema for a question about a document."""

    question: str | None = Field(default=None, description="User question")


class StudyAnswer(BaseModel):
    """Answer grounded in a document, with its sources."""

    answer: str
    sources: list[Citation]
