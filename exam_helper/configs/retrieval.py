"""
Chunking and retrieval configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Tunables for the chunker and top-k retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RetrievalSettings(BaseSettings):
    """Chunking and retrieval configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RETRIEVAL_",
        case_sensitive=False,
        extra="ignore",
    )

    # Chunking
    chunk_size: int = Field(
        default=1000,
        description="Maximum characters per chunk",
    )
    chunk_overlap: int = Field(
        default=150,
        description="Characters shared between consecutive chunks",
    )
    boundary_window: int = Field(
        default=200,
        description="Characters before chunk_size searched for a paragraph or sentence break",
    )

    # Retrieval
    top_k: int = Field(
        default=6,
        description="Number of passages retrieved per query",
        ge=1,
    )
