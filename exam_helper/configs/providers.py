"""
Model provider configuration settings.

Credentials, model ids, timeouts and retry policy for the embedding
and chat models reached through langchain-google-genai.

Dependencies: pydantic, pydantic_settings
System role: External model configuration
"""

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProviderSettings(BaseSettings):
    """Google Generative AI provider configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PROVIDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("PROVIDER_API_KEY", "GOOGLE_API_KEY"),
        description="Google API key used by both embedding and chat models",
    )
    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google embedding model ID",
    )
    chat_model: str = Field(
        default="gemini-2.5-flash",
        description="Google chat model ID used for answer synthesis",
    )
    temperature: float = Field(
        default=0.2,
        description="Chat model temperature",
        ge=0.0,
        le=2.0,
    )

    request_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout applied to every embedding or generation call",
        gt=0,
    )
    max_attempts: int = Field(
        default=3,
        description="Attempts per external call before the failure is surfaced",
        ge=1,
    )
    retry_initial_wait: float = Field(
        default=1.0,
        description="Initial exponential backoff wait in seconds",
        ge=0,
    )
    retry_max_wait: float = Field(
        default=20.0,
        description="Upper bound for a single backoff wait in seconds",
        ge=0,
    )
    embedding_batch_size: int = Field(
        default=100,
        description="Texts sent per embedding request",
        ge=1,
    )
