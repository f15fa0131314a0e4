"""
Embedding generation task using Google Gemini embeddings.

Generates vector embeddings for document chunks and queries. Every call
carries a timeout; transient failures are retried with exponential
backoff before the failure is surfaced as EmbeddingError.

Dependencies: langchain_google_genai, langchain_core, tenacity
System role: Embedding client for ingestion and retrieval
"""

import asyncio
import logging

from dotenv import load_dotenv
from langchain_core.embeddings import Embeddings
from exam_helper.configs.providers import ProviderSettings
from exam_helper.core.exceptions import ConfigError, EmbeddingError
from exam_helper.core.retry_policy import is_transient_error, provider_retrying

load_dotenv()
logger = logging.getLogger(__name__)


def create_google_embeddings(settings: ProviderSettings) -> Embeddings:
    """
    Build the Gemini embeddings client.

    Args:
        settings: Provider settings with credentials and model id

    Returns:
        Embeddings: GoogleGenerativeAIEmbeddings instance

    Raises:
        ConfigError: When no API key is configured
    """
    if settings.api_key is None:
        raise ConfigError("GOOGLE_API_KEY is not set.", setting="api_key")

    from langchain_google_genai import GoogleGenerativeAIEmbeddings

    return GoogleGenerativeAIEmbeddings(
        model=settings.embedding_model,
        google_api_key=settings.api_key,
    )


class EmbeddingTask:
    """Embed chunk batches and queries with bounded retry."""

    def __init__(
        self,
        embeddings: Embeddings | None = None,
        settings: ProviderSettings | None = None,
    ) -> None:
        """
        Initialize embedding task.

        The Gemini client is built on first use, so a missing key only
        fails calls that actually reach the provider.

        Args:
            embeddings: LangChain embeddings implementation (Gemini built from settings if None)
            settings: Provider settings (defaults loaded from environment)
        """
        self._settings = settings or ProviderSettings()
        self._embeddings = embeddings

    @property
    def embeddings(self) -> Embeddings:
        """
        Embeddings client, built from settings on first access.

        Raises:
            ConfigError: When credentials are missing
        """
        if self._embeddings is None:
            self._embeddings = create_google_embeddings(self._settings)
        return self._embeddings

    async def embed_documents(self, texts: list[str]) -> list[list[float]]:
        """
        Generate embeddings for a sequence of texts.

        Texts are sent in batches of embedding_batch_size; a failed batch
        fails the whole call.

        Args:
            texts: Texts to embed, in order

        Returns:
            list[list[float]]: One vector per text, same order

        Raises:
            ConfigError: When the client cannot be built
            EmbeddingError: When a batch still fails after retries
        """
        if not texts:
            return []

        embeddings = self.embeddings
        batch_size = self._settings.embedding_batch_size
        vectors: list[list[float]] = []
        for offset in range(0, len(texts), batch_size):
            batch = texts[offset:offset + batch_size]
            batch_vectors = await self._call_with_retry(
                "embed_documents",
                lambda batch=batch: embeddings.aembed_documents(batch),
            )
            if len(batch_vectors) != len(batch):
                raise EmbeddingError(
                    f"Embedding provider returned {len(batch_vectors)} vectors for {len(batch)} texts"
                )
            vectors.extend(batch_vectors)

        logger.info(f"{__name__}:embed_documents - Embedded {len(texts)} texts")
        return vectors

    async def embed_query(self, text: str) -> list[float]:
        """
        Generate embedding for a query.

        Args:
            text: Query text

        Returns:
            list[float]: Query embedding vector

        Raises:
            ConfigError: When the client cannot be built
            EmbeddingError: When the call still fails after retries
        """
        embeddings = self.embeddings
        return await self._call_with_retry(
            "embed_query",
            lambda: embeddings.aembed_query(text),
        )

    async def _call_with_retry(self, operation: str, call):
        settings = self._settings
        try:
            async for attempt in provider_retrying(settings, logger, operation):
                with attempt:
                    return await asyncio.wait_for(call(), timeout=settings.request_timeout_seconds)
        except asyncio.TimeoutError as e:
            logger.error(f"{__name__}:{operation} - Timed out after {settings.max_attempts} attempts")
            raise EmbeddingError(
                f"Embedding request timed out after {settings.request_timeout_seconds}s",
                details={"operation": operation, "attempts": settings.max_attempts},
            ) from e
        except Exception as e:
            logger.error(f"{__name__}:{operation} - FAILED: {type(e).__name__}: {e}")
            raise EmbeddingError(
                f"Failed to generate embeddings: {e}",
                details={"operation": operation, "transient": is_transient_error(e)},
            ) from e
