"""
Retrieval logic scoped to a single document.

Resolves a document, embeds the query and returns ranked passages with
citation metadata. Only the resolved document's index is searched, so
results never include chunks of another document.

Ordering is deterministic for a fixed index and query vector. The
embedding provider may return slightly different vectors for identical
text across calls; that variation is passed through, not masked.

Dependencies: exam_helper.boundary.vdb, exam_helper.core.document_processing.tasks
System role: RAG retrieval business logic
"""

import logging

from exam_helper.boundary.vdb import DocumentRegistry, VectorMetadata, VectorSearchResult
from exam_helper.core.document_processing.tasks import EmbeddingTask
from exam_helper.core.exceptions import ValidationError

logger = logging.getLogger(__name__)


class Retriever:
    """Retrieval business logic."""

    def __init__(
        self,
        registry: DocumentRegistry,
        embedding_task: EmbeddingTask,
        default_top_k: int = 6,
    ) -> None:
        """
        Initialize retriever.

        Args:
            registry: Registry used to resolve document IDs
            embedding_task: Embedding client for queries
            default_top_k: Results returned when k is not given
        """
        self._registry = registry
        self._embedding_task = embedding_task
        self._default_top_k = default_top_k

    async def retrieve(
        self,
        document_id: str,
        query: str,
        k: int | None = None,
    ) -> list[VectorSearchResult]:
        """
        Retrieve the passages of one document most similar to query.

        Args:
            document_id: Registered document ID
            query: Query text
            k: Number of passages (default_top_k if None)

        Returns:
            list[VectorSearchResult]: Passages in descending score order

        Raises:
            NotFoundError: Unknown document ID
            EmbeddingError: Query embedding failed
            ValidationError: Blank query or k below 1
        """
        if not query or not query.strip():
            raise ValidationError("Query text is required.", field="query")
        top_k = self._default_top_k if k is None else k

        # Resolve first so unknown IDs fail before any network call
        document = self._registry.lookup(document_id)

        query_vector = await self._embedding_task.embed_query(query)
        scored = document.index.query(query_vector, top_k)

        results = [
            VectorSearchResult(
                chunk_id=item.chunk.chunk_id,
                content=item.chunk.content,
                metadata=VectorMetadata(
                    doc_id=document.document_id,
                    chunk_index=item.chunk.index,
                    page=item.chunk.page,
                    source_name=document.name,
                ),
                similarity_score=item.score,
            )
            for item in scored
        ]

        logger.info(
            f"{__name__}:retrieve - Retrieved {len(results)} chunks (k={top_k})",
            extra={"document_id": document_id},
        )
        for rank, result in enumerate(results, start=1):
            logger.debug(
                f"{__name__}:retrieve - #{rank} page={result.metadata.page or '?'} "
                f"score={result.similarity_score:.4f}: {result.content[:120]!r}"
            )
        return results
