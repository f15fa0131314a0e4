"""
In-memory vector index for a single document.

Holds one document's (chunk, vector) pairs and answers nearest-neighbor
queries with a brute-force cosine similarity scan.

Dependencies: numpy, exam_helper.models.chunk
System role: Per-document vector store for RAG retrieval
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from exam_helper.core.exceptions import EmbeddingError, ValidationError
from exam_helper.models.chunk import Chunk

if TYPE_CHECKING:
    from exam_helper.core.document_processing.tasks.embedding_task import EmbeddingTask

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoredChunk:
    """A chunk paired with its similarity to a query."""

    chunk: Chunk
    score: float


class VectorIndex:
    """
    Vector index for one document.

    Vectors are kept as a float64 matrix, one row per chunk in sequence
    order. The index is immutable after construction; a document's index
    is only ever replaced or dropped as a whole.
    """

    def __init__(self, document_id: str, chunks: list[Chunk], vectors: list[list[float]]) -> None:
        """
        Store chunks and their vectors.

        Args:
            document_id: Owning document ID
            chunks: Chunks in sequence order, all owned by document_id
            vectors: One embedding per chunk, same order

        Raises:
            ValidationError: No chunks, or chunks owned by another document
            EmbeddingError: Vector count or dimensions do not line up
        """
        if not chunks:
            raise ValidationError("Cannot index a document with no chunks", field="chunks")
        if len(vectors) != len(chunks):
            raise EmbeddingError(
                f"Expected {len(chunks)} embeddings, received {len(vectors)}",
                document_id=document_id,
            )
        dimensions = {len(vector) for vector in vectors}
        if len(dimensions) != 1 or 0 in dimensions:
            raise EmbeddingError(
                "Embeddings must share one non-zero dimension",
                document_id=document_id,
                details={"dimensions": sorted(dimensions)},
            )
        if any(chunk.document_id != document_id for chunk in chunks):
            raise ValidationError("All chunks must belong to the indexed document", field="chunks")

        ordered = sorted(zip(chunks, vectors), key=lambda pair: pair[0].index)
        self._document_id = document_id
        self._chunks = [chunk.with_embedding(vector) for chunk, vector in ordered]
        self._matrix = np.asarray([vector for _, vector in ordered], dtype=np.float64)
        self._norms = np.linalg.norm(self._matrix, axis=1)

    @classmethod
    async def build(
        cls,
        document_id: str,
        chunks: list[Chunk],
        embedding_task: "EmbeddingTask",
    ) -> "VectorIndex":
        """
        Embed all chunks in one batched call and build the index.

        Nothing is stored if embedding fails.

        Args:
            document_id: Owning document ID
            chunks: Chunks to index, in sequence order
            embedding_task: Embedding client

        Returns:
            VectorIndex: Fully built index

        Raises:
            ValidationError: No chunks to index
            EmbeddingError: Embedding failed or returned malformed vectors
        """
        if not chunks:
            raise ValidationError("Cannot index a document with no chunks", field="chunks")

        vectors = await embedding_task.embed_documents([chunk.content for chunk in chunks])
        index = cls(document_id, chunks, vectors)
        logger.info(
            f"{__name__}:build - Indexed {len(index)} chunks (dimension={index.dimension})",
            extra={"document_id": document_id},
        )
        return index

    @property
    def document_id(self) -> str:
        return self._document_id

    @property
    def dimension(self) -> int:
        return int(self._matrix.shape[1])

    @property
    def chunks(self) -> list[Chunk]:
        """Indexed chunks in sequence order."""
        return list(self._chunks)

    def __len__(self) -> int:
        return len(self._chunks)

    def query(self, query_vector: list[float], k: int) -> list[ScoredChunk]:
        """
        Return the k chunks most similar to query_vector.

        Scores are cosine similarities; a zero-magnitude vector on either
        side scores 0. Results are sorted by descending score, ties by
        ascending chunk index. Fewer than k chunks yields all of them.

        Args:
            query_vector: Query embedding, same dimension as the index
            k: Number of results wanted

        Returns:
            list[ScoredChunk]: Ranked results

        Raises:
            ValidationError: k is less than 1
            EmbeddingError: Query dimension differs from the index dimension
        """
        if k < 1:
            raise ValidationError("k must be at least 1", field="k")

        query = np.asarray(query_vector, dtype=np.float64)
        if query.ndim != 1 or query.shape[0] != self.dimension:
            raise EmbeddingError(
                f"Query dimension {query.shape[-1] if query.ndim else 0} does not match index dimension {self.dimension}",
                document_id=self._document_id,
            )

        scores = self.similarities(query)
        # Stable sort keeps sequence order among equal scores
        order = np.argsort(-scores, kind="stable")[:k]
        return [ScoredChunk(chunk=self._chunks[i], score=float(scores[i])) for i in order]

    def similarities(self, query: np.ndarray) -> np.ndarray:
        """Cosine similarity of query against every stored vector."""
        dots = self._matrix @ query
        denominators = self._norms * np.linalg.norm(query)
        scores = np.zeros_like(dots)
        np.divide(dots, denominators, out=scores, where=denominators > 0)
        return scores
