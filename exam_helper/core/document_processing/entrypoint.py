"""
Document pipeline orchestrator.

Coordinates parsing, chunking, embedding and registration of an upload.
Ingestion is all-or-nothing: the registry only changes once the whole
index has been built.

Dependencies: All task modules, exam_helper.boundary.vdb, configs
System role: Pipeline orchestration (coordinates only)
"""

import asyncio
import logging
import time

from exam_helper.boundary.vdb import DocumentRegistry, VectorIndex
from exam_helper.configs.retrieval import RetrievalSettings
from exam_helper.core.exceptions import ValidationError
from exam_helper.observability.log_utils import log_exception_with_context, log_with_context

from .models import PipelineResult
from .tasks import ChunkingTask, EmbeddingTask, ParsingTask

logger = logging.getLogger(__name__)


class DocumentPipeline:
    """Orchestrate document ingestion: parse -> chunk -> embed -> index -> register."""

    def __init__(
        self,
        registry: DocumentRegistry,
        embedding_task: EmbeddingTask,
        settings: RetrievalSettings | None = None,
        parsing_task: ParsingTask | None = None,
        max_concurrent_ingestions: int = 4,
    ) -> None:
        """
        Initialize pipeline with its collaborators.

        Args:
            registry: Registry that receives finished documents
            embedding_task: Embedding client used to build indices
            settings: Chunking settings (defaults loaded from environment)
            parsing_task: Text extractor (default ParsingTask)
            max_concurrent_ingestions: Uploads indexed at the same time

        Raises:
            ConfigError: Invalid chunking parameters
        """
        self._settings = settings or RetrievalSettings()
        self._registry = registry
        self._embedding_task = embedding_task
        self._parsing_task = parsing_task or ParsingTask()
        self._chunking_task = ChunkingTask(
            chunk_size=self._settings.chunk_size,
            chunk_overlap=self._settings.chunk_overlap,
            boundary_window=self._settings.boundary_window,
        )
        self._ingestion_slots = asyncio.Semaphore(max_concurrent_ingestions)

    async def process(self, file_bytes: bytes, filename: str) -> PipelineResult:
        """
        Process an upload through the full pipeline.

        Args:
            file_bytes: Raw upload content
            filename: Declared file name (format detection and display name)

        Returns:
            PipelineResult: Document ID, name, chunk count and timing

        Raises:
            ValidationError: Empty upload or no extractable text
            UnsupportedTypeError: Extension is not PDF, DOCX or TXT
            ParsingError: Text extraction failed
            EmbeddingError: Embedding failed after retries
        """
        if not filename or not filename.strip():
            raise ValidationError("A file name is required.", field="filename")
        if not file_bytes:
            raise ValidationError("No file uploaded.", field="file")

        async with self._ingestion_slots:
            start_time = time.perf_counter()
            document_id = self._registry.allocate_id()
            try:
                pages = await self._parsing_task.parse(file_bytes, filename)

                chunks = self._chunking_task.chunk(pages, document_id)
                if not chunks:
                    raise ValidationError(
                        "Document contains no extractable text.",
                        field="file",
                        details={"filename": filename},
                    )

                index = await VectorIndex.build(document_id, chunks, self._embedding_task)
                self._registry.register(filename, index, len(chunks))

            except Exception as e:
                log_exception_with_context(
                    logger,
                    f"{__name__}:process - Ingestion aborted",
                    e,
                    document_id=document_id,
                    upload_name=filename,
                )
                raise

            elapsed_ms = (time.perf_counter() - start_time) * 1000

        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:process - Document registered",
            document_id=document_id,
            upload_name=filename,
            chunk_count=len(chunks),
            processing_time_ms=round(elapsed_ms, 2),
        )
        return PipelineResult(
            document_id=document_id,
            name=filename,
            chunk_count=len(chunks),
            processing_time_ms=elapsed_ms,
        )
