"""
Study service orchestrator.

Coordinates upload, summary, important questions and Q&A for a single
uploaded document. Each study operation retrieves passages from the
document's own index, assembles them into a delimited context and asks the
answer synthesizer for grounded text.

Dependencies: exam_helper.core, exam_helper.models
System role: Study workflow orchestration
"""

import logging

from exam_helper.core.answering import (
    ANSWER_PROMPT,
    IMPORTANT_QUESTIONS_TASK,
    SUMMARY_TASK,
    AnswerSynthesizer,
    StudyTask,
)
from exam_helper.core.citation_builder import CitationBuilder
from exam_helper.core.document_processing import DocumentPipeline
from exam_helper.core.exceptions import ValidationError
from exam_helper.core.retriever import Retriever
from exam_helper.models.document import UploadResponse
from exam_helper.models.study import StudyAnswer

logger = logging.getLogger(__name__)


class StudyService:
    """
    Study service orchestrator.

    Stateless apart from its collaborators; the document registry behind
    the pipeline and retriever holds all per-document state.
    """

    def __init__(
        self,
        pipeline: DocumentPipeline,
        retriever: Retriever,
        synthesizer: AnswerSynthesizer,
        citation_builder: CitationBuilder | None = None,
    ) -> None:
        """
        Initialize study service.

        Args:
            pipeline: Ingestion pipeline for uploads
            retriever: Document-scoped retriever
            synthesizer: Answer generation adapter
            citation_builder: Context and citation formatter (default CitationBuilder)
        """
        self._pipeline = pipeline
        self._retriever = retriever
        self._synthesizer = synthesizer
        self._citation_builder = citation_builder or CitationBuilder()

    async def upload(self, file_bytes: bytes, filename: str) -> UploadResponse:
        """
        Index an uploaded document.

        Args:
            file_bytes: Raw upload content
            filename: Declared file name

        Returns:
            UploadResponse: New document ID, display name and chunk count

        Raises:
            ValidationError: Empty upload or no extractable text
            UnsupportedTypeError: Not a PDF, DOCX or TXT file
            ParsingError: Text extraction failed
            EmbeddingError: Embedding failed after retries
        """
        result = await self._pipeline.process(file_bytes, filename)
        return UploadResponse(
            doc_id=result.document_id,
            name=result.name,
            chunk_count=result.chunk_count,
        )

    async def summarize(self, doc_id: str | None) -> StudyAnswer:
        """Summarize the document as exam study bullet points."""
        return await self._run_task(doc_id, SUMMARY_TASK)

    async def important_questions(self, doc_id: str | None) -> StudyAnswer:
        """Generate likely exam questions for the document."""
        return await self._run_task(doc_id, IMPORTANT_QUESTIONS_TASK)

    async def ask(self, doc_id: str | None, question: str | None) -> StudyAnswer:
        """
        Answer a question from the document's content only.

        Args:
            doc_id: Registered document ID
            question: User question

        Returns:
            StudyAnswer: Answer text with its sources

        Raises:
            ValidationError: Missing document ID or question
            NotFoundError: Unknown document ID
            EmbeddingError: Query embedding failed
            GenerationError: Answer generation failed
        """
        doc_id = self._require_doc_id(doc_id)
        if not question or not question.strip():
            raise ValidationError("Missing question.", field="question")

        return await self._answer(doc_id, query=question, system_prompt=ANSWER_PROMPT, user_input=question)

    async def _run_task(self, doc_id: str | None, task: StudyTask) -> StudyAnswer:
        doc_id = self._require_doc_id(doc_id)
        # The fixed task input doubles as the retrieval query
        return await self._answer(
            doc_id,
            query=task.user_input,
            system_prompt=task.system_prompt,
            user_input=task.user_input,
        )

    async def _answer(
        self,
        doc_id: str,
        query: str,
        system_prompt: str,
        user_input: str,
    ) -> StudyAnswer:
        results = await self._retriever.retrieve(doc_id, query)
        context = self._citation_builder.format_context(results)
        answer = await self._synthesizer.synthesize(system_prompt, context, user_input)

        logger.info(
            f"{__name__}:_answer - Answered from {len(results)} passages",
            extra={"document_id": doc_id},
        )
        return StudyAnswer(
            answer=answer,
            sources=self._citation_builder.build_citations(results),
        )

    @staticmethod
    def _require_doc_id(doc_id: str | None) -> str:
        if not doc_id or not doc_id.strip():
            raise ValidationError("Missing docId.", field="docId")
        return doc_id.strip()
