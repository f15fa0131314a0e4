"""Tests for StudyService.

End-to-end over the real pipeline, retriever and citation builder, with
deterministic embeddings and a canned chat model.
"""

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from exam_helper.application.services import StudyService
from exam_helper.api.deps import ServiceCache
from exam_helper.boundary.vdb import DocumentRegistry
from exam_helper.configs import Settings
from exam_helper.configs.providers import ProviderSettings
from exam_helper.core.answering import AnswerSynthesizer
from exam_helper.core.exceptions import ConfigError, NotFoundError, UnsupportedTypeError, ValidationError
from exam_helper.core.retriever import Retriever


class RecordingChatModel(FakeListChatModel):
    """FakeListChatModel that keeps the prompts it received."""

    prompts: list = []

    def _call(self, messages, *args, **kwargs) -> str:
        self.prompts.append(messages)
        return super()._call(messages, *args, **kwargs)


class TestStudyServiceUpload:
    """Test upload."""

    @pytest.mark.asyncio
    async def test_upload_returns_id_name_and_count(
        self,
        study_service: StudyService,
        registry: DocumentRegistry,
        photosynthesis_text: str,
    ) -> None:
        """A 3000-character text upload should yield at least three chunks."""
        # Act
        response = await study_service.upload(photosynthesis_text.encode("utf-8"), "biology.txt")

        # Assert
        assert response.name == "biology.txt"
        assert response.chunk_count >= 3
        assert response.doc_id in registry
        assert response.model_dump(by_alias=True).keys() == {"docId", "name", "chunkCount"}

    @pytest.mark.asyncio
    async def test_upload_unsupported_type(self, study_service: StudyService, registry: DocumentRegistry) -> None:
        """Unsupported uploads should fail and register nothing."""
        with pytest.raises(UnsupportedTypeError):
            await study_service.upload(b"binary", "photo.png")

        assert len(registry) == 0


class TestStudyServiceAnswers:
    """Test summarize, important_questions and ask."""

    @pytest.mark.asyncio
    async def test_ask_absent_topic_returns_model_answer_with_sources(
        self,
        study_service: StudyService,
        photosynthesis_text: str,
    ) -> None:
        """A question the document cannot answer should still return sources from that document."""
        upload = await study_service.upload(photosynthesis_text.encode("utf-8"), "biology.txt")

        result = await study_service.ask(upload.doc_id, "Who won the 1998 football world cup?")

        assert "do not know" in result.answer
        assert 1 <= len(result.sources) <= 6
        assert all(source.source == "biology.txt" for source in result.sources)
        assert all(source.page is None for source in result.sources)

    @pytest.mark.asyncio
    async def test_summary_uses_fixed_instructions(
        self,
        pipeline,
        retriever: Retriever,
        provider_settings: ProviderSettings,
        photosynthesis_text: str,
    ) -> None:
        """summarize should send the summary instruction and the document context."""
        model = RecordingChatModel(responses=["- Light reactions\n- Calvin cycle"], prompts=[])
        service = StudyService(pipeline, retriever, AnswerSynthesizer(model=model, settings=provider_settings))
        upload = await service.upload(photosynthesis_text.encode("utf-8"), "biology.txt")

        result = await service.summarize(upload.doc_id)

        assert result.answer.startswith("- Light reactions")
        system_message, human_message = model.prompts[0]
        assert system_message.content.startswith("You are a study assistant. Use the provided context only.")
        assert "[Source: biology.txt | Page unknown]" in system_message.content
        assert human_message.content == "Summarize the document for exam study in 6-10 bullet points."

    @pytest.mark.asyncio
    async def test_important_questions_uses_fixed_instructions(
        self,
        pipeline,
        retriever: Retriever,
        provider_settings: ProviderSettings,
        photosynthesis_text: str,
    ) -> None:
        """important_questions should send the numbered-list instruction."""
        model = RecordingChatModel(responses=["1. What is rubisco?"], prompts=[])
        service = StudyService(pipeline, retriever, AnswerSynthesizer(model=model, settings=provider_settings))
        upload = await service.upload(photosynthesis_text.encode("utf-8"), "biology.txt")

        result = await service.important_questions(upload.doc_id)

        assert result.answer == "1. What is rubisco?"
        assert result.sources
        _, human_message = model.prompts[0]
        assert human_message.content == "Create 8-12 important exam questions. Output a numbered list."

    @pytest.mark.asyncio
    async def test_unknown_document_raises_not_found(
        self,
        study_service: StudyService,
        registry: DocumentRegistry,
        photosynthesis_text: str,
    ) -> None:
        """An unknown docId should raise NotFoundError and leave the registry unchanged."""
        await study_service.upload(photosynthesis_text.encode("utf-8"), "biology.txt")

        with pytest.raises(NotFoundError, match="Unknown document. Upload again."):
            await study_service.ask("00000000-0000-0000-0000-000000000000", "What is ATP?")

        assert len(registry) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("doc_id", [None, "", "   "])
    async def test_missing_doc_id_rejected(self, study_service: StudyService, doc_id) -> None:
        """Blank docId should raise ValidationError for every operation."""
        with pytest.raises(ValidationError, match="Missing docId"):
            await study_service.summarize(doc_id)
        with pytest.raises(ValidationError, match="Missing docId"):
            await study_service.important_questions(doc_id)
        with pytest.raises(ValidationError, match="Missing docId"):
            await study_service.ask(doc_id, "question")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("question", [None, "", "  \n"])
    async def test_missing_question_rejected(self, study_service: StudyService, question) -> None:
        """Blank question should raise ValidationError."""
        with pytest.raises(ValidationError, match="Missing question"):
            await study_service.ask("some-doc", question)


class TestStudyServiceWithoutCredentials:
    """Test the service built from settings with no API key."""

    @pytest.fixture
    def keyless_service(self, provider_settings: ProviderSettings) -> StudyService:
        """
        Study service with real Gemini adapters and no key.

        Returns:
            StudyService: Service whose model clients cannot be built
        """
        return ServiceCache(settings=Settings(provider=provider_settings)).study_service

    @pytest.mark.asyncio
    async def test_unknown_document_checked_before_credentials(self, keyless_service: StudyService) -> None:
        """An unknown docId should raise NotFoundError even when no model client can be built."""
        with pytest.raises(NotFoundError):
            await keyless_service.summarize("not-a-real-id")
        with pytest.raises(NotFoundError):
            await keyless_service.ask("not-a-real-id", "What is ATP?")

    @pytest.mark.asyncio
    async def test_upload_without_key_raises_config_error(
        self,
        keyless_service: StudyService,
        photosynthesis_text: str,
    ) -> None:
        """Indexing needs embeddings, so a missing key should surface as ConfigError."""
        with pytest.raises(ConfigError):
            await keyless_service.upload(photosynthesis_text.encode("utf-8"), "biology.txt")
