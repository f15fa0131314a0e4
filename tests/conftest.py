"""
Shared test fixtures and configuration for entire test suite.

Provides: deterministic embeddings, fast-retry provider settings, registry,
pipeline and service fixtures
Dependencies: pytest, langchain_core
System role: Test infrastructure and fixture management
"""

import re
import zlib

import pytest
from langchain_core.embeddings import Embeddings
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from exam_helper.boundary.vdb import DocumentRegistry
from exam_helper.configs.providers import ProviderSettings
from exam_helper.configs.retrieval import RetrievalSettings
from exam_helper.core.answering import AnswerSynthesizer
from exam_helper.core.citation_builder import CitationBuilder
from exam_helper.core.document_processing import DocumentPipeline
from exam_helper.core.document_processing.tasks import EmbeddingTask
from exam_helper.core.retriever import Retriever
from exam_helper.application.services import StudyService

EMBEDDING_DIMENSION = 64

_WORD = re.compile(r"[a-z0-9]+")


class HashingEmbeddings(Embeddings):
    """
    Deterministic bag-of-words embeddings.

    Each lowercase word increments one of EMBEDDING_DIMENSION buckets chosen
    by CRC32, so texts sharing vocabulary have high cosine similarity.
    """

    def __init__(self) -> None:
        self.document_calls = 0
        self.query_calls = 0

    def _vector(self, text: str) -> list[float]:
        vector = [0.0] * EMBEDDING_DIMENSION
        for word in _WORD.findall(text.lower()):
            vector[zlib.crc32(word.encode("utf-8")) % EMBEDDING_DIMENSION] += 1.0
        return vector

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.document_calls += 1
        return [self._vector(text) for text in texts]

    def embed_query(self, text: str) -> list[float]:
        self.query_calls += 1
        return self._vector(text)

    async def aembed_documents(self, texts: list[str]) -> list[list[float]]:
        return self.embed_documents(texts)

    async def aembed_query(self, text: str) -> list[float]:
        return self.embed_query(text)


@pytest.fixture
def provider_settings() -> ProviderSettings:
    """
    Provider settings with no credentials and zero backoff.

    Returns:
        ProviderSettings: Settings that never sleep between retries
    """
    return ProviderSettings(
        api_key=None,
        request_timeout_seconds=5.0,
        max_attempts=3,
        retry_initial_wait=0.0,
        retry_max_wait=0.0,
        embedding_batch_size=100,
    )


@pytest.fixture
def retrieval_settings() -> RetrievalSettings:
    """Default chunking and retrieval settings."""
    return RetrievalSettings(chunk_size=1000, chunk_overlap=150, boundary_window=200, top_k=6)


@pytest.fixture
def fake_embeddings() -> HashingEmbeddings:
    """Deterministic in-process embeddings."""
    return HashingEmbeddings()


@pytest.fixture
def embedding_task(fake_embeddings: HashingEmbeddings, provider_settings: ProviderSettings) -> EmbeddingTask:
    """Embedding task backed by HashingEmbeddings."""
    return EmbeddingTask(embeddings=fake_embeddings, settings=provider_settings)


@pytest.fixture
def registry() -> DocumentRegistry:
    """Empty unbounded registry."""
    return DocumentRegistry()


@pytest.fixture
def pipeline(
    registry: DocumentRegistry,
    embedding_task: EmbeddingTask,
    retrieval_settings: RetrievalSettings,
) -> DocumentPipeline:
    """Ingestion pipeline writing into the registry fixture."""
    return DocumentPipeline(
        registry=registry,
        embedding_task=embedding_task,
        settings=retrieval_settings,
    )


@pytest.fixture
def retriever(registry: DocumentRegistry, embedding_task: EmbeddingTask) -> Retriever:
    """Retriever reading from the registry fixture."""
    return Retriever(registry=registry, embedding_task=embedding_task, default_top_k=6)


@pytest.fixture
def chat_responses() -> list[str]:
    """Canned chat model replies, returned in order and cycled."""
    return ["I do not know based on the provided document."]


@pytest.fixture
def synthesizer(chat_responses: list[str], provider_settings: ProviderSettings) -> AnswerSynthesizer:
    """Answer synthesizer backed by FakeListChatModel."""
    return AnswerSynthesizer(
        model=FakeListChatModel(responses=chat_responses),
        settings=provider_settings,
    )


@pytest.fixture
def study_service(
    pipeline: DocumentPipeline,
    retriever: Retriever,
    synthesizer: AnswerSynthesizer,
) -> StudyService:
    """Study service wired to in-process fakes."""
    return StudyService(
        pipeline=pipeline,
        retriever=retriever,
        synthesizer=synthesizer,
        citation_builder=CitationBuilder(),
    )


@pytest.fixture
def photosynthesis_text() -> str:
    """Multi-paragraph study text about photosynthesis, about 3000 characters."""
    paragraphs = [
        "Photosynthesis is the process by which green plants convert light energy into chemical energy. "
        "Chlorophyll in the chloroplasts absorbs sunlight, mostly in the red and blue wavelengths. "
        "The overall reaction combines carbon dioxide and water to produce glucose and oxygen.",
        "The light dependent reactions take place in the thylakoid membranes. "
        "Water molecules are split, releasing oxygen as a by product. "
        "The energy captured is stored in ATP and NADPH, which power the next stage.",
        "The Calvin cycle takes place in the stroma of the chloroplast. "
        "The enzyme rubisco fixes carbon dioxide onto ribulose bisphosphate. "
        "ATP and NADPH from the light reactions reduce the fixed carbon into sugar.",
        "Limiting factors for photosynthesis include light intensity, carbon dioxide concentration and temperature. "
        "When one factor is in short supply, raising the others does not increase the rate. "
        "Greenhouse growers raise carbon dioxide levels to increase crop yield.",
    ]
    text = "\n\n".join(paragraphs)
    while len(text) < 3000:
        text = text + "\n\n" + "\n\n".join(paragraphs)
    return text[:3000]
