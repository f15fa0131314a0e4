"""Tests for ChunkingTask.

Covers splitting boundaries, exact overlap reconstruction, page
provenance and configuration validation.
"""

import pytest
from langchain_core.documents import Document

from exam_helper.core.document_processing.tasks.chunking_task import PAGE_SEPARATOR, ChunkingTask
from exam_helper.core.exceptions import ConfigError


def reconstruct(chunks, overlap: int) -> str:
    """Rebuild text from the first chunk plus every later chunk minus its overlap."""
    return chunks[0].content + "".join(chunk.content[overlap:] for chunk in chunks[1:])


@pytest.fixture
def chunking_task() -> ChunkingTask:
    """ChunkingTask with default parameters."""
    return ChunkingTask(chunk_size=1000, chunk_overlap=150, boundary_window=200)


class TestChunkingTaskConfig:
    """Test constructor validation."""

    def test_overlap_equal_to_size_rejected(self) -> None:
        """Should fail before any chunking when overlap >= size."""
        with pytest.raises(ConfigError) as exc_info:
            ChunkingTask(chunk_size=100, chunk_overlap=100)

        assert exc_info.value.details["setting"] == "chunk_overlap"

    def test_negative_overlap_rejected(self) -> None:
        """Should reject negative overlap."""
        with pytest.raises(ConfigError):
            ChunkingTask(chunk_size=100, chunk_overlap=-1)

    def test_non_positive_size_rejected(self) -> None:
        """Should reject zero chunk size."""
        with pytest.raises(ConfigError):
            ChunkingTask(chunk_size=0, chunk_overlap=0)

    def test_negative_window_rejected(self) -> None:
        """Should reject a negative boundary window."""
        with pytest.raises(ConfigError):
            ChunkingTask(chunk_size=100, chunk_overlap=10, boundary_window=-5)


class TestChunkingTaskSplitting:
    """Test chunk boundaries and overlap."""

    def test_uniform_text_boundary_count(self, chunking_task: ChunkingTask) -> None:
        """2400 characters with no natural breaks should give 3 chunks."""
        text = "abcdefghij" * 240

        chunks = chunking_task.chunk_text(text, "doc-1")

        assert len(chunks) == 3
        assert [chunk.start_index for chunk in chunks] == [0, 850, 1700]
        assert [len(chunk.content) for chunk in chunks] == [1000, 1000, 700]

    def test_short_document_single_chunk(self, chunking_task: ChunkingTask) -> None:
        """Text shorter than chunk_size should yield exactly one chunk."""
        chunks = chunking_task.chunk_text("A short note.", "doc-1")

        assert len(chunks) == 1
        assert chunks[0].content == "A short note."
        assert chunks[0].index == 0

    def test_exact_chunk_size_single_chunk(self, chunking_task: ChunkingTask) -> None:
        """Text of exactly chunk_size characters fits in one chunk."""
        chunks = chunking_task.chunk_text("x" * 1000, "doc-1")

        assert len(chunks) == 1

    @pytest.mark.parametrize("text", ["", "   ", "\n\n\t \n"])
    def test_blank_text_yields_no_chunks(self, chunking_task: ChunkingTask, text: str) -> None:
        """Empty or whitespace-only text should produce zero chunks."""
        assert chunking_task.chunk_text(text, "doc-1") == []

    def test_reconstruction_with_natural_breaks(
        self,
        chunking_task: ChunkingTask,
        photosynthesis_text: str,
    ) -> None:
        """Chunks minus their overlap should concatenate to the original text."""
        chunks = chunking_task.chunk_text(photosynthesis_text, "doc-1")

        assert len(chunks) >= 3
        assert reconstruct(chunks, 150) == photosynthesis_text

    def test_consecutive_chunks_share_exact_overlap(
        self,
        chunking_task: ChunkingTask,
        photosynthesis_text: str,
    ) -> None:
        """Each chunk should begin with the last 150 characters of the previous one."""
        chunks = chunking_task.chunk_text(photosynthesis_text, "doc-1")

        for previous, current in zip(chunks, chunks[1:]):
            assert current.content[:150] == previous.content[-150:]
            assert current.start_index == previous.start_index + len(previous.content) - 150

    def test_chunks_never_exceed_size(self, photosynthesis_text: str) -> None:
        """No chunk should be longer than chunk_size."""
        task = ChunkingTask(chunk_size=300, chunk_overlap=40, boundary_window=80)

        chunks = task.chunk_text(photosynthesis_text * 2, "doc-1")

        assert all(len(chunk.content) <= 300 for chunk in chunks)
        assert reconstruct(chunks, 40) == photosynthesis_text * 2

    def test_indices_are_sequential(self, chunking_task: ChunkingTask) -> None:
        """Sequence indices should follow original-text order."""
        chunks = chunking_task.chunk_text("word " * 1000, "doc-7")

        assert [chunk.index for chunk in chunks] == list(range(len(chunks)))
        assert all(chunk.document_id == "doc-7" for chunk in chunks)
        assert all(chunk.embedding is None for chunk in chunks)


class TestChunkingTaskBoundaries:
    """Test natural break preference."""

    def test_prefers_paragraph_break(self, chunking_task: ChunkingTask) -> None:
        """A blank line inside the window should win over a later sentence break."""
        text = "x" * 850 + "\n\n" + "y" * 100 + ". " + "z" * 500

        chunks = chunking_task.chunk_text(text, "doc-1")

        assert chunks[0].content.endswith("\n\n")
        assert len(chunks[0].content) == 852

    def test_falls_back_to_sentence_break(self, chunking_task: ChunkingTask) -> None:
        """Without a paragraph break the last sentence end should be used."""
        text = "x" * 900 + ". " + "y" * 40 + "! " + "z" * 500

        chunks = chunking_task.chunk_text(text, "doc-1")

        assert len(chunks[0].content) == 944
        assert chunks[0].content.endswith("! ")

    def test_break_outside_window_ignored(self, chunking_task: ChunkingTask) -> None:
        """Breaks before the tolerance window should not shorten the chunk."""
        text = "x" * 500 + ". " + "y" * 1000

        chunks = chunking_task.chunk_text(text, "doc-1")

        assert len(chunks[0].content) == 1000


class TestChunkingTaskPages:
    """Test page provenance."""

    def test_majority_page_assigned(self, chunking_task: ChunkingTask) -> None:
        """Each chunk should take the page covering most of its span."""
        pages = [
            Document(page_content="a" * 600, metadata={"page": 1}),
            Document(page_content="b" * 600, metadata={"page": 2}),
        ]

        chunks = chunking_task.chunk(pages, "doc-1")

        assert len(chunks) == 2
        assert chunks[0].page == 1
        assert chunks[1].page == 2

    def test_tie_goes_to_earlier_page(self) -> None:
        """Equal coverage should resolve to the earlier page."""
        task = ChunkingTask(chunk_size=2000, chunk_overlap=100)
        pages = [
            Document(page_content="a" * 500, metadata={"page": 3}),
            Document(page_content="b" * 500, metadata={"page": 4}),
        ]

        chunks = task.chunk(pages, "doc-1")

        assert len(chunks) == 1
        assert chunks[0].page == 3

    def test_pageless_text_has_no_page(self, chunking_task: ChunkingTask) -> None:
        """Text without page numbers should give chunks with page None."""
        chunks = chunking_task.chunk_text("Plain text content. " * 10, "doc-1")

        assert chunks[0].page is None

    def test_pages_joined_with_separator(self, chunking_task: ChunkingTask) -> None:
        """Pages should be joined with a blank line and skip empty pages."""
        pages = [
            Document(page_content="First page.", metadata={"page": 1}),
            Document(page_content="", metadata={"page": 2}),
            Document(page_content="Third page.", metadata={"page": 3}),
        ]

        text, spans = chunking_task.join_pages(pages)

        assert text == "First page." + PAGE_SEPARATOR + "Third page."
        assert [span.page for span in spans] == [1, 3]
        assert text[spans[1].start:spans[1].end] == "Third page."
