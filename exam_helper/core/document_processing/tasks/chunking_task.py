"""
Text chunking task.

Splits extracted pages into overlapping, bounded-size chunks while
preserving page provenance.

Strategy:
- Cut each chunk as close to chunk_size as possible, preferring the last
  paragraph break, then the last sentence break, inside a tolerance window
- Cut hard at chunk_size when the window holds no natural break
- Start every following chunk exactly chunk_overlap characters before the
  previous chunk's end, so the original text can be rebuilt from the chunks

Dependencies: langchain_core.documents
System role: Second stage of document ingestion pipeline
"""

import re
from dataclasses import dataclass

from langchain_core.documents import Document

from exam_helper.models.chunk import Chunk
from exam_helper.core.exceptions import ConfigError

PAGE_SEPARATOR = "\n\n"

_PARAGRAPH_BREAK = re.compile(r"\n[ \t]*\n")
_SENTENCE_BREAK = re.compile(r"[.!?][\"')\]]*\s+")


@dataclass(frozen=True)
class PageSpan:
    """Character span of one extracted page inside the joined text."""

    start: int
    end: int
    page: int | None


class ChunkingTask:
    """Split page-annotated text into overlapping chunks."""

    def __init__(
        self,
        chunk_size: int = 1000,
        chunk_overlap: int = 150,
        boundary_window: int = 200,
    ) -> None:
        """
        Initialize chunking task with splitter configuration.

        Args:
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Characters shared between consecutive chunks
            boundary_window: Characters before chunk_size searched for a natural break

        Raises:
            ConfigError: When the parameters cannot produce valid chunks
        """
        if chunk_size <= 0:
            raise ConfigError("chunk_size must be positive", setting="chunk_size")
        if chunk_overlap < 0:
            raise ConfigError("chunk_overlap cannot be negative", setting="chunk_overlap")
        if chunk_overlap >= chunk_size:
            raise ConfigError(
                f"chunk_overlap ({chunk_overlap}) must be smaller than chunk_size ({chunk_size})",
                setting="chunk_overlap",
            )
        if boundary_window < 0:
            raise ConfigError("boundary_window cannot be negative", setting="boundary_window")

        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.boundary_window = boundary_window

    def chunk(self, pages: list[Document], document_id: str) -> list[Chunk]:
        """
        Split extracted pages into chunks.

        Args:
            pages: Extracted page segments; metadata["page"] holds the page number or None
            document_id: ID of the document that will own the chunks

        Returns:
            list[Chunk]: Chunks in original-text order, empty for blank input
        """
        text, spans = self.join_pages(pages)
        return [
            Chunk(
                document_id=document_id,
                index=index,
                content=text[start:end],
                page=self._majority_page(spans, start, end),
                start_index=start,
            )
            for index, (start, end) in enumerate(self.split_offsets(text))
        ]

    def chunk_text(self, text: str, document_id: str, page: int | None = None) -> list[Chunk]:
        """Chunk a single block of text that carries no page boundaries."""
        return self.chunk([Document(page_content=text, metadata={"page": page})], document_id)

    def split_offsets(self, text: str) -> list[tuple[int, int]]:
        """
        Compute [start, end) offsets of every chunk in text.

        Args:
            text: Full document text

        Returns:
            list[tuple[int, int]]: Chunk boundaries in order
        """
        if not text.strip():
            return []

        offsets = []
        start = 0
        length = len(text)
        while True:
            if length - start <= self.chunk_size:
                offsets.append((start, length))
                return offsets

            end = self._find_cut(text, start)
            offsets.append((start, end))
            start = end - self.chunk_overlap

    def join_pages(self, pages: list[Document]) -> tuple[str, list[PageSpan]]:
        """Join page texts with a blank line and remember each page's span."""
        parts = []
        spans = []
        cursor = 0
        for document in pages:
            content = document.page_content
            if not content:
                continue
            if parts:
                parts.append(PAGE_SEPARATOR)
                cursor += len(PAGE_SEPARATOR)
            parts.append(content)
            spans.append(PageSpan(cursor, cursor + len(content), document.metadata.get("page")))
            cursor += len(content)
        return "".join(parts), spans

    def _find_cut(self, text: str, start: int) -> int:
        """Pick the end offset for a chunk beginning at start."""
        limit = start + self.chunk_size
        # The next chunk must start after this one does.
        floor = max(limit - self.boundary_window, start + self.chunk_overlap + 1)
        if floor >= limit:
            return limit

        window = text[floor:limit]
        for pattern in (_PARAGRAPH_BREAK, _SENTENCE_BREAK):
            cut = None
            for match in pattern.finditer(window):
                cut = floor + match.end()
            if cut is not None:
                return cut
        return limit

    @staticmethod
    def _majority_page(spans: list[PageSpan], start: int, end: int) -> int | None:
        """Return the page covering most of [start, end); ties go to the earlier page."""
        best_page = None
        best_overlap = 0
        for span in spans:
            if span.end <= start:
                continue
            if span.start >= end:
                break
            covered = min(span.end, end) - max(span.start, start)
            if covered > best_overlap:
                best_overlap = covered
                best_page = span.page
        return best_page
