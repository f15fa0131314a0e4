"""
Citation extraction and context formatting.

Builds source citations and the delimited context block from retrieval
results. Passages are kept in rank order and passed through unchanged.

Dependencies: exam_helper.models, exam_helper.boundary.vdb
System role: Citation formatting business logic
"""

from exam_helper.boundary.vdb import VectorSearchResult
from exam_helper.models.citation import Citation

CONTEXT_DELIMITER = "\n\n---\n\n"


class CitationBuilder:
    """Citation building business logic."""

    def __init__(self, delimiter: str = CONTEXT_DELIMITER) -> None:
        """
        Initialize citation builder.

        Args:
            delimiter: Separator placed between passages in the context block
        """
        self._delimiter = delimiter

    def build_citations(self, results: list[VectorSearchResult]) -> list[Citation]:
        """
        Build citations from search results.

        Args:
            results: Ranked retrieval results

        Returns:
            list[Citation]: One citation per result, same order
        """
        return [self.format_citation(result) for result in results]

    def format_citation(self, result: VectorSearchResult) -> Citation:
        """Format a single result as {source, page}."""
        return Citation(
            source=result.metadata.source_name or "document",
            page=result.metadata.page,
        )

    def format_context(self, results: list[VectorSearchResult]) -> str:
        """
        Concatenate passages in rank order with an explicit delimiter.

        Args:
            results: Ranked retrieval results

        Returns:
            str: Context block for the answer prompt
        """
        if not results:
            return "No relevant passages found."

        blocks = []
        for result in results:
            page_info = f"Page {result.metadata.page}" if result.metadata.page else "Page unknown"
            blocks.append(f"[Source: {result.metadata.source_name} | {page_info}]\n{result.content}")
        return self._delimiter.join(blocks)
