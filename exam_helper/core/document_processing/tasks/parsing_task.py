"""
Document parsing task using LangChain community loaders.

Converts uploaded PDF, DOCX and plain-text bytes into page-annotated
LangChain Documents.

Dependencies: langchain_community.document_loaders, fastapi.concurrency
System role: First stage of document ingestion pipeline
"""

import logging
import tempfile
from enum import Enum
from pathlib import Path

from fastapi.concurrency import run_in_threadpool
from langchain_community.document_loaders import Docx2txtLoader, PyPDFLoader, TextLoader
from langchain_core.documents import Document

from exam_helper.core.exceptions import ParsingError, UnsupportedTypeError

logger = logging.getLogger(__name__)


class DocumentFormat(str, Enum):
    """Upload formats the extractor understands."""

    PDF = "pdf"
    DOCX = "docx"
    PLAIN_TEXT = "txt"

    @classmethod
    def from_filename(cls, filename: str) -> "DocumentFormat":
        """
        Detect the format from a declared file name.

        Args:
            filename: Name supplied with the upload

        Returns:
            DocumentFormat: Matching format

        Raises:
            UnsupportedTypeError: Extension is missing or not PDF, DOCX or TXT
        """
        extension = Path(filename or "").suffix.lower()
        for member in cls:
            if extension == f".{member.value}":
                return member
        raise UnsupportedTypeError(extension)


def _extract_pdf(path: Path) -> list[Document]:
    pages = PyPDFLoader(str(path)).load()
    # PyPDFLoader numbers pages from 0
    return [
        Document(page_content=page.page_content, metadata={"page": int(page.metadata.get("page", i)) + 1})
        for i, page in enumerate(pages)
    ]


def _extract_docx(path: Path) -> list[Document]:
    documents = Docx2txtLoader(str(path)).load()
    return [Document(page_content=doc.page_content, metadata={"page": None}) for doc in documents]


def _extract_text(path: Path) -> list[Document]:
    documents = TextLoader(str(path), encoding="utf-8", autodetect_encoding=True).load()
    return [Document(page_content=doc.page_content, metadata={"page": None}) for doc in documents]


_EXTRACTORS = {
    DocumentFormat.PDF: _extract_pdf,
    DocumentFormat.DOCX: _extract_docx,
    DocumentFormat.PLAIN_TEXT: _extract_text,
}


class ParsingTask:
    """Extract page-annotated text from uploaded document bytes."""

    async def parse(self, file_bytes: bytes, filename: str) -> list[Document]:
        """
        Parse an uploaded document into page segments.

        The bytes are written to a temporary directory that is removed
        once the loader returns; the loader itself runs in the thread pool.

        Args:
            file_bytes: Raw upload content
            filename: Declared file name, used for format detection and as source name

        Returns:
            list[Document]: Page segments with metadata {"page": int | None, "source": filename}

        Raises:
            UnsupportedTypeError: Extension is not PDF, DOCX or TXT
            ParsingError: When the loader fails
        """
        document_format = DocumentFormat.from_filename(filename)
        return await run_in_threadpool(self._parse_sync, file_bytes, filename, document_format)

    def _parse_sync(
        self,
        file_bytes: bytes,
        filename: str,
        document_format: DocumentFormat,
    ) -> list[Document]:
        extractor = _EXTRACTORS[document_format]
        try:
            with tempfile.TemporaryDirectory(prefix="exam_helper_") as temp_dir:
                path = Path(temp_dir) / f"upload.{document_format.value}"
                path.write_bytes(file_bytes)
                pages = extractor(path)
        except Exception as e:
            logger.error(
                f"{__name__}:parse - Failed to extract {document_format.value}: {type(e).__name__}: {e}"
            )
            raise ParsingError(
                f"Failed to extract text from {filename}: {e}",
                file_type=document_format.value,
            ) from e

        for page in pages:
            page.metadata["source"] = filename

        logger.info(
            f"{__name__}:parse - Extracted {len(pages)} segment(s) from {document_format.value}",
            extra={"upload_name": filename, "segment_count": len(pages)},
        )
        return pages
