"""
In-memory document registry.

Maps opaque document IDs to their vector index and metadata for the
lifetime of the process. Owned by the application: constructed at startup,
cleared at shutdown.

Lookups are lock-free; a lock guards registration and eviction only.
Optional capacity bound (least-recently-used eviction) and idle TTL keep
memory bounded.

Dependencies: threading, uuid, exam_helper.boundary.vdb.vector_index
System role: Process-wide document -> index store
"""

import logging
import threading
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from exam_helper.boundary.vdb.vector_index import VectorIndex
from exam_helper.core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


@dataclass
class RegisteredDocument:
    """Registry entry: a document's index plus its metadata."""

    document_id: str
    name: str
    index: VectorIndex
    chunk_count: int
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    last_accessed: float = field(default_factory=time.monotonic)


class DocumentRegistry:
    """Process-lifetime map of document ID to vector index."""

    def __init__(
        self,
        max_documents: int | None = None,
        ttl_seconds: float | None = None,
        clock=time.monotonic,
    ) -> None:
        """
        Initialize an empty registry.

        Args:
            max_documents: Entries kept before the least recently used is evicted (None = unbounded)
            ttl_seconds: Idle seconds after which an entry expires (None = never)
            clock: Monotonic time source
        """
        if max_documents is not None and max_documents < 1:
            raise ValueError("max_documents must be at least 1")
        if ttl_seconds is not None and ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")

        self._entries: dict[str, RegisteredDocument] = {}
        self._lock = threading.Lock()
        self._max_documents = max_documents
        self._ttl_seconds = ttl_seconds
        self._clock = clock

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, document_id: object) -> bool:
        return document_id in self._entries

    def allocate_id(self) -> str:
        """
        Mint a fresh document ID.

        UUID4 draws from os.urandom, so IDs are unguessable. The ID is not
        visible through lookup() until register() is called with an index
        built for it.

        Returns:
            str: New document ID
        """
        while True:
            document_id = str(uuid.uuid4())
            if document_id not in self._entries:
                return document_id

    def register(self, name: str, index: VectorIndex, chunk_count: int) -> str:
        """
        Store a fully built index under its document ID.

        Args:
            name: Display name of the document
            index: Vector index built for an ID from allocate_id()
            chunk_count: Number of chunks in the index

        Returns:
            str: The document ID

        Raises:
            ValidationError: The ID is already registered
        """
        document_id = index.document_id
        now = self._clock()
        entry = RegisteredDocument(
            document_id=document_id,
            name=name,
            index=index,
            chunk_count=chunk_count,
            last_accessed=now,
        )

        with self._lock:
            if document_id in self._entries:
                raise ValidationError(
                    "Document ID is already registered",
                    field="document_id",
                    details={"document_id": document_id},
                )
            self._purge_expired(now)
            if self._max_documents is not None:
                while len(self._entries) >= self._max_documents:
                    self._evict_least_recent()
            # Rebinding keeps concurrent lookups on a consistent dict
            entries = dict(self._entries)
            entries[document_id] = entry
            self._entries = entries

        logger.info(
            f"{__name__}:register - Registered document ({chunk_count} chunks)",
            extra={"document_id": document_id, "document_count": len(self._entries)},
        )
        return document_id

    def lookup(self, document_id: str) -> RegisteredDocument:
        """
        Resolve a document ID.

        Args:
            document_id: ID returned by register()

        Returns:
            RegisteredDocument: Index and metadata

        Raises:
            NotFoundError: Unknown or expired ID
        """
        entry = self._entries.get(document_id)
        if entry is None:
            raise NotFoundError(document_id)

        now = self._clock()
        if self._is_expired(entry, now):
            self.evict(document_id)
            raise NotFoundError(document_id, details={"reason": "expired"})

        entry.last_accessed = now
        return entry

    def evict(self, document_id: str) -> bool:
        """
        Drop a whole document.

        Returns:
            bool: True if the document was registered
        """
        with self._lock:
            if document_id not in self._entries:
                return False
            entries = dict(self._entries)
            del entries[document_id]
            self._entries = entries
        logger.info(f"{__name__}:evict - Evicted document", extra={"document_id": document_id})
        return True

    def clear(self) -> None:
        """Drop every document (application shutdown)."""
        with self._lock:
            count = len(self._entries)
            self._entries = {}
        logger.info(f"{__name__}:clear - Cleared {count} documents")

    def _is_expired(self, entry: RegisteredDocument, now: float) -> bool:
        return self._ttl_seconds is not None and now - entry.last_accessed > self._ttl_seconds

    def _purge_expired(self, now: float) -> None:
        # Caller holds the lock
        expired = [doc_id for doc_id, entry in self._entries.items() if self._is_expired(entry, now)]
        if expired:
            self._entries = {
                doc_id: entry for doc_id, entry in self._entries.items() if doc_id not in expired
            }
            logger.info(f"{__name__}:register - Expired {len(expired)} documents")

    def _evict_least_recent(self) -> None:
        # Caller holds the lock
        victim = min(self._entries.values(), key=lambda entry: entry.last_accessed)
        self._entries = {
            doc_id: entry for doc_id, entry in self._entries.items() if doc_id != victim.document_id
        }
        logger.info(
            f"{__name__}:register - Capacity reached, evicted least recently used document",
            extra={"document_id": victim.document_id},
        )
