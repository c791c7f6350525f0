"""Document store protocol.

Services depend on this protocol rather than on the Firestore SDK so the
store can be swapped (Firestore in deployments, in-memory in tests).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, NamedTuple, Protocol, runtime_checkable

if TYPE_CHECKING:
    from habit_service.core.database.query import QuerySpec

# Store limit on writes in one atomic batch
MAX_BATCH_WRITES = 500


@dataclass(frozen=True, slots=True)
class Document:
    """A stored document: its id plus raw field data."""

    id: str
    data: dict[str, Any] = field(default_factory=dict)


class DocumentRef(NamedTuple):
    collection: str
    document_id: str


class StoreError(Exception):
    """Base class for document store failures."""


class DocumentAlreadyExists(StoreError):
    def __init__(self, collection: str, document_id: str) -> None:
        self.collection = collection
        self.document_id = document_id
        super().__init__(f"Document {collection}/{document_id} already exists")


class DocumentMissing(StoreError):
    def __init__(self, collection: str, document_id: str) -> None:
        self.collection = collection
        self.document_id = document_id
        super().__init__(f"Document {collection}/{document_id} does not exist")


class BatchTooLarge(StoreError):
    def __init__(self, size: int) -> None:
        self.size = size
        super().__init__(f"Atomic batch of {size} writes exceeds the {MAX_BATCH_WRITES} limit")


@runtime_checkable
class DocumentStore(Protocol):
    """Async document store used by every service.

    All methods suspend on I/O; none block the event loop.
    """

    async def get(self, collection: str, document_id: str) -> Document | None:
        """Fetch one document, or None when absent."""
        ...

    async def query(self, spec: QuerySpec) -> list[Document]:
        """Run a query and return matching documents in query order."""
        ...

    async def count(self, spec: QuerySpec) -> int:
        """Count documents matching the query's filters."""
        ...

    async def create(self, collection: str, document_id: str, data: Mapping[str, Any]) -> None:
        """Create a document with a caller-chosen id.

        Raises:
            DocumentAlreadyExists: If the id is taken.
        """
        ...

    async def add(self, collection: str, data: Mapping[str, Any]) -> str:
        """Create a document with a generated id and return the id."""
        ...

    async def update(self, collection: str, document_id: str, data: Mapping[str, Any]) -> None:
        """Merge fields into an existing document.

        Raises:
            DocumentMissing: If the document does not exist.
        """
        ...

    async def delete(self, collection: str, document_id: str) -> None:
        """Delete a document; deleting an absent document is a no-op."""
        ...

    async def delete_all(self, refs: Sequence[DocumentRef]) -> None:
        """Delete several documents in one atomic batch.

        Raises:
            BatchTooLarge: If more refs are given than one batch allows.
        """
        ...


__all__ = [
    "MAX_BATCH_WRITES",
    "BatchTooLarge",
    "Document",
    "DocumentAlreadyExists",
    "DocumentMissing",
    "DocumentRef",
    "DocumentStore",
    "StoreError",
]
