"""Document store implementations.

``create_document_store`` picks the implementation named by
``FIRESTORE_BACKEND``. The Firestore SDK is imported only when that backend
is selected.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from habit_service.infra.firestore.memory import InMemoryDocumentStore
from habit_service.infra.firestore.protocols import (
    MAX_BATCH_WRITES,
    BatchTooLarge,
    Document,
    DocumentAlreadyExists,
    DocumentMissing,
    DocumentRef,
    DocumentStore,
    StoreError,
)

if TYPE_CHECKING:
    from habit_service.core.settings.firestore import FirestoreSettings


def create_document_store(settings: FirestoreSettings) -> DocumentStore:
    """Build the configured document store."""
    if settings.backend == "memory":
        return InMemoryDocumentStore()

    from habit_service.infra.firestore.client import FirestoreDocumentStore

    return FirestoreDocumentStore.from_settings(settings)


__all__ = [
    "MAX_BATCH_WRITES",
    "BatchTooLarge",
    "Document",
    "DocumentAlreadyExists",
    "DocumentMissing",
    "DocumentRef",
    "DocumentStore",
    "InMemoryDocumentStore",
    "StoreError",
    "create_document_store",
]
