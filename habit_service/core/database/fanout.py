"""Ordered batch lookups around the store's 10-value membership limit.

Resolving a bundle's habits means fetching an arbitrary number of documents
by id while the store accepts at most 10 ids per "in" query. The resolver
splits the ids into chunks, runs one query per chunk concurrently, and then
restores the caller's order. Ids the store does not hold are left out.

Example:
    resolver = FanoutResolver(store)
    docs = await resolver.resolve("habits", ["h3", "h1", "h2"])
    # h2 missing -> [doc(h3), doc(h1)]
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import TYPE_CHECKING

from habit_service.core.database.query import MAX_MEMBERSHIP_VALUES, QueryBuilder
from habit_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from habit_service.infra.firestore.protocols import Document, DocumentStore

lazy_logger = get_lazy_logger(__name__)


def chunked(ids: Sequence[str], size: int = MAX_MEMBERSHIP_VALUES) -> list[list[str]]:
    """Split ``ids`` into contiguous chunks of at most ``size``."""
    if size < 1:
        msg = f"chunk size must be positive, got {size}"
        raise ValueError(msg)
    return [list(ids[i : i + size]) for i in range(0, len(ids), size)]


class FanoutResolver:
    """Resolve ordered id lists into documents with chunked membership queries."""

    def __init__(self, store: DocumentStore, chunk_size: int = MAX_MEMBERSHIP_VALUES) -> None:
        if not 1 <= chunk_size <= MAX_MEMBERSHIP_VALUES:
            msg = f"chunk_size must be between 1 and {MAX_MEMBERSHIP_VALUES}"
            raise ValueError(msg)
        self.store = store
        self.chunk_size = chunk_size

    async def resolve(self, collection: str, ids: Sequence[str]) -> list[Document]:
        """Return the documents for ``ids`` in input order, skipping missing ids.

        Duplicate ids resolve to a single document at the id's first position.
        Never raises for ids the store does not hold.
        """
        if not ids:
            return []

        unique = list(dict.fromkeys(ids))
        position = {doc_id: index for index, doc_id in enumerate(unique)}
        chunks = chunked(unique, self.chunk_size)

        results = await asyncio.gather(
            *(
                self.store.query(QueryBuilder(collection).where_id_in(chunk).build())
                for chunk in chunks
            )
        )

        found = {doc.id: doc for batch in results for doc in batch if doc.id in position}
        ordered = sorted(found.values(), key=lambda doc: position[doc.id])

        if len(ordered) < len(unique):
            lazy_logger.debug(
                lambda: (
                    f"Dropped {len(unique) - len(ordered)} unresolved ids from {collection}: "
                    f"{[i for i in unique if i not in found]}"
                )
            )
        return ordered

    async def resolve_map(self, collection: str, ids: Sequence[str]) -> dict[str, Document]:
        """Like ``resolve`` but keyed by id."""
        return {doc.id: doc for doc in await self.resolve(collection, ids)}


__all__ = ["FanoutResolver", "chunked"]
