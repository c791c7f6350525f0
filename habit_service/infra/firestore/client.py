"""Firestore implementation of the DocumentStore protocol.

Uses the async Firestore client so every read and write suspends instead of
blocking the event loop.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from google.api_core import exceptions as gcp_exceptions
from google.cloud import firestore
from google.cloud.firestore_v1 import FieldFilter
from google.cloud.firestore_v1.field_path import FieldPath

from habit_service.core.database.query import DOCUMENT_ID
from habit_service.infra.firestore.protocols import (
    MAX_BATCH_WRITES,
    BatchTooLarge,
    Document,
    DocumentAlreadyExists,
    DocumentMissing,
    DocumentRef,
)

if TYPE_CHECKING:
    from habit_service.core.database.query import QuerySpec
    from habit_service.core.settings.firestore import FirestoreSettings

logger = logging.getLogger(__name__)


class FirestoreDocumentStore:
    """DocumentStore backed by ``google.cloud.firestore.AsyncClient``."""

    def __init__(self, client: firestore.AsyncClient) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, settings: FirestoreSettings) -> FirestoreDocumentStore:
        """Build a store from settings, honouring an emulator host."""
        if settings.emulator_host:
            # The SDK reads the emulator address from the environment
            os.environ.setdefault("FIRESTORE_EMULATOR_HOST", settings.emulator_host)

        kwargs: dict[str, Any] = {}
        if settings.project_id:
            kwargs["project"] = settings.project_id
        if settings.database:
            kwargs["database"] = settings.database

        logger.info(
            "Creating Firestore client",
            extra={
                "project_id": settings.project_id,
                "database": settings.database or "(default)",
                "emulator": bool(settings.emulator_host),
            },
        )
        return cls(firestore.AsyncClient(**kwargs))

    def _document(self, collection: str, document_id: str) -> Any:
        return self._client.collection(collection).document(document_id)

    async def _build_query(self, spec: QuerySpec) -> Any:
        collection = self._client.collection(spec.collection)
        query: Any = collection

        for condition in spec.conditions:
            if condition.field == DOCUMENT_ID:
                # Id filters compare document references, not strings
                if condition.op == "in":
                    value: Any = [collection.document(v) for v in condition.value]
                else:
                    value = collection.document(condition.value)
                query = query.where(filter=FieldFilter(FieldPath.document_id(), condition.op, value))
            else:
                query = query.where(filter=FieldFilter(condition.field, condition.op, condition.value))

        if spec.ordering is not None:
            direction = (
                firestore.Query.DESCENDING if spec.ordering.descending else firestore.Query.ASCENDING
            )
            query = query.order_by(spec.ordering.field, direction=direction)

        if spec.start_after:
            snapshot = await collection.document(spec.start_after).get()
            if snapshot.exists:
                query = query.start_after(snapshot)

        if spec.offset:
            query = query.offset(spec.offset)
        if spec.limit is not None:
            query = query.limit(spec.limit)
        return query

    async def get(self, collection: str, document_id: str) -> Document | None:
        snapshot = await self._document(collection, document_id).get()
        if not snapshot.exists:
            return None
        return Document(id=snapshot.id, data=snapshot.to_dict() or {})

    async def query(self, spec: QuerySpec) -> list[Document]:
        query = await self._build_query(spec)
        snapshots = await query.get()
        return [Document(id=s.id, data=s.to_dict() or {}) for s in snapshots]

    async def count(self, spec: QuerySpec) -> int:
        query = await self._build_query(spec.for_count())
        results = await query.count(alias="total").get()
        return int(results[0][0].value) if results and results[0] else 0

    async def create(self, collection: str, document_id: str, data: Mapping[str, Any]) -> None:
        try:
            await self._document(collection, document_id).create(dict(data))
        except gcp_exceptions.AlreadyExists as e:
            raise DocumentAlreadyExists(collection, document_id) from e

    async def add(self, collection: str, data: Mapping[str, Any]) -> str:
        _, reference = await self._client.collection(collection).add(dict(data))
        return reference.id

    async def update(self, collection: str, document_id: str, data: Mapping[str, Any]) -> None:
        try:
            await self._document(collection, document_id).update(dict(data))
        except gcp_exceptions.NotFound as e:
            raise DocumentMissing(collection, document_id) from e

    async def delete(self, collection: str, document_id: str) -> None:
        await self._document(collection, document_id).delete()

    async def delete_all(self, refs: Sequence[DocumentRef]) -> None:
        if not refs:
            return
        if len(refs) > MAX_BATCH_WRITES:
            raise BatchTooLarge(len(refs))
        batch = self._client.batch()
        for ref in refs:
            batch.delete(self._document(ref.collection, ref.document_id))
        await batch.commit()


__all__ = ["FirestoreDocumentStore"]
