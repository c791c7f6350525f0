"""In-memory DocumentStore.

Mirrors the Firestore semantics the services rely on: id ordering when no
sort is given, exclusion of documents missing the sort field, resuming after
an existing document's sort position, and all-or-nothing batch deletes. Used
by the test suite and by ``FIRESTORE_BACKEND=memory`` local runs.
"""

from __future__ import annotations

import copy
import uuid
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

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
    from habit_service.core.database.query import Condition, QuerySpec

_MISSING = object()


def _field_value(document_id: str, data: Mapping[str, Any], field: str) -> Any:
    if field == DOCUMENT_ID:
        return document_id
    value: Any = data
    for part in field.split("."):
        if not isinstance(value, Mapping) or part not in value:
            return _MISSING
        value = value[part]
    return value


def _matches(document_id: str, data: Mapping[str, Any], condition: Condition) -> bool:
    value = _field_value(document_id, data, condition.field)
    if value is _MISSING:
        return False
    match condition.op:
        case "==":
            return value == condition.value
        case "in":
            return value in condition.value
        case "array_contains_any":
            return isinstance(value, list) and any(v in value for v in condition.value)
        case ">=":
            return value is not None and value >= condition.value
        case ">":
            return value is not None and value > condition.value
        case "<=":
            return value is not None and value <= condition.value
        case "<":
            return value is not None and value < condition.value
    msg = f"Unsupported operator {condition.op!r}"
    raise ValueError(msg)


class InMemoryDocumentStore:
    """DocumentStore holding collections in process memory."""

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self.query_log: list[QuerySpec] = []

    def put(self, collection: str, document_id: str, data: Mapping[str, Any]) -> None:
        """Write a document directly, replacing any existing one."""
        self._collections.setdefault(collection, {})[document_id] = copy.deepcopy(dict(data))

    def snapshot(self, collection: str) -> dict[str, dict[str, Any]]:
        """Copy of every document in ``collection`` keyed by id."""
        return copy.deepcopy(self._collections.get(collection, {}))

    def _sort_key(self, document_id: str, data: Mapping[str, Any], spec: QuerySpec) -> tuple[Any, ...]:
        if spec.ordering is None:
            return (document_id,)
        return (_field_value(document_id, data, spec.ordering.field), document_id)

    def _evaluate(self, spec: QuerySpec) -> list[tuple[str, dict[str, Any]]]:
        items = [
            (doc_id, data)
            for doc_id, data in self._collections.get(spec.collection, {}).items()
            if all(_matches(doc_id, data, c) for c in spec.conditions)
        ]
        if spec.ordering is not None:
            items = [
                (doc_id, data)
                for doc_id, data in items
                if _field_value(doc_id, data, spec.ordering.field) is not _MISSING
            ]
        descending = spec.ordering is not None and spec.ordering.descending
        items.sort(key=lambda item: self._sort_key(item[0], item[1], spec), reverse=descending)
        return items

    def _resume_after(
        self, items: list[tuple[str, dict[str, Any]]], spec: QuerySpec
    ) -> list[tuple[str, dict[str, Any]]]:
        anchor = self._collections.get(spec.collection, {}).get(spec.start_after or "")
        if anchor is None:
            return items
        anchor_key = self._sort_key(spec.start_after or "", anchor, spec)
        if _MISSING in anchor_key:
            return items
        descending = spec.ordering is not None and spec.ordering.descending
        if descending:
            return [i for i in items if self._sort_key(i[0], i[1], spec) < anchor_key]
        return [i for i in items if self._sort_key(i[0], i[1], spec) > anchor_key]

    async def get(self, collection: str, document_id: str) -> Document | None:
        data = self._collections.get(collection, {}).get(document_id)
        if data is None:
            return None
        return Document(id=document_id, data=copy.deepcopy(data))

    async def query(self, spec: QuerySpec) -> list[Document]:
        self.query_log.append(spec)
        items = self._evaluate(spec)
        if spec.start_after:
            items = self._resume_after(items, spec)
        items = items[spec.offset :]
        if spec.limit is not None:
            items = items[: spec.limit]
        return [Document(id=doc_id, data=copy.deepcopy(data)) for doc_id, data in items]

    async def count(self, spec: QuerySpec) -> int:
        return len(self._evaluate(spec.for_count()))

    async def create(self, collection: str, document_id: str, data: Mapping[str, Any]) -> None:
        documents = self._collections.setdefault(collection, {})
        if document_id in documents:
            raise DocumentAlreadyExists(collection, document_id)
        documents[document_id] = copy.deepcopy(dict(data))

    async def add(self, collection: str, data: Mapping[str, Any]) -> str:
        document_id = uuid.uuid4().hex[:20]
        await self.create(collection, document_id, data)
        return document_id

    async def update(self, collection: str, document_id: str, data: Mapping[str, Any]) -> None:
        documents = self._collections.get(collection, {})
        if document_id not in documents:
            raise DocumentMissing(collection, document_id)
        documents[document_id].update(copy.deepcopy(dict(data)))

    async def delete(self, collection: str, document_id: str) -> None:
        self._collections.get(collection, {}).pop(document_id, None)

    async def delete_all(self, refs: Sequence[DocumentRef]) -> None:
        if len(refs) > MAX_BATCH_WRITES:
            raise BatchTooLarge(len(refs))
        for ref in refs:
            self._collections.get(ref.collection, {}).pop(ref.document_id, None)


__all__ = ["InMemoryDocumentStore"]
