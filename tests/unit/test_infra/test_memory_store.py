"""Unit tests for the in-memory document store."""

from __future__ import annotations

import pytest

from habit_service.core.database import QueryBuilder
from habit_service.infra.firestore import (
    MAX_BATCH_WRITES,
    BatchTooLarge,
    DocumentAlreadyExists,
    DocumentMissing,
    DocumentRef,
    DocumentStore,
    InMemoryDocumentStore,
)


@pytest.fixture
def memory() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


def test_satisfies_protocol(memory):
    assert isinstance(memory, DocumentStore)


@pytest.mark.asyncio
async def test_create_then_get(memory):
    await memory.create("users", "u1", {"displayName": "One"})

    document = await memory.get("users", "u1")

    assert document is not None
    assert document.id == "u1"
    assert document.data == {"displayName": "One"}


@pytest.mark.asyncio
async def test_create_existing_raises(memory):
    await memory.create("users", "u1", {})

    with pytest.raises(DocumentAlreadyExists):
        await memory.create("users", "u1", {})


@pytest.mark.asyncio
async def test_add_generates_ids(memory):
    first = await memory.add("users/u1/completion_log", {"habitId": "h1"})
    second = await memory.add("users/u1/completion_log", {"habitId": "h1"})

    assert first != second
    assert set(memory.snapshot("users/u1/completion_log")) == {first, second}


@pytest.mark.asyncio
async def test_update_merges_and_requires_document(memory):
    memory.put("users", "u1", {"displayName": "One", "locale": "en"})

    await memory.update("users", "u1", {"locale": "ar"})

    assert memory.snapshot("users")["u1"] == {"displayName": "One", "locale": "ar"}
    with pytest.raises(DocumentMissing):
        await memory.update("users", "u2", {"locale": "ar"})


@pytest.mark.asyncio
async def test_returned_data_is_a_copy(memory):
    memory.put("habits", "h1", {"tags": ["a"]})

    document = await memory.get("habits", "h1")
    document.data["tags"].append("b")

    assert memory.snapshot("habits")["h1"]["tags"] == ["a"]


@pytest.mark.asyncio
async def test_ordering_excludes_documents_without_field(memory):
    memory.put("habits", "h1", {"priority": 1})
    memory.put("habits", "h2", {"priority": 3})
    memory.put("habits", "h3", {})

    documents = await memory.query(QueryBuilder("habits").order_by("priority", descending=True).build())

    assert [doc.id for doc in documents] == ["h2", "h1"]


@pytest.mark.asyncio
async def test_array_contains_any(memory):
    memory.put("habits", "h1", {"tags": ["a", "b"]})
    memory.put("habits", "h2", {"tags": ["c"]})
    memory.put("habits", "h3", {"tags": []})

    spec = QueryBuilder("habits").where_array_contains_any("tags", ["b", "c"]).build()

    assert [doc.id for doc in await memory.query(spec)] == ["h1", "h2"]
    assert await memory.count(spec) == 2


@pytest.mark.asyncio
async def test_delete_all_is_atomic_on_oversized_batch(memory):
    memory.put("users", "u1", {})
    refs = [DocumentRef("users", "u1")] + [DocumentRef("x", str(i)) for i in range(MAX_BATCH_WRITES)]

    with pytest.raises(BatchTooLarge):
        await memory.delete_all(refs)

    assert "u1" in memory.snapshot("users")


@pytest.mark.asyncio
async def test_delete_all_removes_every_ref(memory):
    memory.put("users", "u1", {})
    memory.put("users/u1/completion_log", "c1", {})

    await memory.delete_all([DocumentRef("users/u1/completion_log", "c1"), DocumentRef("users", "u1")])

    assert memory.snapshot("users") == {}
    assert memory.snapshot("users/u1/completion_log") == {}
