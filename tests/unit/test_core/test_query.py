"""Unit tests for the query builder and page fetching."""

from __future__ import annotations

import pytest

from habit_service.core.database import (
    DOCUMENT_ID,
    PageRequest,
    QueryBuilder,
    fetch_page,
)
from habit_service.core.exceptions import InvalidInputException
from habit_service.core.pagination import CursorCodec
from habit_service.infra.firestore import InMemoryDocumentStore


@pytest.fixture
def numbers() -> InMemoryDocumentStore:
    store = InMemoryDocumentStore()
    for i in range(1, 8):
        store.put("numbers", f"n{i}", {"value": i, "parity": "even" if i % 2 == 0 else "odd"})
    return store


class TestQueryBuilder:
    def test_none_equality_is_skipped(self):
        spec = QueryBuilder("habits").where_equal("category", None).build()

        assert spec.conditions == ()

    def test_membership_values_truncated_to_ten(self):
        tags = [f"t{i}" for i in range(15)] + ["t0", ""]

        spec = QueryBuilder("habits").where_array_contains_any("tags", tags).build()

        (condition,) = spec.conditions
        assert condition.op == "array_contains_any"
        assert condition.value == [f"t{i}" for i in range(10)]

    def test_two_bounds_on_one_field(self):
        spec = QueryBuilder("log").where_range("completedAt", gte=1, lte=5).build()

        assert [c.op for c in spec.conditions] == [">=", "<="]
        assert spec.range_field == "completedAt"

    def test_range_on_second_field_rejected(self):
        builder = QueryBuilder("log").where_range("completedAt", gte=1)

        with pytest.raises(ValueError, match="Range filters already set"):
            builder.where_range("priority", lt=3)

    def test_id_in_limits(self):
        with pytest.raises(ValueError):
            QueryBuilder("habits").where_id_in([])
        with pytest.raises(ValueError):
            QueryBuilder("habits").where_id_in([str(i) for i in range(11)])

        spec = QueryBuilder("habits").where_id_in(["a", "b"]).build()
        assert spec.conditions[0].field == DOCUMENT_ID

    def test_malformed_after_cursor_is_ignored(self):
        builder = QueryBuilder("habits").after("%%%")

        assert builder.after_supplied is True
        assert builder.build().start_after is None

    def test_count_spec_drops_window(self):
        spec = (
            QueryBuilder("habits")
            .where_equal("category", "daily")
            .order_by("priority", descending=True)
            .limit(5)
            .offset(2)
            .build()
        )

        count_spec = spec.for_count()
        assert count_spec.conditions == spec.conditions
        assert count_spec.ordering is None
        assert count_spec.limit is None
        assert count_spec.offset == 0


class TestPageRequest:
    def test_clamped_to_maximum(self):
        assert PageRequest.clamped(500, default=50, maximum=100).size == 100

    def test_default_used_when_missing(self):
        assert PageRequest.clamped(None, default=50, maximum=100).size == 50

    @pytest.mark.parametrize(("size", "offset"), [(0, 0), (-1, 0), (10, -1)])
    def test_invalid_window(self, size, offset):
        with pytest.raises(InvalidInputException):
            PageRequest(size=size, offset=offset)


class TestFetchPage:
    @pytest.mark.asyncio
    async def test_first_page_has_next(self, numbers):
        builder = QueryBuilder("numbers").order_by("value")

        page = await fetch_page(numbers, builder, PageRequest(size=3))

        assert [doc.id for doc in page.nodes] == ["n1", "n2", "n3"]
        assert page.total_count == 7
        assert page.page_info.has_next_page is True
        assert page.page_info.has_previous_page is False
        assert page.page_info.end_cursor == CursorCodec.encode("n3")

    @pytest.mark.asyncio
    async def test_resume_after_cursor(self, numbers):
        builder = QueryBuilder("numbers").order_by("value")

        page = await fetch_page(numbers, builder, PageRequest(size=3, after=CursorCodec.encode("n6")))

        assert [doc.id for doc in page.nodes] == ["n7"]
        assert page.page_info.has_next_page is False
        assert page.page_info.has_previous_page is True

    @pytest.mark.asyncio
    async def test_exact_fit_has_no_next_page(self, numbers):
        builder = QueryBuilder("numbers").where_equal("parity", "odd")

        page = await fetch_page(numbers, builder, PageRequest(size=4))

        assert len(page.edges) == 4
        assert page.total_count == 4
        assert page.page_info.has_next_page is False

    @pytest.mark.asyncio
    async def test_offset_marks_previous_page(self, numbers):
        builder = QueryBuilder("numbers").order_by("value", descending=True)

        page = await fetch_page(numbers, builder, PageRequest(size=2, offset=2))

        assert [doc.id for doc in page.nodes] == ["n5", "n4"]
        assert page.page_info.has_previous_page is True

    @pytest.mark.asyncio
    async def test_empty_result(self, numbers):
        builder = QueryBuilder("numbers").where_equal("parity", "none")

        page = await fetch_page(numbers, builder, PageRequest(size=5))

        assert page.edges == []
        assert page.page_info.start_cursor is None
        assert page.page_info.end_cursor is None
