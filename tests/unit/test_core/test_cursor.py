"""Unit tests for pagination cursors and connection shapes."""

from __future__ import annotations

import pytest

from habit_service.core.pagination import (
    Connection,
    CursorCodec,
    Edge,
    MalformedCursor,
    PageInfo,
    decode_cursor,
    encode_cursor,
)


class TestCursorCodec:
    @pytest.mark.parametrize("document_id", ["h1", "habit-42", "Zm9v", "ünïcode"])
    def test_decode_reverses_encode(self, document_id):
        assert CursorCodec.decode(CursorCodec.encode(document_id)) == document_id

    def test_cursor_is_url_safe(self):
        cursor = encode_cursor("id?with&odd=chars~~~")

        assert "+" not in cursor
        assert "/" not in cursor

    @pytest.mark.parametrize("cursor", ["", "!!!not-base64!!!", "////", "gA=="])
    def test_malformed_cursor_raises(self, cursor):
        with pytest.raises(MalformedCursor):
            decode_cursor(cursor)

    def test_cursor_of_path_is_rejected(self):
        # base64 of "users/a"
        with pytest.raises(MalformedCursor, match="not a document id"):
            CursorCodec.decode("dXNlcnMvYQ==")

    def test_encode_rejects_empty_id(self):
        with pytest.raises(ValueError):
            CursorCodec.encode("")


class TestConnection:
    def _connection(self) -> Connection[int]:
        return Connection(
            page_info=PageInfo(has_previous_page=True, has_next_page=True, start_cursor="a", end_cursor="b"),
            edges=[Edge(node=1, cursor="a"), Edge(node=2, cursor="b")],
            total_count=7,
            page_size=2,
        )

    def test_nodes(self):
        assert self._connection().nodes == [1, 2]

    def test_map_keeps_cursors_and_counts(self):
        mapped = self._connection().map(lambda n: n * 10)

        assert mapped.nodes == [10, 20]
        assert [edge.cursor for edge in mapped.edges] == ["a", "b"]
        assert mapped.total_count == 7
        assert mapped.page_size == 2

    def test_offset_page_dump(self):
        page = self._connection().to_offset_page(offset=4).dump(str)

        assert page == {
            "items": ["1", "2"],
            "total": 7,
            "limit": 2,
            "offset": 4,
            "hasMore": True,
        }
