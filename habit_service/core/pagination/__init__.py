"""Cursor pagination with Connection (GraphQL) and offset page (REST) shapes."""

from habit_service.core.pagination.cursor import (
    CursorCodec,
    MalformedCursor,
    decode_cursor,
    encode_cursor,
)
from habit_service.core.pagination.schemas import Connection, Edge, OffsetPage, PageInfo

__all__ = [
    "Connection",
    "CursorCodec",
    "Edge",
    "MalformedCursor",
    "OffsetPage",
    "PageInfo",
    "decode_cursor",
    "encode_cursor",
]
