"""Pagination result schemas.

Two shapes over one result:

1. Connection (GraphQL / Relay style): edges with cursors, PageInfo and a
   total count.
2. OffsetPage (REST style): items, total, limit, offset and hasMore.

Services always return a Connection; the REST routers convert it with
``to_offset_page``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")
U = TypeVar("U")


class PageInfo(BaseModel):
    """Pagination metadata following the Relay connection spec.

    Attributes:
        has_previous_page: True when the page was requested with an `after`
            cursor or a positive offset. Not a backward existence check.
        has_next_page: True when the store held at least one more match.
        start_cursor: Cursor of the first item in this page.
        end_cursor: Cursor of the last item in this page.
    """

    has_previous_page: bool = Field(description="Whether an earlier position was requested")
    has_next_page: bool = Field(description="Whether more items exist")
    start_cursor: str | None = Field(default=None, description="Cursor of the first item")
    end_cursor: str | None = Field(default=None, description="Cursor of the last item")

    model_config = {"frozen": True}


@dataclass(frozen=True, slots=True)
class Edge(Generic[T]):
    """Edge wrapper for paginated items."""

    node: T
    cursor: str


@dataclass(frozen=True, slots=True)
class Connection(Generic[T]):
    """One page of results with navigation metadata and a total count.

    Attributes:
        edges: Items with their cursors.
        page_info: Navigation metadata.
        total_count: Matches for the same filter, counted independently of
            the page query.
        page_size: Requested page size after defaults and caps.
    """

    page_info: PageInfo
    edges: list[Edge[T]] = field(default_factory=list)
    total_count: int = 0
    page_size: int = 0

    @property
    def nodes(self) -> list[T]:
        """Get just the nodes without edge wrappers."""
        return [edge.node for edge in self.edges]

    def map(self, fn: Callable[[T], U]) -> Connection[U]:
        """Return a connection with every node transformed by ``fn``."""
        return Connection(
            page_info=self.page_info,
            edges=[Edge(node=fn(edge.node), cursor=edge.cursor) for edge in self.edges],
            total_count=self.total_count,
            page_size=self.page_size,
        )

    def to_offset_page(self, offset: int = 0) -> OffsetPage[T]:
        """Convert to the REST offset page shape."""
        return OffsetPage(
            items=self.nodes,
            total=self.total_count,
            limit=self.page_size,
            offset=offset,
            has_more=self.page_info.has_next_page,
        )


@dataclass(frozen=True, slots=True)
class OffsetPage(Generic[T]):
    """REST-style offset page: ``{items, total, limit, offset, hasMore}``."""

    items: list[T]
    total: int
    limit: int
    offset: int = 0
    has_more: bool = False

    def dump(self, item_dump: Callable[[T], Any]) -> dict[str, Any]:
        """Serialize with camelCase keys, dumping items with ``item_dump``."""
        return {
            "items": [item_dump(item) for item in self.items],
            "total": self.total,
            "limit": self.limit,
            "offset": self.offset,
            "hasMore": self.has_more,
        }


__all__ = ["Connection", "Edge", "OffsetPage", "PageInfo"]
