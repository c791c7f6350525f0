"""Shared GraphQL pagination types."""

from __future__ import annotations

import strawberry

from habit_service.core.pagination import PageInfo


@strawberry.type(name="PageInfo", description="Pagination metadata following the GraphQL Relay specification")
class PageInfoType:
    """Mirrors habit_service.core.pagination.schemas.PageInfo."""

    has_next_page: bool = strawberry.field(description="Whether more items exist")
    has_previous_page: bool = strawberry.field(
        description="Whether the page was requested after a cursor",
    )
    start_cursor: str | None = strawberry.field(default=None, description="Cursor of the first item")
    end_cursor: str | None = strawberry.field(default=None, description="Cursor of the last item")

    @classmethod
    def from_model(cls, page_info: PageInfo) -> PageInfoType:
        return cls(
            has_next_page=page_info.has_next_page,
            has_previous_page=page_info.has_previous_page,
            start_cursor=page_info.start_cursor,
            end_cursor=page_info.end_cursor,
        )


__all__ = ["PageInfoType"]
