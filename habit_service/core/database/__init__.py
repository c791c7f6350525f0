"""Query construction, paging and batch lookups over the document store."""

from habit_service.core.database.fanout import FanoutResolver, chunked
from habit_service.core.database.query import (
    DOCUMENT_ID,
    MAX_MEMBERSHIP_VALUES,
    Condition,
    Ordering,
    PageRequest,
    QueryBuilder,
    QuerySpec,
    fetch_page,
)

__all__ = [
    "DOCUMENT_ID",
    "MAX_MEMBERSHIP_VALUES",
    "Condition",
    "FanoutResolver",
    "Ordering",
    "PageRequest",
    "QueryBuilder",
    "QuerySpec",
    "chunked",
    "fetch_page",
]
