"""Declarative queries against document collections.

A QueryBuilder collects filters, ordering and a page window and produces an
immutable QuerySpec that any DocumentStore can execute. The builder carries
the store's constraints so every caller gets them for free:

- at most one field may carry range filters (both bounds on that field are
  fine, e.g. ``completedAt >= start AND completedAt <= end``)
- array-membership filters keep the first 10 distinct values, the rest are
  dropped
- an ``after`` cursor that fails to decode is ignored (first page)

``fetch_page`` runs the "fetch N+1, trim to N" page query and an independent
count query and assembles a Connection.

Example:
    builder = (
        QueryBuilder("habits")
        .where_equal("category", "daily")
        .where_array_contains_any("tags", ["focus", "morning"])
        .order_by("priority", descending=True)
    )
    page = await fetch_page(store, builder, PageRequest(size=20, after=cursor))
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Literal

from habit_service.core.exceptions import InvalidInputException
from habit_service.core.pagination.cursor import CursorCodec, MalformedCursor
from habit_service.core.pagination.schemas import Connection, Edge, PageInfo
from habit_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from habit_service.infra.firestore.protocols import Document, DocumentStore

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)

# Sentinel field path addressing the document id itself
DOCUMENT_ID = "__name__"

# Store limit on values in one "in" / "array-contains-any" filter
MAX_MEMBERSHIP_VALUES = 10

Operator = Literal["==", "in", "array_contains_any", ">=", ">", "<=", "<"]
RANGE_OPERATORS: frozenset[str] = frozenset({">=", ">", "<=", "<"})


@dataclass(frozen=True, slots=True)
class Condition:
    field: str
    op: Operator
    value: Any


@dataclass(frozen=True, slots=True)
class Ordering:
    field: str
    descending: bool = False


@dataclass(frozen=True, slots=True)
class QuerySpec:
    """Executable description of one collection query.

    Attributes:
        collection: Slash-separated collection path, e.g.
            ``users/u1/completion_log``.
        conditions: Filters, all of which must match.
        ordering: Single sort field. Documents without the field are not
            returned when ordering is set.
        limit: Maximum documents to return, None for all.
        offset: Documents to skip after ordering and cursor.
        start_after: Document id to resume after. Ignored by stores when the
            document no longer exists.
    """

    collection: str
    conditions: tuple[Condition, ...] = ()
    ordering: Ordering | None = None
    limit: int | None = None
    offset: int = 0
    start_after: str | None = None

    @property
    def range_field(self) -> str | None:
        for condition in self.conditions:
            if condition.op in RANGE_OPERATORS:
                return condition.field
        return None

    def for_count(self) -> QuerySpec:
        """Same filters without ordering or page window."""
        return replace(self, ordering=None, limit=None, offset=0, start_after=None)


@dataclass(frozen=True, slots=True)
class PageRequest:
    """Requested page window, either cursor based or offset based.

    Raises:
        InvalidInputException: If size is below 1 or offset is negative.
    """

    size: int
    after: str | None = None
    offset: int = 0

    def __post_init__(self) -> None:
        if self.size < 1:
            raise InvalidInputException("Page size must be at least 1", extra={"size": self.size})
        if self.offset < 0:
            raise InvalidInputException("Offset cannot be negative", extra={"offset": self.offset})

    @classmethod
    def clamped(
        cls,
        size: int | None,
        *,
        default: int,
        maximum: int,
        after: str | None = None,
        offset: int = 0,
    ) -> PageRequest:
        """Build a request with ``size`` defaulted and capped at ``maximum``."""
        requested = default if size is None else size
        return cls(size=min(requested, maximum), after=after, offset=offset)


class QueryBuilder:
    """Fluent builder producing a QuerySpec for one collection."""

    def __init__(self, collection: str) -> None:
        if not collection:
            msg = "collection path is required"
            raise ValueError(msg)
        self._collection = collection
        self._conditions: list[Condition] = []
        self._ordering: Ordering | None = None
        self._limit: int | None = None
        self._offset = 0
        self._start_after: str | None = None
        self._after_supplied = False

    @property
    def after_supplied(self) -> bool:
        """Whether an ``after`` cursor was given, valid or not."""
        return self._after_supplied

    def where_equal(self, field: str, value: Any) -> QueryBuilder:
        """Add an equality filter; ``None`` means no filter."""
        if value is not None:
            self._conditions.append(Condition(field, "==", value))
        return self

    def where_array_contains_any(self, field: str, values: Iterable[str] | None) -> QueryBuilder:
        """Match documents whose array ``field`` shares a value with ``values``.

        Only the first 10 distinct non-empty values are used.
        """
        unique = list(dict.fromkeys(v for v in values or () if v))
        if not unique:
            return self
        if len(unique) > MAX_MEMBERSHIP_VALUES:
            lazy_logger.debug(
                lambda: f"Dropping {len(unique) - MAX_MEMBERSHIP_VALUES} values from {field} filter"
            )
            unique = unique[:MAX_MEMBERSHIP_VALUES]
        self._conditions.append(Condition(field, "array_contains_any", unique))
        return self

    def where_range(
        self,
        field: str,
        *,
        gte: Any = None,
        gt: Any = None,
        lte: Any = None,
        lt: Any = None,
    ) -> QueryBuilder:
        """Add range bounds on ``field``; unset bounds are skipped.

        Raises:
            ValueError: If another field already carries a range filter.
        """
        bounds = [(op, v) for op, v in ((">=", gte), (">", gt), ("<=", lte), ("<", lt)) if v is not None]
        if not bounds:
            return self
        existing = self._range_field()
        if existing is not None and existing != field:
            msg = f"Range filters already set on {existing!r}; cannot add range on {field!r}"
            raise ValueError(msg)
        for op, value in bounds:
            self._conditions.append(Condition(field, op, value))
        return self

    def where_id_in(self, document_ids: Sequence[str]) -> QueryBuilder:
        """Match documents by id. Accepts 1 to 10 ids.

        Raises:
            ValueError: If the id list is empty or exceeds the store limit.
        """
        if not document_ids or len(document_ids) > MAX_MEMBERSHIP_VALUES:
            msg = f"where_id_in accepts 1 to {MAX_MEMBERSHIP_VALUES} ids, got {len(document_ids)}"
            raise ValueError(msg)
        self._conditions.append(Condition(DOCUMENT_ID, "in", list(document_ids)))
        return self

    def order_by(self, field: str, *, descending: bool = False) -> QueryBuilder:
        self._ordering = Ordering(field, descending)
        return self

    def limit(self, limit: int | None) -> QueryBuilder:
        if limit is not None and limit < 1:
            msg = f"limit must be positive, got {limit}"
            raise ValueError(msg)
        self._limit = limit
        return self

    def offset(self, offset: int) -> QueryBuilder:
        if offset < 0:
            msg = f"offset cannot be negative, got {offset}"
            raise ValueError(msg)
        self._offset = offset
        return self

    def after(self, cursor: str | None) -> QueryBuilder:
        """Resume after the document named by ``cursor``.

        A malformed cursor restarts from the beginning rather than failing.
        """
        if not cursor:
            return self
        self._after_supplied = True
        try:
            self._start_after = CursorCodec.decode(cursor)
        except MalformedCursor as e:
            logger.debug(
                "Ignoring malformed cursor",
                extra={"collection": self._collection, "reason": e.reason},
            )
            self._start_after = None
        return self

    def build(self) -> QuerySpec:
        return QuerySpec(
            collection=self._collection,
            conditions=tuple(self._conditions),
            ordering=self._ordering,
            limit=self._limit,
            offset=self._offset,
            start_after=self._start_after,
        )

    def _range_field(self) -> str | None:
        for condition in self._conditions:
            if condition.op in RANGE_OPERATORS:
                return condition.field
        return None


async def fetch_page(
    store: DocumentStore,
    builder: QueryBuilder,
    page: PageRequest,
) -> Connection[Document]:
    """Run the page query and the count query and build a Connection.

    The page query asks for ``page.size + 1`` documents; the extra one only
    signals that a next page exists and is trimmed. The count query shares
    the filters but runs independently, so it may observe a different
    snapshot than the page.
    """
    builder.after(page.after).offset(page.offset).limit(page.size + 1)
    spec = builder.build()

    documents, total = await asyncio.gather(
        store.query(spec),
        store.count(spec.for_count()),
    )

    has_next_page = len(documents) > page.size
    documents = documents[: page.size]
    edges = [Edge(node=doc, cursor=CursorCodec.encode(doc.id)) for doc in documents]

    page_info = PageInfo(
        has_previous_page=builder.after_supplied or page.offset > 0,
        has_next_page=has_next_page,
        start_cursor=edges[0].cursor if edges else None,
        end_cursor=edges[-1].cursor if edges else None,
    )
    lazy_logger.debug(
        lambda: f"Fetched {len(edges)} of {total} from {spec.collection} (next={has_next_page})"
    )
    return Connection(page_info=page_info, edges=edges, total_count=total, page_size=page.size)


__all__ = [
    "DOCUMENT_ID",
    "MAX_MEMBERSHIP_VALUES",
    "Condition",
    "Ordering",
    "PageRequest",
    "QueryBuilder",
    "QuerySpec",
    "fetch_page",
]
