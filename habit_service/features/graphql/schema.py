"""GraphQL schema assembly.

Combines Query, Mutation and Subscription into a single schema with the
error handling extensions.
"""

from __future__ import annotations

import logging

import strawberry

from habit_service.features.graphql.extensions import get_extensions
from habit_service.features.graphql.resolvers import Mutation, Query, Subscription

logger = logging.getLogger(__name__)

schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    subscription=Subscription,
    extensions=get_extensions(),
)

logger.debug("GraphQL schema created")

__all__ = ["schema"]
