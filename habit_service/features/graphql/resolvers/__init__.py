"""GraphQL query, mutation and subscription resolvers."""

from habit_service.features.graphql.resolvers.mutations import Mutation
from habit_service.features.graphql.resolvers.queries import Query
from habit_service.features.graphql.resolvers.subscriptions import Subscription

__all__ = ["Mutation", "Query", "Subscription"]
