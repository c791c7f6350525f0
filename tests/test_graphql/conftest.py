"""GraphQL fixtures: execute operations directly against the schema."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from habit_service.core.database.documents import completion_log_path
from habit_service.features.graphql.context import GraphQLContext
from habit_service.features.graphql.dataloaders import create_dataloaders
from habit_service.features.graphql.schema import schema


@pytest.fixture
def execute(services):
    """Run an operation as the given identity (None for anonymous).

    Example:
        result = await execute("{ me { uid } }", identity=alice)
        assert result.errors is None
    """

    async def _execute(query: str, *, identity=None, variables: dict[str, Any] | None = None):
        context = GraphQLContext(
            services=services,
            loaders=create_dataloaders(services),
            identity=identity,
        )
        return await schema.execute(query, variable_values=variables, context_value=context)

    return _execute


@pytest.fixture
def alice_completions(store):
    """Three completions for alice; one points at a habit that no longer exists."""
    now = datetime.now(UTC)
    path = completion_log_path("alice")
    store.put(path, "c1", {"habitId": "h1", "completedAt": now - timedelta(seconds=1), "source": "checklist"})
    store.put(path, "c2", {"habitId": "gone", "completedAt": now - timedelta(seconds=2), "source": "api"})
    store.put(path, "c3", {"habitId": "h3", "completedAt": now - timedelta(days=1), "source": "api"})


@pytest.fixture
def error_codes():
    """Extract `extensions.code` of every error in a result."""

    def _codes(result) -> list[str]:
        return [error.extensions["code"] for error in result.errors or []]

    return _codes
