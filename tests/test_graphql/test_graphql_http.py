"""The GraphQL endpoint over HTTP."""

from __future__ import annotations

import pytest
from graphql import GraphQLError
from httpx import ASGITransport, AsyncClient

from habit_service.core.exceptions import NotFoundException
from habit_service.features.graphql.extensions import (
    AppErrorExtension,
    ProductionMaskErrors,
    get_extensions,
    should_mask_error,
)
from habit_service.features.graphql.router import METHOD_NOT_ALLOWED_MESSAGE


async def test_post_query(client, auth_headers):
    response = await client.post(
        "/graphql",
        json={"query": '{ habit(id: "h1") { title } }'},
        headers=auth_headers("alice-token"),
    )

    assert response.status_code == 200
    assert response.json() == {"data": {"habit": {"title": "Morning remembrance"}}}


async def test_errors_answer_400(client, auth_headers):
    response = await client.post(
        "/graphql",
        json={"query": '{ bundleHabits(bundleId: "nope") { id } }'},
        headers=auth_headers("alice-token"),
    )

    assert response.status_code == 400
    error = response.json()["errors"][0]
    assert error["message"] == "Bundle not found"
    assert error["extensions"]["code"] == "NOT_FOUND"


async def test_rejected_token_is_anonymous(client, auth_headers):
    response = await client.post(
        "/graphql",
        json={"query": "{ me { uid } }"},
        headers=auth_headers("forged"),
    )

    assert response.status_code == 400
    assert response.json()["errors"][0]["extensions"]["code"] == "UNAUTHENTICATED"


@pytest.mark.usefixtures("production")
class TestProduction:
    @pytest.fixture
    async def prod_client(self, production, store, identity_provider):
        from habit_service.app.main import create_app

        app = create_app(store=store, identity_provider=identity_provider)
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac

    async def test_get_not_allowed(self, prod_client):
        response = await prod_client.get("/graphql")

        assert response.status_code == 405
        assert response.json() == {
            "success": False,
            "error": "Method not allowed",
            "message": METHOD_NOT_ALLOWED_MESSAGE,
        }

    async def test_post_still_served(self, prod_client, auth_headers):
        response = await prod_client.post(
            "/graphql",
            json={"query": "{ me { uid } }"},
            headers=auth_headers("alice-token"),
        )

        assert response.json() == {"data": {"me": {"uid": "alice"}}}

    def test_unexpected_errors_are_masked(self):
        error = GraphQLError("boom", original_error=RuntimeError("boom"))

        assert should_mask_error(error) is True

    def test_application_errors_keep_message(self):
        error = GraphQLError("Habit not found", original_error=NotFoundException("Habit not found"))

        assert should_mask_error(error) is False


def test_nothing_masked_outside_production():
    error = GraphQLError("boom", original_error=RuntimeError("boom"))

    assert should_mask_error(error) is False


def test_extensions_are_registered_as_classes():
    extensions = get_extensions()

    assert extensions == [AppErrorExtension, ProductionMaskErrors]
    assert all(isinstance(extension, type) for extension in extensions)
