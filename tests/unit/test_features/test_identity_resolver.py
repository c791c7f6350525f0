"""Unit tests for bearer token to identity resolution."""

from __future__ import annotations

import pytest

from habit_service.infra.auth import InvalidTokenError
from habit_service.infra.logging import clear_log_context, get_log_context


@pytest.fixture(autouse=True)
def _clean_context():
    clear_log_context()
    yield
    clear_log_context()


@pytest.mark.asyncio
async def test_role_from_token_claim(services):
    identity = await services.identities.resolve("coach-token")

    assert identity.id == "coach"
    assert identity.role == "coach"


@pytest.mark.asyncio
async def test_role_from_user_document(services, store):
    store.put("users", "bob", {"displayName": "Bob", "email": "bob@example.com", "role": "coach"})

    identity = await services.identities.resolve("bob-token")

    assert identity.role == "coach"


@pytest.mark.asyncio
async def test_default_role_without_document(services):
    identity = await services.identities.resolve("bob-token")

    assert identity.role == "user"
    assert identity.email == "bob@example.com"


@pytest.mark.asyncio
async def test_unknown_claim_falls_back(services, identity_provider):
    identity_provider.register_token("odd-token", uid="alice", claims={"role": "superuser"})

    identity = await services.identities.resolve("odd-token")

    assert identity.role == "user"


@pytest.mark.asyncio
async def test_unknown_stored_role_uses_default(services, store):
    store.put("users", "bob", {"displayName": "Bob", "email": "bob@example.com", "role": "wizard"})

    assert (await services.identities.resolve("bob-token")).role == "user"


@pytest.mark.asyncio
async def test_sets_user_log_context(services):
    await services.identities.resolve("alice-token")

    assert get_log_context()["user_id"] == "alice"


@pytest.mark.asyncio
async def test_rejected_token(services):
    with pytest.raises(InvalidTokenError):
        await services.identities.resolve("forged")
