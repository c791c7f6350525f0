"""Pytest configuration and shared fixtures.

Organization:
    - Environment: settings for running without Firestore or Firebase
    - Store Fixtures: an in-memory document store seeded with habits,
      bundles and users
    - Auth Fixtures: a token registry and request identities
    - Application Fixtures: service container, FastAPI app and HTTP client

Tokens registered by ``identity_provider``:
    alice-token  -> alice (registered user)
    bob-token    -> bob (no user document yet)
    coach-token  -> coach (role claim "coach")
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

from habit_service.core.dependencies.services import ServiceContainer, build_services
from habit_service.core.schemas.auth import Identity
from habit_service.core.settings import clear_all_caches, get_auth_settings, get_pagination_settings
from habit_service.infra.auth.testing import MockIdentityProvider
from habit_service.infra.firestore import InMemoryDocumentStore

if TYPE_CHECKING:
    from fastapi import FastAPI

# Ensure tests run without external infrastructure
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("FIRESTORE_BACKEND", "memory")
os.environ.setdefault("LOG_JSON_LOGS", "false")

CREATED_AT = datetime(2024, 1, 1, tzinfo=UTC)

HABITS = {
    "h1": {
        "title": "Morning remembrance",
        "hadithEnglish": "Remember Me and I will remember you.",
        "benefits": "Peace of heart",
        "tags": ["dhikr", "morning"],
        "category": "daily",
        "priority": 10,
        "createdAt": CREATED_AT,
    },
    "h2": {
        "title": "Night prayer",
        "benefits": "Closeness in the last third of the night",
        "tags": ["prayer", "night"],
        "category": "daily",
        "priority": 8,
    },
    "h3": {
        "title": "Weekly fasting",
        "benefits": "Discipline",
        "tags": ["fasting"],
        "category": "weekly",
        "priority": 6,
    },
    "h4": {
        "title": "Visit the sick",
        "benefits": "Mercy",
        "tags": ["community", "charity"],
        "category": "occasional",
        "priority": 4,
        "lifeEvent": "illness",
    },
    "h5": {
        "title": "Give charity",
        "benefits": "Purifies wealth",
        "tags": ["charity"],
        "category": "weekly",
        "priority": 2.5,
        "timeWindow": {"startHour": 6, "endHour": 9, "description": "Before work"},
    },
}

BUNDLES = {
    "b1": {
        "name": "Morning routine",
        "description": "Start the day well",
        "habitIds": ["h3", "h1", "gone"],
        "displayOrder": 1,
    },
    "b2": {
        "name": "Community",
        "habitIds": ["h4", "h5"],
        "displayOrder": 2,
        "thumbnailUrl": "https://example.com/community.png",
    },
}

USERS = {
    "alice": {
        "displayName": "Alice",
        "email": "alice@example.com",
        "role": "user",
        "locale": "en",
        "createdAt": CREATED_AT,
    },
    "coach": {
        "displayName": "Coach",
        "email": "coach@example.com",
        "role": "coach",
        "locale": "en",
        "createdAt": CREATED_AT,
    },
}


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Drop cached settings so environment changes in a test stay local."""
    clear_all_caches()
    yield
    clear_all_caches()


@pytest.fixture
def production(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the test with APP_ENVIRONMENT=production."""
    monkeypatch.setenv("APP_ENVIRONMENT", "production")
    clear_all_caches()


# ============================================================================
# Store Fixtures
# ============================================================================


@pytest.fixture
def store() -> InMemoryDocumentStore:
    """In-memory store seeded with the habits, bundles and users above."""
    store = InMemoryDocumentStore()
    for habit_id, data in HABITS.items():
        store.put("habits", habit_id, data)
    for bundle_id, data in BUNDLES.items():
        store.put("bundles", bundle_id, data)
    for user_id, data in USERS.items():
        store.put("users", user_id, data)
    return store


# ============================================================================
# Auth Fixtures
# ============================================================================


@pytest.fixture
def identity_provider() -> MockIdentityProvider:
    provider = MockIdentityProvider()
    provider.register_token("alice-token", uid="alice", email="alice@example.com")
    provider.register_token("bob-token", uid="bob", email="bob@example.com")
    provider.register_token("coach-token", uid="coach", email="coach@example.com", claims={"role": "coach"})
    return provider


@pytest.fixture
def alice() -> Identity:
    return Identity(id="alice", email="alice@example.com", role="user")


@pytest.fixture
def bob() -> Identity:
    return Identity(id="bob", email="bob@example.com", role="user")


@pytest.fixture
def coach() -> Identity:
    return Identity(id="coach", email="coach@example.com", role="coach")


@pytest.fixture
def auth_headers():
    """Build an Authorization header for a token.

    Example:
        async def test_me(client, auth_headers):
            await client.get("/api/users/alice", headers=auth_headers("alice-token"))
    """
    return bearer


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def services(store: InMemoryDocumentStore, identity_provider: MockIdentityProvider) -> ServiceContainer:
    return build_services(
        store,
        identity_provider,
        auth=get_auth_settings(),
        pagination=get_pagination_settings(),
    )


@pytest.fixture
def app(store: InMemoryDocumentStore, identity_provider: MockIdentityProvider) -> FastAPI:
    """Fresh application serving the seeded store."""
    from habit_service.app.main import create_app

    return create_app(store=store, identity_provider=identity_provider)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client bound to ``app`` without a network."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
