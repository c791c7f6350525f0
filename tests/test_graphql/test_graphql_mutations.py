"""Mutation operations."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from habit_service.core.database.documents import completion_log_path

pytestmark = pytest.mark.asyncio

CREATE_USER = """
mutation Register($input: CreateUserInput!) {
    createUser(input: $input) { uid displayName email role locale }
}
"""

CREATE_COMPLETION = """
mutation Log($input: CreateCompletionInput!) {
    createCompletion(input: $input) { id habitId source note habit { id } }
}
"""


class TestUsers:
    async def test_create_user(self, execute, bob):
        result = await execute(
            CREATE_USER,
            identity=bob,
            variables={"input": {"displayName": "Bob", "email": "bob@example.com"}},
        )

        assert result.errors is None
        assert result.data["createUser"] == {
            "uid": "bob",
            "displayName": "Bob",
            "email": "bob@example.com",
            "role": "user",
            "locale": "en",
        }

    async def test_create_existing_user(self, execute, alice, error_codes):
        result = await execute(
            CREATE_USER,
            identity=alice,
            variables={"input": {"displayName": "Alice", "email": "alice@example.com"}},
        )

        assert error_codes(result) == ["CONFLICT"]

    async def test_invalid_email(self, execute, bob, error_codes):
        result = await execute(
            CREATE_USER,
            identity=bob,
            variables={"input": {"displayName": "Bob", "email": "nope"}},
        )

        assert error_codes(result) == ["BAD_USER_INPUT"]
        assert result.errors[0].message.startswith("email:")

    async def test_update_user(self, execute, alice):
        result = await execute(
            'mutation { updateUser(userId: "alice", input: {locale: "ar"}) { locale displayName } }',
            identity=alice,
        )

        assert result.data["updateUser"] == {"locale": "ar", "displayName": "Alice"}

    async def test_delete_user(self, execute, alice, store, identity_provider):
        result = await execute('mutation { deleteUser(userId: "alice") }', identity=alice)

        assert result.data == {"deleteUser": True}
        assert await store.get("users", "alice") is None
        assert identity_provider.deleted_accounts == ["alice"]

    async def test_delete_other_user_forbidden(self, execute, bob, error_codes):
        result = await execute('mutation { deleteUser(userId: "alice") }', identity=bob)

        assert error_codes(result) == ["FORBIDDEN"]


class TestCompletions:
    async def test_create_defaults_to_api(self, execute, alice):
        result = await execute(CREATE_COMPLETION, identity=alice, variables={"input": {"habitId": "h2"}})

        assert result.errors is None
        completion = result.data["createCompletion"]
        assert completion["source"] == "API"
        assert completion["note"] is None
        assert completion["habit"] == {"id": "h2"}

    async def test_create_checklist_with_note(self, execute, alice):
        result = await execute(
            CREATE_COMPLETION,
            identity=alice,
            variables={"input": {"habitId": "h1", "source": "CHECKLIST", "note": "before sunrise"}},
        )

        completion = result.data["createCompletion"]
        assert completion["source"] == "CHECKLIST"
        assert completion["note"] == "before sunrise"

    async def test_unknown_source_is_rejected(self, execute, alice, error_codes):
        result = await execute(
            'mutation { createCompletion(input: {habitId: "h1", source: WATCH}) { id } }',
            identity=alice,
        )

        assert result.data is None
        assert error_codes(result) == ["GRAPHQL_VALIDATION_FAILED"]

    async def test_unknown_habit(self, execute, alice, error_codes):
        result = await execute(CREATE_COMPLETION, identity=alice, variables={"input": {"habitId": "nope"}})

        assert error_codes(result) == ["NOT_FOUND"]

    async def test_anonymous(self, execute, error_codes):
        result = await execute(CREATE_COMPLETION, variables={"input": {"habitId": "h1"}})

        assert error_codes(result) == ["UNAUTHENTICATED"]

    async def test_delete_completion(self, execute, alice, store, error_codes):
        store.put(completion_log_path("alice"), "c1", {"habitId": "h1", "completedAt": datetime(2024, 1, 1, tzinfo=UTC), "source": "api"})

        deleted = await execute('mutation { deleteCompletion(id: "c1") }', identity=alice)
        again = await execute('mutation { deleteCompletion(id: "c1") }', identity=alice)

        assert deleted.data == {"deleteCompletion": True}
        assert error_codes(again) == ["NOT_FOUND"]
