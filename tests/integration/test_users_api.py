"""REST endpoints for users and completions."""

from __future__ import annotations

import pytest

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


class TestUsers:
    async def test_register_then_conflict(self, client, auth_headers):
        payload = {"displayName": "Bob", "email": "bob@example.com"}

        created = await client.post("/api/users", json=payload, headers=auth_headers("bob-token"))
        again = await client.post("/api/users", json=payload, headers=auth_headers("bob-token"))

        assert created.status_code == 201
        body = created.json()
        assert body["message"] == "User created successfully"
        assert body["data"]["uid"] == "bob"
        assert body["data"]["role"] == "user"
        assert again.status_code == 409
        assert again.json()["success"] is False

    async def test_invalid_email(self, client, auth_headers):
        response = await client.post(
            "/api/users",
            json={"displayName": "Bob", "email": "not-an-email"},
            headers=auth_headers("bob-token"),
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Invalid request"
        assert body["message"].startswith("email:")

    async def test_get_self(self, client, auth_headers):
        response = await client.get("/api/users/alice", headers=auth_headers("alice-token"))

        assert response.json()["data"]["displayName"] == "Alice"

    async def test_get_other_forbidden(self, client, auth_headers):
        response = await client.get("/api/users/coach", headers=auth_headers("alice-token"))

        assert response.status_code == 403
        assert response.json() == {"success": False, "error": "Access denied"}

    async def test_coach_reads_anyone(self, client, auth_headers):
        response = await client.get("/api/users/alice", headers=auth_headers("coach-token"))

        assert response.status_code == 200

    async def test_update(self, client, auth_headers):
        response = await client.put(
            "/api/users/alice",
            json={"displayName": "Alice B", "role": "coach"},
            headers=auth_headers("alice-token"),
        )

        body = response.json()
        assert body["message"] == "User updated successfully"
        assert body["data"]["displayName"] == "Alice B"
        assert body["data"]["role"] == "user"

    async def test_update_without_fields(self, client, auth_headers):
        response = await client.put("/api/users/alice", json={}, headers=auth_headers("alice-token"))

        assert response.status_code == 400
        assert response.json()["error"] == "No valid fields to update"

    async def test_delete(self, client, auth_headers, identity_provider):
        response = await client.delete("/api/users/alice", headers=auth_headers("alice-token"))
        missing = await client.get("/api/users/alice", headers=auth_headers("alice-token"))

        assert response.json() == {"success": True, "message": "User account deleted successfully"}
        assert identity_provider.deleted_accounts == ["alice"]
        assert missing.status_code == 404


class TestCompletions:
    async def test_log_list_and_delete(self, client, auth_headers):
        headers = auth_headers("alice-token")

        created = await client.post(
            "/api/completions",
            json={"habitId": "h1", "note": "after fajr"},
            headers=headers,
        )
        assert created.status_code == 201
        completion = created.json()["data"]
        assert created.json()["message"] == "Habit completion logged successfully"
        assert completion["source"] == "api"
        assert "userId" not in completion

        listed = await client.get("/api/completions/alice", params={"habitId": "h1"}, headers=headers)
        page = listed.json()["data"]
        assert [item["id"] for item in page["items"]] == [completion["id"]]
        assert page["total"] == 1

        deleted = await client.delete(f"/api/completions/alice/{completion['id']}", headers=headers)
        assert deleted.json() == {"success": True, "message": "Completion log entry deleted successfully"}

        again = await client.delete(f"/api/completions/alice/{completion['id']}", headers=headers)
        assert again.status_code == 404

    async def test_stats(self, client, auth_headers):
        headers = auth_headers("alice-token")
        await client.post("/api/completions", json={"habitId": "h1", "source": "checklist"}, headers=headers)
        await client.post("/api/completions", json={"habitId": "h2"}, headers=headers)

        response = await client.get("/api/completions/alice/stats", params={"days": 7}, headers=headers)

        stats = response.json()["data"]
        assert stats["totalCompletions"] == 2
        assert stats["uniqueHabitsCount"] == 2
        assert stats["completionsBySource"] == {"checklist": 1, "api": 1}
        assert stats["period"]["days"] == 7

    async def test_invalid_source(self, client, auth_headers):
        response = await client.post(
            "/api/completions",
            json={"habitId": "h1", "source": "watch"},
            headers=auth_headers("alice-token"),
        )

        assert response.status_code == 400
        assert response.json()["error"] == 'source must be either "checklist" or "api"'

    async def test_unknown_habit(self, client, auth_headers):
        response = await client.post(
            "/api/completions",
            json={"habitId": "nope"},
            headers=auth_headers("alice-token"),
        )

        assert response.status_code == 404

    async def test_invalid_date(self, client, auth_headers):
        response = await client.get(
            "/api/completions/alice",
            params={"startDate": "yesterday"},
            headers=auth_headers("alice-token"),
        )

        assert response.status_code == 400
        assert response.json()["message"].startswith("query.startDate:")

    async def test_other_user_forbidden(self, client, auth_headers):
        response = await client.get("/api/completions/coach", headers=auth_headers("alice-token"))

        assert response.status_code == 403
