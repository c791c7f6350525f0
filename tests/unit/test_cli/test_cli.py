"""Tests for the habit-service CLI."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from habit_service import __version__
from habit_service.cli.commands import accounts
from habit_service.cli.main import cli
from habit_service.core.database.documents import completion_log_path


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def cli_services(monkeypatch, services):
    """Point the account commands at the in-memory test services."""
    monkeypatch.setattr(accounts, "load_services", lambda: services)
    return services


def test_version(runner):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


class TestConfigShow:
    def test_json(self, runner):
        result = runner.invoke(cli, ["config", "show", "--format", "json"])

        assert result.exit_code == 0
        settings = json.loads(result.output)
        assert settings["app"]["environment"] == "test"
        assert settings["firestore"]["backend"] == "memory"
        assert set(settings) == {"app", "auth", "firestore", "graphql", "logging", "pagination"}

    def test_masks_credentials(self, runner, monkeypatch):
        monkeypatch.setenv("AUTH_CREDENTIALS_FILE", "/secrets/service-account.json")

        hidden = runner.invoke(cli, ["config", "show", "--format", "json"])
        shown = runner.invoke(cli, ["config", "show", "--format", "json", "--show-secrets"])

        assert json.loads(hidden.output)["auth"]["credentials_file"] == "***"
        assert json.loads(shown.output)["auth"]["credentials_file"] == "/secrets/service-account.json"

    def test_table(self, runner):
        result = runner.invoke(cli, ["config", "show"])

        assert result.exit_code == 0
        assert "api_prefix" in result.output


class TestAccounts:
    def test_provision(self, runner, cli_services, store):
        result = runner.invoke(cli, ["accounts", "provision", "dana", "--email", "dana@example.com"])

        assert result.exit_code == 0, result.output
        assert "User dana ready (dana, role user)" in result.output
        assert store.snapshot("users")["dana"]["email"] == "dana@example.com"

    def test_purge(self, runner, cli_services, store):
        store.put(completion_log_path("alice"), "c1", {"habitId": "h1", "source": "api"})

        result = runner.invoke(cli, ["accounts", "purge", "alice", "--yes"])

        assert result.exit_code == 0, result.output
        assert "Purged alice: 1 completion log(s) removed" in result.output
        assert "alice" not in store.snapshot("users")

    def test_purge_needs_confirmation(self, runner, cli_services, store):
        result = runner.invoke(cli, ["accounts", "purge", "alice"], input="n\n")

        assert result.exit_code == 1
        assert "alice" in store.snapshot("users")
