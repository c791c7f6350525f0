"""Configuration commands."""

import json

import click

from habit_service.cli.utils import header, info, key_value
from habit_service.core.settings import (
    get_app_settings,
    get_auth_settings,
    get_firestore_settings,
    get_graphql_settings,
    get_logging_settings,
    get_pagination_settings,
)

SECRET_FIELDS = {"credentials_file"}


def collect_settings(show_secrets: bool = False) -> dict[str, dict[str, object]]:
    """Effective settings per section, with secret values masked."""
    sections = {
        "app": get_app_settings(),
        "auth": get_auth_settings(),
        "firestore": get_firestore_settings(),
        "graphql": get_graphql_settings(),
        "logging": get_logging_settings(),
        "pagination": get_pagination_settings(),
    }
    result: dict[str, dict[str, object]] = {}
    for name, settings in sections.items():
        values = settings.model_dump(mode="json")
        if not show_secrets:
            values = {
                key: "***" if key in SECRET_FIELDS and value else value
                for key, value in values.items()
            }
        result[name] = values
    return result


@click.group(name="config")
def config() -> None:
    """Configuration commands."""


@config.command()
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "table"]),
    default="table",
    help="Output format",
)
@click.option("--show-secrets/--hide-secrets", default=False, help="Show sensitive values")
def show(output_format: str, show_secrets: bool) -> None:
    """Display the effective configuration."""
    settings = collect_settings(show_secrets)

    if output_format == "json":
        click.echo(json.dumps(settings, indent=2))
        return

    if not show_secrets:
        info("Secrets are hidden. Use --show-secrets to display them.")
    for section, values in settings.items():
        header(section)
        for key, value in values.items():
            key_value(key, value)
