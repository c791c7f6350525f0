"""Main CLI entry point for habit-service management commands."""

import click

from habit_service import __version__
from habit_service.cli.commands import accounts, config, server
from habit_service.infra.logging import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="habit-service")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Habit Service CLI.

    \b
    Command Groups:
      server     Run the API server
      config     Inspect configuration
      accounts   Account lifecycle hooks

    \b
    Quick Start:
      habit-service config show
      habit-service server run --reload
      habit-service accounts provision UID --email user@example.com
    """
    ctx.ensure_object(dict)


cli.add_command(server.server)
cli.add_command(config.config)
cli.add_command(accounts.accounts)


def main() -> None:
    """Entry point for CLI."""
    setup_logging()
    cli(obj={})


if __name__ == "__main__":
    main()
