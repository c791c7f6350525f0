"""Output formatting for CLI commands."""

import click


def success(message: str) -> None:
    click.secho(f"✓ {message}", fg="green")


def error(message: str) -> None:
    click.secho(f"✗ {message}", fg="red", err=True)


def warning(message: str) -> None:
    click.secho(f"⚠ {message}", fg="yellow")


def info(message: str) -> None:
    click.secho(f"ℹ {message}", fg="blue")


def header(message: str) -> None:
    """Print a bold cyan heading."""
    click.secho(f"\n{message}", fg="cyan", bold=True)


def key_value(key: str, value: object, width: int = 28) -> None:
    """Print an indented setting line; unset values are dimmed."""
    click.echo(f"  {key:<{width}} ", nl=False)
    click.secho(str(value), dim=value is None)
