"""Account lifecycle commands.

Run the hooks that follow identity-provider account events: provisioning a
user document for a new account and purging the data of a removed one.
"""

import sys

import click

from habit_service.cli.utils import coro, error, info, success
from habit_service.core.dependencies.services import ServiceContainer, build_services
from habit_service.core.exceptions import AppException
from habit_service.core.settings import (
    get_auth_settings,
    get_firestore_settings,
    get_pagination_settings,
)
from habit_service.infra.auth import create_identity_provider
from habit_service.infra.firestore import create_document_store


def load_services() -> ServiceContainer:
    auth = get_auth_settings()
    return build_services(
        create_document_store(get_firestore_settings()),
        create_identity_provider(auth),
        auth=auth,
        pagination=get_pagination_settings(),
    )


@click.group(name="accounts")
def accounts() -> None:
    """Account lifecycle commands."""


@accounts.command()
@click.argument("uid")
@click.option("--email", default=None, help="Account email address")
@click.option("--display-name", default=None, help="Display name (defaults to the email's local part)")
@coro
async def provision(uid: str, email: str | None, display_name: str | None) -> None:
    """Create the user document for account UID if it does not exist."""
    services = load_services()
    try:
        user = await services.users.provision_account(uid, email, display_name)
    except AppException as e:
        error(f"Provisioning failed: {e.detail}")
        sys.exit(1)
    success(f"User {user.id} ready ({user.display_name}, role {user.role})")


@accounts.command()
@click.argument("uid")
@click.confirmation_option(prompt="Delete the user document and all completion logs?")
@coro
async def purge(uid: str) -> None:
    """Delete the user document and completion logs of account UID."""
    services = load_services()
    try:
        removed = await services.users.purge_account(uid)
    except AppException as e:
        error(f"Purge failed: {e.detail}")
        sys.exit(1)
    if removed:
        success(f"Purged {uid}: {removed} completion log(s) removed")
    else:
        info(f"Purged {uid}: no completion logs stored")
