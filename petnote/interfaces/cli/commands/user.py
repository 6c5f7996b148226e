"""User CLI commands."""

from typing import Optional

import typer

from petnote.application import create_user, get_user
from petnote.global_config import save_last_user_id
from petnote.interfaces.cli.common import (
    USER_ENV,
    get_user_id,
    open_store,
    print_info,
    print_success,
    unwrap,
)

app = typer.Typer(help="User commands")


@app.command("create")
def create(email: str = typer.Argument(..., help="Email address of the account")) -> None:
    """Create a user and make it the current one.

    Example:
        petnote user create ada@example.com
    """
    user = unwrap(create_user(open_store(), email))
    save_last_user_id(user.id)
    print_success(f"Created user {user.email}")
    typer.echo(user.id)


@app.command("use")
def use(user_id: str = typer.Argument(..., help="User ID to work as")) -> None:
    """Select the user later commands act on."""
    user = unwrap(get_user(open_store(), user_id))
    save_last_user_id(user.id)
    print_success(f"Now working as {user.email}")


@app.command("show")
def show(
    user: Optional[str] = typer.Option(
        None, "--user", "-u", help=f"User ID (or set {USER_ENV} env var)", envvar=USER_ENV
    ),
) -> None:
    """Show the current user."""
    account = unwrap(get_user(open_store(), get_user_id(user)))
    typer.echo(f"{account.email} ({account.id})")
    typer.echo(f"Folders: {len(account.folders)}")
    if account.pet is None:
        print_info("No pet yet. Adopt one with: petnote pet create <name> <type>")
    else:
        typer.echo(f"Pet: {account.pet}")
