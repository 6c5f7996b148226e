"""Pet CLI commands."""

from typing import Optional

import typer

from petnote.application import PetUpdate, create_pet, get_pet, get_user, parse_update, update_pet
from petnote.interfaces.cli.common import (
    USER_ENV,
    format_pet,
    get_user_id,
    open_store,
    print_error,
    print_success,
    unwrap,
)

app = typer.Typer(help="Pet commands")


def _current_pet_id(user: str | None) -> str:
    account = unwrap(get_user(open_store(), get_user_id(user)))
    if account.pet is None:
        print_error("This user has no pet yet.")
        raise typer.Exit(1)
    return account.pet


@app.command("create")
def create(
    name: str = typer.Argument(..., help="Pet name"),
    type: str = typer.Argument(..., help="Kind of animal"),
    user: Optional[str] = typer.Option(
        None, "--user", "-u", help=f"User ID (or set {USER_ENV} env var)", envvar=USER_ENV
    ),
) -> None:
    """Adopt the user's pet. Only one per account."""
    pet = unwrap(create_pet(open_store(), get_user_id(user), name, type))
    print_success(f"Say hello to {pet.name}!")
    typer.echo(pet.id)


@app.command("show")
def show(
    user: Optional[str] = typer.Option(
        None, "--user", "-u", help=f"User ID (or set {USER_ENV} env var)", envvar=USER_ENV
    ),
) -> None:
    """Show the pet's level and experience."""
    pet = unwrap(get_pet(open_store(), _current_pet_id(user)))
    typer.echo(format_pet(pet))


@app.command("update")
def update(
    name: Optional[str] = typer.Option(None, "--name", "-n", help="New name"),
    type: Optional[str] = typer.Option(None, "--type", "-t", help="New kind of animal"),
    points: Optional[int] = typer.Option(None, "--points", "-p", help="Points to add (negative to remove)"),
    user: Optional[str] = typer.Option(
        None, "--user", "-u", help=f"User ID (or set {USER_ENV} env var)", envvar=USER_ENV
    ),
) -> None:
    """Rename the pet or adjust its points."""
    payload = {
        key: value
        for key, value in {"name": name, "type": type, "points": points}.items()
        if value is not None
    }
    changes = unwrap(parse_update(PetUpdate, payload))
    pet, _event = unwrap(update_pet(open_store(), _current_pet_id(user), changes))
    typer.echo(format_pet(pet))
