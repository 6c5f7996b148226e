"""Folder CLI commands."""

from typing import Optional

import typer

from petnote.application import (
    FolderUpdate,
    create_folder,
    delete_folder,
    list_folders,
    parse_update,
    rename_folder,
)
from petnote.domain.types import EntityKind
from petnote.interfaces.cli.common import (
    USER_ENV,
    format_folder,
    get_user_id,
    open_store,
    print_info,
    print_success,
    unwrap,
)

app = typer.Typer(help="Folder commands")


@app.command("create")
def create(
    name: str = typer.Argument(..., help="Folder name"),
    user: Optional[str] = typer.Option(
        None, "--user", "-u", help=f"User ID (or set {USER_ENV} env var)", envvar=USER_ENV
    ),
) -> None:
    """Create an empty folder."""
    folder = unwrap(create_folder(open_store(), get_user_id(user), name))
    print_success(f"Created folder {folder.name}")
    typer.echo(folder.id)


@app.command("list")
def list_command(
    user: Optional[str] = typer.Option(
        None, "--user", "-u", help=f"User ID (or set {USER_ENV} env var)", envvar=USER_ENV
    ),
) -> None:
    """List the user's folders."""
    folders = unwrap(list_folders(open_store(), get_user_id(user)))
    if not folders:
        print_info("No folders yet.")
        return
    for folder in folders:
        typer.echo(format_folder(folder))


@app.command("rename")
def rename(
    folder_id: str = typer.Argument(..., help="Folder ID"),
    name: str = typer.Argument(..., help="New name"),
) -> None:
    """Rename a folder."""
    changes = unwrap(parse_update(FolderUpdate, {"name": name}))
    folder = unwrap(rename_folder(open_store(), folder_id, changes))
    print_success(f"Renamed folder to {folder.name}")


@app.command("delete")
def delete(folder_id: str = typer.Argument(..., help="Folder ID")) -> None:
    """Delete a folder with all of its notes and tasks."""
    event = unwrap(delete_folder(open_store(), folder_id))
    print_success(
        f"Deleted folder ({event.count(EntityKind.NOTE)} notes, "
        f"{event.count(EntityKind.TASK)} tasks)"
    )
