"""Note CLI commands."""

from typing import Optional

import typer

from petnote.application import (
    NoteUpdate,
    create_note,
    delete_note,
    list_notes,
    parse_update,
    update_note,
)
from petnote.domain.types import EntityKind
from petnote.interfaces.cli.common import (
    format_note,
    open_store,
    print_info,
    print_success,
    unwrap,
)

app = typer.Typer(help="Note commands")


@app.command("create")
def create(
    folder_id: str = typer.Argument(..., help="Folder ID"),
    title: str = typer.Argument(..., help="Note title"),
    content: str = typer.Option("", "--content", "-c", help="Note body"),
) -> None:
    """Create a note in a folder."""
    note = unwrap(create_note(open_store(), folder_id, title, content))
    print_success(f"Created note {note.title}")
    typer.echo(note.id)


@app.command("list")
def list_command(folder_id: str = typer.Argument(..., help="Folder ID")) -> None:
    """List the notes of a folder."""
    notes = unwrap(list_notes(open_store(), folder_id))
    if not notes:
        print_info("No notes in this folder.")
        return
    for note in notes:
        typer.echo(format_note(note))


@app.command("edit")
def edit(
    note_id: str = typer.Argument(..., help="Note ID"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    content: Optional[str] = typer.Option(None, "--content", "-c", help="New body"),
) -> None:
    """Change a note's title or body."""
    payload = {key: value for key, value in {"title": title, "content": content}.items() if value is not None}
    changes = unwrap(parse_update(NoteUpdate, payload))
    note = unwrap(update_note(open_store(), note_id, changes))
    print_success(f"Updated note {note.title}")


@app.command("delete")
def delete(note_id: str = typer.Argument(..., help="Note ID")) -> None:
    """Delete a note and its tasks."""
    event = unwrap(delete_note(open_store(), note_id))
    print_success(f"Deleted note ({event.count(EntityKind.TASK)} tasks)")
