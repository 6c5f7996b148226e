"""Shared utilities for petnote CLI commands.

- User resolution from option, environment or last session
- Store and settings access
- Formatted output helpers (error, success, info)
- Entity formatting for display
"""

import os
from typing import TypeVar

import typer

from petnote.domain.graph import Folder, Note
from petnote.domain.pet import Pet, level_progress, required_experience
from petnote.domain.shared import DomainError, Err, Result
from petnote.domain.task import Task, TaskStatus
from petnote.global_config import Settings, get_last_user_id, get_settings
from petnote.infrastructure.storage import JsonDocumentStore

T = TypeVar("T")

USER_ENV = "PETNOTE_USER"


def open_store(settings: Settings | None = None) -> JsonDocumentStore:
    """Open the JSON document store configured in settings."""
    settings = settings or get_settings()
    return JsonDocumentStore(settings.resolve_data_dir())


def get_user_id(explicit_user: str | None = None) -> str:
    """Get the user ID, raising an error if not found.

    Resolution order:
    1. Explicit user parameter (from -u/--user CLI option)
    2. PETNOTE_USER environment variable
    3. The last user created or selected with 'petnote user use'

    Raises:
        typer.Exit: If no user can be determined.
    """
    if explicit_user:
        return explicit_user

    env_user = os.environ.get(USER_ENV)
    if env_user:
        return env_user

    last_user = get_last_user_id()
    if last_user:
        return last_user

    print_error("No user specified.")
    typer.echo("")
    typer.echo("Specify a user using one of:")
    typer.echo("  1. Use -u/--user option: petnote folder list -u <id>")
    typer.echo(f"  2. Set {USER_ENV} env var: export {USER_ENV}=<id>")
    typer.echo("  3. Create one: petnote user create you@example.com")
    raise typer.Exit(1)


def unwrap(result: Result[T, DomainError]) -> T:
    """Return the Ok value or print the error and exit with status 1."""
    if isinstance(result, Err):
        print_error(result.error.message)
        raise typer.Exit(1)
    return result.value


def print_error(msg: str) -> None:
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_success(msg: str) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.GREEN))


def print_info(msg: str) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.BLUE))


# =============================================================================
# Entity Formatting
# =============================================================================


def format_folder(folder: Folder) -> str:
    return f"{folder.id}  {folder.name} ({len(folder.notes)} notes)"


def format_note(note: Note) -> str:
    return f"{note.id}  {note.title} ({len(note.tasks)} tasks)"


def format_task(task: Task) -> str:
    """One-line task summary, matching the checklist look of the app."""
    marks = {
        TaskStatus.PENDING: "[ ]",
        TaskStatus.COMPLETED: "[x]",
        TaskStatus.OVERDUE: "[!]",
    }
    line = f"{marks[task.status]} {task.id}  {task.name} ({task.category.value}, {task.points} pts)"
    if task.due_date is not None:
        line += f" due {task.due_date:%Y-%m-%d}"
    return line


def format_pet(pet: Pet, width: int = 30) -> str:
    """Pet summary with an experience bar for the current level."""
    progress = level_progress(pet.level, pet.points)
    filled = int(progress * width)
    bar = "#" * filled + "-" * (width - filled)
    return "\n".join(
        [
            f"{pet.name} the {pet.type} ({pet.id})",
            f"Level {pet.level}",
            f"[{bar}] {pet.points:.0f}/{required_experience(pet.level):.0f} XP",
        ]
    )
