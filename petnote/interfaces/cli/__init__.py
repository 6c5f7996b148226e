"""CLI interface for petnote using Typer.

Usage:
    petnote user create EMAIL        # Create an account
    petnote folder create NAME       # Add a folder
    petnote note create FOLDER TITLE # Add a note
    petnote task create NOTE NAME    # Add a task
    petnote done TASK                # Complete a task, reward the pet

The CLI is structured as:
- app: Main Typer application
- commands/: Individual command groups (user, folder, note, task, pet)
- common.py: Shared utilities for CLI commands
- main.py: Entry point that runs the app
"""

import logging
from typing import Optional

import typer

from petnote import __version__
from petnote.global_config import get_settings

# Import command groups
from petnote.interfaces.cli.commands import folder, note, pet, task, user
from petnote.interfaces.cli.common import USER_ENV

# Create the main Typer application
app = typer.Typer(
    name="petnote",
    help="Notes and tasks with a pet that grows as you get things done",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"petnote version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log service activity"),
) -> None:
    """petnote - folders, notes and tasks with a companion pet.

    Completing tasks earns experience for your pet: easy, medium and hard
    tasks are worth different amounts of points.
    """
    level = "INFO" if verbose else get_settings().log_level
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# =============================================================================
# Register Command Groups
# =============================================================================

app.add_typer(user.app, name="user")
app.add_typer(folder.app, name="folder")
app.add_typer(note.app, name="note")
app.add_typer(task.app, name="task")
app.add_typer(pet.app, name="pet")


# =============================================================================
# Top-Level Shortcuts for Common Commands
# =============================================================================


@app.command("done")
def done(task_id: str = typer.Argument(..., help="Task ID")) -> None:
    """Complete a task (shortcut for 'task done')."""
    task.done(task_id=task_id)


@app.command("status")
def status(
    user_id: Optional[str] = typer.Option(
        None, "--user", "-u", help=f"User ID (or set {USER_ENV} env var)", envvar=USER_ENV
    ),
) -> None:
    """Show the pet (shortcut for 'pet show')."""
    pet.show(user=user_id)


__all__ = ["app"]
