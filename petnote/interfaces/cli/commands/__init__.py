"""CLI command groups for petnote.

Each module provides a Typer app registered with the main app using
app.add_typer().

Command groups:
- user: create, use, show
- folder: create, list, rename, delete
- note: create, list, edit, delete
- task: create, list, update, done, delete, overdue
- pet: create, show, update
"""

from petnote.interfaces.cli.commands import folder, note, pet, task, user

__all__ = ["user", "folder", "note", "task", "pet"]
