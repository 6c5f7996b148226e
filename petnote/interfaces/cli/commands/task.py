"""Task management CLI commands.

Creating, listing and updating the tasks of a note. Completing a task
feeds the category reward to the user's pet.
"""

from datetime import datetime
from typing import Optional

import typer

from petnote.application import (
    TaskUpdate,
    complete_task,
    create_task,
    delete_task,
    list_tasks,
    mark_overdue,
    parse_update,
    update_task,
)
from petnote.domain.pet import PointsAwarded
from petnote.domain.shared import DomainEvent
from petnote.domain.task import TaskCategory, TaskStatus
from petnote.global_config import get_settings
from petnote.interfaces.cli.common import (
    format_task,
    open_store,
    print_info,
    print_success,
    unwrap,
)

app = typer.Typer(help="Task management commands")

DATE_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S"]


# =============================================================================
# Output Formatting Helpers
# =============================================================================


def report_events(events: list[DomainEvent]) -> None:
    """Print what happened to the pet."""
    for event in events:
        if not isinstance(event, PointsAwarded):
            continue
        verb = "earned" if event.delta >= 0 else "lost"
        print_info(f"Your pet {verb} {abs(event.delta):.0f} XP")
        if event.leveled_up:
            print_success(f"Level up! Your pet is now level {event.new_level}")
        elif event.leveled_down:
            print_info(f"Your pet dropped to level {event.new_level}")


# =============================================================================
# Commands
# =============================================================================


@app.command("create")
def create(
    note_id: str = typer.Argument(..., help="Note ID"),
    name: str = typer.Argument(..., help="What needs doing"),
    category: TaskCategory = typer.Option(TaskCategory.EASY, "--category", "-c", help="Difficulty"),
    due: Optional[datetime] = typer.Option(None, "--due", "-d", formats=DATE_FORMATS, help="Due date"),
) -> None:
    """Add a pending task to a note."""
    settings = get_settings()
    task = unwrap(
        create_task(
            open_store(settings),
            note_id,
            name,
            settings.category_points.as_mapping(),
            category=category,
            due_date=due,
        )
    )
    print_success(f"Created task {task.name} worth {task.points} points")
    typer.echo(task.id)


@app.command("list")
def list_command(note_id: str = typer.Argument(..., help="Note ID")) -> None:
    """List the tasks of a note."""
    tasks = unwrap(list_tasks(open_store(), note_id))
    if not tasks:
        print_info("No tasks in this note.")
        return
    for task in tasks:
        typer.echo(format_task(task))


@app.command("update")
def update(
    task_id: str = typer.Argument(..., help="Task ID"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="New name"),
    status: Optional[TaskStatus] = typer.Option(None, "--status", "-s", help="New status"),
    category: Optional[TaskCategory] = typer.Option(None, "--category", "-c", help="New difficulty"),
    due: Optional[datetime] = typer.Option(None, "--due", "-d", formats=DATE_FORMATS, help="New due date"),
    points: Optional[int] = typer.Option(None, "--points", "-p", help="Override the task's points"),
) -> None:
    """Change a task. Only the given fields are updated."""
    payload = {
        key: value
        for key, value in {
            "name": name,
            "status": status,
            "category": category,
            "due_date": due,
            "points": points,
        }.items()
        if value is not None
    }
    changes = unwrap(parse_update(TaskUpdate, payload))

    settings = get_settings()
    task, events = unwrap(
        update_task(
            open_store(settings),
            task_id,
            changes,
            settings.category_points.as_mapping(),
            settings.rewards,
        )
    )
    print_success(f"Updated task {task.name}")
    report_events(events)


@app.command("done")
def done(task_id: str = typer.Argument(..., help="Task ID")) -> None:
    """Mark a task completed and reward the pet."""
    settings = get_settings()
    task, events = unwrap(
        complete_task(open_store(settings), task_id, settings.category_points.as_mapping())
    )
    print_success(f"Completed {task.name}")
    report_events(events)


@app.command("delete")
def delete(task_id: str = typer.Argument(..., help="Task ID")) -> None:
    """Delete a task."""
    settings = get_settings()
    unwrap(
        delete_task(
            open_store(settings),
            task_id,
            settings.category_points.as_mapping(),
            settings.rewards,
        )
    )
    print_success("Deleted task")


@app.command("overdue")
def overdue(note_id: str = typer.Argument(..., help="Note ID")) -> None:
    """Flag pending tasks of a note whose due date has passed."""
    changed = unwrap(mark_overdue(open_store(), note_id))
    if not changed:
        print_info("Nothing is overdue.")
        return
    for task in changed:
        typer.echo(format_task(task))
