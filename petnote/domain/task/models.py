"""Task domain models.

Pure models for the tasks that live inside notes. A completed task is
what feeds experience to the user's pet.
"""

from datetime import UTC, datetime
from enum import Enum
from typing import ClassVar

from pydantic import Field

from petnote.domain.types import Entity, EntityKind


class TaskStatus(str, Enum):
    """Lifecycle state of a task."""

    PENDING = "pending"
    COMPLETED = "completed"
    OVERDUE = "overdue"


class TaskCategory(str, Enum):
    """Difficulty of a task, which decides its reward."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Task(Entity):
    """A unit of work owned by a note.

    ``user`` duplicates the owner at the top of the tree so that rewards
    can reach the pet without walking note -> folder -> user.
    """

    kind: ClassVar[EntityKind] = EntityKind.TASK

    note: str = Field(description="Id of the owning note")
    user: str = Field(description="Id of the user owning the note's folder")
    name: str
    status: TaskStatus = TaskStatus.PENDING
    category: TaskCategory = TaskCategory.EASY
    points: int = Field(default=0, ge=0)
    creation_date: datetime = Field(default_factory=lambda: datetime.now(UTC))
    due_date: datetime | None = None
    completed_date: datetime | None = None

    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    def is_past_due(self, now: datetime) -> bool:
        """Check if a pending task has passed its due date.

        Naive datetimes are read as UTC.
        """
        if self.status != TaskStatus.PENDING or self.due_date is None:
            return False
        return _as_utc(self.due_date) < _as_utc(now)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
