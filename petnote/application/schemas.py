"""Update payloads accepted by the application services.

Each entity exposes an explicit allow-list of updatable fields. Unknown
fields are rejected instead of being copied onto the stored document.
"""

from datetime import datetime
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from petnote.domain.shared import Err, Ok, Result, ValidationFailed
from petnote.domain.task import TaskCategory, TaskStatus

M = TypeVar("M", bound=BaseModel)


class _Update(BaseModel):
    model_config = ConfigDict(extra="forbid")

    def changes(self) -> dict[str, Any]:
        """Fields the caller actually set, minus explicit nulls."""
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


class FolderUpdate(_Update):
    name: str = Field(min_length=1)


class NoteUpdate(_Update):
    title: str | None = Field(default=None, min_length=1)
    content: str | None = None


class TaskUpdate(_Update):
    """Changes to a task.

    ``points`` overrides the category reward value and is only honored
    when the category is not changing. ``due_date`` may be set to None
    explicitly to clear it.
    """

    name: str | None = Field(default=None, min_length=1)
    status: TaskStatus | None = None
    category: TaskCategory | None = None
    due_date: datetime | None = None
    points: int | None = Field(default=None, ge=0)

    def changes(self) -> dict[str, Any]:
        changes = super().changes()
        if "due_date" in self.model_fields_set and self.due_date is None:
            changes["due_date"] = None
        return changes


class PetUpdate(_Update):
    """Changes to a pet. ``points`` is a delta, not an absolute value."""

    name: str | None = Field(default=None, min_length=1)
    type: str | None = Field(default=None, min_length=1)
    points: int | None = None


def parse_update(model: type[M], payload: dict[str, Any]) -> Result[M, ValidationFailed]:
    """Validate a raw payload against an update model.

    Args:
        model: One of the update classes in this module.
        payload: Raw field -> value mapping, e.g. a decoded request body.

    Returns:
        Ok(model instance) or Err(ValidationFailed) naming the bad fields.
    """
    try:
        return Ok(model.model_validate(payload))
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in error['loc']) or 'payload'}: {error['msg']}"
            for error in e.errors()
        )
        return Err(ValidationFailed(problems))
