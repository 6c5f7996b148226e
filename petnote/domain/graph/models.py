"""Ownership graph models.

Users own folders, folders own notes. Each parent keeps the ids of its
children in a list and each child points back at its parent. Tasks and
pets live in their own aggregates.
"""

from datetime import UTC, datetime
from typing import ClassVar

from pydantic import Field

from petnote.domain.types import Entity, EntityKind


class User(Entity):
    """An account: the root of an ownership tree.

    A user owns at most one pet; ``pet`` stays None until it is created.
    """

    kind: ClassVar[EntityKind] = EntityKind.USER

    email: str
    folders: list[str] = Field(default_factory=list)
    pet: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class Folder(Entity):
    """A named group of notes."""

    kind: ClassVar[EntityKind] = EntityKind.FOLDER

    user: str = Field(description="Id of the owning user")
    name: str
    notes: list[str] = Field(default_factory=list)


class Note(Entity):
    """A note holding free text and a checklist of tasks."""

    kind: ClassVar[EntityKind] = EntityKind.NOTE

    folder: str = Field(description="Id of the owning folder")
    title: str
    content: str = ""
    tasks: list[str] = Field(default_factory=list)
