"""Core domain types shared by every aggregate.

``EntityKind`` names the five document collections and ``Entity`` is the
base model every stored document derives from.
"""

from enum import Enum
from typing import ClassVar
from uuid import uuid4

from pydantic import BaseModel, Field


class EntityKind(str, Enum):
    """The collections of the ownership graph."""

    USER = "user"
    FOLDER = "folder"
    NOTE = "note"
    TASK = "task"
    PET = "pet"


def new_id() -> str:
    """Generate an opaque entity id."""
    return uuid4().hex


class Entity(BaseModel):
    """Base for all stored documents.

    ``version`` is owned by the document store: it starts at 0 for an
    entity that was never saved and is bumped by every successful save.
    A save carrying a version other than the stored one is rejected, which
    is how concurrent read-modify-write cycles on the same document are
    detected.
    """

    kind: ClassVar[EntityKind]

    id: str = Field(default_factory=new_id)
    version: int = Field(default=0, ge=0)
