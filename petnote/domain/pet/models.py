"""Pet domain models.

A pet is the user's single companion. It gains experience when tasks are
completed and its level follows the curve in ``leveling``.
"""

from typing import ClassVar

from pydantic import Field

from petnote.domain.types import Entity, EntityKind


class Pet(Entity):
    """The companion owned by exactly one user."""

    kind: ClassVar[EntityKind] = EntityKind.PET

    user: str = Field(description="Id of the owning user")
    name: str
    type: str = Field(description="Species shown in the UI, e.g. 'cat'")
    level: int = Field(default=1, ge=1)
    points: float = Field(
        default=0,
        ge=0,
        description="Experience accumulated within the current level",
    )
