"""Ownership graph events."""

from pydantic import Field

from petnote.domain.shared.events import DomainEvent
from petnote.domain.types import EntityKind


class SubtreeDeleted(DomainEvent):
    """Event raised when a cascade delete finished.

    ``deleted`` lists every removed id by kind, descendants first.
    """

    kind: EntityKind
    entity_id: str
    deleted: dict[EntityKind, list[str]] = Field(default_factory=dict)

    def count(self, kind: EntityKind) -> int:
        return len(self.deleted.get(kind, []))
