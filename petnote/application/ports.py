"""Persistence port used by the application services.

The services depend only on this Protocol; implementations live in
``petnote.infrastructure.storage`` and are injected by the caller.

Contract:
    - Each call is atomic for the single record it touches
    - ``save`` is a compare-and-swap on ``Entity.version``: it fails with
      StaleEntity when the stored version differs from the one carried by
      the entity, and returns the entity with its version bumped
    - ``delete`` of an absent record is not an error
"""

from typing import Protocol

from petnote.domain.shared import PersistenceError, Result
from petnote.domain.types import Entity, EntityKind


class DocumentStore(Protocol):
    """Id-addressed document storage."""

    def find_by_id(
        self, kind: EntityKind, entity_id: str
    ) -> Result[Entity | None, PersistenceError]: ...

    def find_many(
        self, kind: EntityKind, entity_ids: list[str]
    ) -> Result[list[Entity], PersistenceError]: ...

    def save(self, entity: Entity) -> Result[Entity, PersistenceError]: ...

    def delete(self, kind: EntityKind, entity_id: str) -> Result[None, PersistenceError]: ...
