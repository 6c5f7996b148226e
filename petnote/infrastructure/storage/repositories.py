"""DocumentStore implementations.

Both stores honor the same contract: records are addressed by
(kind, id), every call is atomic for the record it touches, and ``save``
is a compare-and-swap on ``Entity.version``.
"""

import logging
import re
import threading
from pathlib import Path

from pydantic import ValidationError

from petnote.domain.graph import ENTITY_MODELS
from petnote.domain.shared import Err, Ok, PersistenceError, Result, StaleEntity
from petnote.domain.types import Entity, EntityKind
from petnote.infrastructure.storage.json_storage import JsonStorage

logger = logging.getLogger(__name__)

_SAFE_ID = re.compile(r"^[A-Za-z0-9_-]+$")


def _check_version(
    kind: EntityKind,
    entity: Entity,
    stored_version: int | None,
) -> Result[None, PersistenceError]:
    """Compare the version an entity was read at with the stored one.

    A never-saved entity carries version 0 and must not exist yet; a
    stored entity must carry exactly the stored version.
    """
    expected = 0 if stored_version is None else stored_version
    if entity.version != expected:
        return Err(
            StaleEntity(
                f"{kind.value} {entity.id} is at version {stored_version}, "
                f"save was based on version {entity.version}"
            )
        )
    return Ok(None)


class InMemoryDocumentStore:
    """Dictionary-backed store for tests and embedding.

    Records are copied on the way in and out, so callers never share
    mutable state with the store.
    """

    def __init__(self) -> None:
        self._records: dict[tuple[EntityKind, str], Entity] = {}
        self._lock = threading.RLock()

    def find_by_id(self, kind: EntityKind, entity_id: str) -> Result[Entity | None, PersistenceError]:
        with self._lock:
            record = self._records.get((kind, entity_id))
            return Ok(None if record is None else record.model_copy(deep=True))

    def find_many(self, kind: EntityKind, entity_ids: list[str]) -> Result[list[Entity], PersistenceError]:
        with self._lock:
            return Ok(
                [
                    self._records[(kind, entity_id)].model_copy(deep=True)
                    for entity_id in entity_ids
                    if (kind, entity_id) in self._records
                ]
            )

    def save(self, entity: Entity) -> Result[Entity, PersistenceError]:
        key = (entity.kind, entity.id)
        with self._lock:
            stored = self._records.get(key)
            checked = _check_version(entity.kind, entity, None if stored is None else stored.version)
            if isinstance(checked, Err):
                return checked
            saved = entity.model_copy(update={"version": entity.version + 1}, deep=True)
            self._records[key] = saved
            return Ok(saved.model_copy(deep=True))

    def delete(self, kind: EntityKind, entity_id: str) -> Result[None, PersistenceError]:
        with self._lock:
            self._records.pop((kind, entity_id), None)
            return Ok(None)

    def count(self, kind: EntityKind) -> int:
        """Number of stored records of a kind."""
        with self._lock:
            return sum(1 for k, _ in self._records if k == kind)


class JsonDocumentStore:
    """One JSON file per record under ``<root>/<kind>/<id>.json``.

    A process-wide lock makes the version check and the write of a save
    a single step; the write itself is an atomic file replace.
    """

    def __init__(self, root: Path, storage: JsonStorage | None = None) -> None:
        """Initialize the store.

        Args:
            root: Data directory. Created on first write.
            storage: JsonStorage instance to use. Creates new one if not provided.
        """
        self._root = root
        self._storage = storage or JsonStorage()
        self._lock = threading.RLock()

    @property
    def root(self) -> Path:
        return self._root

    def _path(self, kind: EntityKind, entity_id: str) -> Path:
        return self._root / kind.value / f"{entity_id}.json"

    def find_by_id(self, kind: EntityKind, entity_id: str) -> Result[Entity | None, PersistenceError]:
        if not _SAFE_ID.match(entity_id):
            return Ok(None)

        loaded = self._storage.load_json(self._path(kind, entity_id))
        if isinstance(loaded, Err) or loaded.value is None:
            return loaded

        try:
            return Ok(ENTITY_MODELS[kind].model_validate(loaded.value))
        except ValidationError as e:
            return Err(PersistenceError(f"Invalid {kind.value} data for {entity_id}: {e}"))

    def find_many(self, kind: EntityKind, entity_ids: list[str]) -> Result[list[Entity], PersistenceError]:
        entities: list[Entity] = []
        for entity_id in entity_ids:
            found = self.find_by_id(kind, entity_id)
            if isinstance(found, Err):
                return found
            if found.value is None:
                logger.warning(f"{kind.value.capitalize()} {entity_id} is referenced but missing")
                continue
            entities.append(found.value)
        return Ok(entities)

    def save(self, entity: Entity) -> Result[Entity, PersistenceError]:
        if not _SAFE_ID.match(entity.id):
            return Err(PersistenceError(f"Unsafe {entity.kind.value} id: {entity.id!r}"))

        with self._lock:
            current = self.find_by_id(entity.kind, entity.id)
            if isinstance(current, Err):
                return current
            stored_version = None if current.value is None else current.value.version

            checked = _check_version(entity.kind, entity, stored_version)
            if isinstance(checked, Err):
                return checked

            saved = entity.model_copy(update={"version": entity.version + 1})
            written = self._storage.save_json(
                self._path(entity.kind, entity.id),
                saved.model_dump(mode="json"),
            )
            if isinstance(written, Err):
                return written
            return Ok(saved)

    def delete(self, kind: EntityKind, entity_id: str) -> Result[None, PersistenceError]:
        if not _SAFE_ID.match(entity_id):
            return Ok(None)
        with self._lock:
            return self._storage.delete_json(self._path(kind, entity_id))
