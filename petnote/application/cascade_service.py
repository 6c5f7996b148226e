"""Cascade delete coordinator.

Deleting a folder, note or task removes the whole subtree below it and
pulls the deleted id out of its owner's child list, in this order:

    1. every child subtree, depth first
    2. the entity's own record
    3. the id from the owner's child list

so a live child list never references a deleted record for longer than
one store call. Each step is idempotent, which makes a failed delete safe
to run again: descendants that are already gone are skipped, and an
owner that is already gone has nothing left to pull.
"""

import logging

from petnote.application.ownership_service import detach_child
from petnote.application.ports import DocumentStore
from petnote.domain.graph import (
    SubtreeDeleted,
    child_ids,
    child_relations,
    owner_id,
    owning_relation,
)
from petnote.domain.shared import DomainError, Err, NotFound, Ok, Result
from petnote.domain.types import Entity, EntityKind

logger = logging.getLogger(__name__)

CASCADE_KINDS = (EntityKind.FOLDER, EntityKind.NOTE, EntityKind.TASK)


class CascadeCoordinator:
    """Deletes ownership subtrees without leaving dangling references.

    The coordinator provides no cross-record transaction. If a step fails
    the call stops and reports the error; everything deleted up to that
    point stays deleted and every list that referenced it has already been
    pulled.

    Example:
        coordinator = CascadeCoordinator(store)
        result = coordinator.delete_subtree(EntityKind.FOLDER, folder_id)
        if isinstance(result, Ok):
            print(result.value.count(EntityKind.TASK), "tasks removed")
    """

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def delete_subtree(
        self,
        kind: EntityKind,
        entity_id: str,
    ) -> Result[SubtreeDeleted, DomainError]:
        """Delete an entity and everything it owns.

        Args:
            kind: FOLDER, NOTE or TASK.
            entity_id: Id of the subtree root.

        Returns:
            Ok(SubtreeDeleted), Err(NotFound) if entity_id does not
            resolve, or the store's PersistenceError.

        Raises:
            ValueError: If kind is not a cascading kind.
        """
        if kind not in CASCADE_KINDS:
            raise ValueError(f"Cannot cascade-delete a {kind.value}")

        found = self._store.find_by_id(kind, entity_id)
        if isinstance(found, Err):
            return found
        if found.value is None:
            return Err(NotFound(kind, entity_id))

        deleted: dict[EntityKind, list[str]] = {}
        result = self._delete(found.value, deleted)
        if isinstance(result, Err):
            logger.error(f"Cascade delete of {kind.value} {entity_id} aborted: {result.error}")
            return result

        event = SubtreeDeleted(kind=kind, entity_id=entity_id, deleted=deleted)
        logger.info(
            f"Deleted {kind.value} {entity_id} "
            f"({sum(len(ids) for ids in deleted.values())} records)"
        )
        return Ok(event)

    def _delete(
        self,
        entity: Entity,
        deleted: dict[EntityKind, list[str]],
    ) -> Result[None, DomainError]:
        # 1. Descendants
        for relation in child_relations(entity.kind):
            for child_id in child_ids(entity, relation):
                found = self._store.find_by_id(relation.child, child_id)
                if isinstance(found, Err):
                    return found
                if found.value is None:
                    logger.warning(
                        f"{relation.child.value.capitalize()} {child_id} listed by "
                        f"{entity.kind.value} {entity.id} is already gone"
                    )
                    continue
                result = self._delete(found.value, deleted)
                if isinstance(result, Err):
                    return result

        # 2. Own record
        removed = self._store.delete(entity.kind, entity.id)
        if isinstance(removed, Err):
            return removed
        deleted.setdefault(entity.kind, []).append(entity.id)

        # 3. Owner's child list
        relation = owning_relation(entity.kind)
        if relation is None:
            return Ok(None)
        parent_id = owner_id(entity, relation)
        detached = detach_child(self._store, relation, parent_id, entity.id)
        if isinstance(detached, Err):
            if isinstance(detached.error, NotFound):
                logger.warning(
                    f"Owner {relation.parent.value} {parent_id} of "
                    f"{entity.kind.value} {entity.id} is already gone"
                )
                return Ok(None)
            return detached

        return Ok(None)
