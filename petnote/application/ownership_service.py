"""Ownership service.

Keeps parent child-lists in step with the store. ``attach_child`` and
``detach_child`` are idempotent read-modify-write cycles: attaching an id
that is already listed, or detaching one that is not, changes nothing.
Because of that, a cycle that loses a compare-and-swap race is simply
re-read and retried.
"""

import logging

from petnote.application.ports import DocumentStore
from petnote.domain.graph import (
    Relation,
    has_child,
    owner_id,
    owning_relation,
    with_child,
    without_child,
)
from petnote.domain.shared import (
    DomainError,
    Err,
    NotFound,
    Ok,
    Result,
    StaleEntity,
    retry_while,
)
from petnote.domain.types import Entity, EntityKind

logger = logging.getLogger(__name__)

MAX_CAS_ATTEMPTS = 3


def is_stale(error: DomainError) -> bool:
    """A save lost a compare-and-swap race and may be retried."""
    return isinstance(error, StaleEntity)


def load(store: DocumentStore, kind: EntityKind, entity_id: str) -> Result[Entity, DomainError]:
    """Fetch an entity, turning a missing record into NotFound."""
    found = store.find_by_id(kind, entity_id)
    if isinstance(found, Err):
        return found
    if found.value is None:
        return Err(NotFound(kind, entity_id))
    return Ok(found.value)


def attach_child(
    store: DocumentStore,
    relation: Relation,
    parent_id: str,
    child_id: str,
) -> Result[Entity, DomainError]:
    """Add child_id to the parent's child list.

    Args:
        store: Document store.
        relation: Which parent -> child link to update.
        parent_id: Id of the parent entity.
        child_id: Id of the child to reference.

    Returns:
        Ok(parent as stored), Err(NotFound) if the parent does not resolve,
        Err(InvariantViolation) if a single-child slot is taken, or the
        store's PersistenceError.
    """
    return _update_parent(store, relation, parent_id, child_id, attach=True)


def detach_child(
    store: DocumentStore,
    relation: Relation,
    parent_id: str,
    child_id: str,
) -> Result[Entity, DomainError]:
    """Remove child_id from the parent's child list.

    Returns:
        Ok(parent as stored), Err(NotFound) if the parent does not resolve,
        or the store's PersistenceError.
    """
    return _update_parent(store, relation, parent_id, child_id, attach=False)


def _update_parent(
    store: DocumentStore,
    relation: Relation,
    parent_id: str,
    child_id: str,
    attach: bool,
) -> Result[Entity, DomainError]:
    action = "attach" if attach else "detach"

    def attempt(number: int) -> Result[Entity, DomainError]:
        loaded = load(store, relation.parent, parent_id)
        if isinstance(loaded, Err):
            return loaded
        parent = loaded.value

        # Already in the requested state
        if has_child(parent, relation, child_id) == attach:
            return Ok(parent)

        if attach:
            updated = with_child(parent, relation, child_id)
            if isinstance(updated, Err):
                return updated
            candidate = updated.value
        else:
            candidate = without_child(parent, relation, child_id)

        saved = store.save(candidate)
        if isinstance(saved, Err) and is_stale(saved.error):
            logger.warning(
                f"{action} {child_id} on {relation} {parent_id} lost a concurrent "
                f"update (attempt {number}/{MAX_CAS_ATTEMPTS})"
            )
        return saved

    return retry_while(attempt, is_stale, MAX_CAS_ATTEMPTS)


def create_child(store: DocumentStore, child: Entity) -> Result[Entity, DomainError]:
    """Save a new entity and reference it from its owner.

    The owner must exist before anything is written. If referencing the
    child fails, the saved record is removed again so no orphan is left
    behind.

    Args:
        store: Document store.
        child: Unsaved entity whose parent field names its owner.

    Returns:
        Ok(child as stored) or the first error encountered.
    """
    relation = owning_relation(child.kind)
    if relation is None:
        raise ValueError(f"{child.kind.value} entities have no owner")

    parent_id = owner_id(child, relation)
    parent = load(store, relation.parent, parent_id)
    if isinstance(parent, Err):
        return parent

    saved = store.save(child)
    if isinstance(saved, Err):
        return saved

    attached = attach_child(store, relation, parent_id, child.id)
    if isinstance(attached, Err):
        logger.warning(
            f"Could not reference {child.kind.value} {child.id} from "
            f"{relation.parent.value} {parent_id}: {attached.error}; rolling back"
        )
        rolled_back = store.delete(child.kind, child.id)
        if isinstance(rolled_back, Err):
            logger.error(f"Rollback of {child.kind.value} {child.id} failed: {rolled_back.error}")
        return attached

    return saved
