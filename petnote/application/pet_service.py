"""Pet application service."""

import logging

from petnote.application.ownership_service import create_child, load
from petnote.application.ports import DocumentStore
from petnote.application.schemas import PetUpdate
from petnote.domain.pet import Pet, PointsAwarded, apply_points
from petnote.domain.shared import (
    DomainError,
    Err,
    InvariantViolation,
    Ok,
    Result,
    ValidationFailed,
)
from petnote.domain.types import EntityKind

logger = logging.getLogger(__name__)


def create_pet(
    store: DocumentStore,
    user_id: str,
    name: str,
    type: str,
) -> Result[Pet, DomainError]:
    """Create the user's pet. Each account gets exactly one.

    Returns:
        Ok(Pet), Err(NotFound) if the user does not exist,
        Err(InvariantViolation) if the user already has a pet.
    """
    if not name.strip() or not type.strip():
        return Err(ValidationFailed("pet name and type are required"))

    user = load(store, EntityKind.USER, user_id)
    if isinstance(user, Err):
        return user
    if user.value.pet is not None:
        return Err(InvariantViolation(f"User {user_id} already has a pet: {user.value.pet}"))

    created = create_child(store, Pet(user=user_id, name=name.strip(), type=type.strip()))
    if isinstance(created, Ok):
        logger.info(f"User {user_id} adopted {created.value.type} {created.value.name}")
    return created


def get_pet(store: DocumentStore, pet_id: str) -> Result[Pet, DomainError]:
    return load(store, EntityKind.PET, pet_id)


def update_pet(
    store: DocumentStore,
    pet_id: str,
    changes: PetUpdate,
) -> Result[tuple[Pet, PointsAwarded | None], DomainError]:
    """Rename a pet or apply a point delta to it.

    Returns:
        Ok((pet, PointsAwarded or None when no points were given)).
    """
    loaded = load(store, EntityKind.PET, pet_id)
    if isinstance(loaded, Err):
        return loaded
    pet = loaded.value

    updates = changes.changes()
    delta = updates.pop("points", None)
    if delta is not None:
        level, points = apply_points(pet.level, pet.points, delta)
        updates.update(level=level, points=points)

    saved = store.save(pet.model_copy(update=updates))
    if isinstance(saved, Err):
        return saved

    if delta is None:
        return Ok((saved.value, None))

    event = PointsAwarded(
        pet_id=pet_id,
        delta=delta,
        old_level=pet.level,
        new_level=saved.value.level,
        points=saved.value.points,
    )
    if event.new_level != event.old_level:
        logger.info(f"Pet {pet_id} moved from level {event.old_level} to {event.new_level}")
    return Ok((saved.value, event))
