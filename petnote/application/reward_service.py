"""Reward application service.

Loads the pet of a task's owner, applies the category reward through the
pure dispatcher and persists the result. A pet save that loses a
compare-and-swap race is re-read and retried, so two tasks completed at
once both reach the pet.
"""

import logging
from collections.abc import Mapping

from petnote.application.ownership_service import MAX_CAS_ATTEMPTS, is_stale, load
from petnote.application.ports import DocumentStore
from petnote.domain.pet import Pet, PointsAwarded
from petnote.domain.shared import DomainError, Err, Ok, Result, retry_while
from petnote.domain.task import Task, dispatch_reward, points_for_category
from petnote.domain.types import EntityKind

logger = logging.getLogger(__name__)


def award_for_task(
    store: DocumentStore,
    task: Task,
    category_points: Mapping[str, int],
    *,
    reverse: bool = False,
) -> Result[PointsAwarded | None, DomainError]:
    """Grant (or with ``reverse``, take back) the reward for a task.

    A user without a pet is valid: there is nobody to reward, so the
    call succeeds with None.

    Args:
        store: Document store.
        task: The task whose category decides the reward.
        category_points: The category -> points table.
        reverse: Deduct instead of grant.

    Returns:
        Ok(PointsAwarded), Ok(None) when the user has no pet, or
        Err(NotFound | InvalidCategory | PersistenceError).
    """
    user = load(store, EntityKind.USER, task.user)
    if isinstance(user, Err):
        return user
    pet_id = user.value.pet
    if pet_id is None:
        logger.info(f"User {task.user} has no pet yet; task {task.id} earns nothing")
        return Ok(None)

    delta = points_for_category(category_points, task.category)
    if isinstance(delta, Err):
        return delta

    def attempt(number: int) -> Result[tuple[Pet, Pet], DomainError]:
        pet = load(store, EntityKind.PET, pet_id)
        if isinstance(pet, Err):
            return pet

        rewarded = dispatch_reward(pet.value, category_points, task.category, reverse=reverse)
        if isinstance(rewarded, Err):
            return rewarded

        saved = store.save(rewarded.value)
        if isinstance(saved, Err):
            if is_stale(saved.error):
                logger.warning(
                    f"Reward for task {task.id} lost a concurrent update of pet {pet_id} "
                    f"(attempt {number}/{MAX_CAS_ATTEMPTS})"
                )
            return saved
        return Ok((pet.value, saved.value))

    settled = retry_while(attempt, is_stale, MAX_CAS_ATTEMPTS)
    if isinstance(settled, Err):
        return settled
    before, after = settled.value

    event = PointsAwarded(
        pet_id=after.id,
        task_id=task.id,
        category=task.category.value,
        delta=-delta.value if reverse else delta.value,
        old_level=before.level,
        new_level=after.level,
        points=after.points,
    )
    if event.leveled_up:
        logger.info(f"Pet {event.pet_id} leveled up to {event.new_level}")
    elif event.leveled_down:
        logger.info(f"Pet {event.pet_id} dropped to level {event.new_level}")
    return Ok(event)
