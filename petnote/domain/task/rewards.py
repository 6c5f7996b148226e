"""Category rewards.

Maps a task category to a point delta and routes it through the leveling
curve. The category table is always passed in by the caller (it lives in
the settings), never read from module state. All functions are pure.
"""

from collections.abc import Mapping

from pydantic import BaseModel

from petnote.domain.pet.leveling import apply_points
from petnote.domain.pet.models import Pet
from petnote.domain.shared import Err, InvalidCategory, Ok, Result, flat_map

from .models import TaskCategory

_CATEGORY_KEYS = frozenset(category.value for category in TaskCategory)


class CategoryPoints(BaseModel):
    """Points awarded per task category."""

    easy: int = 250
    medium: int = 500
    hard: int = 1000

    model_config = {"frozen": True}

    def as_mapping(self) -> dict[str, int]:
        return self.model_dump()


class RewardPolicy(BaseModel):
    """When completed work is taken back from the pet.

    Both are off by default: points once earned are kept.
    """

    deduct_on_delete: bool = False
    deduct_on_uncomplete: bool = False

    model_config = {"frozen": True}


def points_for_category(
    category_points: Mapping[str, int],
    category: TaskCategory | str,
) -> Result[int, InvalidCategory]:
    """Look up the points for a category.

    Args:
        category_points: The category -> points table.
        category: A TaskCategory or its string value.

    Returns:
        Ok(points), or Err(InvalidCategory) when the category is not one
        of easy/medium/hard or the table has no entry for it.
    """
    key = category.value if isinstance(category, TaskCategory) else str(category)
    if key not in _CATEGORY_KEYS or key not in category_points:
        return Err(InvalidCategory(key))
    return Ok(category_points[key])


def dispatch_reward(
    pet: Pet,
    category_points: Mapping[str, int],
    category: TaskCategory | str,
    *,
    reverse: bool = False,
) -> Result[Pet, InvalidCategory]:
    """Apply the reward for a category to a pet.

    The caller persists the returned pet; nothing is written here.

    Args:
        pet: The pet to reward.
        category_points: The category -> points table.
        category: Category of the task being rewarded.
        reverse: Deduct the reward instead of granting it.

    Returns:
        Ok(updated copy of pet), or Err(InvalidCategory).
    """

    def reward(delta: int) -> Result[Pet, InvalidCategory]:
        level, points = apply_points(pet.level, pet.points, -delta if reverse else delta)
        return Ok(pet.model_copy(update={"level": level, "points": points}))

    return flat_map(points_for_category(category_points, category), reward)
