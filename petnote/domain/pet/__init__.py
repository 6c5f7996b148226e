"""Pet domain - the companion and its experience curve.

Key Types:
    Pet - The user's companion
    PointsAwarded - A point delta was applied

Leveling Functions:
    required_experience - Experience needed to leave a level
    apply_points - Normalize (level, points) after a delta
    level_progress - Fraction of the current level completed
"""

from .events import PointsAwarded
from .leveling import (
    BASE_EXP,
    EXPONENT,
    apply_points,
    level_progress,
    required_experience,
)
from .models import Pet

__all__ = [
    # Models
    "Pet",
    # Leveling
    "BASE_EXP",
    "EXPONENT",
    "required_experience",
    "apply_points",
    "level_progress",
    # Events
    "PointsAwarded",
]
