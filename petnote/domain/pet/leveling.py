"""Experience curve and leveling.

Pure functions converting a point delta into a normalized
``(level, experience)`` pair. No I/O, no failure modes: every integer
input produces a defined output, negative deltas included.
"""

# =============================================================================
# Curve Constants
# =============================================================================

BASE_EXP = 100  # Experience needed to leave level 1
EXPONENT = 1.5  # Growth of the requirement per level


def required_experience(level: int) -> float:
    """Experience needed to advance past ``level``.

    Args:
        level: Current level (1-based).

    Returns:
        ``BASE_EXP * level ** EXPONENT``. Strictly increasing in level.
    """
    return BASE_EXP * level**EXPONENT


def apply_points(level: int, points: float, delta: float) -> tuple[int, float]:
    """Apply a point delta to a (level, experience) state.

    Positive totals past the current requirement roll over into level ups,
    possibly several at once. Negative totals borrow from lower levels
    until level 1 is reached, where any remaining deficit is dropped
    rather than carried as debt.

    Args:
        level: Current level, at least 1.
        points: Experience within the current level.
        delta: Points to add; negative values deduct.

    Returns:
        ``(new_level, new_points)`` with ``new_level >= 1`` and
        ``0 <= new_points < required_experience(new_level)``.

    Examples:
        >>> apply_points(1, 80, 250)
        (2, 230.0)
        >>> apply_points(1, 10, -500)
        (1, 0.0)
    """
    level = max(level, 1)
    total = float(points + delta)

    # Level up
    while total >= required_experience(level):
        total -= required_experience(level)
        level += 1

    # Level down: the level just entered refunds its whole requirement
    while total < 0 and level > 1:
        level -= 1
        total += required_experience(level)

    if total < 0:
        total = 0.0

    return level, total


def level_progress(level: int, points: float) -> float:
    """Fraction of the current level completed, in ``[0, 1)``."""
    return points / required_experience(max(level, 1))
