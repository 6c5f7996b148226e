"""Pet domain events."""

from petnote.domain.shared.events import DomainEvent


class PointsAwarded(DomainEvent):
    """Event raised when a point delta was applied to a pet.

    ``delta`` is negative for deductions.
    """

    pet_id: str
    task_id: str | None = None
    category: str | None = None
    delta: float
    old_level: int
    new_level: int
    points: float

    @property
    def leveled_up(self) -> bool:
        return self.new_level > self.old_level

    @property
    def leveled_down(self) -> bool:
        return self.new_level < self.old_level
