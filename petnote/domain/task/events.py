"""Task domain events."""

from petnote.domain.shared.events import DomainEvent


class TaskCompleted(DomainEvent):
    """Event raised when a task transitions into the completed status."""

    task_id: str
    note_id: str
    category: str
    points: int


class TaskReopened(DomainEvent):
    """Event raised when a completed task goes back to pending or overdue."""

    task_id: str
    note_id: str
    status: str
