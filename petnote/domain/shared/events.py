"""Base domain event infrastructure.

Domain events are immutable records of something that happened: a task
was completed, a pet gained points, a subtree was deleted. Services return
them next to the entities they changed so callers can log or react.

Example usage:
    >>> from petnote.domain.shared.events import DomainEvent
    >>>
    >>> class FolderRenamed(DomainEvent):
    ...     folder_id: str
    ...     name: str
    ...
    >>> event = FolderRenamed(folder_id="f1", name="Inbox")
    >>> event.model_config["frozen"]
    True
"""

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, Field


class DomainEvent(BaseModel):
    """Base class for all domain events.

    Attributes:
        event_id: Unique identifier for this event instance.
        occurred_at: UTC timestamp when the event occurred.
    """

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    model_config = {"frozen": True}
