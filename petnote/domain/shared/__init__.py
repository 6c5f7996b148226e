"""Shared domain building blocks.

- Result monad for explicit error handling
- Domain error values carried by Err
- Base domain event

Example usage:
    >>> from petnote.domain.shared import Err, NotFound, Ok, Result
    >>> from petnote.domain.types import EntityKind
    >>>
    >>> def find_note(notes: dict, note_id: str) -> Result[dict, NotFound]:
    ...     if note_id not in notes:
    ...         return Err(NotFound(EntityKind.NOTE, note_id))
    ...     return Ok(notes[note_id])
"""

from petnote.domain.shared.errors import (
    DomainError,
    InvalidCategory,
    InvariantViolation,
    NotFound,
    PersistenceError,
    StaleEntity,
    ValidationFailed,
)
from petnote.domain.shared.events import DomainEvent
from petnote.domain.shared.result import (
    Err,
    Ok,
    Result,
    flat_map,
    is_err,
    is_ok,
    map_result,
    retry_while,
    unwrap_or,
)

__all__ = [
    # Result monad
    "Ok",
    "Err",
    "Result",
    "is_ok",
    "is_err",
    "map_result",
    "flat_map",
    "unwrap_or",
    "retry_while",
    # Errors
    "DomainError",
    "NotFound",
    "InvalidCategory",
    "InvariantViolation",
    "ValidationFailed",
    "PersistenceError",
    "StaleEntity",
    # Domain events
    "DomainEvent",
]
