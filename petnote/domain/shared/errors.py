"""Domain error values.

These are carried inside ``Err`` results rather than raised. Each error
knows how to describe itself to a user through ``message`` and whether it
is the caller's fault (``client_error``) or the system's.
"""

from dataclasses import dataclass

from petnote.domain.types import EntityKind


@dataclass(frozen=True)
class DomainError:
    """Base class for all expected failures."""

    client_error = True

    @property
    def message(self) -> str:
        return self.__class__.__name__

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class NotFound(DomainError):
    """An entity id did not resolve."""

    kind: EntityKind
    entity_id: str

    @property
    def message(self) -> str:
        return f"{self.kind.value.capitalize()} not found: {self.entity_id}"


@dataclass(frozen=True)
class InvalidCategory(DomainError):
    """A task category has no entry in the category->points table."""

    category: str

    @property
    def message(self) -> str:
        return f"Invalid task category: {self.category!r} (expected easy, medium or hard)"


@dataclass(frozen=True)
class InvariantViolation(DomainError):
    """An operation would break an ownership invariant."""

    detail: str

    @property
    def message(self) -> str:
        return self.detail


@dataclass(frozen=True)
class ValidationFailed(DomainError):
    """An update payload was rejected."""

    detail: str

    @property
    def message(self) -> str:
        return f"Invalid update: {self.detail}"


@dataclass(frozen=True)
class PersistenceError(DomainError):
    """The document store failed. Not retried by the core."""

    client_error = False

    detail: str

    @property
    def message(self) -> str:
        return f"Storage failure: {self.detail}"


@dataclass(frozen=True)
class StaleEntity(PersistenceError):
    """A compare-and-swap save found a newer version in the store."""

    @property
    def message(self) -> str:
        return f"Concurrent modification: {self.detail}"
