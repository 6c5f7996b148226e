"""Result monad for expected failures in domain and application code.

Operations that can fail for ordinary reasons (an id that does not resolve,
an unknown task category, a store that refuses a write) return either
``Ok(value)`` or ``Err(error)`` instead of raising. Callers branch with
``isinstance`` or the ``is_ok``/``is_err`` helpers, chain steps with
``map_result`` and ``flat_map``, and repeat a read-modify-write cycle that
lost a race with ``retry_while``.

Example usage:
    >>> def find_folder(folders: dict, folder_id: str) -> Result[dict, str]:
    ...     if folder_id not in folders:
    ...         return Err(f"Folder not found: {folder_id}")
    ...     return Ok(folders[folder_id])
    ...
    >>> result = find_folder({"f1": {"name": "Inbox"}}, "f1")
    >>> unwrap_or(map_result(result, lambda folder: folder["name"]), "?")
    'Inbox'
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful outcome carrying ``value``."""

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed outcome carrying ``error``, usually a DomainError."""

    error: E


# Union is required here: TypeVar aliases do not support | at runtime
Result = Union[Ok[T], Err[E]]  # noqa: UP007


def is_ok(result: Result[T, E]) -> bool:
    return isinstance(result, Ok)


def is_err(result: Result[T, E]) -> bool:
    return isinstance(result, Err)


def map_result(result: Result[T, E], fn: Callable[[T], U]) -> Result[U, E]:
    """Transform an Ok value; an Err passes through untouched."""
    return Ok(fn(result.value)) if isinstance(result, Ok) else result


def flat_map(result: Result[T, E], fn: Callable[[T], Result[U, E]]) -> Result[U, E]:
    """Continue with a step that itself may fail; an Err short-circuits."""
    return fn(result.value) if isinstance(result, Ok) else result


def unwrap_or(result: Result[T, E], default: T) -> T:
    return result.value if isinstance(result, Ok) else default


def retry_while(
    step: Callable[[int], Result[T, E]],
    should_retry: Callable[[E], bool],
    attempts: int,
) -> Result[T, E]:
    """Run ``step`` again while it fails with a retryable error.

    Meant for idempotent read-modify-write cycles: each call must re-read
    whatever it modifies, so repeating it after a lost race is safe.

    Args:
        step: Called with the 1-based attempt number.
        should_retry: Decides whether an error is worth another attempt.
        attempts: Upper bound on calls to ``step`` (at least one is made).

    Returns:
        The first Ok, the first non-retryable Err, or the Err of the last
        attempt.

    Examples:
        >>> outcomes = iter([Err("busy"), Err("busy"), Ok("saved")])
        >>> retry_while(lambda n: next(outcomes), lambda e: e == "busy", 3)
        Ok(value='saved')
    """
    result = step(1)
    for attempt in range(2, attempts + 1):
        if isinstance(result, Ok) or not should_retry(result.error):
            break
        result = step(attempt)
    return result
