"""Storage infrastructure for petnote.

DocumentStore implementations returning Result types for explicit error
handling.
"""

from petnote.infrastructure.storage.json_storage import JsonStorage
from petnote.infrastructure.storage.repositories import (
    InMemoryDocumentStore,
    JsonDocumentStore,
)

__all__ = [
    "JsonStorage",
    "InMemoryDocumentStore",
    "JsonDocumentStore",
]
