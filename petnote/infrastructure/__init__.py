"""Infrastructure layer for petnote.

Concrete implementations of the ports the application layer depends on.

Exports:
    Storage:
        - JsonStorage: Low-level JSON file I/O
        - InMemoryDocumentStore: Dictionary-backed DocumentStore
        - JsonDocumentStore: One JSON file per record
"""

from petnote.infrastructure.storage import (
    InMemoryDocumentStore,
    JsonDocumentStore,
    JsonStorage,
)

__all__ = [
    "JsonStorage",
    "InMemoryDocumentStore",
    "JsonDocumentStore",
]
