"""Ownership graph domain.

User -> Folder -> Note -> Task, and User -> Pet. This package defines the
container models and the relations between every kind; the application
layer uses them to keep both directions of each link consistent.
"""

from petnote.domain.graph.events import SubtreeDeleted
from petnote.domain.graph.models import Folder, Note, User
from petnote.domain.graph.relations import (
    ENTITY_MODELS,
    FOLDER_NOTES,
    NOTE_TASKS,
    RELATIONS,
    USER_FOLDERS,
    USER_PET,
    Relation,
    child_ids,
    child_relations,
    has_child,
    owner_id,
    owning_relation,
    with_child,
    without_child,
)

__all__ = [
    # Models
    "User",
    "Folder",
    "Note",
    "ENTITY_MODELS",
    # Relations
    "Relation",
    "USER_FOLDERS",
    "FOLDER_NOTES",
    "NOTE_TASKS",
    "USER_PET",
    "RELATIONS",
    "owning_relation",
    "child_relations",
    "child_ids",
    "has_child",
    "owner_id",
    "with_child",
    "without_child",
    # Events
    "SubtreeDeleted",
]
