"""Workspace application service.

Users, folders and notes: the containers of the ownership tree. Creation
goes through ``create_child`` so every new record is referenced by its
owner; deletion goes through the cascade coordinator.
"""

import logging

from petnote.application.cascade_service import CascadeCoordinator
from petnote.application.ownership_service import create_child, load
from petnote.application.ports import DocumentStore
from petnote.application.schemas import FolderUpdate, NoteUpdate
from petnote.domain.graph import Folder, Note, SubtreeDeleted, User
from petnote.domain.shared import DomainError, Err, Ok, Result, ValidationFailed
from petnote.domain.types import Entity, EntityKind

logger = logging.getLogger(__name__)


# =============================================================================
# Users
# =============================================================================


def create_user(store: DocumentStore, email: str) -> Result[User, DomainError]:
    """Create a user with no folders and no pet."""
    email = email.strip()
    if not email:
        return Err(ValidationFailed("email cannot be empty"))
    return store.save(User(email=email))


def get_user(store: DocumentStore, user_id: str) -> Result[User, DomainError]:
    return load(store, EntityKind.USER, user_id)


# =============================================================================
# Folders
# =============================================================================


def create_folder(store: DocumentStore, user_id: str, name: str) -> Result[Folder, DomainError]:
    """Create an empty folder and add it to the user's folder list.

    Returns:
        Ok(Folder), Err(ValidationFailed) for a blank name,
        Err(NotFound) if the user does not exist.
    """
    if not name.strip():
        return Err(ValidationFailed("folder name cannot be empty"))
    return create_child(store, Folder(user=user_id, name=name.strip()))


def list_folders(store: DocumentStore, user_id: str) -> Result[list[Folder], DomainError]:
    user = load(store, EntityKind.USER, user_id)
    if isinstance(user, Err):
        return user
    return store.find_many(EntityKind.FOLDER, user.value.folders)


def rename_folder(
    store: DocumentStore,
    folder_id: str,
    changes: FolderUpdate,
) -> Result[Folder, DomainError]:
    return _apply_changes(store, EntityKind.FOLDER, folder_id, changes.changes())


def delete_folder(store: DocumentStore, folder_id: str) -> Result[SubtreeDeleted, DomainError]:
    """Delete a folder with all of its notes and their tasks."""
    return CascadeCoordinator(store).delete_subtree(EntityKind.FOLDER, folder_id)


# =============================================================================
# Notes
# =============================================================================


def create_note(
    store: DocumentStore,
    folder_id: str,
    title: str,
    content: str = "",
) -> Result[Note, DomainError]:
    """Create a note without tasks and add it to the folder's note list."""
    if not title.strip():
        return Err(ValidationFailed("note title cannot be empty"))
    return create_child(store, Note(folder=folder_id, title=title.strip(), content=content))


def list_notes(store: DocumentStore, folder_id: str) -> Result[list[Note], DomainError]:
    folder = load(store, EntityKind.FOLDER, folder_id)
    if isinstance(folder, Err):
        return folder
    return store.find_many(EntityKind.NOTE, folder.value.notes)


def update_note(
    store: DocumentStore,
    note_id: str,
    changes: NoteUpdate,
) -> Result[Note, DomainError]:
    return _apply_changes(store, EntityKind.NOTE, note_id, changes.changes())


def delete_note(store: DocumentStore, note_id: str) -> Result[SubtreeDeleted, DomainError]:
    """Delete a note with all of its tasks."""
    return CascadeCoordinator(store).delete_subtree(EntityKind.NOTE, note_id)


# =============================================================================
# Helpers
# =============================================================================


def _apply_changes(
    store: DocumentStore,
    kind: EntityKind,
    entity_id: str,
    changes: dict,
) -> Result[Entity, DomainError]:
    entity = load(store, kind, entity_id)
    if isinstance(entity, Err):
        return entity
    if not changes:
        return Ok(entity.value)
    logger.debug(f"Updating {kind.value} {entity_id}: {sorted(changes)}")
    return store.save(entity.value.model_copy(update=changes))
