"""Application service layer for petnote.

Services orchestrate domain functions against a DocumentStore passed in
by the caller. They return Result values and never raise for expected
failures.

Services:
    ownership_service - attach/detach children, create owned entities
    cascade_service - CascadeCoordinator for subtree deletion
    reward_service - award category rewards to the user's pet
    workspace_service - users, folders and notes
    task_service - task lifecycle and rewards
    pet_service - pet creation and updates

Example usage:
    >>> from petnote.application import create_user, create_folder
    >>> from petnote.infrastructure.storage import InMemoryDocumentStore
    >>>
    >>> store = InMemoryDocumentStore()
    >>> user = create_user(store, "ada@example.com").value
    >>> folder = create_folder(store, user.id, "Inbox").value
    >>> folder.user == user.id
    True
"""

from petnote.application.cascade_service import CASCADE_KINDS, CascadeCoordinator
from petnote.application.ownership_service import (
    MAX_CAS_ATTEMPTS,
    attach_child,
    create_child,
    detach_child,
)
from petnote.application.pet_service import create_pet, get_pet, update_pet
from petnote.application.ports import DocumentStore
from petnote.application.reward_service import award_for_task
from petnote.application.schemas import (
    FolderUpdate,
    NoteUpdate,
    PetUpdate,
    TaskUpdate,
    parse_update,
)
from petnote.application.task_service import (
    complete_task,
    create_task,
    delete_task,
    list_tasks,
    mark_overdue,
    update_task,
)
from petnote.application.workspace_service import (
    create_folder,
    create_note,
    create_user,
    delete_folder,
    delete_note,
    get_user,
    list_folders,
    list_notes,
    rename_folder,
    update_note,
)

__all__ = [
    # Port
    "DocumentStore",
    # Ownership
    "attach_child",
    "detach_child",
    "create_child",
    "MAX_CAS_ATTEMPTS",
    # Cascade
    "CascadeCoordinator",
    "CASCADE_KINDS",
    # Rewards
    "award_for_task",
    # Update payloads
    "FolderUpdate",
    "NoteUpdate",
    "TaskUpdate",
    "PetUpdate",
    "parse_update",
    # Workspace
    "create_user",
    "get_user",
    "create_folder",
    "list_folders",
    "rename_folder",
    "delete_folder",
    "create_note",
    "list_notes",
    "update_note",
    "delete_note",
    # Tasks
    "create_task",
    "list_tasks",
    "update_task",
    "complete_task",
    "delete_task",
    "mark_overdue",
    # Pets
    "create_pet",
    "get_pet",
    "update_pet",
]
