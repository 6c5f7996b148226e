"""Tests for attach/detach and owned-entity creation."""

from petnote.application import MAX_CAS_ATTEMPTS, attach_child, create_child, detach_child
from petnote.domain.graph import FOLDER_NOTES, USER_FOLDERS, Folder, Note
from petnote.domain.pet import Pet
from petnote.domain.shared import Err, InvariantViolation, NotFound, Ok, StaleEntity
from petnote.domain.types import EntityKind
from petnote.infrastructure.storage import InMemoryDocumentStore


class InterleavingStore(InMemoryDocumentStore):
    """Runs a queued write right before the next save, like a concurrent client."""

    def __init__(self):
        super().__init__()
        self.interleave = None

    def save(self, entity):
        if self.interleave is not None:
            action, self.interleave = self.interleave, None
            action()
        return super().save(entity)


class AlwaysStaleStore(InMemoryDocumentStore):
    def __init__(self):
        super().__init__()
        self.attempts = 0

    def save(self, entity):
        if entity.kind == EntityKind.FOLDER and entity.version > 0:
            self.attempts += 1
            return Err(StaleEntity("folder moved on"))
        return super().save(entity)


def test_attach_to_missing_parent(store):
    result = attach_child(store, FOLDER_NOTES, "nope", "n1")

    assert result == Err(NotFound(EntityKind.FOLDER, "nope"))


def test_attach_is_idempotent(workspace):
    store, folder = workspace.store, workspace.folder

    first = attach_child(store, FOLDER_NOTES, folder.id, "n-extra")
    second = attach_child(store, FOLDER_NOTES, folder.id, "n-extra")

    assert first.value.notes == [workspace.note.id, "n-extra"]
    assert second.value.notes == first.value.notes
    assert second.value.version == first.value.version


def test_detach_is_idempotent(workspace):
    store, folder, note = workspace.store, workspace.folder, workspace.note

    first = detach_child(store, FOLDER_NOTES, folder.id, note.id)
    second = detach_child(store, FOLDER_NOTES, folder.id, note.id)

    assert first.value.notes == []
    assert second.value.notes == []
    assert second.value.version == first.value.version


def test_detach_of_absent_child_does_not_write(workspace):
    before = workspace.reload(workspace.folder)

    result = detach_child(workspace.store, FOLDER_NOTES, workspace.folder.id, "never-attached")

    assert isinstance(result, Ok)
    assert result.value.version == before.version


def test_attach_retries_after_losing_a_race():
    store = InterleavingStore()
    folder = store.save(Folder(user="u1", name="Inbox")).value

    store.interleave = lambda: attach_child(store, FOLDER_NOTES, folder.id, "theirs")
    result = attach_child(store, FOLDER_NOTES, folder.id, "mine")

    assert isinstance(result, Ok)
    assert result.value.notes == ["theirs", "mine"]


def test_detach_retries_after_losing_a_race():
    store = InterleavingStore()
    folder = store.save(Folder(user="u1", name="Inbox", notes=["a", "b"])).value

    store.interleave = lambda: detach_child(store, FOLDER_NOTES, folder.id, "a")
    result = detach_child(store, FOLDER_NOTES, folder.id, "b")

    assert result.value.notes == []


def test_attach_gives_up_after_repeated_conflicts():
    store = AlwaysStaleStore()
    folder = store.save(Folder(user="u1", name="Inbox")).value

    result = attach_child(store, FOLDER_NOTES, folder.id, "n1")

    assert isinstance(result, Err)
    assert isinstance(result.error, StaleEntity)
    assert store.attempts == MAX_CAS_ATTEMPTS


def test_create_child_references_the_child(workspace):
    store = workspace.store

    note = create_child(store, Note(folder=workspace.folder.id, title="Ideas")).value

    assert note.version == 1
    assert workspace.reload(workspace.folder).notes == [workspace.note.id, note.id]


def test_create_child_with_missing_owner_writes_nothing(store):
    result = create_child(store, Folder(user="ghost", name="Inbox"))

    assert result == Err(NotFound(EntityKind.USER, "ghost"))
    assert store.count(EntityKind.FOLDER) == 0


def test_create_child_rolls_back_when_reference_fails(workspace):
    store, user = workspace.store, workspace.user
    workspace.adopt_pet()

    result = create_child(store, Pet(user=user.id, name="Second", type="dog"))

    assert isinstance(result, Err)
    assert isinstance(result.error, InvariantViolation)
    assert store.count(EntityKind.PET) == 1


def test_user_folder_list_tracks_creation(workspace):
    user = workspace.reload(workspace.user)

    assert user.folders == [workspace.folder.id]
    assert attach_child(workspace.store, USER_FOLDERS, user.id, workspace.folder.id).value.folders == [
        workspace.folder.id
    ]
