"""Root conftest - shared fixtures for the petnote test suite."""

from dataclasses import dataclass, field

import pytest

from petnote.application import create_folder, create_note, create_pet, create_task, create_user
from petnote.domain.graph import Folder, Note, User
from petnote.domain.pet import Pet
from petnote.domain.task import CategoryPoints, Task, TaskCategory
from petnote.infrastructure.storage import InMemoryDocumentStore


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep every test away from the real ~/.petnote."""
    monkeypatch.setenv("PETNOTE_HOME", str(tmp_path / "home"))
    monkeypatch.delenv("PETNOTE_USER", raising=False)


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def category_points():
    return CategoryPoints().as_mapping()


@dataclass
class Workspace:
    """A small ownership tree: one user, one folder, one note."""

    store: InMemoryDocumentStore
    category_points: dict
    user: User
    folder: Folder
    note: Note
    tasks: list[Task] = field(default_factory=list)

    def add_task(self, name: str, category: TaskCategory = TaskCategory.EASY, note: Note | None = None) -> Task:
        note_id = (note or self.note).id
        task = create_task(self.store, note_id, name, self.category_points, category=category).value
        self.tasks.append(task)
        return task

    def add_note(self, title: str) -> Note:
        return create_note(self.store, self.folder.id, title).value

    def adopt_pet(self) -> Pet:
        return create_pet(self.store, self.user.id, "Mochi", "cat").value

    def reload(self, entity):
        return self.store.find_by_id(entity.kind, entity.id).value


@pytest.fixture
def workspace(store, category_points):
    user = create_user(store, "ada@example.com").value
    folder = create_folder(store, user.id, "Inbox").value
    note = create_note(store, folder.id, "Groceries").value
    return Workspace(store=store, category_points=category_points, user=user, folder=folder, note=note)
