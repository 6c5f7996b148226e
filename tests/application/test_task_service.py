"""Tests for the task lifecycle and its rewards."""

from datetime import UTC, datetime, timedelta

import pytest

from petnote.application import (
    MAX_CAS_ATTEMPTS,
    TaskUpdate,
    complete_task,
    create_task,
    delete_task,
    list_tasks,
    mark_overdue,
    update_task,
)
from petnote.domain.pet import PointsAwarded
from petnote.domain.shared import Err, NotFound, PersistenceError, StaleEntity, ValidationFailed
from petnote.domain.task import RewardPolicy, TaskCategory, TaskCompleted, TaskReopened, TaskStatus
from petnote.domain.types import EntityKind
from petnote.infrastructure.storage import InMemoryDocumentStore

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


def _pet_state(workspace, pet):
    pet = workspace.reload(pet)
    return pet.level, pet.points


def test_create_task_uses_category_points(workspace):
    task = workspace.add_task("Buy milk")

    assert task.points == 250
    assert task.status == TaskStatus.PENDING
    assert task.user == workspace.user.id
    assert workspace.reload(workspace.note).tasks == [task.id]


def test_create_task_validation(workspace, category_points):
    blank = create_task(workspace.store, workspace.note.id, "  ", category_points)
    orphan = create_task(workspace.store, "ghost", "Buy milk", category_points)

    assert isinstance(blank.error, ValidationFailed)
    assert orphan == Err(NotFound(EntityKind.NOTE, "ghost"))
    assert workspace.store.count(EntityKind.TASK) == 0


def test_list_tasks_in_creation_order(workspace):
    names = ["a", "b", "c"]
    for name in names:
        workspace.add_task(name)

    tasks = list_tasks(workspace.store, workspace.note.id).value

    assert [t.name for t in tasks] == names


def test_category_change_recomputes_points(workspace, category_points):
    task = workspace.add_task("Buy milk")

    updated, events = update_task(
        workspace.store, task.id, TaskUpdate(category=TaskCategory.HARD), category_points
    ).value

    assert updated.points == 1000
    assert events == []


def test_points_override_kept_when_category_unchanged(workspace, category_points):
    task = workspace.add_task("Buy milk")

    updated, _ = update_task(workspace.store, task.id, TaskUpdate(points=42), category_points).value

    assert updated.points == 42


def test_points_override_ignored_when_category_changes(workspace, category_points):
    task = workspace.add_task("Buy milk")

    updated, _ = update_task(
        workspace.store,
        task.id,
        TaskUpdate(category=TaskCategory.MEDIUM, points=42),
        category_points,
    ).value

    assert updated.points == 500


def test_completion_rewards_the_pet(workspace, category_points):
    pet = workspace.adopt_pet()
    task = workspace.add_task("Buy milk")

    updated, events = complete_task(workspace.store, task.id, category_points).value

    assert updated.status == TaskStatus.COMPLETED
    assert updated.completed_date is not None
    assert isinstance(events[0], TaskCompleted)
    award = events[1]
    assert isinstance(award, PointsAwarded)
    assert award.delta == 250
    assert award.leveled_up
    assert _pet_state(workspace, pet) == (2, pytest.approx(150))


def test_completion_without_pet_still_succeeds(workspace, category_points):
    task = workspace.add_task("Buy milk")

    updated, events = complete_task(workspace.store, task.id, category_points).value

    assert updated.status == TaskStatus.COMPLETED
    assert [type(e) for e in events] == [TaskCompleted]


def test_completing_twice_rewards_once(workspace, category_points):
    pet = workspace.adopt_pet()
    task = workspace.add_task("Buy milk")

    complete_task(workspace.store, task.id, category_points)
    _, events = complete_task(workspace.store, task.id, category_points).value

    assert events == []
    assert _pet_state(workspace, pet) == (2, pytest.approx(150))


def test_category_change_on_completed_task_swaps_reward(workspace, category_points):
    pet = workspace.adopt_pet()
    task = workspace.add_task("Buy milk")
    complete_task(workspace.store, task.id, category_points)

    updated, events = update_task(
        workspace.store, task.id, TaskUpdate(category=TaskCategory.HARD), category_points
    ).value

    assert updated.points == 1000
    assert [e.delta for e in events] == [-250, 1000]
    level, points = _pet_state(workspace, pet)
    assert level == 4
    assert points == pytest.approx(1000 - 100 - 282.8427125 - 519.6152423)


def test_reopening_keeps_reward_by_default(workspace, category_points):
    pet = workspace.adopt_pet()
    task = workspace.add_task("Buy milk")
    complete_task(workspace.store, task.id, category_points)

    updated, events = update_task(
        workspace.store, task.id, TaskUpdate(status=TaskStatus.PENDING), category_points
    ).value

    assert updated.completed_date is None
    assert [type(e) for e in events] == [TaskReopened]
    assert _pet_state(workspace, pet) == (2, pytest.approx(150))


def test_reopening_deducts_when_policy_says_so(workspace, category_points):
    pet = workspace.adopt_pet()
    task = workspace.add_task("Buy milk")
    complete_task(workspace.store, task.id, category_points)

    update_task(
        workspace.store,
        task.id,
        TaskUpdate(status=TaskStatus.PENDING),
        category_points,
        policy=RewardPolicy(deduct_on_uncomplete=True),
    )

    assert _pet_state(workspace, pet) == (1, pytest.approx(0))


def test_update_missing_task(workspace, category_points):
    result = update_task(workspace.store, "ghost", TaskUpdate(name="x"), category_points)

    assert result == Err(NotFound(EntityKind.TASK, "ghost"))


def test_due_date_can_be_cleared(workspace, category_points):
    task = create_task(
        workspace.store, workspace.note.id, "Buy milk", category_points, due_date=NOW
    ).value

    updated, _ = update_task(workspace.store, task.id, TaskUpdate(due_date=None), category_points).value

    assert updated.due_date is None


def test_delete_task_keeps_reward_by_default(workspace, category_points):
    pet = workspace.adopt_pet()
    task = workspace.add_task("Buy milk")
    complete_task(workspace.store, task.id, category_points)

    deleted = delete_task(workspace.store, task.id, category_points).value

    assert deleted.count(EntityKind.TASK) == 1
    assert workspace.reload(workspace.note).tasks == []
    assert _pet_state(workspace, pet) == (2, pytest.approx(150))


def test_delete_task_deducts_when_policy_says_so(workspace, category_points):
    pet = workspace.adopt_pet()
    task = workspace.add_task("Buy milk")
    complete_task(workspace.store, task.id, category_points)

    delete_task(
        workspace.store, task.id, category_points, policy=RewardPolicy(deduct_on_delete=True)
    )

    assert workspace.store.count(EntityKind.TASK) == 0
    assert _pet_state(workspace, pet) == (1, pytest.approx(0))


def test_delete_pending_task_never_deducts(workspace, category_points):
    pet = workspace.adopt_pet()
    task = workspace.add_task("Buy milk")

    delete_task(
        workspace.store, task.id, category_points, policy=RewardPolicy(deduct_on_delete=True)
    )

    assert _pet_state(workspace, pet) == (1, 0)


def test_mark_overdue(workspace, category_points):
    store, note_id = workspace.store, workspace.note.id
    late = create_task(store, note_id, "late", category_points, due_date=NOW - timedelta(hours=1)).value
    create_task(store, note_id, "fine", category_points, due_date=NOW + timedelta(hours=1))
    done = create_task(store, note_id, "done", category_points, due_date=NOW - timedelta(hours=1)).value
    complete_task(store, done.id, category_points)

    changed = mark_overdue(store, note_id, now=NOW).value

    assert [t.id for t in changed] == [late.id]
    assert workspace.reload(late).status == TaskStatus.OVERDUE
    assert mark_overdue(store, note_id, now=NOW).value == []


class FlakyStore(InMemoryDocumentStore):
    """Lets ``pass_through`` pet updates succeed, then rejects ``conflicts``
    more as concurrent modifications. Deletes of ids in ``broken`` fail."""

    def __init__(self):
        super().__init__()
        self.pass_through = 0
        self.conflicts = 0
        self.broken = set()

    def save(self, entity):
        if entity.kind == EntityKind.PET and entity.version > 0:
            if self.pass_through:
                self.pass_through -= 1
            elif self.conflicts:
                self.conflicts -= 1
                return Err(StaleEntity(f"pet {entity.id} moved on"))
        return super().save(entity)

    def delete(self, kind, entity_id):
        if entity_id in self.broken:
            return Err(PersistenceError(f"disk said no to {entity_id}"))
        return super().delete(kind, entity_id)


class TestRewardsUnderFailure:
    @pytest.fixture
    def store(self):
        return FlakyStore()

    def test_pet_conflict_is_retried(self, workspace, category_points):
        pet = workspace.adopt_pet()
        task = workspace.add_task("Buy milk")
        workspace.store.conflicts = 1

        _, events = complete_task(workspace.store, task.id, category_points).value

        assert [type(e) for e in events] == [TaskCompleted, PointsAwarded]
        assert _pet_state(workspace, pet) == (2, pytest.approx(150))

    def test_failed_reward_leaves_task_pending(self, workspace, category_points):
        pet = workspace.adopt_pet()
        task = workspace.add_task("Buy milk")
        workspace.store.conflicts = MAX_CAS_ATTEMPTS

        failed = complete_task(workspace.store, task.id, category_points)

        assert isinstance(failed.error, StaleEntity)
        reverted = workspace.reload(task)
        assert reverted.status == TaskStatus.PENDING
        assert reverted.completed_date is None
        assert _pet_state(workspace, pet) == (1, 0)

        _, events = complete_task(workspace.store, task.id, category_points).value

        assert isinstance(events[-1], PointsAwarded)
        assert _pet_state(workspace, pet) == (2, pytest.approx(150))

    def test_failed_category_swap_restores_old_reward(self, workspace, category_points):
        pet = workspace.adopt_pet()
        task = workspace.add_task("Buy milk")
        complete_task(workspace.store, task.id, category_points)
        workspace.store.pass_through = 1
        workspace.store.conflicts = MAX_CAS_ATTEMPTS

        failed = update_task(
            workspace.store, task.id, TaskUpdate(category=TaskCategory.HARD), category_points
        )

        assert isinstance(failed, Err)
        reverted = workspace.reload(task)
        assert (reverted.category, reverted.points, reverted.status) == (
            TaskCategory.EASY,
            250,
            TaskStatus.COMPLETED,
        )
        assert _pet_state(workspace, pet) == (2, pytest.approx(150))

    def test_retried_delete_deducts_once(self, workspace, category_points):
        pet = workspace.adopt_pet()
        task = workspace.add_task("Buy milk")
        complete_task(workspace.store, task.id, category_points)
        policy = RewardPolicy(deduct_on_delete=True)
        workspace.store.broken.add(task.id)

        failed = delete_task(workspace.store, task.id, category_points, policy=policy)

        assert isinstance(failed.error, PersistenceError)
        assert workspace.reload(task) is not None
        assert _pet_state(workspace, pet) == (2, pytest.approx(150))

        workspace.store.broken.clear()
        deleted = delete_task(workspace.store, task.id, category_points, policy=policy)
        again = delete_task(workspace.store, task.id, category_points, policy=policy)

        assert deleted.value.count(EntityKind.TASK) == 1
        assert again == Err(NotFound(EntityKind.TASK, task.id))
        assert _pet_state(workspace, pet) == (1, pytest.approx(0))
