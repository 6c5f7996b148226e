"""Task application service.

Task lifecycle on top of the ownership core: creation inside a note,
updates through the ``TaskUpdate`` allow-list, rewards on completion and
cascade deletion.
"""

import logging
from collections.abc import Mapping
from datetime import UTC, datetime

from petnote.application.cascade_service import CascadeCoordinator
from petnote.application.ownership_service import create_child, load
from petnote.application.ports import DocumentStore
from petnote.application.reward_service import award_for_task
from petnote.application.schemas import TaskUpdate
from petnote.domain.graph import SubtreeDeleted
from petnote.domain.shared import DomainError, DomainEvent, Err, Ok, Result, ValidationFailed
from petnote.domain.task import (
    RewardPolicy,
    Task,
    TaskCategory,
    TaskCompleted,
    TaskReopened,
    TaskStatus,
    points_for_category,
)
from petnote.domain.types import EntityKind

logger = logging.getLogger(__name__)


def create_task(
    store: DocumentStore,
    note_id: str,
    name: str,
    category_points: Mapping[str, int],
    category: TaskCategory = TaskCategory.EASY,
    due_date: datetime | None = None,
) -> Result[Task, DomainError]:
    """Create a pending task in a note.

    The task's points come from the category table and its user is the
    owner of the note's folder.

    Returns:
        Ok(Task), Err(ValidationFailed) for a blank name, Err(NotFound) if
        the note or its folder does not resolve, Err(InvalidCategory).
    """
    if not name.strip():
        return Err(ValidationFailed("task name cannot be empty"))

    note = load(store, EntityKind.NOTE, note_id)
    if isinstance(note, Err):
        return note
    folder = load(store, EntityKind.FOLDER, note.value.folder)
    if isinstance(folder, Err):
        return folder

    points = points_for_category(category_points, category)
    if isinstance(points, Err):
        return points

    task = Task(
        note=note_id,
        user=folder.value.user,
        name=name.strip(),
        status=TaskStatus.PENDING,
        category=category,
        points=points.value,
        due_date=due_date,
    )
    return create_child(store, task)


def list_tasks(store: DocumentStore, note_id: str) -> Result[list[Task], DomainError]:
    note = load(store, EntityKind.NOTE, note_id)
    if isinstance(note, Err):
        return note
    return store.find_many(EntityKind.TASK, note.value.tasks)


def update_task(
    store: DocumentStore,
    task_id: str,
    changes: TaskUpdate,
    category_points: Mapping[str, int],
    policy: RewardPolicy | None = None,
) -> Result[tuple[Task, list[DomainEvent]], DomainError]:
    """Apply an update to a task and settle its reward.

    Rules:
        - A category change re-derives points from the table; an explicit
          ``points`` is only kept when the category stays the same
        - Entering ``completed`` stamps ``completed_date`` and awards the
          category reward to the user's pet
        - Changing category while completed swaps the reward
        - Leaving ``completed`` clears ``completed_date`` and deducts the
          reward only if ``policy.deduct_on_uncomplete``
        - If a reward cannot be settled, rewards already applied are undone
          and the task is restored, so the update can simply be repeated

    Returns:
        Ok((task, events)) where events holds TaskCompleted / TaskReopened
        and PointsAwarded records, or the first error encountered.
    """
    policy = policy or RewardPolicy()

    loaded = load(store, EntityKind.TASK, task_id)
    if isinstance(loaded, Err):
        return loaded
    old = loaded.value

    updates = changes.changes()
    new_category = updates.get("category", old.category)
    category_changed = new_category != old.category
    if category_changed:
        points = points_for_category(category_points, new_category)
        if isinstance(points, Err):
            return points
        updates["points"] = points.value

    was_completed = old.is_completed()
    now_completed = updates.get("status", old.status) == TaskStatus.COMPLETED
    if now_completed and not was_completed:
        updates["completed_date"] = datetime.now(UTC)
    elif was_completed and not now_completed:
        updates["completed_date"] = None

    saved = store.save(old.model_copy(update=updates))
    if isinstance(saved, Err):
        return saved
    task = saved.value

    events: list[DomainEvent] = []
    rewards: list[tuple[Task, bool]] = []
    if now_completed and not was_completed:
        events.append(
            TaskCompleted(
                task_id=task.id,
                note_id=task.note,
                category=task.category.value,
                points=task.points,
            )
        )
        rewards.append((task, False))
    elif now_completed and category_changed:
        rewards.extend([(old, True), (task, False)])
    elif was_completed and not now_completed:
        events.append(TaskReopened(task_id=task.id, note_id=task.note, status=task.status.value))
        if policy.deduct_on_uncomplete:
            rewards.append((old, True))

    applied: list[tuple[Task, bool]] = []
    for rewarded_task, reverse in rewards:
        awarded = award_for_task(store, rewarded_task, category_points, reverse=reverse)
        if isinstance(awarded, Err):
            logger.error(f"Reward for task {task.id} failed: {awarded.error}; reverting the update")
            _revert_update(store, old, task, applied, category_points)
            return awarded
        applied.append((rewarded_task, reverse))
        if awarded.value is not None:
            events.append(awarded.value)

    return Ok((task, events))


def _revert_update(
    store: DocumentStore,
    old: Task,
    saved: Task,
    applied: list[tuple[Task, bool]],
    category_points: Mapping[str, int],
) -> None:
    """Undo the rewards already settled, then put the task back as it was.

    Leaves the task in its previous status so that repeating the update
    settles the reward again from scratch.
    """
    for rewarded_task, reverse in reversed(applied):
        undone = award_for_task(store, rewarded_task, category_points, reverse=not reverse)
        if isinstance(undone, Err):
            logger.error(f"Could not undo the reward of task {rewarded_task.id}: {undone.error}")

    restored = store.save(old.model_copy(update={"version": saved.version}))
    if isinstance(restored, Err):
        logger.error(f"Could not restore task {old.id}: {restored.error}")


def complete_task(
    store: DocumentStore,
    task_id: str,
    category_points: Mapping[str, int],
) -> Result[tuple[Task, list[DomainEvent]], DomainError]:
    """Mark a task completed (shortcut for a status-only update)."""
    return update_task(store, task_id, TaskUpdate(status=TaskStatus.COMPLETED), category_points)


def delete_task(
    store: DocumentStore,
    task_id: str,
    category_points: Mapping[str, int],
    policy: RewardPolicy | None = None,
) -> Result[SubtreeDeleted, DomainError]:
    """Delete a task, taking back its reward if the policy says so.

    The reward is only taken back once the task record is gone, so a
    delete that fails and is run again deducts at most once.
    """
    policy = policy or RewardPolicy()

    settled: Task | None = None
    if policy.deduct_on_delete:
        task = load(store, EntityKind.TASK, task_id)
        if isinstance(task, Err):
            return task
        if task.value.is_completed():
            settled = task.value

    deleted = CascadeCoordinator(store).delete_subtree(EntityKind.TASK, task_id)
    if isinstance(deleted, Err) or settled is None:
        return deleted

    deducted = award_for_task(store, settled, category_points, reverse=True)
    if isinstance(deducted, Err):
        logger.error(f"Task {task_id} was deleted but its reward was not taken back: {deducted.error}")
        return deducted
    return deleted


def mark_overdue(
    store: DocumentStore,
    note_id: str,
    now: datetime | None = None,
) -> Result[list[Task], DomainError]:
    """Move the note's pending tasks past their due date to overdue.

    Returns:
        Ok(list of tasks that changed).
    """
    now = now or datetime.now(UTC)

    tasks = list_tasks(store, note_id)
    if isinstance(tasks, Err):
        return tasks

    changed: list[Task] = []
    for task in tasks.value:
        if not task.is_past_due(now):
            continue
        saved = store.save(task.model_copy(update={"status": TaskStatus.OVERDUE}))
        if isinstance(saved, Err):
            return saved
        changed.append(saved.value)

    if changed:
        logger.info(f"{len(changed)} task(s) in note {note_id} are now overdue")
    return Ok(changed)
