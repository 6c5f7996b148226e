"""Task domain - tasks and the rewards they grant.

Key Types:
    TaskStatus - pending / completed / overdue
    TaskCategory - easy / medium / hard
    Task - A unit of work owned by a note
    CategoryPoints - The category -> points table
    RewardPolicy - When rewards are deducted again

Reward Functions:
    points_for_category - Look up the points of a category
    dispatch_reward - Apply a category reward to a pet

Domain Events:
    TaskCompleted - Task moved into completed
    TaskReopened - Task moved out of completed
"""

from .events import TaskCompleted, TaskReopened
from .models import Task, TaskCategory, TaskStatus
from .rewards import (
    CategoryPoints,
    RewardPolicy,
    dispatch_reward,
    points_for_category,
)

__all__ = [
    # Models
    "TaskStatus",
    "TaskCategory",
    "Task",
    # Rewards
    "CategoryPoints",
    "RewardPolicy",
    "points_for_category",
    "dispatch_reward",
    # Events
    "TaskCompleted",
    "TaskReopened",
]
