"""Savings goal progress."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional

from .models import DateLike, as_datetime


@dataclass(frozen=True)
class SavingGoal:
    name: str
    target_amount: float
    current_amount: float = 0.0
    deadline: Optional[datetime] = None
    is_completed: bool = False


@dataclass(frozen=True)
class GoalProgress:
    goal: SavingGoal
    progress: float
    remaining: float
    is_overdue: bool
    days_remaining: Optional[int]

    @property
    def status(self) -> str:
        if self.goal.is_completed or self.progress >= 1.0:
            return 'Completed'
        if self.is_overdue:
            return 'Overdue'
        return 'In Progress'


def goal_progress(goal: SavingGoal, reference_date: DateLike) -> GoalProgress:
    """Progress of ``goal`` as seen at ``reference_date``.

    Progress is capped at 1 and is 0 when the target is not positive.
    ``days_remaining`` counts whole days to the deadline (negative once
    it has passed) and is None without a deadline.
    """
    reference = as_datetime(reference_date)
    if goal.target_amount > 0:
        progress = min(goal.current_amount / goal.target_amount, 1.0)
    else:
        progress = 0.0
    remaining = max(goal.target_amount - goal.current_amount, 0.0)

    days_remaining = None
    is_overdue = False
    if goal.deadline is not None:
        deadline = as_datetime(goal.deadline)
        days_remaining = (deadline - reference).days
        is_overdue = not goal.is_completed and reference > deadline

    return GoalProgress(
        goal=goal,
        progress=progress,
        remaining=remaining,
        is_overdue=is_overdue,
        days_remaining=days_remaining,
    )


def goals_progress(goals: Iterable[SavingGoal], reference_date: DateLike) -> List[GoalProgress]:
    return [goal_progress(goal, reference_date) for goal in goals]
