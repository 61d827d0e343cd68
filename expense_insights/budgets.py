"""Budget utilisation against recorded spending."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from .frames import AMOUNT_COL, KEY_COL, expense_frame, filter_range
from .models import Category, DateLike, DateRange, ExpenseRecord, Period, as_datetime
from .windows import select_window

CAUTION_THRESHOLD = 0.5
CRITICAL_THRESHOLD = 0.8


class BudgetPeriod(Enum):
    WEEKLY = 'weekly'
    MONTHLY = 'monthly'
    YEARLY = 'yearly'

    @property
    def period(self) -> Period:
        return {
            BudgetPeriod.WEEKLY: Period.WEEK,
            BudgetPeriod.MONTHLY: Period.MONTH,
            BudgetPeriod.YEARLY: Period.YEAR,
        }[self]


@dataclass(frozen=True)
class Budget:
    amount: float
    period: BudgetPeriod = BudgetPeriod.MONTHLY
    category: Optional[str] = None
    start_date: Optional[datetime] = None


@dataclass(frozen=True)
class BudgetStatus:
    budget: Budget
    spent: float
    progress: float
    level: str

    @property
    def limit(self) -> float:
        return self.budget.amount

    @property
    def remaining(self) -> float:
        return max(self.budget.amount - self.spent, 0.0)

    @property
    def exceeded(self) -> bool:
        return self.budget.amount > 0 and self.spent >= self.budget.amount


def utilisation_level(progress: float) -> str:
    if progress < CAUTION_THRESHOLD:
        return 'on_track'
    if progress < CRITICAL_THRESHOLD:
        return 'caution'
    return 'critical'


def budget_status(
    records: Iterable[ExpenseRecord],
    budget: Budget,
    reference_date: DateLike,
) -> BudgetStatus:
    """Spending counted against ``budget`` in its period ending at ``reference_date``.

    Only records of the budget's category count (every record when the
    budget has no category), and nothing before ``budget.start_date``.
    ``progress`` is capped at 1 and is 0 for a non-positive budget amount.
    """
    window = select_window(budget.period.period, reference_date).current
    if budget.start_date is not None:
        start = max(window.start, as_datetime(budget.start_date))
        window = DateRange(start, window.end, window.inclusive)

    df = filter_range(expense_frame(records), window)
    if budget.category is not None and not df.empty:
        target = Category(budget.category)
        df = df[df[KEY_COL].apply(lambda key: key == target)]

    spent = float(df[AMOUNT_COL].sum())
    progress = min(spent / budget.amount, 1.0) if budget.amount > 0 else 0.0
    return BudgetStatus(budget=budget, spent=spent, progress=progress, level=utilisation_level(progress))


def budget_statuses(
    records: Sequence[ExpenseRecord],
    budgets: Iterable[Budget],
    reference_date: DateLike,
) -> List[BudgetStatus]:
    return [budget_status(records, budget, reference_date) for budget in budgets]
