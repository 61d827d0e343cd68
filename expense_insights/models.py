"""Value types consumed and produced by the expense insights engine.

All types are immutable dataclasses.  Aggregates are recomputed on demand
and carry no identity beyond the values they hold.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional, Union

from . import config

DateLike = Union[date, datetime]

WEEKDAY_NAMES = (
    'Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday'
)
RANGE_INCLUSIVE_OPTIONS = {'both', 'left', 'right', 'neither'}


def as_datetime(value: DateLike) -> datetime:
    """Promote plain dates to midnight datetimes; datetimes pass through."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    raise ValueError(f"Expected a date or datetime, got {type(value).__name__}")


@dataclass(frozen=True)
class Category:
    """A user-defined category."""

    name: str

    @property
    def label(self) -> str:
        return self.name


@dataclass(frozen=True)
class Uncategorized:
    """Bucket for expenses that were never assigned a category."""

    @property
    def label(self) -> str:
        return config.UNCATEGORIZED_LABEL


CategoryKey = Union[Category, Uncategorized]


@dataclass(frozen=True)
class ExpenseRecord:
    amount: float
    date: datetime
    category: Optional[str] = None
    color: Optional[str] = None

    def __post_init__(self) -> None:
        try:
            amount = float(self.amount)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Expense amount must be numeric, got {self.amount!r}") from exc
        if not math.isfinite(amount) or amount < 0:
            raise ValueError(f"Expense amount must be a non-negative number, got {self.amount!r}")
        if self.category is not None and not isinstance(self.category, str):
            raise ValueError(f"Expense category must be a string or None, got {self.category!r}")
        object.__setattr__(self, 'amount', amount)
        object.__setattr__(self, 'date', as_datetime(self.date))

    @property
    def category_key(self) -> CategoryKey:
        if self.category is None:
            return Uncategorized()
        return Category(self.category)


class Period(Enum):
    WEEK = 'week'
    MONTH = 'month'
    YEAR = 'year'

    @classmethod
    def coerce(cls, value: Union['Period', str]) -> 'Period':
        """Accept either a member or its (case-insensitive) value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown period {value!r}; expected one of {[p.value for p in cls]}"
            ) from None


@dataclass(frozen=True)
class DateRange:
    """A date interval whose boundary handling mirrors ``Series.between``."""

    start: datetime
    end: datetime
    inclusive: str = 'both'

    def __post_init__(self) -> None:
        if self.inclusive not in RANGE_INCLUSIVE_OPTIONS:
            raise ValueError(
                f"inclusive must be one of {sorted(RANGE_INCLUSIVE_OPTIONS)}, got {self.inclusive!r}"
            )
        object.__setattr__(self, 'start', as_datetime(self.start))
        object.__setattr__(self, 'end', as_datetime(self.end))

    def contains(self, moment: DateLike) -> bool:
        moment = as_datetime(moment)
        after_start = moment >= self.start if self.inclusive in ('both', 'left') else moment > self.start
        before_end = moment <= self.end if self.inclusive in ('both', 'right') else moment < self.end
        return after_start and before_end


@dataclass(frozen=True)
class DateWindow:
    """Current and previous look-back windows for a :class:`Period`."""

    current_start: datetime
    current_end: datetime
    previous_start: datetime
    previous_end: datetime

    @property
    def current(self) -> DateRange:
        return DateRange(self.current_start, self.current_end, 'both')

    @property
    def previous(self) -> DateRange:
        # Half-open so the boundary instant is only counted in the current window
        return DateRange(self.previous_start, self.previous_end, 'left')


@dataclass(frozen=True)
class CategoryAggregate:
    category: CategoryKey
    total: float
    share: float
    color: str = config.DEFAULT_CATEGORY_COLOR

    @property
    def label(self) -> str:
        return self.category.label


@dataclass(frozen=True)
class DailyAggregate:
    day: datetime
    total: float


@dataclass(frozen=True)
class WeekdayAggregate:
    weekday_name: str
    total: float


@dataclass(frozen=True)
class QuarterlyAggregate:
    quarter_start: datetime
    total: float
    trend_value: float


@dataclass(frozen=True)
class LinearFit:
    """Result of an ordinary least squares fit ``y = intercept + slope * x``.

    ``degenerate`` is set when fewer than two points were available; the fit
    is then a flat line at the mean of the input.
    """

    slope: float
    intercept: float
    r_squared: float
    degenerate: bool = False

    def predict(self, x: float) -> float:
        return self.intercept + self.slope * x


@dataclass(frozen=True)
class CategoryForecast:
    category: CategoryKey
    color: str
    current_period_total: float
    predicted_next_period_total: float
    confidence: float
    months_of_history: int

    @property
    def label(self) -> str:
        return self.category.label

    @property
    def percent_change(self) -> float:
        """Relative change from current to predicted; 0 when current is 0."""
        if self.current_period_total == 0:
            return 0.0
        return (self.predicted_next_period_total - self.current_period_total) / self.current_period_total


@dataclass(frozen=True)
class ForecastSummary:
    forecasts: List[CategoryForecast] = field(default_factory=list)
    total_predicted: float = 0.0
    total_current: float = 0.0
    average_confidence: float = 0.0


@dataclass(frozen=True)
class PeriodComparison:
    period: Period
    current_total: float
    previous_total: float

    @property
    def difference(self) -> float:
        return self.current_total - self.previous_total

    @property
    def percent_change(self) -> float:
        """Percentage (0-100 scale) change against the previous window."""
        if self.previous_total <= 0:
            return 0.0
        return self.difference / self.previous_total * 100
