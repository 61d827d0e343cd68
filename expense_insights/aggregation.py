"""Grouped spending totals.

Every function takes an iterable of :class:`~expense_insights.models.ExpenseRecord`
and returns freshly built result objects.  Empty input always produces an
empty (or zero-filled) result rather than an error.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Union

from . import config
from .frames import AMOUNT_COL, COLOR_COL, DATE_COL, KEY_COL, expense_frame, filter_range
from .models import (
    WEEKDAY_NAMES,
    CategoryAggregate,
    DailyAggregate,
    DateLike,
    DateRange,
    ExpenseRecord,
    Period,
    PeriodComparison,
    QuarterlyAggregate,
    WeekdayAggregate,
    as_datetime,
)
from .regression import fit_linear_trend
from .windows import select_window, shift_months

logger = logging.getLogger(__name__)


def total_spent(records: Iterable[ExpenseRecord], date_range: Optional[DateRange] = None) -> float:
    df = filter_range(expense_frame(records), date_range)
    return float(df[AMOUNT_COL].sum())


def category_totals(
    records: Iterable[ExpenseRecord],
    date_range: Optional[DateRange] = None,
) -> List[CategoryAggregate]:
    """Total and share of spending per category, largest first.

    Categories with equal totals keep the order in which they first appear
    in ``records``.  Shares are 0 when the grand total is 0.
    """
    df = filter_range(expense_frame(records), date_range)
    if df.empty:
        return []

    grouped = df.groupby(KEY_COL, sort=False)
    totals = grouped[AMOUNT_COL].sum()
    colors = grouped[COLOR_COL].first()
    grand_total = float(totals.sum())

    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    result = []
    for key, total in ranked:
        color = colors.get(key)
        result.append(CategoryAggregate(
            category=key,
            total=float(total),
            share=float(total) / grand_total if grand_total > 0 else 0.0,
            color=color if isinstance(color, str) else config.DEFAULT_CATEGORY_COLOR,
        ))
    logger.debug("Aggregated %d records into %d categories", len(df), len(result))
    return result


def daily_totals(
    records: Iterable[ExpenseRecord],
    date_range: Optional[DateRange] = None,
) -> List[DailyAggregate]:
    """Spending per calendar day in ascending day order."""
    df = filter_range(expense_frame(records), date_range)
    if df.empty:
        return []
    per_day = df.groupby(df[DATE_COL].dt.normalize())[AMOUNT_COL].sum().sort_index()
    return [
        DailyAggregate(day=day.to_pydatetime(), total=float(total))
        for day, total in per_day.items()
    ]


def weekday_totals(
    records: Iterable[ExpenseRecord],
    date_range: Optional[DateRange] = None,
) -> List[WeekdayAggregate]:
    """Spending per weekday, always seven buckets from Monday to Sunday."""
    df = filter_range(expense_frame(records), date_range)
    per_weekday = (
        df.groupby(df[DATE_COL].dt.weekday)[AMOUNT_COL].sum()
        .reindex(range(len(WEEKDAY_NAMES)), fill_value=0.0)
    )
    return [
        WeekdayAggregate(weekday_name=name, total=float(per_weekday.iloc[index]))
        for index, name in enumerate(WEEKDAY_NAMES)
    ]


def quarterly_totals(
    records: Iterable[ExpenseRecord],
    reference_date: DateLike,
) -> List[QuarterlyAggregate]:
    """Spending per 3-month quarter over the trailing year, with a linear trend.

    Quarters run consecutively from ``reference_date - 12 months``; each is
    half-open except the last, which includes ``reference_date``.  Leading
    quarters without any record are dropped, so a short history yields fewer
    quarters.  With a single quarter the trend is flat at its total.
    """
    reference = as_datetime(reference_date)
    quarter_count = max(1, config.TREND_LOOKBACK_MONTHS // config.QUARTER_MONTHS)
    bounds = [
        shift_months(reference, -config.QUARTER_MONTHS * (quarter_count - index))
        for index in range(quarter_count)
    ]
    bounds.append(reference)

    df = expense_frame(records)
    quarters = []
    for index in range(quarter_count):
        inclusive = 'both' if index == quarter_count - 1 else 'left'
        in_quarter = filter_range(df, DateRange(bounds[index], bounds[index + 1], inclusive))
        quarters.append((bounds[index], float(in_quarter[AMOUNT_COL].sum()), len(in_quarter)))

    while quarters and quarters[0][2] == 0:
        quarters.pop(0)
    if not quarters:
        return []

    fit = fit_linear_trend([total for _, total, _ in quarters])
    return [
        QuarterlyAggregate(quarter_start=start, total=total, trend_value=fit.predict(index))
        for index, (start, total, _) in enumerate(quarters)
    ]


def compare_periods(
    records: Iterable[ExpenseRecord],
    period: Union[Period, str],
    reference_date: DateLike,
) -> PeriodComparison:
    """Total spending of the current window against the previous one."""
    window = select_window(period, reference_date)
    df = expense_frame(records)
    current = filter_range(df, window.current)
    previous = filter_range(df, window.previous)
    return PeriodComparison(
        period=Period.coerce(period),
        current_total=float(current[AMOUNT_COL].sum()),
        previous_total=float(previous[AMOUNT_COL].sum()),
    )
