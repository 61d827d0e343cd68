"""Per-category next-month spending forecasts.

Each category's monthly totals over the trailing window are fitted with
an ordinary least squares line and extrapolated one month ahead.  The
confidence score combines how steady the monthly totals are (inverse
coefficient of variation) with a small bonus for the amount of history.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

import numpy as np
import pandas as pd

from . import config
from .frames import AMOUNT_COL, COLOR_COL, DATE_COL, KEY_COL, expense_frame, filter_range
from .models import (
    CategoryForecast,
    DateLike,
    DateRange,
    ExpenseRecord,
    ForecastSummary,
    as_datetime,
)
from .regression import fit_linear_trend
from .windows import month_start, shift_months

logger = logging.getLogger(__name__)

MAX_DATA_BONUS = 0.2
DATA_BONUS_PER_MONTH = 0.02


def confidence_score(monthly_totals: Sequence[float]) -> float:
    """Heuristic confidence in ``[0, 1]`` for a series of monthly totals.

    ``min(1, 1 / (1 + cv) + min(0.2, 0.02 * n))`` where ``cv`` is the
    population standard deviation over the mean, or exactly 1.0 when the
    mean is 0.
    """
    values = np.asarray(monthly_totals, dtype=float)
    if values.size == 0:
        return 0.0
    mean = float(values.mean())
    std = float(values.std(ddof=0))
    cv = std / mean if mean != 0 else 1.0
    base = 1.0 / (1.0 + cv)
    bonus = min(MAX_DATA_BONUS, DATA_BONUS_PER_MONTH * values.size)
    return min(1.0, base + bonus)


def _abs_percent_change(forecast: CategoryForecast) -> float:
    return abs(forecast.percent_change)


def forecast_categories(
    records: Iterable[ExpenseRecord],
    reference_date: DateLike,
) -> ForecastSummary:
    """Forecast next month's spending for every category with enough history.

    Only categories with at least ``MIN_FORECAST_MONTHS`` months of spending
    inside the trailing ``FORECAST_WINDOW_MONTHS`` window are included.
    Forecasts are ordered by the size of the expected change relative to the
    current month, largest first.
    """
    reference = as_datetime(reference_date)
    window = DateRange(shift_months(reference, -config.FORECAST_WINDOW_MONTHS), reference, 'both')
    df = filter_range(expense_frame(records), window)
    if df.empty:
        return ForecastSummary()

    # Month keys are naive wall-clock month starts so aware and naive dates compare
    dates = df[DATE_COL]
    if dates.dt.tz is not None:
        dates = dates.dt.tz_localize(None)
    df = df.assign(Month=dates.dt.to_period('M').dt.to_timestamp())
    current_month = pd.Timestamp(month_start(reference).replace(tzinfo=None))

    forecasts: List[CategoryForecast] = []
    for key, group in df.groupby(KEY_COL, sort=False):
        monthly = group.groupby('Month')[AMOUNT_COL].sum().sort_index()
        monthly = monthly[monthly > 0]
        if len(monthly) < config.MIN_FORECAST_MONTHS:
            logger.debug("Skipping %s: %d months of history", key.label, len(monthly))
            continue

        fit = fit_linear_trend(monthly.to_numpy())
        predicted = max(0.0, fit.predict(len(monthly)))
        color = group[COLOR_COL].dropna()
        forecasts.append(CategoryForecast(
            category=key,
            color=color.iloc[0] if not color.empty else config.DEFAULT_CATEGORY_COLOR,
            current_period_total=float(monthly.get(current_month, 0.0)),
            predicted_next_period_total=float(predicted),
            confidence=confidence_score(monthly.to_numpy()),
            months_of_history=len(monthly),
        ))

    forecasts.sort(key=_abs_percent_change, reverse=True)
    logger.debug("Forecast %d categories from %d records", len(forecasts), len(df))

    if not forecasts:
        return ForecastSummary()
    return ForecastSummary(
        forecasts=forecasts,
        total_predicted=sum(f.predicted_next_period_total for f in forecasts),
        total_current=sum(f.current_period_total for f in forecasts),
        average_confidence=sum(f.confidence for f in forecasts) / len(forecasts),
    )
