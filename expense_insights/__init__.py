"""Top‑level package for Expense Insights.

Pure statistics and forecasting over a flat list of expense records.
The primary modules are:

* ``aggregation`` – totals by category, day, weekday and quarter
* ``forecasting`` – per-category next-month predictions with confidence
* ``windows`` – calendar-aware current/previous look-back windows
* ``budgets`` and ``goals`` – budget utilisation and savings goal progress
* ``visualization`` – functions that generate Plotly figures

Nothing in the package performs I/O or keeps state between calls.
"""

from .aggregation import (  # noqa: F401  # re-exported for convenience
    category_totals,
    compare_periods,
    daily_totals,
    quarterly_totals,
    total_spent,
    weekday_totals,
)
from .forecasting import confidence_score, forecast_categories  # noqa: F401
from .models import (  # noqa: F401
    Category,
    DateRange,
    ExpenseRecord,
    Period,
    Uncategorized,
)
from .regression import fit_linear_trend  # noqa: F401
from .windows import select_window  # noqa: F401

__all__ = [
    "Category",
    "DateRange",
    "ExpenseRecord",
    "Period",
    "Uncategorized",
    "category_totals",
    "compare_periods",
    "confidence_score",
    "daily_totals",
    "fit_linear_trend",
    "forecast_categories",
    "quarterly_totals",
    "select_window",
    "total_spent",
    "weekday_totals",
]
