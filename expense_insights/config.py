"""Configuration values for the expense insights engine.

Every value can be overridden through an environment variable so a host
application can tune the look-back windows without patching the package.
"""

from __future__ import annotations

import os


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# Label shown for expenses without a category
UNCATEGORIZED_LABEL = os.getenv("EXPENSE_INSIGHTS_UNCATEGORIZED_LABEL", "Sin categoría")

# Colour used when no record of a category carries one
DEFAULT_CATEGORY_COLOR = os.getenv("EXPENSE_INSIGHTS_DEFAULT_COLOR", "#8E8E93")

# Forecasting
FORECAST_WINDOW_MONTHS = _int_env("EXPENSE_INSIGHTS_FORECAST_WINDOW_MONTHS", 6)
MIN_FORECAST_MONTHS = _int_env("EXPENSE_INSIGHTS_MIN_FORECAST_MONTHS", 3)

# Quarterly trend
TREND_LOOKBACK_MONTHS = _int_env("EXPENSE_INSIGHTS_TREND_LOOKBACK_MONTHS", 12)
QUARTER_MONTHS = 3

# Currency code used when a requested one is unknown
DEFAULT_CURRENCY = os.getenv("EXPENSE_INSIGHTS_DEFAULT_CURRENCY", "USD")
