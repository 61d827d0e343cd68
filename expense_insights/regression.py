"""Ordinary least squares trend fitting over an evenly spaced index."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .models import LinearFit


def fit_linear_trend(values: Sequence[float]) -> LinearFit:
    """Fit ``y = intercept + slope * x`` with ``x = 0..n-1``.

    Uses the closed-form estimators::

        slope = (n*Sxy - Sx*Sy) / (n*Sxx - Sx**2)
        intercept = (Sy - slope*Sx) / n

    With fewer than two points the denominator is zero; the result is then a
    flat line at the mean (0 for an empty series) flagged as ``degenerate``.
    """
    y = np.asarray(values, dtype=float)
    n = len(y)
    if n == 0:
        return LinearFit(slope=0.0, intercept=0.0, r_squared=0.0, degenerate=True)

    x = np.arange(n, dtype=float)
    sum_x = x.sum()
    sum_y = y.sum()
    sum_xy = (x * y).sum()
    sum_xx = (x * x).sum()

    denominator = n * sum_xx - sum_x ** 2
    if denominator == 0:
        return LinearFit(slope=0.0, intercept=float(sum_y / n), r_squared=0.0, degenerate=True)

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n

    fitted = intercept + slope * x
    ss_res = float(((y - fitted) ** 2).sum())
    ss_tot = float(((y - y.mean()) ** 2).sum())
    r_squared = 1.0 - ss_res / ss_tot if ss_tot > 0 else 1.0

    return LinearFit(slope=float(slope), intercept=float(intercept), r_squared=r_squared)
