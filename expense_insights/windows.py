"""Calendar-aware look-back windows.

Month and year offsets use :class:`dateutil.relativedelta.relativedelta`, so
subtracting one month from March 31 lands on the last valid day of
February instead of a fixed 30-day offset.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Union

from dateutil.relativedelta import relativedelta

from .models import DateLike, DateWindow, Period, as_datetime

logger = logging.getLogger(__name__)

Offset = Union[timedelta, relativedelta]

PERIOD_OFFSETS = {
    Period.WEEK: timedelta(days=7),
    Period.MONTH: relativedelta(months=1),
    Period.YEAR: relativedelta(years=1),
}


def shift_back(reference: datetime, offset: Offset, times: int = 1) -> datetime:
    """Move ``reference`` back by ``offset`` ``times`` times.

    Falls back to ``reference`` unchanged when the result is not a
    representable date (e.g. before year 1).
    """
    try:
        return reference - offset * times
    except (OverflowError, ValueError):
        logger.debug("Calendar arithmetic undefined for %s - %s x%d; using reference date", reference, offset, times)
        return reference


def shift_months(reference: DateLike, months: int) -> datetime:
    """Calendar month offset; negative ``months`` moves back in time."""
    reference = as_datetime(reference)
    return shift_back(reference, relativedelta(months=-months))


def month_start(moment: DateLike) -> datetime:
    return as_datetime(moment).replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def select_window(period: Union[Period, str], reference_date: DateLike) -> DateWindow:
    """Return the current and previous windows ending at ``reference_date``.

    The current window is ``[reference - 1 period, reference]`` and the
    previous one ``[reference - 2 periods, reference - 1 period]``.
    """
    period = Period.coerce(period)
    reference = as_datetime(reference_date)
    offset = PERIOD_OFFSETS[period]

    current_start = shift_back(reference, offset, 1)
    previous_start = shift_back(reference, offset, 2)
    return DateWindow(
        current_start=current_start,
        current_end=reference,
        previous_start=previous_start,
        previous_end=current_start,
    )
