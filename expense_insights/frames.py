"""Conversions between expense records and pandas DataFrames.

The engine works on a DataFrame internally, using the same column naming
as bank-export transaction tables (``Transaction Date``, ``Amount``,
``Category``).  Records coming from such a table can be converted with
:func:`records_from_frame`; computed aggregates can be turned back into a
table for display with :func:`aggregates_to_frame`.
"""

from __future__ import annotations

import logging
from dataclasses import fields, is_dataclass
from typing import Any, Iterable, List, Optional

import pandas as pd

from . import config
from .models import DateRange, ExpenseRecord

logger = logging.getLogger(__name__)

DATE_COL = 'Transaction Date'
AMOUNT_COL = 'Amount'
KEY_COL = 'Category Key'
COLOR_COL = 'Color'
FRAME_COLUMNS = [DATE_COL, AMOUNT_COL, KEY_COL, COLOR_COL]

UNCATEGORIZED_ALIASES = {'', 'uncategorized', 'none', 'nan'}


def expense_frame(records: Iterable[ExpenseRecord]) -> pd.DataFrame:
    """Build a fresh DataFrame from ``records`` (the input is never mutated)."""
    rows = [
        {
            DATE_COL: record.date,
            AMOUNT_COL: record.amount,
            KEY_COL: record.category_key,
            COLOR_COL: record.color,
        }
        for record in records
    ]
    df = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    df[DATE_COL] = pd.to_datetime(df[DATE_COL])
    df[AMOUNT_COL] = df[AMOUNT_COL].astype(float)
    return df


def filter_range(df: pd.DataFrame, date_range: Optional[DateRange]) -> pd.DataFrame:
    """Rows of ``df`` whose date falls inside ``date_range`` (all rows when None)."""
    if date_range is None or df.empty:
        return df
    mask = df[DATE_COL].between(
        pd.Timestamp(date_range.start),
        pd.Timestamp(date_range.end),
        inclusive=date_range.inclusive,
    )
    return df[mask]


def _category_label(value: Any) -> Optional[str]:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    text = str(value).strip()
    lowered = text.lower()
    if lowered in UNCATEGORIZED_ALIASES or lowered == config.UNCATEGORIZED_LABEL.lower():
        return None
    return text


def records_from_frame(
    df: pd.DataFrame,
    date_col: str = DATE_COL,
    amount_col: str = AMOUNT_COL,
    category_col: str = 'Category',
    color_col: Optional[str] = None,
) -> List[ExpenseRecord]:
    """Convert a transaction table into :class:`ExpenseRecord` objects.

    Dates and amounts are coerced the way the dashboard loaders do it
    (unparseable values become NaN/NaT and the row is dropped).  Bank
    exports store spending as negative numbers, so absolute amounts are
    used.  Blank or "Uncategorized" categories map to the uncategorized
    bucket.
    """
    missing = {date_col, amount_col} - set(df.columns)
    if missing:
        raise ValueError(f"Columns {sorted(missing)} not found")

    working = df.copy()
    working[date_col] = pd.to_datetime(working[date_col], errors='coerce')
    working[amount_col] = pd.to_numeric(working[amount_col], errors='coerce')
    working = working.dropna(subset=[date_col, amount_col])
    dropped = len(df) - len(working)
    if dropped:
        logger.debug("Dropped %d rows with unparseable date or amount", dropped)

    if category_col in working.columns:
        # A plain list keeps None intact; string-dtype Series turn it back into NA
        categories = [_category_label(value) for value in working[category_col]]
    else:
        categories = [None] * len(working)
    if color_col and color_col in working.columns:
        colors = working[color_col].astype(object).where(working[color_col].notna(), None)
    else:
        colors = pd.Series([None] * len(working), index=working.index, dtype=object)

    records = [
        ExpenseRecord(
            amount=abs(float(amount)),
            date=timestamp.to_pydatetime(),
            category=category,
            color=color,
        )
        for timestamp, amount, category, color in zip(
            working[date_col], working[amount_col], categories, colors
        )
    ]
    logger.debug("Converted %d rows into expense records", len(records))
    return records


def aggregates_to_frame(items: Iterable[Any]) -> pd.DataFrame:
    """Tabulate aggregate dataclasses; category variants become their label."""
    rows = []
    for item in items:
        if not is_dataclass(item):
            raise ValueError(f"Expected an aggregate dataclass, got {type(item).__name__}")
        row = {f.name: getattr(item, f.name) for f in fields(item)}
        if 'category' in row:
            row['category'] = row['category'].label
        rows.append(row)
    return pd.DataFrame(rows)
