"""Unit tests for expense_insights.aggregation.

Each test builds a handful of records by hand so the expected totals can
be checked without any fixtures on disk.
"""

from __future__ import annotations

from datetime import date, datetime

import pytest

from expense_insights import aggregation as agg
from expense_insights.models import (
    WEEKDAY_NAMES,
    Category,
    DateRange,
    ExpenseRecord,
    Period,
    Uncategorized,
)

DAY1 = datetime(2024, 5, 6, 9, 0)


def _day1_range() -> DateRange:
    return DateRange(datetime(2024, 5, 6), datetime(2024, 5, 6, 23, 59, 59))


def _sample_records():
    return [
        ExpenseRecord(50, DAY1, "Food"),
        ExpenseRecord(30, DAY1.replace(hour=13), "Food"),
        ExpenseRecord(20, DAY1.replace(hour=18), "Transport"),
    ]


def test_category_totals_scenario() -> None:
    result = agg.category_totals(_sample_records(), _day1_range())

    assert [a.label for a in result] == ["Food", "Transport"]
    assert result[0].total == pytest.approx(80)
    assert result[0].share == pytest.approx(0.8)
    assert result[1].total == pytest.approx(20)
    assert result[1].share == pytest.approx(0.2)
    assert agg.total_spent(_sample_records(), _day1_range()) == pytest.approx(100)


def test_category_totals_partition_and_share_normalisation() -> None:
    records = _sample_records() + [
        ExpenseRecord(12.5, datetime(2024, 5, 2), None),
        ExpenseRecord(7.25, datetime(2024, 5, 3), "Health"),
        ExpenseRecord(100, datetime(2024, 6, 1), "Rent"),
    ]
    date_range = DateRange(datetime(2024, 5, 1), datetime(2024, 5, 31))
    result = agg.category_totals(records, date_range)

    assert sum(a.total for a in result) == pytest.approx(agg.total_spent(records, date_range))
    assert sum(a.share for a in result) == pytest.approx(1.0)
    assert "Rent" not in [a.label for a in result]


def test_missing_category_goes_to_uncategorized_bucket() -> None:
    records = [
        ExpenseRecord(10, DAY1, None),
        ExpenseRecord(5, DAY1, None),
    ]
    result = agg.category_totals(records)

    assert len(result) == 1
    assert result[0].category == Uncategorized()
    assert result[0].label == "Sin categoría"
    assert result[0].total == pytest.approx(15)


def test_literal_uncategorized_label_is_a_separate_category() -> None:
    records = [
        ExpenseRecord(10, DAY1, None),
        ExpenseRecord(5, DAY1, "Sin categoría"),
    ]
    result = agg.category_totals(records)

    assert [a.category for a in result] == [Uncategorized(), Category("Sin categoría")]


def test_ties_keep_first_seen_order() -> None:
    forward = [ExpenseRecord(10, DAY1, "A"), ExpenseRecord(10, DAY1, "B")]
    backward = list(reversed(forward))

    assert [a.label for a in agg.category_totals(forward)] == ["A", "B"]
    assert [a.label for a in agg.category_totals(backward)] == ["B", "A"]


def test_zero_grand_total_gives_zero_shares() -> None:
    records = [ExpenseRecord(0, DAY1, "A"), ExpenseRecord(0, DAY1, "B")]
    result = agg.category_totals(records)

    assert len(result) == 2
    assert all(a.share == 0 for a in result)


def test_category_colour_comes_from_records() -> None:
    records = [
        ExpenseRecord(10, DAY1, "Food"),
        ExpenseRecord(10, DAY1, "Food", color="#FF6B6B"),
        ExpenseRecord(1, DAY1, "Misc"),
    ]
    colors = {a.label: a.color for a in agg.category_totals(records)}

    assert colors["Food"] == "#FF6B6B"
    assert colors["Misc"] == "#8E8E93"


def test_range_bounds_are_inclusive() -> None:
    start = datetime(2024, 5, 1)
    end = datetime(2024, 5, 31)
    records = [
        ExpenseRecord(1, start, "A"),
        ExpenseRecord(2, end, "A"),
        ExpenseRecord(4, datetime(2024, 6, 1), "A"),
    ]
    assert agg.total_spent(records, DateRange(start, end)) == pytest.approx(3)


def test_input_records_are_not_mutated() -> None:
    records = _sample_records()
    snapshot = list(records)
    agg.category_totals(records)
    agg.daily_totals(records)
    assert records == snapshot


def test_daily_totals_truncate_time_and_sort() -> None:
    records = [
        ExpenseRecord(5, datetime(2024, 5, 8, 22, 0), "A"),
        ExpenseRecord(10, datetime(2024, 5, 6, 8, 0), "A"),
        ExpenseRecord(15, datetime(2024, 5, 6, 20, 0), "B"),
    ]
    result = agg.daily_totals(records)

    assert [d.day for d in result] == [datetime(2024, 5, 6), datetime(2024, 5, 8)]
    assert [d.total for d in result] == pytest.approx([25, 5])
    assert agg.daily_totals(records) == result


def test_weekday_totals_always_seven_buckets() -> None:
    records = [
        ExpenseRecord(10, datetime(2024, 1, 1, 10), "A"),  # Monday
        ExpenseRecord(5, datetime(2024, 1, 8, 10), "A"),  # Monday
        ExpenseRecord(7, datetime(2024, 1, 7, 10), "A"),  # Sunday
    ]
    result = agg.weekday_totals(records)

    assert [w.weekday_name for w in result] == list(WEEKDAY_NAMES)
    assert result[0].total == pytest.approx(15)
    assert result[6].total == pytest.approx(7)
    assert sum(w.total for w in result[1:6]) == 0


def test_empty_input_gives_empty_aggregates() -> None:
    assert agg.category_totals([]) == []
    assert agg.daily_totals([]) == []
    assert agg.quarterly_totals([], datetime(2024, 12, 31)) == []
    assert agg.total_spent([]) == 0
    weekdays = agg.weekday_totals([])
    assert len(weekdays) == 7
    assert all(w.total == 0 for w in weekdays)


def test_quarterly_totals_follow_linear_trend_exactly() -> None:
    reference = datetime(2024, 12, 31)
    records = [
        ExpenseRecord(100, datetime(2024, 1, 15), "A"),
        ExpenseRecord(200, datetime(2024, 4, 15), "A"),
        ExpenseRecord(300, datetime(2024, 7, 15), "A"),
        ExpenseRecord(400, datetime(2024, 10, 15), "A"),
        ExpenseRecord(999, datetime(2023, 6, 1), "A"),  # before the look-back
    ]
    result = agg.quarterly_totals(records, reference)

    assert [q.quarter_start for q in result] == [
        datetime(2023, 12, 31),
        datetime(2024, 3, 31),
        datetime(2024, 6, 30),
        datetime(2024, 9, 30),
    ]
    assert [q.total for q in result] == pytest.approx([100, 200, 300, 400])
    assert [q.trend_value for q in result] == pytest.approx([100, 200, 300, 400])


def test_quarterly_totals_single_quarter_is_flat() -> None:
    result = agg.quarterly_totals([ExpenseRecord(80, datetime(2024, 11, 1), "A")], datetime(2024, 12, 31))

    assert len(result) == 1
    assert result[0].total == pytest.approx(80)
    assert result[0].trend_value == pytest.approx(80)


def test_quarterly_totals_keep_inner_empty_quarters() -> None:
    records = [
        ExpenseRecord(100, datetime(2024, 4, 15), "A"),
        ExpenseRecord(300, datetime(2024, 12, 31), "A"),  # reference instant is included
    ]
    result = agg.quarterly_totals(records, datetime(2024, 12, 31))

    assert [q.total for q in result] == pytest.approx([100, 0, 300])


def test_compare_periods_week() -> None:
    reference = datetime(2024, 3, 15)
    records = [
        ExpenseRecord(50, datetime(2024, 3, 10), "A"),
        ExpenseRecord(10, datetime(2024, 3, 8), "A"),  # boundary counts as current
        ExpenseRecord(25, datetime(2024, 3, 2), "A"),
        ExpenseRecord(500, datetime(2024, 2, 1), "A"),
    ]
    comparison = agg.compare_periods(records, Period.WEEK, reference)

    assert comparison.current_total == pytest.approx(60)
    assert comparison.previous_total == pytest.approx(25)
    assert comparison.difference == pytest.approx(35)
    assert comparison.percent_change == pytest.approx(140)


def test_compare_periods_without_previous_spending() -> None:
    comparison = agg.compare_periods([ExpenseRecord(20, datetime(2024, 3, 10), "A")], "week", datetime(2024, 3, 15))

    assert comparison.previous_total == 0
    assert comparison.percent_change == 0


def test_negative_amounts_are_rejected() -> None:
    with pytest.raises(ValueError):
        ExpenseRecord(-1, DAY1, "A")
    with pytest.raises(ValueError):
        ExpenseRecord(float("nan"), DAY1, "A")


def test_date_range_accepts_plain_dates() -> None:
    date_range = DateRange(date(2024, 5, 1), date(2024, 5, 31))

    assert date_range.start == datetime(2024, 5, 1)
    assert date_range.contains(datetime(2024, 5, 15, 12, 0))
    assert not date_range.contains(datetime(2024, 5, 31, 8, 0))
    assert agg.total_spent([ExpenseRecord(5, datetime(2024, 5, 15, 12, 0), "A")], date_range) == pytest.approx(5)
