"""Plotly visualisation helpers for the computed aggregates.

Each function accepts the list returned by the matching function in
:mod:`expense_insights.aggregation` or :mod:`expense_insights.forecasting`
and produces a `plotly.graph_objects.Figure`.  Figures are returned
unstyled beyond titles and axis labels; currency formatting of hover
labels is left to the caller.
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .models import (
    CategoryAggregate,
    DailyAggregate,
    ForecastSummary,
    QuarterlyAggregate,
    WeekdayAggregate,
)


def _empty_figure(title: str = "No data to display") -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title=title)
    return fig


def create_category_donut_chart(
    aggregates: Sequence[CategoryAggregate],
    title: str | None = None,
) -> go.Figure:
    """Donut chart of spending share per category, coloured per category.

    Parameters
    ----------
    aggregates : sequence of CategoryAggregate
        Output of :func:`~expense_insights.aggregation.category_totals`.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Pie chart with a hole in the middle.
    """
    if not aggregates:
        return _empty_figure()
    fig = go.Figure(
        go.Pie(
            labels=[a.label for a in aggregates],
            values=[a.total for a in aggregates],
            marker={"colors": [a.color for a in aggregates]},
            hole=0.618,
            sort=False,
        )
    )
    fig.update_layout(title=title or "Spending by category")
    return fig


def create_daily_timeline_chart(
    daily: Sequence[DailyAggregate],
    title: str | None = None,
) -> go.Figure:
    """Area-filled line chart of spending per day."""
    if not daily:
        return _empty_figure()
    df = pd.DataFrame({"Day": [d.day for d in daily], "Total": [d.total for d in daily]})
    fig = px.area(df, x="Day", y="Total")
    fig.update_layout(
        title=title or "Spending over time",
        xaxis_title="Day",
        yaxis_title="Total",
    )
    return fig


def create_weekday_bar_chart(
    weekdays: Sequence[WeekdayAggregate],
    title: str | None = None,
) -> go.Figure:
    if not weekdays:
        return _empty_figure()
    df = pd.DataFrame({
        "Weekday": [w.weekday_name for w in weekdays],
        "Total": [w.total for w in weekdays],
    })
    fig = px.bar(df, x="Weekday", y="Total")
    fig.update_layout(
        title=title or "Spending by weekday",
        xaxis_title="Weekday",
        yaxis_title="Total",
    )
    return fig


def create_quarterly_trend_chart(
    quarters: Sequence[QuarterlyAggregate],
    title: str | None = None,
) -> go.Figure:
    """Bars of quarterly totals overlaid with the fitted trend line.

    Parameters
    ----------
    quarters : sequence of QuarterlyAggregate
        Output of :func:`~expense_insights.aggregation.quarterly_totals`.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Combined bar and line chart.
    """
    if not quarters:
        return _empty_figure()
    starts = [q.quarter_start for q in quarters]
    fig = go.Figure()
    fig.add_trace(go.Bar(x=starts, y=[q.total for q in quarters], name="Total"))
    fig.add_trace(go.Scatter(
        x=starts,
        y=[q.trend_value for q in quarters],
        mode="lines",
        name="Trend",
        line={"dash": "dash"},
    ))
    fig.update_layout(
        title=title or "Quarterly spending trend",
        xaxis_title="Quarter",
        yaxis_title="Total",
    )
    return fig


def create_forecast_bar_chart(summary: ForecastSummary, title: str | None = None) -> go.Figure:
    """Grouped bars of current vs predicted spending per category."""
    if not summary.forecasts:
        return _empty_figure("Not enough history to forecast")
    rows = []
    for forecast in summary.forecasts:
        rows.append({"Category": forecast.label, "Series": "Current", "Total": forecast.current_period_total})
        rows.append({"Category": forecast.label, "Series": "Predicted", "Total": forecast.predicted_next_period_total})
    df = pd.DataFrame(rows)
    fig = px.bar(df, x="Category", y="Total", color="Series", barmode="group")
    fig.update_layout(
        title=title or f"Next month forecast (confidence {summary.average_confidence:.0%})",
        xaxis_title="Category",
        yaxis_title="Total",
    )
    return fig
