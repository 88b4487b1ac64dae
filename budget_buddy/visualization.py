"""Plotly figure builders for the statistics views.

Each function accepts the structures returned by :mod:`budget_buddy.analytics`
or :mod:`budget_buddy.budgets` and returns a
``plotly.graph_objects.Figure``.  Rendering is left to the caller.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .budgets import STATUS_EXCEEDED, STATUS_WARNING, BudgetProgress
from .models import CategoryBreakdownEntry, MonthlyTotals

STATUS_COLORS = {
    'good': '#2ECC71',
    STATUS_WARNING: '#F1C40F',
    STATUS_EXCEEDED: '#E74C3C',
}


def _empty_figure() -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title="No data to display")
    return fig


def create_category_donut(
    breakdown: Iterable[CategoryBreakdownEntry],
    colors: Optional[Mapping[str, str]] = None,
    title: str | None = None,
) -> go.Figure:
    """Donut chart of spending per category.

    Parameters
    ----------
    breakdown : iterable of CategoryBreakdownEntry
        Rows as returned by :func:`budget_buddy.analytics.spent_by_category`.
    colors : mapping, optional
        Category id to hex colour; categories without one use Plotly's
        default palette.
    title : str, optional
        Chart title.
    """
    rows: List[CategoryBreakdownEntry] = list(breakdown)
    if not rows:
        return _empty_figure()
    df = pd.DataFrame(
        {
            'Category': [row.category_name for row in rows],
            'Amount': [row.amount for row in rows],
            'Category ID': [row.category_id for row in rows],
        }
    )
    color_map: Dict[str, str] = {}
    if colors:
        color_map = {
            name: colors[cat_id]
            for name, cat_id in zip(df['Category'], df['Category ID'])
            if cat_id in colors
        }
    fig = px.pie(
        df,
        names='Category',
        values='Amount',
        hole=0.55,
        color='Category',
        color_discrete_map=color_map or None,
    )
    fig.update_traces(textinfo='percent+label', sort=False)
    fig.update_layout(title=title or "Spending by category", showlegend=False)
    return fig


def create_monthly_totals_chart(totals_by_month: Mapping[str, MonthlyTotals], title: str | None = None) -> go.Figure:
    """Grouped bars of income and expense for each month key."""
    if not totals_by_month:
        return _empty_figure()
    months = sorted(totals_by_month)
    fig = go.Figure()
    fig.add_trace(go.Bar(name='Income', x=months, y=[totals_by_month[m].income for m in months]))
    fig.add_trace(go.Bar(name='Expense', x=months, y=[totals_by_month[m].expense for m in months]))
    fig.update_layout(
        barmode='group',
        title=title or "Income vs expense",
        xaxis_title="Month",
        yaxis_title="Amount",
    )
    return fig


def create_budget_progress_bar(progress: Optional[BudgetProgress], title: str | None = None) -> go.Figure:
    """Horizontal bar filled to the clamped percentage used."""
    if progress is None:
        return _empty_figure()
    fig = go.Figure(
        go.Bar(
            x=[progress.clamped_percentage],
            y=[title or "Budget"],
            orientation='h',
            marker_color=STATUS_COLORS.get(progress.status, STATUS_COLORS['good']),
            text=[f"{progress.percentage:.0f}%"],
            textposition='auto',
        )
    )
    fig.update_layout(
        title=title or "Budget used",
        xaxis=dict(range=[0, 100], title="Percent used"),
        showlegend=False,
    )
    return fig
