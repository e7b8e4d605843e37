"""
Visualization components using Plotly for the dashboard views.

Each builder receives the engine's DashboardUpdate explicitly and turns
it into a figure; none of them reach into engine state.
"""

from typing import Dict, List, Optional, Tuple

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from config.settings import TransitionConfig
from core.engine import DashboardUpdate
from core.records import (
    COMPANY_SIZE_NAMES,
    COMPANY_SIZES,
    DIMENSION_NAMES,
    EXPERIENCE_LEVEL_NAMES,
    EXPERIENCE_LEVELS,
    NUMERIC_DIMENSIONS,
)
from core.scales import LinearScale, nice_domain


# d3 category10, matching the experience-level colours of the line legend
EXPERIENCE_COLORS: Dict[str, str] = dict(zip(EXPERIENCE_LEVELS, px.colors.qualitative.D3))
COMPANY_SIZE_COLORS: Dict[str, str] = {"S": "#1f77b4", "M": "#2ca02c", "L": "#ff7f0e"}

DEFAULT_BAR_CEILING = 10000.0


def _transition(duration_ms: int) -> dict:
    return dict(duration=duration_ms, easing="cubic-in-out")


def create_company_size_pie(distribution: Dict[str, int]) -> go.Figure:
    """Static overview of how many records fall into each company size."""
    sizes = [size for size in COMPANY_SIZES if size in distribution]
    fig = go.Figure(go.Pie(
        labels=[COMPANY_SIZE_NAMES[size] for size in sizes],
        values=[distribution[size] for size in sizes],
        marker=dict(
            colors=[COMPANY_SIZE_COLORS[size] for size in sizes],
            line=dict(color="white", width=2),
        ),
        sort=False,
        hovertemplate="%{label}: %{value} records (%{percent})<extra></extra>",
    ))
    fig.update_layout(
        title="Company Size Distribution (Overview)",
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def create_salary_bar_chart(
    update: DashboardUpdate,
    transitions: Optional[TransitionConfig] = None,
) -> go.Figure:
    """
    Average salary per experience level over the brushed records.

    Every level keeps its bar; an empty group renders at zero height.
    Bars outside the selected category are drawn at reduced opacity.
    """
    transitions = transitions or TransitionConfig()
    levels = list(EXPERIENCE_LEVELS)
    means = [update.aggregate_rows[level].mean_salary for level in levels]
    counts = [update.aggregate_rows[level].count for level in levels]
    opacities = [
        transitions.bar_emphasized_opacity if update.category_emphasis[level] else transitions.bar_muted_opacity
        for level in levels
    ]

    fig = go.Figure(go.Bar(
        x=levels,
        y=means,
        customdata=counts,
        marker=dict(
            color=[EXPERIENCE_COLORS[level] for level in levels],
            opacity=opacities,
        ),
        hovertemplate="%{x}: %{y:$,.0f} (%{customdata} records)<extra></extra>",
        uid="salary-bars",
    ))

    ceiling = max(means) or DEFAULT_BAR_CEILING
    fig.update_layout(
        title="Average Salary by Experience Level",
        xaxis=dict(
            title="Experience Level",
            tickmode="array",
            tickvals=levels,
            ticktext=[EXPERIENCE_LEVEL_NAMES[level] for level in levels],
        ),
        yaxis=dict(
            title="Average Salary (USD)",
            tickformat="$,.0f",
            range=list(nice_domain(0.0, ceiling)),
        ),
        showlegend=False,
        transition=_transition(transitions.bar_duration_ms),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def line_points(
    row: Tuple[float, ...],
    scales: Dict[str, LinearScale],
) -> List[Tuple[int, float]]:
    """
    Axis positions of one record's polyline.

    Values outside an axis domain are left out of the path; the caller
    drops records with fewer than two remaining points.
    """
    points = []
    for axis_index, (dimension, value) in enumerate(zip(NUMERIC_DIMENSIONS, row)):
        scale = scales[dimension]
        if pd.notna(value) and scale.contains(value):
            points.append((axis_index, scale.normalize(value)))
    return points


def _line_xy(points: List[Tuple[int, float]]) -> Tuple[List[int], List[float]]:
    return [x for x, _ in points], [y for _, y in points]


def create_parallel_lines(
    frame: pd.DataFrame,
    update: DashboardUpdate,
    scales: Dict[str, LinearScale],
    transitions: Optional[TransitionConfig] = None,
) -> go.Figure:
    """
    Parallel-coordinates view over year, salary and remote ratio.

    Every record keeps its line, drawn as its own trace with the uid
    ``record-<position>`` so Plotly matches it across updates and animates
    its colour and opacity in place. Emphasised records are coloured by
    experience level; the rest are greyed out at low opacity. Legend
    entries are empty traces, one per level.
    """
    transitions = transitions or TransitionConfig()
    fig = go.Figure()

    columns = list(NUMERIC_DIMENSIONS) + ["experience_level"]
    for position, row in enumerate(frame[columns].itertuples(index=False, name=None)):
        *values, level = row
        points = line_points(tuple(values), scales)
        if len(points) < 2:
            continue
        xs, ys = _line_xy(points)
        if update.record_emphasis[position] and level in EXPERIENCE_COLORS:
            color, opacity = EXPERIENCE_COLORS[level], transitions.line_emphasized_opacity
        else:
            color, opacity = transitions.line_muted_color, transitions.line_muted_opacity
        fig.add_trace(go.Scatter(
            x=xs,
            y=ys,
            mode="lines",
            line=dict(color=color, width=1.5),
            opacity=opacity,
            hoverinfo="skip",
            showlegend=False,
            uid=f"record-{position}",
        ))

    for level in EXPERIENCE_LEVELS:
        fig.add_trace(go.Scatter(
            x=[None],
            y=[None],
            mode="lines",
            name=EXPERIENCE_LEVEL_NAMES[level],
            line=dict(color=EXPERIENCE_COLORS[level], width=1.5),
            uid=f"legend-{level}",
        ))

    shapes = []
    annotations = []
    for axis_index, dimension in enumerate(NUMERIC_DIMENSIONS):
        scale = scales[dimension]
        shapes.append(dict(
            type="line", x0=axis_index, x1=axis_index, y0=0, y1=1,
            line=dict(color="#444", width=1),
        ))
        low, high = sorted(scale.domain)
        annotations.extend([
            dict(x=axis_index, y=1.08, text=DIMENSION_NAMES[dimension], showarrow=False),
            dict(x=axis_index, y=-0.05, text=_format_tick(dimension, low), showarrow=False),
            dict(x=axis_index, y=1.02, text=_format_tick(dimension, high), showarrow=False),
        ])

        bounds = update.ranges.get(dimension)
        if bounds is not None:
            shapes.append(dict(
                type="rect",
                x0=axis_index - 0.06, x1=axis_index + 0.06,
                y0=max(scale.normalize(bounds.low), 0.0),
                y1=min(scale.normalize(bounds.high), 1.0),
                fillcolor="rgba(68,68,68,0.15)",
                line=dict(color="#444", width=1),
            ))

    fig.update_layout(
        title="Salary vs Year vs Remote (by Experience)",
        xaxis=dict(visible=False, range=[-0.3, len(NUMERIC_DIMENSIONS) - 0.7]),
        yaxis=dict(visible=False, range=[-0.1, 1.12]),
        shapes=shapes,
        annotations=annotations,
        legend=dict(title="Experience Level", orientation="h", y=-0.15),
        transition=_transition(transitions.line_duration_ms),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def _format_tick(dimension: str, value: float) -> str:
    if dimension == "salary_in_usd":
        return f"${value:,.0f}"
    if dimension == "work_year":
        return f"{value:.0f}"
    return f"{value:g}"
