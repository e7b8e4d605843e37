"""
View adapters: subscribe to the engine and keep each view's latest figure.

Adapters only read the update they are handed. Interactions go back
through the engine's event methods.
"""

from typing import Dict, Optional

import plotly.graph_objects as go

from config.settings import TransitionConfig
from core.aggregation import category_distribution
from core.engine import CrossFilterEngine, DashboardUpdate
from core.visualizations import (
    create_company_size_pie,
    create_parallel_lines,
    create_salary_bar_chart,
)


class ViewAdapter:
    """Base adapter; ``render`` is the engine listener."""

    def __init__(self, engine: CrossFilterEngine, transitions: Optional[TransitionConfig] = None):
        self.engine = engine
        self.transitions = transitions or TransitionConfig()
        self.figure: Optional[go.Figure] = None
        self.render_count = 0

    def attach(self) -> "ViewAdapter":
        self.engine.subscribe(self.render)
        return self

    def detach(self) -> None:
        self.engine.unsubscribe(self.render)

    def render(self, update: DashboardUpdate) -> None:
        self.figure = self.build(update)
        self.render_count += 1

    def build(self, update: DashboardUpdate) -> go.Figure:
        raise NotImplementedError


class BarViewAdapter(ViewAdapter):
    """Average salary bars; clicks toggle the category highlight."""

    def build(self, update: DashboardUpdate) -> go.Figure:
        return create_salary_bar_chart(update, self.transitions)

    def click(self, level: str) -> Optional[DashboardUpdate]:
        return self.engine.on_category_click(level)


class LineViewAdapter(ViewAdapter):
    """Parallel coordinates; brushes set per-dimension ranges."""

    def build(self, update: DashboardUpdate) -> go.Figure:
        return create_parallel_lines(self.engine.store.frame, update, self.engine.scales, self.transitions)

    def brush(self, dimension: str, pixel_extent) -> Optional[DashboardUpdate]:
        return self.engine.on_brush_change(dimension, pixel_extent)


class DistributionViewAdapter(ViewAdapter):
    """Company-size pie over the full dataset; it does not react to the filters."""

    def __init__(self, engine: CrossFilterEngine, transitions: Optional[TransitionConfig] = None):
        super().__init__(engine, transitions)
        self.distribution: Dict[str, int] = category_distribution(engine.store.frame, "company_size")

    def render(self, update: DashboardUpdate) -> None:
        if self.figure is None:
            super().render(update)

    def build(self, update: DashboardUpdate) -> go.Figure:
        return create_company_size_pie(self.distribution)
