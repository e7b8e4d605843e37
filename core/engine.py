"""
Coordinated cross-filter engine.

Owns the dashboard's FilterState, turns interaction events into state
transitions and publishes one consistent target state to every view:

* range brushes are a hard filter - records outside them do not count
  toward the bar aggregates;
* the category click is a soft highlight - it never removes a record,
  it only decides which lines and bars are emphasised.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from core.aggregation import AggregateRow, aggregate
from core.filtering import DimensionRange, FilterState
from core.records import EXPERIENCE_LEVELS, RecordStore
from core.scales import LinearScale, build_dimension_scales


logger = logging.getLogger(__name__)

Extent = Sequence[float]


@dataclass(frozen=True)
class DashboardUpdate:
    """Target state pushed to the view adapters after every transition."""

    aggregate_rows: Dict[str, AggregateRow]
    record_emphasis: Tuple[bool, ...]
    category_emphasis: Dict[str, bool]
    selected_category: Optional[str]
    ranges: Dict[str, DimensionRange]
    member_count: int
    total_count: int

    @property
    def emphasized_count(self) -> int:
        return sum(self.record_emphasis)


Listener = Callable[[DashboardUpdate], None]


def _as_extent(extent: Any) -> Optional[Tuple[float, float]]:
    """Two numeric bounds as floats, or None when ``extent`` is not a numeric pair."""
    try:
        if len(extent) != 2:
            return None
        return float(extent[0]), float(extent[1])
    except (TypeError, ValueError, KeyError, IndexError):
        return None


class CrossFilterEngine:
    """
    State machine behind the dashboard interactions.

    Usage:
        engine = CrossFilterEngine(RecordStore(df), line_view_height=400)
        engine.subscribe(bar_adapter.render)
        engine.on_range_change("salary_in_usd", (100_000, 200_000))
        engine.on_category_click("SE")

    Every accepted event runs ``recompute()`` synchronously and returns
    the published update. Rejected events return None and leave both the
    state and the last published update untouched.
    """

    group_key = "experience_level"

    def __init__(
        self,
        store: RecordStore,
        scales: Optional[Dict[str, LinearScale]] = None,
        *,
        line_view_height: float = 400,
    ):
        self._store = store
        self._state = FilterState()
        self._scales = scales if scales is not None else build_dimension_scales(store.frame, line_view_height)
        self._listeners: List[Listener] = []
        self._update = self._compute_update()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def store(self) -> RecordStore:
        return self._store

    @property
    def scales(self) -> Dict[str, LinearScale]:
        return dict(self._scales)

    @property
    def ranges(self) -> Dict[str, DimensionRange]:
        return self._state.ranges

    @property
    def selected_category(self) -> Optional[str]:
        return self._state.selected_category

    @property
    def update(self) -> DashboardUpdate:
        """The most recently published update."""
        return self._update

    def filtered_frame(self) -> pd.DataFrame:
        """Records inside every active range."""
        frame = self._store.frame
        return frame.loc[self._state.member_mask(frame)]

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------
    def subscribe(self, listener: Listener, replay: bool = True) -> None:
        """Register a view; with ``replay`` it immediately receives the current state."""
        self._listeners.append(listener)
        if replay:
            listener(self._update)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # Interaction events
    # ------------------------------------------------------------------
    def on_brush_change(self, dimension: str, pixel_extent: Optional[Extent]) -> Optional[DashboardUpdate]:
        """
        Brush moved on the ``dimension`` axis of the line view.

        ``pixel_extent`` is the brush selection in screen pixels, or None
        when the brush was cleared. Screen y grows downward while data
        grows upward, so the inverted pair is reordered before use.
        """
        if pixel_extent is None:
            return self.on_range_change(dimension, None)

        scale = self._scales.get(dimension)
        pixels = _as_extent(pixel_extent)
        if scale is None or pixels is None:
            logger.debug("Rejected brush on %s: %r", dimension, pixel_extent)
            return None

        low, high = sorted(scale.invert(p) for p in pixels)
        return self.on_range_change(dimension, (low, high))

    def on_range_change(self, dimension: str, data_extent: Optional[Extent]) -> Optional[DashboardUpdate]:
        """Set (or with None, clear) the data-space range of ``dimension``."""
        if data_extent is None:
            accepted = self._state.clear_range(dimension)
        else:
            bounds = _as_extent(data_extent)
            accepted = bounds is not None and self._state.set_range(dimension, *bounds)

        if not accepted:
            logger.debug("Rejected range on %s: %r", dimension, data_extent)
            return None
        return self.recompute()

    def on_category_click(self, level: str) -> Optional[DashboardUpdate]:
        """Toggle the highlighted experience level."""
        if not self._state.toggle_category(level):
            logger.debug("Rejected category click: %r", level)
            return None
        return self.recompute()

    def reset(self) -> DashboardUpdate:
        """Clear every brush and the category selection."""
        self._state.clear()
        return self.recompute()

    # ------------------------------------------------------------------
    # Recompute / publish
    # ------------------------------------------------------------------
    def recompute(self) -> DashboardUpdate:
        """Rebuild the target state from scratch and push it to every view."""
        self._update = self._compute_update()
        logger.debug(
            "Recomputed: %d/%d members, %d emphasised, state=%r",
            self._update.member_count,
            self._update.total_count,
            self._update.emphasized_count,
            self._state,
        )
        for listener in list(self._listeners):
            listener(self._update)
        return self._update

    def _compute_update(self) -> DashboardUpdate:
        frame = self._store.frame
        members = self._state.member_mask(frame)
        selected = self._state.selected_category

        aggregate_rows = aggregate(frame.loc[members], self.group_key)

        if selected is None:
            emphasis = members
        else:
            emphasis = members & (frame[self.group_key].to_numpy() == selected)

        return DashboardUpdate(
            aggregate_rows=aggregate_rows,
            record_emphasis=tuple(bool(flag) for flag in emphasis),
            category_emphasis={level: self._state.matches_category(level) for level in EXPERIENCE_LEVELS},
            selected_category=selected,
            ranges=self._state.ranges,
            member_count=int(np.count_nonzero(members)),
            total_count=len(self._store),
        )
