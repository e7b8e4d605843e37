"""Selection state for the cross-filtered dashboard: range brushes and a category toggle."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

import numpy as np
import pandas as pd

from core.records import EXPERIENCE_LEVELS, NUMERIC_DIMENSIONS, Record


@dataclass(frozen=True)
class DimensionRange:
    """Closed interval [low, high] on one numeric dimension."""

    low: float
    high: float

    def contains(self, value: float) -> bool:
        return self.low <= value <= self.high


def _is_valid_bound(value: Any) -> bool:
    try:
        return not math.isnan(float(value))
    except (TypeError, ValueError):
        return False


class FilterState:
    """
    Current selection of the dashboard.

    Ranges are a hard filter (they decide which records count toward the
    aggregates). The selected category is a separate highlight and never
    takes part in membership.
    """

    def __init__(self):
        self._ranges: Dict[str, DimensionRange] = {}
        self._selected_category: Optional[str] = None

    @property
    def ranges(self) -> Dict[str, DimensionRange]:
        return dict(self._ranges)

    @property
    def selected_category(self) -> Optional[str]:
        return self._selected_category

    @property
    def is_empty(self) -> bool:
        return not self._ranges and self._selected_category is None

    def set_range(self, dimension: str, low: float, high: float) -> bool:
        """
        Replace the range on ``dimension``.

        Bounds must already be in ascending data order. Returns False and
        leaves the state untouched for an unknown dimension, a NaN bound
        or low > high.
        """
        if dimension not in NUMERIC_DIMENSIONS:
            return False
        if not (_is_valid_bound(low) and _is_valid_bound(high)):
            return False
        low, high = float(low), float(high)
        if low > high:
            return False

        self._ranges[dimension] = DimensionRange(low, high)
        return True

    def clear_range(self, dimension: str) -> bool:
        """Remove the range on ``dimension``; clearing an inactive brush is a no-op."""
        if dimension not in NUMERIC_DIMENSIONS:
            return False
        self._ranges.pop(dimension, None)
        return True

    def toggle_category(self, level: str) -> bool:
        """Select ``level``, or deselect it when it is already the selection."""
        if level not in EXPERIENCE_LEVELS:
            return False
        if self._selected_category == level:
            self._selected_category = None
        else:
            self._selected_category = level
        return True

    def clear(self) -> None:
        self._ranges.clear()
        self._selected_category = None

    def is_member(self, record: Union[Record, Mapping[str, Any]]) -> bool:
        """True when every active range contains the record's value."""
        for dimension, bounds in self._ranges.items():
            if isinstance(record, Record):
                value = getattr(record, dimension)
            else:
                value = record[dimension]
            if not bounds.contains(value):
                return False
        return True

    def member_mask(self, frame: pd.DataFrame) -> np.ndarray:
        """Vectorised ``is_member`` over every row of ``frame``."""
        mask = np.ones(len(frame), dtype=bool)
        for dimension, bounds in self._ranges.items():
            values = frame[dimension].to_numpy(dtype="float64")
            mask &= (values >= bounds.low) & (values <= bounds.high)
        return mask

    def matches_category(self, level: str) -> bool:
        return self._selected_category is None or level == self._selected_category

    def __repr__(self) -> str:
        ranges = ", ".join(f"{dim}=[{r.low:g}, {r.high:g}]" for dim, r in self._ranges.items())
        return f"FilterState(ranges={{{ranges}}}, selected_category={self._selected_category!r})"
