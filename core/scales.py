"""
Linear scales for the parallel-coordinates axes.

The line view draws each numeric dimension on a vertical axis whose
pixel range runs from the bottom (``height``) to the top (``0``). Brush
selections arrive in pixels and are inverted back to data values here.
"""

import math
from dataclasses import dataclass
from typing import Dict, Tuple

import pandas as pd

from core.records import NUMERIC_DIMENSIONS


def _tick_increment(start: float, stop: float, count: int) -> float:
    step = abs(stop - start) / max(count, 1)
    power = 10 ** math.floor(math.log10(step))
    error = step / power
    if error >= math.sqrt(50):
        factor = 10
    elif error >= math.sqrt(10):
        factor = 5
    elif error >= math.sqrt(2):
        factor = 2
    else:
        factor = 1
    return factor * power


def nice_domain(start: float, stop: float, count: int = 10) -> Tuple[float, float]:
    """Extend [start, stop] outward to round tick values."""
    if start == stop or not (math.isfinite(start) and math.isfinite(stop)):
        return start, stop

    reverse = stop < start
    if reverse:
        start, stop = stop, start

    for _ in range(10):
        step = _tick_increment(start, stop, count)
        nice_start = math.floor(start / step) * step
        nice_stop = math.ceil(stop / step) * step
        if (nice_start, nice_stop) == (start, stop):
            break
        start, stop = nice_start, nice_stop

    return (stop, start) if reverse else (start, stop)


@dataclass(frozen=True)
class LinearScale:
    """Maps a data interval onto a pixel interval."""

    domain: Tuple[float, float]
    range: Tuple[float, float]

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d0 == d1:
            return (r0 + r1) / 2
        return r0 + (value - d0) / (d1 - d0) * (r1 - r0)

    def invert(self, pixel: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if r0 == r1:
            return d0
        return d0 + (pixel - r0) / (r1 - r0) * (d1 - d0)

    def normalize(self, value: float) -> float:
        """Position of ``value`` in the domain, 0 at the low end and 1 at the high end."""
        d0, d1 = self.domain
        if d0 == d1:
            return 0.5
        return (value - d0) / (d1 - d0)

    def contains(self, value: float) -> bool:
        lo, hi = sorted(self.domain)
        return lo <= value <= hi

    def nice(self, count: int = 10) -> "LinearScale":
        return LinearScale(nice_domain(*self.domain, count=count), self.range)


def build_dimension_scales(frame: pd.DataFrame, height: float) -> Dict[str, LinearScale]:
    """
    Axis scales for the line view, one per numeric dimension.

    * salary: data extent padded by 5% (low end clamped at 0), then niced
    * remote ratio: fixed [0, 100]
    * year: data extent niced to about 4 ticks, widened by half a year
      on each side when every record has the same year
    """
    pixel_range = (float(height), 0.0)
    scales: Dict[str, LinearScale] = {}

    for dimension in NUMERIC_DIMENSIONS:
        values = frame[dimension].dropna() if dimension in frame.columns else pd.Series(dtype="float64")
        if values.empty:
            scales[dimension] = LinearScale((0.0, 1.0), pixel_range)
            continue

        low, high = float(values.min()), float(values.max())

        if dimension == "salary_in_usd":
            padding = (high - low) * 0.05
            low = low if low <= 0 else max(low - padding, 0.0)
            high = high + padding
            scales[dimension] = LinearScale((low, high), pixel_range).nice()
        elif dimension == "remote_ratio":
            scales[dimension] = LinearScale((0.0, 100.0), pixel_range)
        elif dimension == "work_year":
            if low == high:
                low, high = low - 0.5, high + 0.5
            scales[dimension] = LinearScale((low, high), pixel_range).nice(4 if len(values) > 1 else 1)

    return scales
