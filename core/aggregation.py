"""
Grouped statistics over record subsets.

Every result covers the full fixed category domain of the grouping
field, so views always receive a stable set of keys.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Tuple, Union

import pandas as pd

from core.records import CATEGORY_DOMAINS, Record, records_to_frame


RecordsLike = Union[pd.DataFrame, Iterable[Record]]


@dataclass(frozen=True)
class AggregateRow:
    """Count and mean salary of one category within a subset."""

    count: int
    mean_salary: float


def _as_frame(records: RecordsLike) -> pd.DataFrame:
    if isinstance(records, pd.DataFrame):
        return records
    return records_to_frame(records)


def _domain_for(group_key: str) -> Tuple[str, ...]:
    try:
        return CATEGORY_DOMAINS[group_key]
    except KeyError:
        raise ValueError(f"No fixed category domain for '{group_key}'") from None


def aggregate(
    records: RecordsLike,
    group_key: str = "experience_level",
    value_column: str = "salary_in_usd",
) -> Dict[str, AggregateRow]:
    """
    Count and mean of ``value_column`` per category of ``group_key``.

    Args:
        records: Subset of the record store (DataFrame or Record sequence)
        group_key: Categorical field to group by
        value_column: Numeric field to average

    Returns:
        Mapping category -> AggregateRow in domain order. Categories with
        no records get count 0 and mean 0.0; values outside the domain
        are ignored.
    """
    domain = _domain_for(group_key)
    frame = _as_frame(records)

    if frame.empty:
        return {category: AggregateRow(count=0, mean_salary=0.0) for category in domain}

    grouped = (
        frame.groupby(group_key)[value_column]
        .agg(["count", "mean"])
        .reindex(list(domain))
    )
    grouped["count"] = grouped["count"].fillna(0).astype(int)
    grouped["mean"] = grouped["mean"].fillna(0.0)

    return {
        category: AggregateRow(
            count=int(grouped.at[category, "count"]),
            mean_salary=float(grouped.at[category, "mean"]),
        )
        for category in domain
    }


def category_distribution(records: RecordsLike, group_key: str = "company_size") -> Dict[str, int]:
    """Record count per category of ``group_key`` in domain order."""
    domain = _domain_for(group_key)
    frame = _as_frame(records)
    if frame.empty:
        return {category: 0 for category in domain}

    counts = frame[group_key].value_counts().reindex(list(domain), fill_value=0)
    return {category: int(counts[category]) for category in domain}
