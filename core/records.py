"""
Record store for the employment salary dataset.

Holds the immutable, ordered set of records loaded for a dashboard
session, both as frozen dataclasses and as a pandas DataFrame for
vectorised filtering.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Iterable, Iterator, Mapping, Tuple, Union

import pandas as pd


EXPERIENCE_LEVELS: Tuple[str, ...] = ("EN", "MI", "SE", "EX")
EXPERIENCE_LEVEL_NAMES: Dict[str, str] = {
    "EN": "Entry",
    "MI": "Mid",
    "SE": "Senior",
    "EX": "Executive",
}

COMPANY_SIZES: Tuple[str, ...] = ("S", "M", "L")
COMPANY_SIZE_NAMES: Dict[str, str] = {"S": "Small", "M": "Medium", "L": "Large"}

NUMERIC_DIMENSIONS: Tuple[str, ...] = ("work_year", "salary_in_usd", "remote_ratio")
DIMENSION_NAMES: Dict[str, str] = {
    "work_year": "Year",
    "salary_in_usd": "Salary (USD)",
    "remote_ratio": "Remote Ratio (%)",
}

# Fixed category domain for every groupable field
CATEGORY_DOMAINS: Dict[str, Tuple[str, ...]] = {
    "experience_level": EXPERIENCE_LEVELS,
    "company_size": COMPANY_SIZES,
}


@dataclass(frozen=True)
class Record:
    """One employment observation."""

    work_year: int
    salary_in_usd: float
    remote_ratio: float
    experience_level: str
    company_size: str

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "Record":
        return cls(
            work_year=int(row["work_year"]),
            salary_in_usd=float(row["salary_in_usd"]),
            remote_ratio=float(row["remote_ratio"]),
            experience_level=str(row["experience_level"]),
            company_size=str(row["company_size"]),
        )


RECORD_FIELDS: Tuple[str, ...] = tuple(f.name for f in fields(Record))


def records_to_frame(records: Iterable[Union[Record, Mapping[str, Any]]]) -> pd.DataFrame:
    """Build a DataFrame with the record columns, in record order."""
    rows = []
    for record in records:
        if not isinstance(record, Record):
            record = Record.from_mapping(record)
        rows.append((
            record.work_year,
            record.salary_in_usd,
            record.remote_ratio,
            record.experience_level,
            record.company_size,
        ))
    frame = pd.DataFrame(rows, columns=list(RECORD_FIELDS))
    return _coerce_dtypes(frame)


def _coerce_dtypes(frame: pd.DataFrame) -> pd.DataFrame:
    return frame.astype({
        "work_year": "int64",
        "salary_in_usd": "float64",
        "remote_ratio": "float64",
        "experience_level": "object",
        "company_size": "object",
    })


class RecordStore:
    """
    Immutable, ordered collection of records.

    The row position of a record in ``frame`` is its identity for the
    lifetime of the session; per-record emphasis flags are aligned to it.
    """

    def __init__(self, frame: pd.DataFrame):
        missing = [col for col in RECORD_FIELDS if col not in frame.columns]
        if missing:
            raise ValueError(f"Record columns missing: {', '.join(missing)}")

        self._frame = _coerce_dtypes(frame.loc[:, list(RECORD_FIELDS)].reset_index(drop=True))
        self._records: Tuple[Record, ...] = tuple(
            Record(int(year), float(salary), float(remote), str(level), str(size))
            for year, salary, remote, level, size in self._frame.itertuples(index=False, name=None)
        )

    @classmethod
    def from_records(cls, records: Iterable[Union[Record, Mapping[str, Any]]]) -> "RecordStore":
        return cls(records_to_frame(records))

    @property
    def frame(self) -> pd.DataFrame:
        """Column view of the records. Callers must treat it as read-only."""
        return self._frame

    @property
    def records(self) -> Tuple[Record, ...]:
        return self._records

    def column(self, name: str) -> pd.Series:
        return self._frame[name]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    def __getitem__(self, index: int) -> Record:
        return self._records[index]
