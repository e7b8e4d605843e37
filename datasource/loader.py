import logging
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np
import pandas as pd

from config.settings import AppConfig
from core.records import COMPANY_SIZES, EXPERIENCE_LEVELS, NUMERIC_DIMENSIONS, RECORD_FIELDS


logger = logging.getLogger(__name__)

CATEGORY_COLUMNS = ("experience_level", "company_size")


def load_salaries(path: Union[str, Path]) -> pd.DataFrame:
    """
    Load the salary CSV into a DataFrame with the record columns.

    Args:
        path: CSV file path (``ds_salaries.csv`` layout; extra columns are ignored)

    Returns:
        DataFrame with work_year, salary_in_usd, remote_ratio,
        experience_level and company_size

    Raises:
        ValueError: when a required column is missing
    """
    raw = pd.read_csv(path)
    return normalize_salaries(raw)


def normalize_salaries(raw: pd.DataFrame) -> pd.DataFrame:
    """Keep the record columns, coerce numerics and drop incomplete rows."""
    missing = [col for col in RECORD_FIELDS if col not in raw.columns]
    if missing:
        raise ValueError(f"Dataset is missing required columns: {', '.join(missing)}")

    df = raw.loc[:, list(RECORD_FIELDS)].copy()
    for col in NUMERIC_DIMENSIONS:
        df[col] = pd.to_numeric(df[col], errors="coerce")
    for col in CATEGORY_COLUMNS:
        df[col] = df[col].astype(str).str.strip()

    incomplete = df[list(NUMERIC_DIMENSIONS)].isna().any(axis=1)
    if incomplete.any():
        logger.warning("Dropping %d rows with missing or non-numeric values", int(incomplete.sum()))
        df = df.loc[~incomplete]

    df["work_year"] = df["work_year"].astype("int64")
    return df.reset_index(drop=True)


def load_sample(n: int = 600, seed: int = 42) -> pd.DataFrame:
    """Synthetic dataset with the salary schema, for running without the CSV."""
    rng = np.random.default_rng(seed)
    levels = rng.choice(EXPERIENCE_LEVELS, n, p=[0.15, 0.35, 0.42, 0.08])
    base_salary = {"EN": 60_000, "MI": 90_000, "SE": 140_000, "EX": 190_000}

    salaries = np.array([rng.lognormal(np.log(base_salary[level]), 0.35) for level in levels])

    return pd.DataFrame({
        "work_year": rng.choice([2020, 2021, 2022], n, p=[0.12, 0.36, 0.52]),
        "salary_in_usd": np.round(salaries, 0),
        "remote_ratio": rng.choice([0, 50, 100], n, p=[0.21, 0.16, 0.63]).astype(float),
        "experience_level": levels,
        "company_size": rng.choice(COMPANY_SIZES, n, p=[0.14, 0.53, 0.33]),
    })


def load_dataset(config: Optional[AppConfig] = None) -> Tuple[pd.DataFrame, str]:
    """
    Load the configured CSV, falling back to the synthetic sample.

    Returns:
        (DataFrame, dataset name)
    """
    config = config or AppConfig.from_env()
    path = Path(config.dataset_path)
    if path.exists():
        logger.info("Loading salaries from %s", path)
        return load_salaries(path), path.name

    logger.warning("%s not found, using a synthetic sample of %d rows", path, config.sample_size)
    return load_sample(config.sample_size), "Sample Salaries"
