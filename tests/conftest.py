"""Test fixtures and configuration for pytest."""

import pytest
import pandas as pd
import numpy as np

from core.engine import CrossFilterEngine
from core.records import RecordStore


@pytest.fixture
def scenario_df():
    """Three-record dataset used by the walkthrough scenario."""
    return pd.DataFrame({
        'work_year': [2021, 2022, 2023],
        'salary_in_usd': [50000.0, 150000.0, 160000.0],
        'remote_ratio': [50.0, 100.0, 0.0],
        'experience_level': ['EN', 'SE', 'SE'],
        'company_size': ['S', 'M', 'L'],
    })


@pytest.fixture
def scenario_store(scenario_df):
    return RecordStore(scenario_df)


@pytest.fixture
def scenario_engine(scenario_store):
    return CrossFilterEngine(scenario_store, line_view_height=400)


@pytest.fixture
def sample_salary_df():
    """Larger random dataset with the salary schema."""
    np.random.seed(42)
    n = 200
    return pd.DataFrame({
        'work_year': np.random.choice([2020, 2021, 2022], n),
        'salary_in_usd': np.round(np.random.lognormal(11.5, 0.4, n), 0),
        'remote_ratio': np.random.choice([0.0, 50.0, 100.0], n),
        'experience_level': np.random.choice(['EN', 'MI', 'SE', 'EX'], n),
        'company_size': np.random.choice(['S', 'M', 'L'], n),
    })


@pytest.fixture
def sample_engine(sample_salary_df):
    return CrossFilterEngine(RecordStore(sample_salary_df), line_view_height=400)
