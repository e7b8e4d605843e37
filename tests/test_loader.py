"""Tests for dataset loading."""

import pandas as pd
import pytest

from config.settings import AppConfig
from core.records import RECORD_FIELDS, RecordStore
from datasource.loader import load_dataset, load_salaries, load_sample, normalize_salaries


CSV_TEXT = """work_year,experience_level,employment_type,salary_in_usd,remote_ratio,company_size
2021,EN,FT,50000,50,S
2022,SE,FT,150000,100,M
2023, SE ,FT,160000,0,L
2022,MI,FT,not-a-number,0,M
"""


@pytest.fixture
def salaries_csv(tmp_path):
    path = tmp_path / "ds_salaries.csv"
    path.write_text(CSV_TEXT)
    return path


class TestLoadSalaries:

    def test_keeps_record_columns_only(self, salaries_csv):
        df = load_salaries(salaries_csv)
        assert list(df.columns) == list(RECORD_FIELDS)

    def test_drops_non_numeric_rows(self, salaries_csv):
        df = load_salaries(salaries_csv)

        assert len(df) == 3
        assert df['salary_in_usd'].tolist() == [50000.0, 150000.0, 160000.0]

    def test_strips_category_values(self, salaries_csv):
        df = load_salaries(salaries_csv)
        assert df['experience_level'].tolist() == ['EN', 'SE', 'SE']

    def test_missing_column_raises_error(self):
        raw = pd.DataFrame({'work_year': [2021], 'salary_in_usd': [1.0]})
        with pytest.raises(ValueError):
            normalize_salaries(raw)

    def test_result_builds_a_record_store(self, salaries_csv):
        store = RecordStore(load_salaries(salaries_csv))

        assert len(store) == 3
        assert store[0].work_year == 2021
        assert store[2].company_size == 'L'


class TestLoadSample:

    def test_schema_and_size(self):
        df = load_sample(120, seed=7)

        assert len(df) == 120
        assert set(RECORD_FIELDS) <= set(df.columns)
        assert set(df['experience_level']) <= {'EN', 'MI', 'SE', 'EX'}
        assert df['remote_ratio'].between(0, 100).all()
        assert (df['salary_in_usd'] >= 0).all()

    def test_deterministic_for_seed(self):
        pd.testing.assert_frame_equal(load_sample(50, seed=1), load_sample(50, seed=1))


class TestLoadDataset:

    def test_prefers_csv(self, salaries_csv):
        df, name = load_dataset(AppConfig(dataset_path=salaries_csv))
        assert name == 'ds_salaries.csv'
        assert len(df) == 3

    def test_falls_back_to_sample(self, tmp_path):
        df, name = load_dataset(AppConfig(dataset_path=tmp_path / "missing.csv", sample_size=40))
        assert name == 'Sample Salaries'
        assert len(df) == 40
