"""Tests for the record store."""

import dataclasses

import pandas as pd
import pytest

from core.records import RECORD_FIELDS, Record, RecordStore


class TestRecordStore:

    def test_preserves_order(self, scenario_store):
        assert [r.salary_in_usd for r in scenario_store] == [50000.0, 150000.0, 160000.0]

    def test_records_are_frozen(self, scenario_store):
        with pytest.raises(dataclasses.FrozenInstanceError):
            scenario_store[0].salary_in_usd = 1.0

    def test_native_python_values(self, scenario_store):
        record = scenario_store[1]
        assert record == Record(2022, 150000.0, 100.0, 'SE', 'M')
        assert type(record.work_year) is int

    def test_frame_columns_and_index(self, scenario_df):
        store = RecordStore(scenario_df.set_index(pd.Index([10, 20, 30])))

        assert list(store.frame.columns) == list(RECORD_FIELDS)
        assert list(store.frame.index) == [0, 1, 2]

    def test_missing_columns_raise_error(self, scenario_df):
        with pytest.raises(ValueError):
            RecordStore(scenario_df.drop(columns=['remote_ratio']))

    def test_from_records(self):
        store = RecordStore.from_records([
            Record(2021, 1.0, 0.0, 'EN', 'S'),
            {'work_year': 2022, 'salary_in_usd': 2, 'remote_ratio': 50,
             'experience_level': 'MI', 'company_size': 'M'},
        ])

        assert len(store) == 2
        assert store[1] == Record(2022, 2.0, 50.0, 'MI', 'M')
