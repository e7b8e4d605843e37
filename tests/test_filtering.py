"""Tests for the filter state module."""

import numpy as np
import pytest

from core.filtering import DimensionRange, FilterState
from core.records import Record


class TestRanges:
    """Tests for setting and clearing per-dimension ranges."""

    def test_starts_empty(self):
        state = FilterState()

        assert state.ranges == {}
        assert state.selected_category is None
        assert state.is_empty

    def test_set_range(self):
        state = FilterState()

        assert state.set_range('salary_in_usd', 100000, 200000) is True
        assert state.ranges == {'salary_in_usd': DimensionRange(100000.0, 200000.0)}
        assert not state.is_empty

    def test_set_range_replaces_previous(self):
        state = FilterState()
        state.set_range('work_year', 2020, 2021)
        state.set_range('work_year', 2022, 2023)

        assert state.ranges == {'work_year': DimensionRange(2022.0, 2023.0)}

    def test_inverted_bounds_rejected(self):
        state = FilterState()
        state.set_range('remote_ratio', 0, 50)

        assert state.set_range('remote_ratio', 80, 20) is False
        assert state.ranges == {'remote_ratio': DimensionRange(0.0, 50.0)}

    def test_nan_bound_rejected(self):
        state = FilterState()
        assert state.set_range('remote_ratio', float('nan'), 50) is False
        assert state.ranges == {}

    def test_unknown_dimension_rejected(self):
        state = FilterState()
        assert state.set_range('company_size', 0, 1) is False
        assert state.clear_range('company_size') is False

    def test_zero_width_range_allowed(self):
        state = FilterState()
        assert state.set_range('work_year', 2022, 2022) is True

    def test_clear_range(self):
        state = FilterState()
        state.set_range('work_year', 2020, 2021)

        assert state.clear_range('work_year') is True
        assert 'work_year' not in state.ranges

    def test_clear_absent_range_is_noop(self):
        state = FilterState()
        assert state.clear_range('salary_in_usd') is True
        assert state.ranges == {}

    def test_ranges_returns_copy(self):
        state = FilterState()
        state.ranges['work_year'] = DimensionRange(1, 2)
        assert state.ranges == {}


class TestCategoryToggle:
    """Tests for the single-category highlight."""

    def test_select_category(self):
        state = FilterState()
        assert state.toggle_category('SE') is True
        assert state.selected_category == 'SE'

    def test_same_category_toggles_off(self):
        state = FilterState()
        state.toggle_category('SE')
        state.toggle_category('SE')
        assert state.selected_category is None

    def test_new_category_replaces_previous(self):
        state = FilterState()
        state.toggle_category('EN')
        state.toggle_category('EX')
        assert state.selected_category == 'EX'

    def test_unknown_category_rejected(self):
        state = FilterState()
        state.toggle_category('MI')

        assert state.toggle_category('Senior') is False
        assert state.selected_category == 'MI'

    def test_clear_resets_everything(self):
        state = FilterState()
        state.set_range('work_year', 2020, 2021)
        state.toggle_category('MI')
        state.clear()
        assert state.is_empty


class TestMembership:
    """Tests for the AND-combined membership predicate."""

    def test_no_ranges_everything_is_member(self, scenario_store):
        state = FilterState()
        assert all(state.is_member(record) for record in scenario_store)

    def test_bounds_are_inclusive(self):
        state = FilterState()
        state.set_range('salary_in_usd', 50000, 150000)

        assert state.is_member(Record(2021, 50000.0, 0.0, 'EN', 'S'))
        assert state.is_member(Record(2021, 150000.0, 0.0, 'EN', 'S'))
        assert not state.is_member(Record(2021, 150000.5, 0.0, 'EN', 'S'))

    def test_ranges_combine_with_and(self):
        state = FilterState()
        state.set_range('salary_in_usd', 100000, 200000)
        state.set_range('remote_ratio', 50, 100)

        assert state.is_member(Record(2022, 150000.0, 100.0, 'SE', 'M'))
        assert not state.is_member(Record(2023, 160000.0, 0.0, 'SE', 'L'))

    def test_category_does_not_affect_membership(self):
        state = FilterState()
        state.toggle_category('EX')
        assert state.is_member(Record(2021, 50000.0, 50.0, 'EN', 'S'))

    def test_accepts_mappings(self):
        state = FilterState()
        state.set_range('work_year', 2022, 2023)
        assert state.is_member({'work_year': 2022, 'salary_in_usd': 1.0, 'remote_ratio': 0.0})

    def test_zero_width_range_is_exact_match(self, scenario_df):
        state = FilterState()
        state.set_range('work_year', 2022, 2022)
        assert state.member_mask(scenario_df).tolist() == [False, True, False]

    def test_mask_matches_scalar_predicate(self, sample_salary_df):
        state = FilterState()
        state.set_range('salary_in_usd', 80000, 150000)
        state.set_range('work_year', 2021, 2022)

        mask = state.member_mask(sample_salary_df)
        expected = [state.is_member(row) for row in sample_salary_df.to_dict('records')]

        assert mask.dtype == np.bool_
        assert mask.tolist() == expected

    def test_empty_mask_for_disjoint_range(self, scenario_df):
        state = FilterState()
        state.set_range('salary_in_usd', 0, 1)
        assert not state.member_mask(scenario_df).any()


class TestDimensionRange:

    def test_contains(self):
        bounds = DimensionRange(1.0, 2.0)
        assert bounds.contains(1.0)
        assert bounds.contains(2.0)
        assert not bounds.contains(2.1)

    @pytest.mark.parametrize('value', [0.999, 3])
    def test_outside(self, value):
        assert not DimensionRange(1.0, 2.0).contains(value)
