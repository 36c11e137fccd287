"""
Tests for life table lookups and survival probabilities.
"""

from datetime import date

import numpy as np
import pandas as pd
import pytest

from finsteplab.calendar import calendar_range
from finsteplab.core.errors import ConfigError
from finsteplab.model import Person
from finsteplab.sim.actuary import (
    EOL,
    MAX_AGE,
    actuary,
    actuary_for,
    compute_probabilities,
    life_table,
    load_life_table,
    lookup_or_eol,
)


class TestLifeTable:
    def test_shape(self):
        table = life_table()
        assert list(table.index) == list(range(MAX_AGE + 1))
        assert isinstance(table.columns, pd.MultiIndex)
        assert set(table.columns.get_level_values(0)) == {"male", "female"}

    def test_survivors_decline(self):
        n = life_table()[("female", "n")].to_numpy()
        assert n[0] == 100_000
        assert np.all(np.diff(n) <= 0)

    def test_last_row_is_end_of_life(self):
        last = actuary(MAX_AGE, "male")
        assert last == EOL

    def test_women_live_longer(self):
        assert actuary(65, "female").years > actuary(65, "male").years

    def test_csv_round_trip(self, tmp_path):
        path = tmp_path / "table.csv"
        life_table().to_csv(path)
        loaded = load_life_table(path)
        assert actuary(50, "male", loaded).n == actuary(50, "male").n

    def test_csv_missing_columns(self, tmp_path):
        path = tmp_path / "table.csv"
        life_table().drop(columns=[("male", "years")]).to_csv(path)
        with pytest.raises(ConfigError):
            load_life_table(path)


class TestInterpolation:
    """Whole ages read a row; fractions above 0.003 interpolate."""

    def test_near_whole_age_reads_floor_row(self):
        assert actuary(50.002, "female") == actuary(50, "female")

    def test_interpolates_between_rows(self):
        lo, hi = actuary(50, "female"), actuary(51, "female")
        mid = actuary(50.5, "female")
        assert min(lo.p, hi.p) <= mid.p <= max(lo.p, hi.p)
        assert mid.years == pytest.approx((lo.years + hi.years) / 2)
        assert mid.n == round((lo.n + hi.n) / 2)

    def test_just_over_threshold_interpolates(self):
        assert actuary(50.004, "female") != actuary(50, "female")

    def test_out_of_table(self):
        with pytest.raises(ConfigError):
            actuary(MAX_AGE + 0.5, "male")
        with pytest.raises(ConfigError):
            actuary(200, "male")
        with pytest.raises(ConfigError):
            actuary(40, "other")

    def test_lookup_or_eol(self):
        assert lookup_or_eol(200, "male") == EOL
        assert lookup_or_eol(40, "male") == actuary(40, "male")

    def test_actuary_for(self):
        person = Person({"name": "spouse1", "birth": "1960-01-01", "sex": "male"})
        assert actuary_for(person, date(2020, 1, 1)) == actuary(60, "male")


class TestSurvival:
    def test_monthly_cumulative(self):
        person = Person({"name": "spouse1", "birth": "1960-01-01", "sex": "male"})
        probs = compute_probabilities(person, date(2021, 1, 1), date(2031, 1, 1))
        assert len(probs) == 120
        assert probs[0] == 1.0
        assert np.all(np.diff(probs) <= 0)
        assert 0 < probs[-1] < 1

    def test_past_end_of_table(self):
        person = Person({"name": "spouse1", "birth": "1900-01-01", "sex": "female"})
        probs = compute_probabilities(person, date(2021, 1, 1), date(2022, 1, 1))
        assert probs[0] == 1.0
        assert np.all(probs[1:] == 0)

    def test_mid_month_bounds(self):
        """One probability per simulated month, whatever the day of the bounds."""
        person = Person({"name": "spouse1", "birth": "1960-01-01", "sex": "male"})
        probs = compute_probabilities(person, date(2021, 1, 15), date(2021, 4, 10))
        assert len(probs) == len(list(calendar_range(date(2021, 1, 15), date(2021, 4, 10), "month")))
        assert len(probs) == 4

    def test_empty_range(self):
        person = Person({"name": "spouse1", "birth": "1960-01-01", "sex": "male"})
        assert list(compute_probabilities(person, date(2021, 1, 1), date(2021, 1, 1))) == [1.0]
