"""
Tests for scenario construction, cross references and construct().
"""

from datetime import date

import pytest

from finsteplab.core.errors import ConfigError, TransferSpecError
from finsteplab.core.kinds import T
from finsteplab.model import Scenario, construct

SPOUSE1 = {"type": "person", "name": "spouse1", "birth": "1967-01-01", "sex": "female"}


class TestConstruct:
    def test_versions_share_temporal(self):
        rows = [
            {"type": "asset", "name": "savings", "value": 200, "start": "2023-01-01"},
            {"type": "asset", "name": "savings", "value": 100, "start": "2021-01-01"},
        ]
        first = construct(rows, T.ASSET, None)
        assert first.value == 100
        assert [v.value for v in first.temporal] == [100, 200]
        assert all(v.temporal is first.temporal for v in first.temporal)

    def test_end_year_drops_later_versions(self):
        rows = [
            {"type": "asset", "name": "savings", "value": 100, "start": "2021-01-01"},
            {"type": "asset", "name": "savings", "value": 200, "start": "2031-01-01"},
        ]
        assert len(construct(rows, T.ASSET, None, end_year=2030).temporal) == 1

    def test_rejects_mixed_rows(self):
        with pytest.raises(ConfigError):
            construct([{"type": "asset", "name": "a"}, {"type": "asset", "name": "b"}], T.ASSET, None)
        with pytest.raises(ConfigError):
            construct([{"type": "income", "name": "a"}], T.ASSET, None)
        with pytest.raises(ConfigError):
            construct([{"name": "a"}], "gadget", None)
        with pytest.raises(ConfigError):
            construct([], T.ASSET, None)


class TestScenarioConstruction:
    def test_round_trip_through_all_items(self, make_scenario):
        rows = [
            {"type": "person", "name": "spouse2", "birth": "1969-05-01", "sex": "male"},
            {"type": "person", "name": "kid", "birth": "2005-05-01", "sex": "male"},
            {"type": "asset", "name": "savings", "value": 1000},
            {"type": "liability", "name": "mortgage", "value": 5000, "rate": 0.04},
            {"type": "income", "name": "salary", "value": 100, "payment_period": "month"},
            {"type": "transfer", "name": "living", "spec": "salary"},
            {"type": "expense", "name": "rent", "value": 50, "payment_period": "month", "from_stream": "living"},
            {"type": "income_tax", "name": "federal"},
            {"type": "text", "name": "intro", "text": "Hi"},
        ]
        scenario = make_scenario(rows)
        for row in rows:
            item = scenario.all_items[row["type"]][row["name"]]
            assert item.name == row["name"]
            assert item.type == row["type"]
            assert scenario.find_item(row["name"], row["type"]) is item
        assert scenario.people["spouse1"] is scenario.spouse1
        assert [p.name for p in scenario.dependents] == ["kid"]
        assert scenario.find_text("intro") == "Hi"
        assert scenario.find_text("missing") == ""
        assert scenario.taxes["federal"].status == "married"
        assert "asset/savings" in scenario.by_id

    def test_items_order(self, make_scenario, pass_through_rows):
        scenario = make_scenario(pass_through_rows)
        types = [i.type for i in scenario.items()]
        assert types[0] == T.SCENARIO
        assert types.index(T.PERSON) < types.index(T.ASSET) < types.index(T.INCOME) < types.index(T.TRANSFER)

    def test_default_start(self, make_scenario, pass_through_rows):
        scenario = make_scenario(pass_through_rows)
        assert scenario.incomes["salary"].start == date(2021, 1, 1)
        assert scenario.date_range == (date(2021, 1, 1), date(2022, 1, 1))

    def test_spouse1_required(self):
        with pytest.raises(ConfigError, match="spouse1"):
            Scenario({"name": "Default", "start": "2021-01-01"}, [], 2030)

    def test_unknown_type(self, make_scenario):
        with pytest.raises(ConfigError, match="Unknown item type"):
            make_scenario([{"type": "gadget", "name": "x"}])

    def test_scenario_membership(self, make_scenario):
        scenario = make_scenario(
            [
                {"type": "asset", "name": "savings", "value": 1},
                {"type": "asset", "name": "boat", "value": 1, "scenarios": "Dream"},
            ]
        )
        assert list(scenario.assets) == ["savings"]

    def test_end_year_after_start(self):
        with pytest.raises(ConfigError):
            Scenario({"name": "Default", "start": "2021-01-01"}, [SPOUSE1], 2021)

    def test_set_end(self, make_scenario):
        scenario = make_scenario([])
        scenario.set_end(date(2021, 4, 1))
        assert len(scenario.snapshots) == 3
        with pytest.raises(ConfigError):
            scenario.set_end(date(2020, 1, 1))

    def test_deposit_must_exist(self, make_scenario):
        with pytest.raises(ConfigError, match="deposit"):
            make_scenario(
                [{"type": "income", "name": "salary", "value": 1, "payment_period": "month", "deposit": "nowhere"}]
            )

    def test_liability_expense_must_exist(self, make_scenario):
        with pytest.raises(ConfigError, match="expense"):
            make_scenario([{"type": "liability", "name": "loan", "value": 1, "expense": "nothing"}])

    def test_unknown_transfer_source(self, make_scenario):
        with pytest.raises(TransferSpecError, match="ghost"):
            make_scenario([{"type": "transfer", "name": "living", "spec": "ghost"}])

    def test_transfer_cycle(self, make_scenario):
        with pytest.raises(TransferSpecError, match="cycle"):
            make_scenario(
                [
                    {"type": "transfer", "name": "a", "spec": "@b"},
                    {"type": "transfer", "name": "b", "spec": '["@a"]'},
                ]
            )


class TestAggregates:
    def test_net_assets_and_retirement_income(self, make_scenario):
        scenario = make_scenario(
            [
                {"type": "asset", "name": "savings", "value": 1000, "rate": 0.05},
                {"type": "asset", "name": "house", "value": 5000, "rate": 0.02, "categories": "non-income"},
                {"type": "liability", "name": "loan", "value": 400},
                {"type": "income", "name": "pension", "value": 10, "payment_period": "month"},
            ]
        )
        assert scenario.net_assets == 5600
        assert scenario.total_retirement_income == 60
        assert scenario.total_retirement_income_with_fixed == 160
        assert [s.name for s in scenario.sources] == ["savings", "house", "pension"]


class TestPeopleOverTime:
    def test_expectancies_per_year(self, make_scenario):
        scenario = make_scenario(
            [
                {"type": "person", "name": "spouse1", "birth": "1967-01-01", "sex": "female"},
                {"type": "person", "name": "spouse2", "birth": "1905-01-01", "sex": "male"},
            ],
            end_year=2031,
        )
        young = scenario.spouse1.expectancies
        old = scenario.spouse2.expectancies

        assert len(young) == len(old) == 2031 - 2021 + 1
        assert young[0] == pytest.approx(scenario.spouse1.expectancy, abs=1.0)
        assert young == sorted(young, reverse=True)
        assert all(y > 0 for y in young)

    def test_expectancies_past_end_of_table(self, make_scenario):
        """Ages beyond the life table count as end of life instead of failing."""
        scenario = make_scenario(
            [
                {"type": "person", "name": "spouse1", "birth": "1905-01-01", "sex": "male"},
            ],
            end_year=2031,
        )
        # ages 120 and over, from 2025 on
        assert scenario.spouse1.expectancies[4:] == [0.0] * 7
