"""
Tests for building items from rows.
"""

from datetime import date

import pytest

from finsteplab.calendar import CalendarUnit
from finsteplab.core.errors import ConfigError, ContractError, TaggedValueError
from finsteplab.core.temporal import Temporal
from finsteplab.model import Asset, Expense, Income, IncomeTax, Liability, Person, Text
from finsteplab.model.item import START, parse_categories, parse_scenarios


class TestItemBasics:
    def test_defaults(self):
        asset = Asset({"name": "savings", "value": 100})
        assert asset.id == "asset/savings"
        assert asset.pretty_name == "savings"
        assert asset.start == START
        assert not asset.end
        assert asset.scenarios == ("Default",)
        assert asset.categories == frozenset()

    def test_name_required(self):
        with pytest.raises(ConfigError):
            Asset({"value": 100})

    def test_categories_and_scenarios(self):
        assert parse_categories("nontaxable|non-income") == {"nontaxable", "non-income"}
        assert parse_categories(["a", " b "]) == {"a", "b"}
        assert parse_scenarios("Base, Retire early") == ("Base", "Retire early")
        asset = Asset({"name": "ira", "categories": "nontaxable", "scenarios": ["A", "B"]})
        assert asset.has_category("nontaxable")
        assert asset.in_scenario("B")
        assert not asset.in_scenario("Default")

    def test_temporal_set_once(self):
        asset = Asset({"name": "savings"})
        with pytest.raises(ContractError):
            asset.temporal
        asset.temporal = Temporal([asset])
        assert asset.temporal.first is asset
        with pytest.raises(ContractError):
            asset.temporal = Temporal([asset])

    def test_value_given(self):
        assert Asset({"name": "a", "value": 0}).value_given
        assert not Asset({"name": "a"}).value_given


class TestPerson:
    def test_birth_and_sex_required(self):
        with pytest.raises(ConfigError, match="Birth date"):
            Person({"name": "spouse1", "sex": "male"})
        with pytest.raises(ConfigError, match="Sex"):
            Person({"name": "spouse1", "birth": "1960-01-01"})
        with pytest.raises(ConfigError):
            Person({"name": "spouse1", "birth": "1960-01-01", "sex": "robot"})

    def test_ages(self):
        p = Person({"name": "spouse1", "birth": "1960-07-01", "sex": "Male"})
        assert p.sex == "male"
        assert p.iage(2021) == 61
        assert p.iage(date(2021, 6, 30)) == 60
        assert 60.4 < p.age(date(2021, 1, 1)) < 60.6


class TestCashFlows:
    def test_payment_period_required(self):
        with pytest.raises(ConfigError):
            Income({"name": "salary", "value": 100})
        with pytest.raises(ConfigError):
            Expense({"name": "rent", "value": 100, "from_stream": "living"})

    def test_end_markers_need_nothing(self):
        assert Income({"name": "salary", "end": True}).end
        assert Expense({"name": "rent", "end": True}).end

    def test_from_stream_required(self):
        with pytest.raises(ConfigError, match="from_stream"):
            Expense({"name": "rent", "value": 100, "payment_period": "month"})

    def test_per_period(self):
        income = Income({"name": "bonus", "value": 1200, "payment_period": "year"})
        assert income.per_period(12) == 100
        assert income.per_period(4) == 300

    def test_deposit(self):
        income = Income({"name": "salary", "value": 1, "payment_period": "month", "deposit": "savings"})
        assert income.deposit == "savings"


class TestInterestBearing:
    def test_rate(self):
        asset = Asset({"name": "brokerage", "value": 1000, "rate": 0.12, "rate_type": "month"})
        assert asset.period_rate(12) == pytest.approx(0.01)
        assert Asset({"name": "cash", "value": 10}).rate is None
        assert Asset({"name": "cash", "value": 10}).period_rate(12) == 0.0

    def test_rate_domain(self):
        with pytest.raises(ConfigError):
            Asset({"name": "bad", "rate": 5})
        with pytest.raises(TaggedValueError):
            Asset({"name": "zero", "value": 10, "rate": 0})
        assert Asset({"name": "blank", "value": 10, "rate": ""}).rate is None

    def test_liability_defaults(self):
        loan = Liability({"name": "car", "value": 10000, "rate": 0.06, "payment": 500, "expense": "car_payment"})
        assert loan.payment_period is CalendarUnit.MONTH
        assert loan.expense == "car_payment"

    def test_amortization_schedule(self):
        loan = Liability({"name": "car", "value": 1000, "rate": 0.12, "payment": 500})
        rows = list(loan.schedule())
        assert rows[0]["interest"] == 10.0
        assert rows[-1]["value"] == 0
        assert sum(r["principal"] for r in rows) == pytest.approx(1000)


class TestIncomeTaxAndText:
    def test_defaults(self):
        tax = IncomeTax({"name": "federal"})
        assert tax.state == "US"
        assert tax.status == "single"
        assert tax.from_stream is None

    def test_unknown_jurisdiction_and_status(self):
        with pytest.raises(ConfigError):
            IncomeTax({"name": "tax", "state": "ZZ"})
        with pytest.raises(ConfigError):
            IncomeTax({"name": "tax", "status": "complicated"})

    def test_text(self):
        assert Text({"name": "intro", "text": "Hello"}).text == "Hello"
