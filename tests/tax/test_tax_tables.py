"""
Tests for bracket lookup and yearly tax calculation.
"""

import pytest

from finsteplab.core.errors import ConfigError
from finsteplab.model import IncomeTax, Person
from finsteplab.tax import (
    FEDERAL_TAX,
    TaxBracket,
    TaxData,
    TaxYearTables,
    compute_tax,
    lookup_tax,
)
from finsteplab.tax.federal import FEDERAL_2021

try:
    from hypothesis import given
    from hypothesis import strategies as st

    HAS_HYPOTHESIS = True
except ImportError:
    HAS_HYPOTHESIS = False


def data(regular=0.0, status="single", **kwargs):
    return TaxData(income={"regular": regular}, year=2021, status=status, **kwargs)


class TestLookup:
    def test_two_brackets(self):
        assert lookup_tax(37450, "single", FEDERAL_2021.brackets) == 4295

    def test_zero_and_negative(self):
        assert lookup_tax(0, "single", FEDERAL_2021.brackets) == 0
        assert lookup_tax(-500, "married", FEDERAL_2021.brackets) == 0

    def test_missing_status(self):
        with pytest.raises(ConfigError):
            lookup_tax(1000, "head", FEDERAL_2021.brackets)
        with pytest.raises(ConfigError):
            TaxBracket(0.1, {"single": 0}).threshold("married")


class TestCalculate:
    def test_standard_deduction(self):
        result = compute_tax("US", 2021, data(50000))
        assert result.std_deductions == 12550
        assert result.agi == 37450
        assert result.tax == 4295

    def test_senior_add_on(self):
        senior = Person({"name": "spouse1", "birth": "1950-06-01", "sex": "female"})
        result = compute_tax("US", 2021, data(50000, spouse1=senior))
        assert result.spouse1_age == 71
        assert result.std_deductions == 12550 + 1700

    def test_explicit_deductions_override(self):
        result = compute_tax("US", 2021, data(50000, deductions=2000))
        assert result.deductions == 2000
        assert result.agi == 48000

    def test_credits(self):
        assert compute_tax("US", 2021, data(50000, credits=5000)).tax == 0
        assert compute_tax("US", 2021, data(50000, credits=295)).tax == 4000

    def test_income_category_rates(self):
        result = compute_tax(
            "CA", 2020, TaxData(income={"capital_gains": 10000, "social_security": 1000}, year=2020, status="single")
        )
        assert result.income == 5850

    def test_filing_status_without_deduction(self):
        with pytest.raises(ConfigError):
            compute_tax("US", 2021, data(50000, status="head"))


class TestJurisdictions:
    def test_unknown_state(self):
        with pytest.raises(ConfigError):
            compute_tax("ZZ", 2021, data(1000))

    def test_year_falls_back_to_default(self):
        assert compute_tax("US", 2035, data(50000)).year == 2021
        assert FEDERAL_TAX.for_year(2021) is FEDERAL_2021

    def test_no_table_and_no_default(self):
        with pytest.raises(ConfigError):
            TaxYearTables({}).for_year(2021)


class TestItemizedDeductions:
    """IncomeTax itemizes only when that beats the standard deduction."""

    def test_itemizes_when_larger(self):
        result = IncomeTax({"name": "federal"}).compute(2021, 100000, 20000)
        assert result.deductions == 20000

    def test_standard_when_larger(self):
        result = IncomeTax({"name": "federal"}).compute(2021, 100000, 5000)
        assert result.deductions == 12550


@pytest.mark.skipif(not HAS_HYPOTHESIS, reason="Hypothesis not installed")
class TestMonotonicity:
    """More income never means less tax."""

    if HAS_HYPOTHESIS:
        incomes = st.integers(min_value=0, max_value=2_000_000)

        @given(a=incomes, b=incomes, status=st.sampled_from(["single", "married"]))
        def test_federal(self, a, b, status):
            lo, hi = sorted((a, b))
            assert compute_tax("US", 2021, data(lo, status)).tax <= compute_tax("US", 2021, data(hi, status)).tax

        @given(a=incomes, b=incomes)
        def test_california(self, a, b):
            lo, hi = sorted((a, b))
            low = TaxData(income={"regular": lo}, year=2020, status="married")
            high = TaxData(income={"regular": hi}, year=2020, status="married")
            assert compute_tax("CA", 2020, low).tax <= compute_tax("CA", 2020, high).tax

        @given(income=incomes)
        def test_tax_below_income(self, income):
            assert compute_tax("US", 2021, data(income)).tax <= income
