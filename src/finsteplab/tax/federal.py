"""
US federal income tax tables.
"""

from ..tagged import Money, TaxRate, Year
from .tables import AgeGroup, TaxBracket, TaxYearTable, TaxYearTables


def _bracket(rate: float, single: float, married: float) -> TaxBracket:
    return TaxBracket(TaxRate(rate), {"single": Money(single), "married": Money(married)})


FEDERAL_2021 = TaxYearTable(
    year=Year(2021),
    brackets=[
        _bracket(0.10, 0, 0),
        _bracket(0.12, 9950, 19900),
        _bracket(0.22, 40525, 81050),
        _bracket(0.24, 86375, 172750),
        _bracket(0.32, 164925, 329850),
        _bracket(0.35, 209425, 418850),
        _bracket(0.37, 523600, 628300),
    ],
    rates={
        "regular": TaxRate(1.0),
        "capital_gains": TaxRate(0.5),
        "social_security": TaxRate(0.85),
    },
    deductions={
        "single": AgeGroup(regular=Money(12550), senior=Money(1700), age=65),
        "married": AgeGroup(regular=Money(25100), senior=Money(1350), age=65),
    },
)

FEDERAL_TAX = TaxYearTables({2021: FEDERAL_2021}, default=2021)
