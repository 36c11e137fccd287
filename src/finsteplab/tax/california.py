"""
California income tax tables.
"""

from ..tagged import Money, TaxRate, Year
from .tables import AgeGroup, TaxBracket, TaxYearTable, TaxYearTables


def _bracket(rate: float, single: float, married: float, head: float) -> TaxBracket:
    return TaxBracket(
        TaxRate(rate),
        {"single": Money(single), "married": Money(married), "head": Money(head)},
    )


CALIFORNIA_2020 = TaxYearTable(
    year=Year(2020),
    brackets=[
        _bracket(0.01, 0, 0, 0),
        _bracket(0.02, 8932, 17864, 17864),
        _bracket(0.04, 21175, 42350, 42353),
        _bracket(0.06, 33421, 66842, 54597),
        _bracket(0.08, 46394, 92788, 67569),
        _bracket(0.093, 58634, 117268, 79812),
        _bracket(0.103, 299508, 599016, 407329),
        _bracket(0.113, 359407, 718814, 488796),
        _bracket(0.123, 599012, 1198024, 814658),
    ],
    rates={
        "capital_gains": TaxRate(0.5),
        "social_security": TaxRate(0.85),
    },
    deductions={
        "single": AgeGroup(regular=Money(4601), senior=Money(122), dependent=Money(383), age=65),
        "married": AgeGroup(regular=Money(9202), senior=Money(248), dependent=Money(383), age=65),
    },
)

CALIFORNIA_TAX = TaxYearTables({2020: CALIFORNIA_2020}, default=2020)
