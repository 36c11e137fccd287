"""
Tax table structures and the bracket calculation shared by all jurisdictions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Literal

from ..calendar import calculate_age
from ..core.errors import ConfigError
from ..tagged import IAge, Money, TaxRate, Year, cents, iage

if TYPE_CHECKING:
    from ..model.person import Person

TaxStatus = Literal["single", "married", "separately", "head"]
TAX_STATUSES: tuple[str, ...] = ("single", "married", "separately", "head")

# Income categories with their own inclusion rates
INCOME_CATEGORIES: tuple[str, ...] = ("regular", "social_security", "capital_gains")


@dataclass(frozen=True)
class TaxBracket:
    """A marginal rate and the income threshold where it starts, per filing status."""

    rate: TaxRate
    thresholds: dict[str, Money]

    def threshold(self, status: str) -> Money:
        if status not in self.thresholds:
            raise ConfigError(f"No data for status {status}.")
        return self.thresholds[status]


@dataclass(frozen=True)
class AgeGroup:
    """Standard deduction for one filing status, with senior and dependent add-ons."""

    regular: Money
    age: int = 65
    senior: Money = Money(0.0)
    dependent: Money = Money(0.0)


@dataclass
class TaxData:
    """
    Inputs to a year's tax calculation.

    Attributes:
        income: Amounts per income category (`regular`, `social_security`, `capital_gains`)
        year: Tax year
        status: Filing status
        spouse1: Primary filer
        spouse2: Second filer, if filing jointly
        dependents: Number of dependents
        deductions: Itemized deductions, overriding the standard deduction when given
        credits: Credits subtracted from the computed tax
    """

    income: dict[str, Money]
    year: Year
    status: str
    spouse1: Person | None = None
    spouse2: Person | None = None
    dependents: int = 0
    deductions: Money | None = None
    credits: Money = Money(0.0)


@dataclass(frozen=True)
class TaxResult:
    year: Year
    income: Money
    agi: Money
    sources: dict[str, Money]
    deductions: Money
    std_deductions: Money
    spouse1_age: IAge
    spouse2_age: IAge
    credits: Money
    tax: Money


def lookup_tax(income: Money, status: str, brackets: list[TaxBracket]) -> Money:
    """
    Tax on `income` from marginal brackets.

    Brackets are walked from the highest threshold down; the income above each
    threshold is taxed at that bracket's rate and removed from what remains.
    """
    remaining = float(income)
    tax = 0.0
    for bracket in sorted(brackets, key=lambda b: b.threshold(status), reverse=True):
        at_rate = remaining - bracket.threshold(status)
        if at_rate > 0:
            tax += at_rate * bracket.rate
            remaining -= at_rate
    return cents(tax)


def _filer_age(person: Person | None, year_end: date) -> IAge:
    if person is None:
        return IAge(0)
    return iage(calculate_age(person.birth, year_end))


@dataclass
class TaxYearTable:
    """
    One jurisdiction's tax rules for one year.

    Attributes:
        year: The tax year these figures apply to
        brackets: Marginal brackets (any order)
        rates: Inclusion rate per income category; missing categories count fully
        deductions: Standard deduction per filing status
    """

    year: Year
    brackets: list[TaxBracket]
    rates: dict[str, TaxRate] = field(default_factory=dict)
    deductions: dict[str, AgeGroup] = field(default_factory=dict)

    def calculate(self, data: TaxData) -> TaxResult:
        sources = {k: Money(data.income.get(k, 0.0)) for k in INCOME_CATEGORIES}
        income = cents(sum(amount * self.rates.get(k, 1.0) for k, amount in sources.items()))
        if data.status not in self.deductions:
            raise ConfigError(f"No data for filing status {data.status}")
        info = self.deductions[data.status]
        year_end = date(data.year, 12, 31)
        spouse1_age = _filer_age(data.spouse1, year_end)
        spouse2_age = _filer_age(data.spouse2, year_end)
        seniors = sum(
            1 for p, a in ((data.spouse1, spouse1_age), (data.spouse2, spouse2_age)) if p is not None and a >= info.age
        )
        std_deductions = cents(info.regular + seniors * info.senior + data.dependents * info.dependent)
        deductions = std_deductions if data.deductions is None else cents(data.deductions)
        agi = cents(income - deductions)
        tax = lookup_tax(agi, data.status, self.brackets)
        return TaxResult(
            year=self.year,
            income=income,
            agi=agi,
            sources=sources,
            deductions=deductions,
            std_deductions=std_deductions,
            spouse1_age=spouse1_age,
            spouse2_age=spouse2_age,
            credits=data.credits,
            tax=cents(max(tax - data.credits, 0.0)),
        )


@dataclass
class TaxYearTables:
    """All years of tables for one jurisdiction, with the year used when one is missing."""

    tables: dict[int, TaxYearTable]
    default: int | None = None

    def for_year(self, year: int) -> TaxYearTable:
        if year in self.tables:
            return self.tables[year]
        if self.default is not None and self.default in self.tables:
            return self.tables[self.default]
        raise ConfigError(f"No tax table for {year} and no default year declared")
