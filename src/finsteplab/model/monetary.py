"""
Items carrying a monetary value, and periodic cash flows.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..calendar import CalendarUnit, as_calendar_unit, year_fraction
from ..core.errors import ConfigError
from ..tagged import Money, as_money
from .item import Item

if TYPE_CHECKING:
    from .scenario import Scenario


class Monetary(Item):
    """An item with a monetary `value` (balance, amount due, amount received)."""

    def __init__(self, row: Mapping[str, Any], scenario: Scenario | None = None):
        super().__init__(row, scenario)
        value = row.get("value")
        self.value_given = value is not None
        self.value: Money = as_money(value if value is not None else 0.0)


class CashFlow(Monetary):
    """
    A monetary item paid or received periodically.

    `value` is the amount per `payment_period`; `per_period` re-expresses it
    for a simulation period of another length.
    """

    payment_period_required = False

    def __init__(self, row: Mapping[str, Any], scenario: Scenario | None = None):
        super().__init__(row, scenario)
        period = row.get("payment_period")
        if period is None:
            if self.payment_period_required and not self.end:
                raise ConfigError(f"{self.id}: payment_period is required")
            period = CalendarUnit.MONTH
        self.payment_period: CalendarUnit = as_calendar_unit(period)

    def per_period(self, periods_per_year: float = 12) -> Money:
        """`value` pro-rated to one of `periods_per_year` equal periods."""
        return Money(self.value * self.payment_period.periods_per_year / periods_per_year)

    def year_fraction(self, year: int) -> float:
        """Share of `year` during which this flow exists, from its versions' span."""
        start, end = self.temporal.span()
        return year_fraction(start, end, year)
