"""
Assets: balances that accrue interest and fund expenses.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..calendar import CalendarUnit, as_calendar_unit
from ..core.kinds import T
from ..sim.interest import convert_interest_per_period
from ..tagged import Rate, as_rate
from .item import ItemStepper
from .monetary import CashFlow

if TYPE_CHECKING:
    from ..calendar import CalendarStep
    from ..core.context import SimContext
    from ..core.state import ItemState
    from .scenario import Scenario


class InterestBearing(CashFlow):
    """
    A balance with an optional annual interest rate.

    Attributes:
        rate: Annual nominal rate, or None for a balance that earns nothing
        rate_type: Compounding unit of `rate` (default: yearly)
    """

    def __init__(self, row: Mapping[str, Any], scenario: Scenario | None = None):
        super().__init__(row, scenario)
        rate = row.get("rate")
        self.rate: Rate | None = as_rate(rate) if rate not in (None, "") else None
        self.rate_type: CalendarUnit = as_calendar_unit(row.get("rate_type") or CalendarUnit.YEAR)

    def period_rate(self, periods_per_year: float) -> float:
        if self.rate is None:
            return 0.0
        return convert_interest_per_period(self.rate, self.rate_type, periods_per_year)


class Asset(InterestBearing):
    """A savings, brokerage or retirement account; `value` is its balance."""

    type = T.ASSET

    def stepper(self, start: CalendarStep, ctx: SimContext) -> AssetStepper:
        return AssetStepper(self, start, ctx)


class AssetStepper(ItemStepper):
    """
    Compounds the balance each period.

    State fields: `value` (balance), `interest` (earned this period), `periodic_rate`
    (per-period rate) and `used` (cumulative amount withdrawn).
    """

    item: InterestBearing

    def initial(self, period: CalendarStep, previous: ItemState | None):
        value = self.item.value
        if previous is not None and not self.item.value_given:
            value = previous.value
        return {
            "value": value,
            "interest": 0.0,
            "periodic_rate": self.item.period_rate(self.ctx.config.periods_per_year),
            "used": previous.get("used", 0.0) if previous is not None else 0.0,
        }

    def advance(self, period: CalendarStep, previous: ItemState):
        rate = self.item.period_rate(self.ctx.config.periods_per_year)
        interest = self.cents(previous.value * rate)
        if interest:
            self.timeline("interest", period.start, amount=interest, rate=rate)
        return {
            "value": self.cents(previous.value + interest),
            "interest": interest,
            "periodic_rate": rate,
            "used": previous.get("used", 0.0),
        }
