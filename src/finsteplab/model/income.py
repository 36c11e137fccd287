"""
Income: recurring inflows that fund expenses.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..core.kinds import T
from .item import ItemStepper
from .monetary import CashFlow

if TYPE_CHECKING:
    from ..calendar import CalendarStep
    from ..core.context import SimContext
    from ..core.state import ItemState
    from .scenario import Scenario


class Income(CashFlow):
    """
    A salary, pension, annuity or other recurring income.

    Attributes:
        payment_period: How often `value` is received (required)
        deposit: Asset receiving whatever part of each payment is not spent
    """

    type = T.INCOME
    payment_period_required = True

    def __init__(self, row: Mapping[str, Any], scenario: Scenario | None = None):
        super().__init__(row, scenario)
        self.deposit: str | None = row.get("deposit") or None

    def stepper(self, start: CalendarStep, ctx: SimContext) -> IncomeStepper:
        return IncomeStepper(self, start, ctx)


class IncomeStepper(ItemStepper):
    """
    Produces this period's pro-rated payment as `value`.

    `value` is fresh each period and is drawn down by withdrawals; `used` and
    `received` accumulate across periods.
    """

    item: Income

    def _receive(self, period: CalendarStep, received: float, used: float):
        amount = self.cents(self.item.per_period(self.ctx.config.periods_per_year))
        if amount:
            self.timeline("receive", period.start, amount=amount)
        return {"value": amount, "used": used, "received": self.cents(received + amount)}

    def initial(self, period: CalendarStep, previous: ItemState | None):
        if previous is None:
            return self._receive(period, 0.0, 0.0)
        return self._receive(period, previous.get("received", 0.0), previous.get("used", 0.0))

    def advance(self, period: CalendarStep, previous: ItemState):
        return self._receive(period, previous.get("received", 0.0), previous.get("used", 0.0))
