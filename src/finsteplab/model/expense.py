"""
Expenses: recurring outflows paid through a transfer.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..core.errors import ConfigError
from ..core.kinds import T
from .item import ItemStepper
from .monetary import CashFlow

if TYPE_CHECKING:
    from ..calendar import CalendarStep
    from ..core.context import SimContext
    from ..core.state import ItemState
    from .scenario import Scenario


class Expense(CashFlow):
    """
    A recurring expense.

    Attributes:
        payment_period: How often `value` is due (required)
        from_stream: Name of the Transfer that pays it (required)
    """

    type = T.EXPENSE
    payment_period_required = True

    def __init__(self, row: Mapping[str, Any], scenario: Scenario | None = None):
        super().__init__(row, scenario)
        self.from_stream: str | None = row.get("from_stream") or None
        if self.from_stream is None and not self.end:
            raise ConfigError(f"{self.id}: from_stream is required")

    def stepper(self, start: CalendarStep, ctx: SimContext) -> ExpenseStepper:
        return ExpenseStepper(self, start, ctx)


class ExpenseStepper(ItemStepper):
    """
    Produces the amount due this period as `value`.

    Payments reduce `value` and add to `paid`; whatever remains unpaid is added
    to `unpaid` and is not carried into the next period.
    """

    item: Expense

    def _due(self, paid: float, unpaid: float):
        amount = self.cents(self.item.per_period(self.ctx.config.periods_per_year))
        return {"value": amount, "due": amount, "paid": paid, "unpaid": unpaid}

    def initial(self, period: CalendarStep, previous: ItemState | None):
        if previous is None:
            return self._due(0.0, 0.0)
        return self._due(previous.get("paid", 0.0), previous.get("unpaid", 0.0))

    def advance(self, period: CalendarStep, previous: ItemState):
        return self._due(previous.get("paid", 0.0), previous.get("unpaid", 0.0))
