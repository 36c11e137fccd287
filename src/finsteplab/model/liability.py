"""
Liabilities: debts that accrue interest and are repaid through an expense.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any

from ..calendar import CalendarUnit
from ..core.errors import ConfigError
from ..core.kinds import T
from ..core.stepper import DONE
from ..sim.interest import amortize, convert_periods
from ..tagged import Money, as_money
from .asset import AssetStepper, InterestBearing

if TYPE_CHECKING:
    from ..calendar import CalendarStep
    from ..core.context import SimContext
    from ..core.state import ItemState
    from .scenario import Scenario


class Liability(InterestBearing):
    """
    A loan, mortgage or credit balance; `value` is the amount owed.

    Attributes:
        payment: Scheduled payment per `payment_period`, if any
        expense: Name of the expense whose payments repay this liability
    """

    type = T.LIABILITY

    def __init__(self, row: Mapping[str, Any], scenario: Scenario | None = None):
        row = {"payment_period": CalendarUnit.MONTH, **row}
        super().__init__(row, scenario)
        payment = row.get("payment")
        self.payment: Money | None = as_money(payment) if payment is not None else None
        self.expense: str | None = row.get("expense") or None

    def schedule(self) -> Iterator[dict[str, Money]]:
        """Monthly amortization of the current balance at the scheduled payment."""
        if self.rate is None:
            raise ConfigError(f"{self.id}: no rate to amortize with")
        payment = None
        if self.payment is not None:
            payment = convert_periods(self.payment, self.payment_period, CalendarUnit.MONTH)
        return amortize(self.value, self.rate, payment)

    def stepper(self, start: CalendarStep, ctx: SimContext) -> LiabilityStepper:
        return LiabilityStepper(self, start, ctx)


class LiabilityStepper(AssetStepper):
    """
    Accrues interest on the balance owed.

    In addition to the asset fields, carries `principal`: the cumulative amount
    repaid. Finishes once repayments have cleared the balance.
    """

    item: Liability

    def initial(self, period: CalendarStep, previous: ItemState | None):
        principal = previous.get("principal", 0.0) if previous is not None else 0.0
        return {**super().initial(period, previous), "principal": principal}

    def advance(self, period: CalendarStep, previous: ItemState):
        principal = previous.get("principal", 0.0)
        if principal > 0 and previous.value <= 0:
            return DONE
        return {**super().advance(period, previous), "principal": principal}
