"""
Income tax: accrues taxable income over a year and assesses tax after it ends.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..core.errors import ConfigError
from ..core.kinds import T
from ..tax import STATES, TAX_STATUSES, TaxData, TaxResult, compute_tax
from ..tagged import Money
from .item import ItemStepper
from .monetary import CashFlow

if TYPE_CHECKING:
    from ..calendar import CalendarStep
    from ..core.context import SimContext
    from ..core.state import ItemState
    from .scenario import Scenario

logger = logging.getLogger(__name__)


class IncomeTax(CashFlow):
    """
    Income tax owed to one jurisdiction.

    Attributes:
        state: Jurisdiction postal code (`US` for federal)
        status: Filing status; defaults to `married` with two spouses, else `single`
        from_stream: Transfer paying the tax when assessed, if any
    """

    type = T.INCOME_TAX

    def __init__(self, row: Mapping[str, Any], scenario: Scenario | None = None):
        super().__init__(row, scenario)
        self.state: str = str(row.get("state") or "US").upper()
        if self.state not in STATES:
            raise ConfigError(f"{self.id}: unknown jurisdiction {self.state!r}")
        status = row.get("status")
        if status is not None and status not in TAX_STATUSES:
            raise ConfigError(f"{self.id}: unknown filing status {status!r}")
        self._status: str | None = status
        self.from_stream: str | None = row.get("from_stream") or None

    @property
    def status(self) -> str:
        if self._status is not None:
            return self._status
        if self.scenario is not None and self.scenario.spouse2 is not None:
            return "married"
        return "single"

    def compute(self, year: int, income: float, deductions: float) -> TaxResult:
        """
        Tax for one year of income.

        Itemized `deductions` are used only when they exceed the standard
        deduction.
        """
        spouse1 = self.scenario.spouse1 if self.scenario is not None else None
        spouse2 = self.scenario.spouse2 if self.scenario is not None else None
        data = TaxData(
            income={"regular": Money(income)},
            year=year,
            status=self.status,
            spouse1=spouse1,
            spouse2=spouse2,
        )
        result = compute_tax(self.state, year, data)
        if deductions > result.std_deductions:
            data.deductions = Money(deductions)
            result = compute_tax(self.state, year, data)
        return result

    def stepper(self, start: CalendarStep, ctx: SimContext) -> IncomeTaxStepper:
        return IncomeTaxStepper(self, start, ctx)


class IncomeTaxStepper(ItemStepper):
    """
    Accumulates year-to-date income and deductions.

    The engine credits each period's taxable income and deductions to the
    state's `income` and `deductions`. On the first period of a new calendar
    year the completed year is assessed: `value` becomes the tax owed and
    `tax_result` the full calculation. Otherwise `value` is 0.
    """

    item: IncomeTax

    def initial(self, period: CalendarStep, previous: ItemState | None):
        state = {
            "value": 0.0,
            "year": period.start.year,
            "income": 0.0,
            "deductions": 0.0,
            "ytd_income": 0.0,
            "ytd_deductions": 0.0,
            "tax_result": None,
            "paid": 0.0,
            "unpaid": 0.0,
        }
        if previous is not None and previous.get("year") == period.start.year:
            # a new version of the same tax picks up the year so far
            for k in ("ytd_income", "ytd_deductions", "paid", "unpaid", "tax_result"):
                state[k] = previous.get(k, state[k])
            state["ytd_income"] += previous.get("income", 0.0)
            state["ytd_deductions"] += previous.get("deductions", 0.0)
        return state

    def advance(self, period: CalendarStep, previous: ItemState):
        ytd_income = previous.ytd_income + previous.income
        ytd_deductions = previous.ytd_deductions + previous.deductions
        state = {
            "value": 0.0,
            "year": period.start.year,
            "income": 0.0,
            "deductions": 0.0,
            "ytd_income": ytd_income,
            "ytd_deductions": ytd_deductions,
            "tax_result": previous.tax_result,
            "paid": previous.get("paid", 0.0),
            "unpaid": previous.get("unpaid", 0.0),
        }
        if period.start.year != previous.year:
            result = self.item.compute(previous.year, ytd_income, ytd_deductions)
            logger.debug("%s: %s tax for %d is %.2f", self.item.id, self.item.state, previous.year, result.tax)
            state.update(value=result.tax, tax_result=result, ytd_income=0.0, ytd_deductions=0.0)
        return state
