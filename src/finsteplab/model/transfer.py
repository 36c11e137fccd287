"""
Transfers: named routing rules saying where payments are drawn from.
"""

from __future__ import annotations

import json
import warnings
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..core.errors import TransferSpecError
from ..core.kinds import T
from ..sim.withdraw import BoundSpec, Share, Withdrawal, withdraw
from .item import ItemStepper, item_id
from .monetary import CashFlow

if TYPE_CHECKING:
    from ..calendar import CalendarStep
    from ..core.context import SimContext
    from ..core.state import ItemState
    from .scenario import Scenario

_CURLY_QUOTES = str.maketrans({"“": '"', "”": '"'})


class Transfer(CashFlow):
    """
    A routing rule for paying expenses.

    The raw `spec` names the sources to draw from:

    - `"savings"`: a single income, asset or liability
    - `"@other"`: delegate to another transfer
    - `["salary", "savings"]`: in order, until the amount is covered
    - `{"brokerage": 3, "ira": 1}`: split by weight

    Specs given as strings starting with `"`, `[` or `{` are parsed as JSON,
    after replacing curly quotes with straight ones.

    **Example Usage:**
        ```python
        row = {"name": "living", "type": "transfer", "spec": '["salary", "savings"]'}
        transfer = Transfer(row, scenario)
        transfer.spec  # ['income/salary', 'asset/savings']
        ```
    """

    type = T.TRANSFER

    def __init__(self, row: Mapping[str, Any], scenario: Scenario | None = None):
        super().__init__(row, scenario)
        if row.get("spec") in (None, "") and not self.end:
            raise TransferSpecError(f"Transfer {self.name} has no spec")
        self.raw_spec = self.parse(row.get("spec"), self.name)
        self._bound: BoundSpec | None = None

    @staticmethod
    def parse(spec: Any, name: str | None = None) -> Any:
        if isinstance(spec, str):
            text = spec.translate(_CURLY_QUOTES).strip()
            if text[:1] in ('"', "[", "{"):
                try:
                    return json.loads(text)
                except json.JSONDecodeError as e:
                    raise TransferSpecError(f"Error parsing transfer {name or 'unknown'}: {e}") from e
            return text
        return spec

    @property
    def spec(self) -> BoundSpec:
        """The spec with names resolved to item ids, bound on first use."""
        if self._bound is None:
            self._bound = self.bind(self.raw_spec)
        return self._bound

    def _resolve(self, name: str) -> str:
        scenario = self.scenario
        if scenario is None:
            raise TransferSpecError(f"Transfer {self.name} is not part of a scenario")
        if name.startswith("@"):
            target = name[1:]
            if target not in scenario.transfers:
                raise TransferSpecError(f"Transfer {self.name}: there is no Transfer named {target!r}")
            return item_id(T.TRANSFER, target)
        for index, type_ in (
            (scenario.incomes, T.INCOME),
            (scenario.assets, T.ASSET),
            (scenario.liabilities, T.LIABILITY),
        ):
            if name in index:
                return item_id(type_, name)
        raise TransferSpecError(f"Transfer {self.name}: there is no income, asset, or liability named {name!r}")

    def bind(self, spec: Any) -> BoundSpec:
        """
        Resolve names to item ids and normalize weights.

        Raises:
            TransferSpecError: On unknown names, unknown spec shapes or a
                non-positive weight total
        """
        if isinstance(spec, str):
            return self._resolve(spec)
        if isinstance(spec, list):
            return [self.bind(s) for s in spec]
        if isinstance(spec, Mapping):
            try:
                weights = {k: float(v) for k, v in spec.items()}
            except (TypeError, ValueError) as e:
                raise TransferSpecError(f"Transfer {self.name}: weights must be numbers: {spec!r}") from e
            total = sum(weights.values())
            if total <= 0 or any(w < 0 for w in weights.values()):
                raise TransferSpecError(f"Transfer {self.name}: weights must be non-negative with a positive total")
            for k, w in weights.items():
                if w == 0:
                    warnings.warn(f"Transfer {self.name}: source {k!r} has zero weight", stacklevel=2)
            return {self._resolve(k): Share(w / total) for k, w in weights.items()}
        raise TransferSpecError(f"Unknown transfer spec for {self.name}: {spec!r}")

    def references(self) -> set[str]:
        """Ids of the transfers this one delegates to."""
        found: set[str] = set()

        def walk(spec: BoundSpec) -> None:
            if isinstance(spec, str):
                if spec.startswith(f"{T.TRANSFER}/"):
                    found.add(spec)
            else:
                for s in spec:
                    walk(s)

        walk(self.spec)
        return found

    def withdraw(self, amount: float, payer_id: str, states: Mapping[str, ItemState], **kwargs: Any) -> Withdrawal:
        return withdraw(self, amount, payer_id, states, **kwargs)

    def stepper(self, start: CalendarStep, ctx: SimContext) -> TransferStepper:
        return TransferStepper(self, start, ctx)


class TransferStepper(ItemStepper):
    """Transfers carry no state of their own; being live is what matters."""

    def initial(self, period: CalendarStep, previous: ItemState | None):
        return {}

    def advance(self, period: CalendarStep, previous: ItemState):
        return {}
