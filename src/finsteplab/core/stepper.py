"""
Stepper protocol: the per-item state machine driven by the engine.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .errors import ContractError

if TYPE_CHECKING:
    from ..calendar import CalendarStep
    from ..model.item import Item
    from .context import SimContext
    from .state import ItemState


class _Done:
    """Sentinel returned by a stepper whose item has reached its natural end."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "DONE"

    def __bool__(self) -> bool:
        return False


DONE = _Done()


class Stepper:
    """
    Explicit state machine producing one item version's state per period.

    A stepper is created for an item version at a start period. The engine then
    calls `step()` once per period, in order: the first call must be for the
    start period and produces the initial value; each later call must be for
    the next step index and receives the state produced by the previous call
    (possibly modified by payments in between). On the first call `previous` is
    the last state of the version being replaced, or None for a new item.

    **Contract:**
    - `step()` for any period other than the expected one raises `ContractError`
    - `step()` after `close()` raises `ContractError`
    - returning `DONE` closes the stepper

    Subclasses implement `initial(period, previous)` and `advance(period, previous)`.

    **Example:**
        ```python
        class CounterStepper(Stepper):
            def initial(self, period, previous):
                return {"value": 0}

            def advance(self, period, previous):
                return {"value": previous.value + 1}
        ```
    """

    def __init__(self, item: Item, start: CalendarStep, ctx: SimContext):
        self.item = item
        self.start = start
        self.ctx = ctx
        self.position: int | None = None
        self.closed = False

    def step(self, period: CalendarStep, previous: ItemState | None) -> dict[str, Any] | _Done:
        if self.closed:
            raise ContractError(f"{self.item.id}: stepper resumed after close")
        if self.position is None:
            if period.step != self.start.step:
                raise ContractError(
                    f"{self.item.id}: first step must be {self.start.step}, got {period.step}"
                )
            result = self.initial(period, previous)
        else:
            if period.step != self.position + 1:
                raise ContractError(
                    f"{self.item.id}: expected step {self.position + 1}, got {period.step}"
                )
            result = self.advance(period, previous)
        self.position = period.step
        if result is DONE:
            self.close()
        return result

    def initial(self, period: CalendarStep, previous: ItemState | None) -> dict[str, Any] | _Done:
        raise NotImplementedError

    def advance(self, period: CalendarStep, previous: ItemState) -> dict[str, Any] | _Done:
        raise NotImplementedError

    def close(self) -> None:
        self.closed = True

    def __repr__(self) -> str:
        state = "closed" if self.closed else f"at {self.position}"
        return f"<{type(self).__name__} {self.item.id} {state}>"
