"""
Read-only view of an item combined with its state for one period.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..calendar import CalendarStep
    from ..core.state import ItemState
    from .item import Item
    from .scenario_base import ScenarioBase


class Stateful:
    """
    An item as it stood in one period.

    Attribute lookups resolve the period's state fields first (`value`,
    `used`, `interest`, ...) and fall back to the item (`rate`, `birth`,
    `has_category`, ...). Instances are immutable.

    **Example:**
        ```python
        savings = snapshot.assets["savings"]
        savings.value   # balance this period, from the state
        savings.rate    # annual rate, from the item
        ```
    """

    __slots__ = ("item", "scenario", "period", "state")

    def __init__(self, item: Item, scenario: ScenarioBase, period: CalendarStep, state: ItemState):
        object.__setattr__(self, "item", item)
        object.__setattr__(self, "scenario", scenario)
        object.__setattr__(self, "period", period)
        object.__setattr__(self, "state", state)

    def __getattr__(self, name: str) -> Any:
        fields = vars(object.__getattribute__(self, "state"))
        if name in fields:
            return fields[name]
        return getattr(object.__getattribute__(self, "item"), name)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    @property
    def id(self) -> str:
        return self.item.id

    @property
    def name(self) -> str:
        return self.item.name

    @property
    def type(self) -> str:
        return self.item.type

    @property
    def date(self):
        return self.state.date

    def __repr__(self) -> str:
        return f"<Stateful {self.item.id} @ {self.state.date}: value={self.state.get('value')!r}>"
