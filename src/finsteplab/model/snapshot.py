"""
Per-period snapshots of a scenario.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from .scenario_base import ScenarioBase
from .stateful import Stateful

if TYPE_CHECKING:
    from ..calendar import CalendarStep
    from ..core.state import ItemState
    from .scenario import Scenario


class Snapshot(ScenarioBase):
    """
    The scenario as it stood in one period.

    Has the same lists and indexes as its `Scenario`, but each entry is a
    `Stateful` view pairing the version in effect with a copy of that period's
    state. Items with no live state (not begun, or ended) are left out.
    Snapshots are never modified; `previous` links them into a sequence.

    Attributes:
        scenario: The scenario this is a snapshot of
        period: The simulation step
        date: Start of the period
        previous: The prior snapshot, or None for the first
    """

    def __init__(
        self,
        scenario: Scenario,
        period: CalendarStep,
        previous: Snapshot | None,
        states: Mapping[str, ItemState],
    ):
        super().__init__(scenario.row, scenario)
        self.period = period
        self.date = period.start
        self.previous = previous
        self.config = scenario.config

        def view(item):
            if item is None or item.id not in states:
                return None
            state = states[item.id].copy()
            return Stateful(state.item, self, period, state)

        def views(items):
            return [v for v in map(view, items) if v is not None]

        self._init_lists()
        self.spouse1 = view(scenario.spouse1)
        self.spouse2 = view(scenario.spouse2)
        self.dependents = views(scenario.dependents)
        self.asset_list = views(scenario.asset_list)
        self.liability_list = views(scenario.liability_list)
        self.income_list = views(scenario.income_list)
        self.expense_list = views(scenario.expense_list)
        self.tax_list = views(scenario.tax_list)
        self.transfer_list = views(scenario.transfer_list)
        self.text_list = list(scenario.text_list)
        self._build_indexes()

    @property
    def date_range(self):
        return self.scenario.date_range

    def __repr__(self) -> str:
        return f"<Snapshot {self.name} @ {self.date.isoformat()}>"
