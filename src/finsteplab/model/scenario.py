"""
Scenario: a household model built from rows, and the entry point for running it.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable, Mapping
from datetime import date
from typing import TYPE_CHECKING, Any

from ..config import SimConfig
from ..core.errors import ConfigError, TransferSpecError
from ..core.kinds import T
from ..core.timeline import TimelineEvent
from .construct import construct
from .item import Item
from .scenario_base import ScenarioBase

if TYPE_CHECKING:
    from ..sim.engine import Sim
    from .snapshot import Snapshot

logger = logging.getLogger(__name__)

SPOUSES = ("spouse1", "spouse2")


class Scenario(ScenarioBase):
    """
    A household financial model under one set of assumptions.

    Rows from a dataset belong to a scenario through their `scenarios` field
    (default `["Default"]`). Rows sharing a type and name are versions of one
    item.

    **Construction:**
    1. Filter the dataset to this scenario's rows
    2. Build `spouse1` (required) and `spouse2` (optional) from person rows of
       those names; other person rows become dependents
    3. Build every other item type, grouped by name
    4. Check cross references and bind all transfers

    **Example Usage:**
        ```python
        from finsteplab.model import Scenario

        scenario = Scenario({"name": "Default", "type": "scenario", "start": "2021-01-01"}, rows, 2060)
        for snapshot in scenario.snapshots:
            print(snapshot.date, snapshot.net_assets)
        ```

    Attributes:
        data: The rows belonging to this scenario
        end_year: First year not simulated
        config: Engine configuration
        by_id: Earliest version of each item, by id
    """

    def __init__(
        self,
        row: Mapping[str, Any],
        dataset: Iterable[Mapping[str, Any]],
        end_year: int,
        config: SimConfig | None = None,
    ):
        row = {"type": T.SCENARIO, **row}
        super().__init__(row, None)
        self.config = config or SimConfig()
        self.end_year = end_year
        self.end_date = date(end_year, 1, 1)
        if self.end_date <= self.start:
            raise ConfigError(f"Scenario {self.name}: end year {end_year} is not after {self.start}")
        self.data = [r for r in dataset if r.get("name") and Item.row_in_scenario(self.name, r)]
        self._sim: Sim | None = None

        groups: dict[str, dict[str, list[Mapping[str, Any]]]] = defaultdict(lambda: defaultdict(list))
        for r in self.data:
            if r.get("type") not in T.all_types():
                raise ConfigError(f"Unknown item type {r.get('type')!r} for {r.get('name')!r}")
            groups[r["type"]][r["name"]].append(r)

        self._init_lists()
        people = groups.get(T.PERSON, {})
        if "spouse1" not in people:
            raise ConfigError("No spouse1 specified")
        self.spouse1 = self._construct(people["spouse1"], T.PERSON)
        self.spouse2 = self._construct(people["spouse2"], T.PERSON) if "spouse2" in people else None
        self.dependents = [self._construct(rows, T.PERSON) for name, rows in people.items() if name not in SPOUSES]

        self.asset_list = self._construct_items(groups, T.ASSET)
        self.liability_list = self._construct_items(groups, T.LIABILITY)
        self.income_list = self._construct_items(groups, T.INCOME)
        self.expense_list = self._construct_items(groups, T.EXPENSE)
        self.tax_list = self._construct_items(groups, T.INCOME_TAX)
        self.transfer_list = self._construct_items(groups, T.TRANSFER)
        self.text_list = self._construct_items(groups, T.TEXT)
        self._build_indexes()

        self.by_id: dict[str, Item] = {}
        for item in self.items():
            if item is not self:
                self.by_id.setdefault(item.id, item)

        self._check_references()
        self.bind_transfers()
        logger.debug("Scenario %s: %d items from %d rows", self.name, len(self.by_id), len(self.data))

    def _construct(self, rows: list[Mapping[str, Any]], type_: str) -> Any:
        return construct(rows, type_, self, self.end_year)

    def _construct_items(self, groups, type_: str) -> list[Any]:
        return [self._construct(rows, type_) for rows in groups.get(type_, {}).values()]

    def _check_references(self) -> None:
        for income in self.income_list:
            for version in income.temporal:
                if version.deposit is not None and version.deposit not in self.assets:
                    raise ConfigError(f"{version.id}: deposit asset {version.deposit!r} does not exist")
        for liability in self.liability_list:
            for version in liability.temporal:
                if version.expense is not None and version.expense not in self.expenses:
                    raise ConfigError(f"{version.id}: repaying expense {version.expense!r} does not exist")

    def bind_transfers(self) -> None:
        """
        Bind every version of every transfer and reject delegation cycles.

        Raises:
            TransferSpecError: On unresolvable names or cyclic `@transfer` references
        """
        graph: dict[str, set[str]] = defaultdict(set)
        for transfer in self.transfer_list:
            for version in transfer.temporal:
                if not version.end:
                    graph[version.id] |= version.references()

        visiting: list[str] = []
        done: set[str] = set()

        def visit(node: str) -> None:
            if node in done:
                return
            if node in visiting:
                cycle = " -> ".join([*visiting[visiting.index(node) :], node])
                raise TransferSpecError(f"Transfer cycle: {cycle}")
            visiting.append(node)
            for ref in sorted(graph.get(node, ())):
                visit(ref)
            visiting.pop()
            done.add(node)

        for node in sorted(graph):
            visit(node)

    @property
    def date_range(self) -> tuple[date, date]:
        return self.start, self.end_date

    def set_end(self, d: date) -> None:
        """Truncate the simulated range; memoized results are dropped."""
        if d <= self.start:
            raise ConfigError(f"Scenario {self.name}: end {d} is not after start {self.start}")
        self.end_date = d
        self._sim = None

    @property
    def sim(self) -> Sim:
        if self._sim is None:
            from ..sim.engine import Sim

            self._sim = Sim(self, config=self.config)
        return self._sim

    @property
    def snapshots(self) -> list[Snapshot]:
        return self.sim.snapshots

    @property
    def timeline(self) -> list[TimelineEvent]:
        return self.sim.timeline

    def __repr__(self) -> str:
        return f"<Scenario {self.name} {self.start.isoformat()} to {self.end_date.isoformat()}>"
