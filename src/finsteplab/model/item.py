"""
Base item class for FinStepLab household models.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date
from typing import TYPE_CHECKING, Any

from ..calendar import to_date
from ..core.errors import ConfigError, ContractError
from ..core.stepper import Stepper
from ..core.temporal import Temporal
from ..tagged import Money, cents

if TYPE_CHECKING:
    from ..calendar import CalendarStep
    from ..core.context import SimContext
    from .scenario import Scenario

# Default start for items and scenarios that do not give one
START = date(date.today().year, 1, 1)

DEFAULT_SCENARIOS: tuple[str, ...] = ("Default",)


def item_id(type_: str, name: str) -> str:
    return f"{type_}/{name}"


def parse_categories(value: Any) -> frozenset[str]:
    """Categories come as an iterable of tags or a `|`/`,` separated string."""
    if value is None or value == "":
        return frozenset()
    if isinstance(value, str):
        return frozenset(t.strip() for t in re.split(r"[|,]", value) if t.strip())
    return frozenset(str(t).strip() for t in value if str(t).strip())


def parse_scenarios(value: Any) -> tuple[str, ...]:
    if value is None or value == "" or value == []:
        return DEFAULT_SCENARIOS
    if isinstance(value, str):
        return tuple(s.strip() for s in re.split(r"[|,]", value) if s.strip())
    return tuple(value)


class Item:
    """
    Base class for every row-defined element of a household model.

    An item is one *version* of a named thing: a salary from 2021, the same
    salary after a raise in 2023. Versions of one item share `id` and are held,
    in start order, by the `Temporal` assigned to each of them.

    Attributes:
        id: `"<type>/<name>"`, stable across versions
        name: Name, unique within its type
        pretty_name: Display name (defaults to `name`)
        start: Date from which this version is in effect
        end: True when this version marks the end of the item
        categories: Free-form tags (`nontaxable`, `non-income`, ...)
        scenarios: Scenarios this row belongs to
        sort: Display ordering hint
        notes: Free text
        scenario: The owning scenario

    Note:
        `temporal` is set exactly once, by `construct`, after all versions exist.
    """

    type: str = ""

    def __init__(self, row: Mapping[str, Any], scenario: Scenario | None = None):
        name = row.get("name")
        if not name:
            raise ConfigError(f"{self.type} row has no name: {dict(row)!r}")
        self.scenario = scenario
        self.name: str = str(name)
        self.pretty_name: str = row.get("pretty_name") or self.name
        if row.get("start") is not None:
            self.start: date = to_date(row["start"])
        else:
            self.start = scenario.start if scenario is not None else START
        self.end: bool = bool(row.get("end", False))
        self.categories = parse_categories(row.get("categories"))
        self.scenarios = parse_scenarios(row.get("scenarios"))
        self.sort: int = int(row.get("sort") or 0)
        self.notes: str | None = row.get("notes")
        self.row: dict[str, Any] = dict(row)
        self._temporal: Temporal[Item] | None = None

    @property
    def id(self) -> str:
        return item_id(self.type, self.name)

    @property
    def temporal(self) -> Temporal[Item]:
        if self._temporal is None:
            raise ContractError(f"{self.id}: temporal read before it was set")
        return self._temporal

    @temporal.setter
    def temporal(self, value: Temporal[Item]) -> None:
        if self._temporal is not None:
            raise ContractError(f"{self.id}: temporal may only be set once")
        self._temporal = value

    def has_category(self, category: str) -> bool:
        return category in self.categories

    def in_scenario(self, name: str) -> bool:
        return name in self.scenarios

    @staticmethod
    def row_in_scenario(name: str, row: Mapping[str, Any]) -> bool:
        return name in parse_scenarios(row.get("scenarios"))

    def stepper(self, start: CalendarStep, ctx: SimContext) -> Stepper:
        raise ConfigError(f"{self.id}: items of type {self.type!r} are not simulated")

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id} from {self.start.isoformat()}{' end' if self.end else ''}>"


class ItemStepper(Stepper):
    """Stepper base for items, with amounts rounded in the run's currency."""

    def cents(self, amount: float) -> Money:
        return cents(amount, self.ctx.currency)

    def timeline(self, action: str, d: date, **data: Any) -> None:
        self.ctx.add_timeline(action, d, self.item, **data)
