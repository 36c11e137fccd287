"""
Item construction from rows.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from ..core.errors import ConfigError
from ..core.kinds import T
from ..core.temporal import Temporal
from .asset import Asset
from .expense import Expense
from .income import Income
from .income_tax import IncomeTax
from .item import Item
from .liability import Liability
from .person import Person
from .text import Text
from .transfer import Transfer

if TYPE_CHECKING:
    from .scenario import Scenario

ITEM_CLASSES: dict[str, type[Item]] = {
    T.PERSON: Person,
    T.ASSET: Asset,
    T.LIABILITY: Liability,
    T.INCOME: Income,
    T.EXPENSE: Expense,
    T.INCOME_TAX: IncomeTax,
    T.TRANSFER: Transfer,
    T.TEXT: Text,
}


def construct(
    rows: Sequence[Mapping[str, Any]],
    type_: str,
    scenario: Scenario | None,
    end_year: int | None = None,
) -> Item:
    """
    Build all versions of one named item and link them through a `Temporal`.

    **Args:**
        rows: One row per version, all with the same `type` and `name`
        type_: The item type to construct
        scenario: Owning scenario
        end_year: Versions starting on or after January 1 of this year are dropped

    **Returns:**
        The earliest version; the rest are reachable through its `temporal`

    Raises:
        ConfigError: On an unknown type, no rows, or rows of mixed type or name
    """
    cls = ITEM_CLASSES.get(type_)
    if cls is None:
        raise ConfigError(f"Unknown item type: {type_!r}")
    if not rows:
        raise ConfigError(f"No rows to construct a {type_}")
    names = {r.get("name") for r in rows}
    types = {r.get("type", type_) for r in rows}
    if len(names) > 1 or types != {type_}:
        raise ConfigError(f"Rows for one {type_} must share type and name: {sorted(map(str, names))}")
    items = [cls(row, scenario) for row in rows]
    if end_year is not None:
        items = [i for i in items if i.start.year < end_year] or items[:1]
    temporal = Temporal(items)
    for item in temporal:
        item.temporal = temporal
    return temporal.first
