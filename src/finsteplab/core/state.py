"""
Per-period item state records.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import SimpleNamespace
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from datetime import date

    from ..model.item import Item
    from .stepper import Stepper


class ItemStatus(Enum):
    INIT = "init"
    ACTIVE = "active"
    TERMINATED = "terminated"


_HEADER = ("date", "id", "type", "item", "step")


class ItemState(SimpleNamespace):
    """
    The state of one item for one period.

    Always carries `date`, `id`, `type`, `item` and `step`; every other field
    (`value`, `used`, `interest`, ...) is whatever the item's stepper produced.
    Fields are read as attributes or by key.
    """

    def __init__(self, date: date, item: Item, step: int, **fields: Any):
        super().__init__(date=date, id=item.id, type=item.type, item=item, step=step, **fields)

    def get(self, key: str, default: Any = None) -> Any:
        return getattr(self, key, default)

    def fields(self) -> dict[str, Any]:
        return {k: v for k, v in vars(self).items() if k not in _HEADER}

    def copy(self) -> ItemState:
        """Shallow copy: field values are shared, the record is not."""
        new = ItemState.__new__(ItemState)
        new.__dict__.update(vars(self))
        return new

    def __getitem__(self, key: str) -> Any:
        try:
            return getattr(self, key)
        except AttributeError:
            raise KeyError(key) from None

    def __contains__(self, key: str) -> bool:
        return hasattr(self, key)

    def __repr__(self) -> str:
        body = ", ".join(f"{k}={v!r}" for k, v in self.fields().items())
        return f"ItemState({self.id} @ {self.date}: {body})"


@dataclass
class ItemRecord:
    """Engine-owned bookkeeping for one item across the whole run."""

    item: Item
    stepper: Stepper
    status: ItemStatus = ItemStatus.INIT
    current: ItemState | None = None
