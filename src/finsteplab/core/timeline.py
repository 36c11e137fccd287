"""
Ordered audit log of simulation events.
"""

from __future__ import annotations

import heapq
import itertools
from datetime import date
from enum import Enum
from typing import TYPE_CHECKING, Any, NamedTuple

if TYPE_CHECKING:
    from ..model.item import Item


class Action(str, Enum):
    """Timeline actions, declared in priority order within a date."""

    BEGIN = "begin"
    STEP = "step"
    INTEREST = "interest"
    RECEIVE = "receive"
    WITHDRAW = "withdraw"
    DEPOSIT = "deposit"
    PAY = "pay"
    END = "end"
    AGE = "age"
    TERMINATE = "terminate"

    def __str__(self) -> str:
        return self.value

    @property
    def priority(self) -> int:
        return _PRIORITY[self]


_PRIORITY = {a: i for i, a in enumerate(Action)}


class TimelineEvent(NamedTuple):
    """
    A dated record of something that happened to an item.

    Attributes:
        date: Simulated date of the event
        action: What happened (begin, pay, withdraw, ...)
        item: The item the event concerns
        data: Action-specific details (amounts, sources, ages)
    """

    date: date
    action: Action
    item: Item
    data: dict[str, Any]


class Timeline:
    """
    Binary heap of `TimelineEvent`s.

    Events sort by date, then action priority, then item type and name; ties
    keep insertion order. The key is computed once when an event is added.
    """

    def __init__(self):
        self._heap: list[tuple[tuple, TimelineEvent]] = []
        self._seq = itertools.count()

    def add(self, action: Action | str, d: date, item: Item, **data: Any) -> TimelineEvent:
        action = Action(action)
        event = TimelineEvent(d, action, item, data)
        key = (d, action.priority, item.type, item.name, next(self._seq))
        heapq.heappush(self._heap, (key, event))
        return event

    def events(self) -> list[TimelineEvent]:
        """All events in order. The heap itself is left intact."""
        return [event for _, event in sorted(self._heap, key=lambda kv: kv[0])]

    def for_item(self, item_id: str) -> list[TimelineEvent]:
        return [e for e in self.events() if e.item.id == item_id]

    def __len__(self) -> int:
        return len(self._heap)

    def __iter__(self):
        return iter(self.events())
