"""
Time-versioned sequences of items.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from datetime import date
from typing import Generic, Protocol, TypeVar


class Versioned(Protocol):
    start: date
    end: bool


V = TypeVar("V", bound=Versioned)


class Temporal(Sequence, Generic[V]):
    """
    An immutable, start-ordered sequence of versions of one item.

    A version is in effect from its `start` until the next version starts. A
    version flagged `end` marks the point where the item stops existing.

    **Example:**
        ```python
        t = Temporal([rent_2021, rent_2023, rent_end_2030])
        t.on_date(date(2024, 5, 1))   # rent_2023
        t.on_date(date(2031, 1, 1))   # None, ended
        t.span()                      # (date(2021, 1, 1), date(2030, 1, 1))
        ```
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[V]):
        # sorted() is stable, so equal starts keep their input order
        self._items: tuple[V, ...] = tuple(sorted(items, key=lambda v: v.start))

    def on_date(self, d: date) -> V | None:
        """The version in effect at `d`, or None before the first start or after an end."""
        current = None
        for v in self._items:
            if v.start > d:
                break
            current = v
        if current is None or current.end:
            return None
        return current

    @property
    def first(self) -> V:
        return self._items[0]

    @property
    def last(self) -> V:
        return self._items[-1]

    def slice(self, start: date | None = None, end: date | None = None) -> Temporal[V]:
        """Versions whose start lies in `[start, end)`."""
        return Temporal(
            v
            for v in self._items
            if (start is None or v.start >= start) and (end is None or v.start < end)
        )

    def span(self) -> tuple[date, date | None]:
        """`(first start, start of the first end marker or None)`."""
        end = next((v.start for v in self._items if v.end), None)
        return self._items[0].start, end

    def __getitem__(self, i):
        return self._items[i]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[V]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"Temporal({list(self._items)!r})"
