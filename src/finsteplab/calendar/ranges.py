"""
Restartable ranges of calendar steps.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date

from ..core.errors import ConfigError
from .period import CalendarPeriod, CalendarStep
from .units import CalendarUnit, unit_and_count
from .utils import increment_date, to_date


@dataclass(frozen=True)
class CalendarRange(CalendarPeriod):
    """
    A finite, lazy sequence of `CalendarStep`s covering `[start, end)`.

    Each call to `iter()` starts again from `start`, so a range can be walked
    any number of times. The final step may extend past `end`.
    """

    unit: CalendarUnit = CalendarUnit.MONTH
    n: int = 1

    def __post_init__(self):
        if self.n < 1:
            raise ConfigError(f"CalendarRange increment must be positive, got {self.n}")

    @property
    def interval(self) -> dict[str, int]:
        return {self.unit.value: self.n}

    def __iter__(self) -> Iterator[CalendarStep]:
        current = self.start
        i = 0
        while current < self.end:
            nxt = increment_date(current, self.unit, self.n)
            yield CalendarStep(current, nxt, i)
            current = nxt
            i += 1

    def first(self) -> CalendarStep | None:
        return next(iter(self), None)


def calendar_range(start, end, unit_spec, n: int | None = None) -> CalendarRange:
    """
    Build a `CalendarRange`.

    **Args:**
        start: First date (date-like)
        end: Exclusive end (date-like)
        unit_spec: A `CalendarUnit`, its name, or a `{unit: n}` mapping
        n: Units per step (overrides the mapping's count)

    **Example:**
        ```python
        for step in calendar_range("2021-01-01", "2022-01-01", {"month": 1}):
            print(step.step, step)
        ```
    """
    unit, count = unit_and_count(unit_spec, n)
    start_d: date = to_date(start)
    return CalendarRange(start_d, to_date(end), unit, count)
