"""
Calendar periods and steps.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from .utils import add_months, fmt_date


@dataclass(frozen=True)
class CalendarLength:
    """
    Measured length of a period.

    Components that are zero are left as None, so `{month: 1}` style
    comparisons stay readable. `total_days` is always set.
    """

    total_days: int
    year: int | None = None
    month: int | None = None
    week: int | None = None
    day: int | None = None

    def as_dict(self) -> dict[str, int]:
        out = {
            k: getattr(self, k)
            for k in ("year", "month", "week", "day")
            if getattr(self, k) is not None
        }
        out["total_days"] = self.total_days
        return out


@dataclass(frozen=True)
class CalendarPeriod:
    """A half-open span of dates, `[start, end)`."""

    start: date
    end: date

    @property
    def total_days(self) -> int:
        return (self.end - self.start).days

    @property
    def length(self) -> CalendarLength:
        months = (self.end.year - self.start.year) * 12 + self.end.month - self.start.month
        if self.end.day < self.start.day:
            months -= 1
        months = max(months, 0)
        days = (self.end - add_months(self.start, months)).days
        year, month = divmod(months, 12)
        week, day = divmod(days, 7)
        return CalendarLength(
            total_days=self.total_days,
            year=year or None,
            month=month or None,
            week=week or None,
            day=day or None,
        )

    def contains(self, d: date) -> bool:
        return self.start <= d < self.end

    def __str__(self) -> str:
        return f"{fmt_date(self.start)} to {fmt_date(self.end)}"


@dataclass(frozen=True)
class CalendarStep(CalendarPeriod):
    """One step of a `CalendarRange`: a period plus its 0-based index."""

    step: int = 0

    def __str__(self) -> str:
        return f"{super().__str__()} (step {self.step})"
