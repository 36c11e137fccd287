"""
Calendar units and intervals.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum

from ..core.errors import ConfigError
from ..tagged import as_integer


class CalendarUnit(str, Enum):
    """Units of calendar time, from coarsest to finest."""

    YEAR = "year"
    SEMIANNUALLY = "semiannually"
    QUARTER = "quarter"
    MONTH = "month"
    SEMIMONTHLY = "semimonthly"
    BIWEEKLY = "biweekly"
    WEEK = "week"
    DAY = "day"

    def __str__(self) -> str:
        return self.value

    @property
    def periods_per_year(self) -> int:
        return ANNUAL_PAYMENT_PERIODS[self]

    @property
    def months(self) -> int | None:
        """Length in whole months for month-based units, else None."""
        return MONTHS_PER_UNIT.get(self)


ANNUAL_PAYMENT_PERIODS: dict[CalendarUnit, int] = {
    CalendarUnit.YEAR: 1,
    CalendarUnit.SEMIANNUALLY: 2,
    CalendarUnit.QUARTER: 4,
    CalendarUnit.MONTH: 12,
    CalendarUnit.SEMIMONTHLY: 24,
    CalendarUnit.BIWEEKLY: 26,
    CalendarUnit.WEEK: 52,
    CalendarUnit.DAY: 365,
}

MONTHS_PER_UNIT: dict[CalendarUnit, int] = {
    CalendarUnit.YEAR: 12,
    CalendarUnit.SEMIANNUALLY: 6,
    CalendarUnit.QUARTER: 3,
    CalendarUnit.MONTH: 1,
}

DAYS_PER_UNIT: dict[CalendarUnit, int] = {
    CalendarUnit.BIWEEKLY: 14,
    CalendarUnit.WEEK: 7,
    CalendarUnit.DAY: 1,
}

# A one-entry mapping such as {"month": 3}
CalendarInterval = Mapping[str, int]


def is_calendar_unit(u) -> bool:
    if isinstance(u, CalendarUnit):
        return True
    return isinstance(u, str) and u in CalendarUnit._value2member_map_


def as_calendar_unit(u) -> CalendarUnit:
    """Coerce a unit name (case-insensitive) or `CalendarUnit` to `CalendarUnit`."""
    if isinstance(u, CalendarUnit):
        return u
    if isinstance(u, str) and u.strip().lower() in CalendarUnit._value2member_map_:
        return CalendarUnit(u.strip().lower())
    raise ConfigError(f"{u!r} is not a calendar unit")


def is_calendar_interval(i) -> bool:
    if not isinstance(i, Mapping) or len(i) != 1:
        return False
    ((unit, n),) = i.items()
    return is_calendar_unit(unit) and isinstance(n, int) and not isinstance(n, bool)


def decode_calendar_interval(i: CalendarInterval) -> tuple[CalendarUnit, int]:
    """Decode `{unit: n}` into `(CalendarUnit, n)`."""
    if not isinstance(i, Mapping) or len(i) != 1:
        raise ConfigError(f"{i!r} is not a CalendarInterval")
    ((unit, n),) = i.items()
    return as_calendar_unit(unit), as_integer(n)


def unit_and_count(spec, n: int | None = None) -> tuple[CalendarUnit, int]:
    """Accept a unit, a unit name or a `{unit: n}` mapping."""
    if isinstance(spec, Mapping):
        unit, count = decode_calendar_interval(spec)
        return unit, count if n is None else as_integer(n)
    return as_calendar_unit(spec), 1 if n is None else as_integer(n)
