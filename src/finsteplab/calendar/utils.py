"""
Date utilities for FinStepLab.
"""

from __future__ import annotations

from calendar import monthrange
from collections.abc import Callable
from datetime import date, datetime, timedelta

import numpy as np
import pandas as pd

from ..core.errors import ConfigError
from .units import DAYS_PER_UNIT, MONTHS_PER_UNIT, CalendarUnit, unit_and_count

# Day-of-year offset of the first of each month, non-leap and leap years.
MONTH_START = (
    (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334, 365),
    (0, 31, 60, 91, 121, 152, 182, 213, 244, 274, 305, 335, 366),
)


def to_date(value) -> date:
    """
    Coerce a date-like value to `datetime.date`.

    Accepts `date`, `datetime`, ISO 8601 strings, `numpy.datetime64` and
    `pandas.Timestamp`.

    Raises:
        ConfigError: If the value cannot be interpreted as a date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (np.datetime64, pd.Timestamp)):
        return pd.Timestamp(value).date()
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError as e:
            raise ConfigError(f"{value!r} is not a valid date") from e
    raise ConfigError(f"{value!r} is not a valid date")


def is_leap_year(year: int | date) -> bool:
    if isinstance(year, date):
        year = year.year
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def add_months(d: date, months: int) -> date:
    """Add whole months to a date, clamping the day to the target month's length."""
    nm = d.month - 1 + months
    y, m = d.year + nm // 12, nm % 12 + 1
    return date(y, m, min(d.day, monthrange(y, m)[1]))


def increment_date(d: date, unit, n: int | None = None) -> date:
    """
    Advance a date by `n` calendar units.

    Month-based units (year, semiannually, quarter, month) land on the first of
    the target month, so incrementing by 0 truncates to the month start.
    Semimonthly steps alternate between the 1st and the 15th. Week-based and
    day units add an exact number of days.

    **Args:**
        d: The date to advance
        unit: A `CalendarUnit`, its name, or a `{unit: n}` mapping
        n: Number of units (default 1, or the mapping's count)

    **Example:**
        ```python
        increment_date(date(2021, 11, 20), "month", 3)  # date(2022, 2, 1)
        increment_date(date(2021, 1, 20), "semimonthly")  # date(2021, 2, 1)
        ```
    """
    unit, n = unit_and_count(unit, n)
    if unit in MONTHS_PER_UNIT:
        nm = d.month - 1 + MONTHS_PER_UNIT[unit] * n
        return date(d.year + nm // 12, nm % 12 + 1, 1)
    if unit is CalendarUnit.SEMIMONTHLY:
        half = 2 * (d.month - 1) + (1 if d.day >= 15 else 0) + n
        months, odd = divmod(half, 2)
        return date(d.year + months // 12, months % 12 + 1, 15 if odd else 1)
    if unit in DAYS_PER_UNIT:
        return d + timedelta(days=DAYS_PER_UNIT[unit] * n)
    raise ConfigError(f"Unknown calendar unit: {unit}")


def truncate_date(unit) -> Callable[[date], date]:
    """
    Return a function truncating dates to the start of the enclosing `unit`.

    Week-based units have no calendar anchor and are rejected.
    """
    unit, _ = unit_and_count(unit)
    if unit in MONTHS_PER_UNIT:
        span = MONTHS_PER_UNIT[unit]
        return lambda d: date(d.year, (d.month - 1) // span * span + 1, 1)
    if unit is CalendarUnit.SEMIMONTHLY:
        return lambda d: date(d.year, d.month, 15 if d.day >= 15 else 1)
    if unit is CalendarUnit.DAY:
        return lambda d: d
    raise ConfigError(f"{unit} is not a valid truncation unit")


def _p2(n: int) -> str:
    return str(n).rjust(2, "0")


def fmt_month(d: date) -> str:
    return f"{d.year}-{_p2(d.month)}"


def fmt_date(d: date) -> str:
    return f"{d.year}-{_p2(d.month)}-{_p2(d.day)}"
