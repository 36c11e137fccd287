"""
Calendar arithmetic used by the model: ages, day counts and year fractions.
"""

from __future__ import annotations

from datetime import date

import numpy as np

from ..tagged import Age, as_age
from .utils import MONTH_START, is_leap_year


def year_days(year: int) -> int:
    """The number of days in a year, 365 or 366."""
    return 366 if is_leap_year(year) else 365


def day_of_year(d: date) -> int:
    """Day number within the year, January 1 being day 1."""
    return MONTH_START[1 if is_leap_year(d.year) else 0][d.month - 1] + d.day


def _anniversary(birth: date, year: int) -> date:
    try:
        return birth.replace(year=year)
    except ValueError:
        # Feb 29 birthdays are observed on Feb 28 in common years
        return date(year, 2, 28)


def calculate_age(birth: date, d: date) -> Age:
    """
    Fractional age in years at date `d`.

    The whole part counts birthdays passed; the fraction is the share of the
    current birthday-to-birthday year elapsed, measured in actual days.
    """
    years = d.year - birth.year
    last = _anniversary(birth, d.year)
    if last > d:
        years -= 1
        last = _anniversary(birth, birth.year + years)
    nxt = _anniversary(birth, birth.year + years + 1)
    return as_age(years + (d - last).days / (nxt - last).days)


def year_fraction(start: date, end: date | None, year: int) -> float:
    """
    Fraction of calendar `year` covered by the half-open span `[start, end)`.

    `end=None` means open-ended. Leap years are measured with 366 days.
    """
    y0, y1 = date(year, 1, 1), date(year + 1, 1, 1)
    lo = max(start, y0)
    hi = y1 if end is None else min(end, y1)
    if hi <= lo:
        return 0.0
    return min(1.0, (hi - lo).days / year_days(year))


def month_range(start: date, months: int) -> np.ndarray:
    """
    Generate a range of monthly dates starting from a given date.

    **Example:**
        ```python
        month_range(date(2026, 1, 1), 3)
        # array(['2026-01', '2026-02', '2026-03'], dtype='datetime64[M]')
        ```
    """
    s = np.datetime64(start, "M")
    return s + np.arange(months).astype("timedelta64[M]")
