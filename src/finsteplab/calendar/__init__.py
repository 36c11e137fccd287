"""
Calendar support: units, date increments, periods and restartable ranges.
"""

from .fns import calculate_age, day_of_year, month_range, year_days, year_fraction
from .period import CalendarLength, CalendarPeriod, CalendarStep
from .ranges import CalendarRange, calendar_range
from .units import (
    ANNUAL_PAYMENT_PERIODS,
    CalendarInterval,
    CalendarUnit,
    as_calendar_unit,
    decode_calendar_interval,
    is_calendar_interval,
    is_calendar_unit,
)
from .utils import (
    add_months,
    fmt_date,
    fmt_month,
    increment_date,
    is_leap_year,
    to_date,
    truncate_date,
)

__all__ = [
    "ANNUAL_PAYMENT_PERIODS",
    "CalendarInterval",
    "CalendarLength",
    "CalendarPeriod",
    "CalendarRange",
    "CalendarStep",
    "CalendarUnit",
    "add_months",
    "as_calendar_unit",
    "calculate_age",
    "calendar_range",
    "day_of_year",
    "decode_calendar_interval",
    "fmt_date",
    "fmt_month",
    "increment_date",
    "is_calendar_interval",
    "is_calendar_unit",
    "is_leap_year",
    "month_range",
    "to_date",
    "truncate_date",
    "year_days",
    "year_fraction",
]
