"""
Engine configuration for FinStepLab.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .calendar import CalendarUnit, decode_calendar_interval
from .core.currency import Currency, RoundingPolicy, get_currency


@dataclass
class SimConfig:
    """
    Configuration options for simulation runs.

    Attributes:
        interval: Length of one simulation period as `{unit: n}`
        currency: Currency code; its precision drives cent rounding
        rounding: Rounding policy applied by `cents`
        log_unavailable_sources: Log withdrawals from items with no live state
        record_age_events: Add an `age` timeline event on birthdays
    """

    interval: dict[str, int] = field(default_factory=lambda: {"month": 1})
    currency: str = "USD"
    rounding: RoundingPolicy = RoundingPolicy.HALF_UP
    log_unavailable_sources: bool = True
    record_age_events: bool = True

    @property
    def unit(self) -> CalendarUnit:
        return decode_calendar_interval(self.interval)[0]

    @property
    def n(self) -> int:
        return decode_calendar_interval(self.interval)[1]

    @property
    def periods_per_year(self) -> float:
        """Simulation periods per year (12 for the default monthly interval)."""
        unit, n = decode_calendar_interval(self.interval)
        return unit.periods_per_year / n

    def money(self) -> Currency:
        """The currency used to round amounts, with this config's rounding policy."""
        return get_currency(self.currency).with_rounding(self.rounding)
