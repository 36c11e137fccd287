"""
Interest-rate and periodic-amount conversions.

Rates are annual nominal rates compounded `from_period` times a year. Periods
are given either as a count per year or as a `CalendarUnit` (or its name).
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Union

from ..calendar import ANNUAL_PAYMENT_PERIODS, as_calendar_unit
from ..tagged import Money, Rate, cents

Periods = Union[float, str]


def _per_year(p) -> float:
    if isinstance(p, (int, float)) and not isinstance(p, bool):
        return float(p)
    return float(ANNUAL_PAYMENT_PERIODS[as_calendar_unit(p)])


def convert_interest_per_period(rate: Rate, from_period: Periods, to_period: Periods) -> float:
    """
    Effective rate per `to_period` for an annual rate compounded `from_period` times a year.

    **Example:**
        ```python
        convert_interest_per_period(0.12, "month", "month")  # 0.01
        convert_interest_per_period(0.05, "year", "month")   # ~0.004074
        ```
    """
    f, t = _per_year(from_period), _per_year(to_period)
    return (1 + rate / f) ** (f / t) - 1


def convert_interest(rate: Rate, from_period: Periods, to_period: Periods) -> Rate:
    """Equivalent annual nominal rate when compounding `to_period` times a year."""
    return Rate(_per_year(to_period) * convert_interest_per_period(rate, from_period, to_period))


def convert_periods(amount: Money, from_period: Periods, to_period: Periods) -> Money:
    """Pro-rate an amount paid `from_period` times a year to one paid `to_period` times a year."""
    return Money(amount * _per_year(from_period) / _per_year(to_period))


def amortize(value: Money, rate: Rate, payment: Money | None = None) -> Iterator[dict[str, Money]]:
    """
    Step a balance month by month at simple monthly interest (`rate / 12`).

    Without a payment the balance compounds indefinitely. With a payment, each
    month pays interest first and the rest reduces principal; the generator
    stops once the balance reaches zero.

    Yields:
        Dicts with `value`, `interest`, `principal` and `payment`, rounded to cents
    """
    monthly = rate / 12
    balance = cents(value)
    while balance != 0:
        interest = cents(balance * monthly)
        owed = cents(balance + interest)
        if payment is None:
            balance = owed
            yield {"value": balance, "interest": interest, "principal": Money(0.0), "payment": Money(0.0)}
            continue
        pmt = cents(min(payment, owed))
        principal = cents(min(balance, max(0.0, pmt - interest)))
        balance = cents(owed - pmt)
        yield {"value": balance, "interest": interest, "principal": principal, "payment": pmt}
