"""
Tagged numeric domain for FinStepLab.

Every quantity that flows through the engine is a plain `float` or `int` at
runtime, but is declared with one of the `NewType` aliases below and validated
with the matching `as_*` checked cast at the boundaries where values enter the
model (row construction, table lookups). This keeps NaN, infinite or negative
amounts from silently propagating through hundreds of monthly periods.

**Conventions:**
- `is_<type>(x)` is a predicate and never raises
- `as_<type>(x)` returns `x` (typed) or raises `TaggedValueError`
- `cents(x)` rounds a monetary amount to cent precision

**Example:**
    ```python
    from finsteplab.tagged import as_money, as_rate, cents

    balance = as_money(1000.0)
    rate = as_rate(0.05)
    interest = cents(balance * rate / 12)  # 4.17
    ```
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from numbers import Real
from typing import NewType

from .core.currency import USD, Currency
from .core.errors import TaggedValueError

Money = NewType("Money", float)
Rate = NewType("Rate", float)
TaxRate = NewType("TaxRate", float)
Probability = NewType("Probability", float)
Unit = NewType("Unit", float)
Integer = NewType("Integer", int)
Age = NewType("Age", float)
IAge = NewType("IAge", int)
Year = NewType("Year", int)
Degrees = NewType("Degrees", float)

ZERO = Money(0.0)

MIN_YEAR = 1800
MAX_YEAR = 3000


def _is_number(n) -> bool:
    return isinstance(n, Real) and not isinstance(n, bool)


def _fail(n, what: str):
    raise TaggedValueError(f"{n!r} is not {what}")


def is_money(n) -> bool:
    """Money is any finite number; negative balances are legal (overdrafts)."""
    return _is_number(n) and math.isfinite(n)


def as_money(n) -> Money:
    return Money(float(n)) if is_money(n) else _fail(n, "a valid amount of Money")


def is_unit(n) -> bool:
    return _is_number(n) and 0 <= n <= 1


def as_unit(n) -> Unit:
    return Unit(float(n)) if is_unit(n) else _fail(n, "a number between 0 and 1")


is_probability = is_unit


def as_probability(n) -> Probability:
    return Probability(float(n)) if is_unit(n) else _fail(n, "a valid probability")


def is_rate(n) -> bool:
    """An annual rate, strictly positive and at most 1 (100%)."""
    return is_unit(n) and n != 0


def as_rate(n) -> Rate:
    return Rate(float(n)) if is_rate(n) else _fail(n, "a valid Rate")


def is_tax_rate(n) -> bool:
    return is_unit(n)


def as_tax_rate(n) -> TaxRate:
    return TaxRate(float(n)) if is_unit(n) else _fail(n, "a valid tax rate")


def is_integer(n) -> bool:
    return _is_number(n) and math.isfinite(n) and n % 1 == 0


def as_integer(n) -> Integer:
    return Integer(int(n)) if is_integer(n) else _fail(n, "an Integer")


def is_age(n) -> bool:
    return _is_number(n) and math.isfinite(n) and n >= 0


def as_age(n) -> Age:
    return Age(float(n)) if is_age(n) else _fail(n, "a valid age")


def is_iage(n) -> bool:
    return is_integer(n) and n >= 0


def as_iage(n) -> IAge:
    return IAge(int(n)) if is_iage(n) else _fail(n, "a valid integer age")


def iage(age: Age) -> IAge:
    """Truncate a fractional age to the integer age reached."""
    return as_iage(math.floor(age))


def is_year(n) -> bool:
    return is_integer(n) and MIN_YEAR <= n < MAX_YEAR


def as_year(n) -> Year:
    return Year(int(n)) if is_year(n) else _fail(n, "a valid year")


def is_degrees(n) -> bool:
    return _is_number(n) and 0 <= n < 360


def as_degrees(n) -> Degrees:
    return Degrees(float(n)) if is_degrees(n) else _fail(n, "a valid number of degrees")


def mod360(n) -> Degrees:
    """Coerce a number into [0, 360)."""
    if not _is_number(n) or math.isnan(n):
        _fail(n, "a valid number of degrees")
    return Degrees(n % 360)


def cents(amount: float, currency: Currency = USD) -> Money:
    """
    Round a monetary amount to the currency's precision.

    Applied at every computed step (interest, payments, withdrawals) rather than
    only at display time, so float drift cannot accumulate across periods.
    """
    return Money(currency.round(as_money(amount)))


def money_sum(amounts: Iterable[float], currency: Currency = USD) -> Money:
    """Sum monetary amounts and round the total to cents."""
    return cents(math.fsum(amounts), currency)
