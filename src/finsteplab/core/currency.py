"""
Currency and precision handling for FinStepLab.
"""

from __future__ import annotations

from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP, Decimal
from enum import Enum


class RoundingPolicy(Enum):
    """Rounding policies for currency calculations."""

    BANKERS = ROUND_HALF_EVEN
    HALF_UP = ROUND_HALF_UP


class Currency:
    """
    Currency definition with precision and rounding rules.

    Attributes:
        code: ISO currency code (e.g., 'USD', 'EUR', 'JPY')
        decimals: Number of decimal places for this currency
        rounding: Rounding policy for calculations
    """

    def __init__(
        self,
        code: str,
        decimals: int = 2,
        rounding: RoundingPolicy = RoundingPolicy.HALF_UP,
    ):
        self.code = code.upper()
        self.decimals = decimals
        self.rounding = rounding

    def quantize(self, amount: Decimal) -> Decimal:
        """Quantize amount to currency precision."""
        quantum = Decimal("1").scaleb(-self.decimals)  # e.g., 0.01 for 2 dp
        return amount.quantize(quantum, rounding=self.rounding.value)

    def round(self, amount: float | int) -> float:
        """Round a float amount to currency precision, returning a float."""
        # str() first so 0.1 + 0.2 style binary noise does not bias the rounding
        return float(self.quantize(Decimal(str(amount))))

    def with_rounding(self, rounding: RoundingPolicy) -> Currency:
        """Return a copy of this currency using another rounding policy."""
        return Currency(self.code, self.decimals, rounding)

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return f"Currency('{self.code}', decimals={self.decimals})"


USD = Currency("USD", decimals=2)
EUR = Currency("EUR", decimals=2)
JPY = Currency("JPY", decimals=0)

CURRENCIES: dict[str, Currency] = {
    "USD": USD,
    "EUR": EUR,
    "JPY": JPY,
}


def get_currency(code: str) -> Currency:
    """Get currency by code."""
    if code.upper() not in CURRENCIES:
        # Default to 2 decimal places for unknown currencies
        return Currency(code, decimals=2)
    return CURRENCIES[code.upper()]
