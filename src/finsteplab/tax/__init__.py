"""
Income tax tables and calculation.

Tables are registered per jurisdiction (postal code, `US` for federal). Each
jurisdiction declares a default year used when a requested year has no table.

**Example Usage:**
    ```python
    from finsteplab.tax import TaxData, compute_tax

    result = compute_tax("US", 2021, TaxData(income={"regular": 80000}, year=2021, status="single"))
    print(result.agi, result.tax)
    ```
"""

from __future__ import annotations

from ..core.errors import ConfigError
from .california import CALIFORNIA_TAX
from .federal import FEDERAL_TAX
from .states import STATES
from .tables import (
    INCOME_CATEGORIES,
    TAX_STATUSES,
    AgeGroup,
    TaxBracket,
    TaxData,
    TaxResult,
    TaxStatus,
    TaxYearTable,
    TaxYearTables,
    lookup_tax,
)

TAX_TABLES: dict[str, TaxYearTables] = {
    "US": FEDERAL_TAX,
    "CA": CALIFORNIA_TAX,
}


def compute_tax(state: str, year: int, data: TaxData) -> TaxResult:
    """
    Compute a year's tax for a jurisdiction.

    Raises:
        ConfigError: If the jurisdiction has no tables, or neither the year nor a
            declared default year has one
    """
    if state not in TAX_TABLES:
        raise ConfigError(f"No tax tables are entered for state {state}.")
    return TAX_TABLES[state].for_year(year).calculate(data)


__all__ = [
    "CALIFORNIA_TAX",
    "FEDERAL_TAX",
    "INCOME_CATEGORIES",
    "STATES",
    "TAX_STATUSES",
    "TAX_TABLES",
    "AgeGroup",
    "TaxBracket",
    "TaxData",
    "TaxResult",
    "TaxStatus",
    "TaxYearTable",
    "TaxYearTables",
    "compute_tax",
    "lookup_tax",
]
