"""
FinStepLab item type constants.
"""


class T:
    PERSON = "person"  # spouse1, spouse2, dependents
    ASSET = "asset"  # balances that accrue interest
    LIABILITY = "liability"  # debts that accrue interest
    INCOME = "income"  # recurring inflows
    EXPENSE = "expense"  # recurring outflows, paid through a transfer
    INCOME_TAX = "income_tax"
    TRANSFER = "transfer"  # routing rules between sources
    TEXT = "text"  # named text snippets, never simulated
    SCENARIO = "scenario"

    @classmethod
    def all_types(cls) -> list[str]:
        """Enumerate all known item types (for validation and docs)."""
        return [*cls.simulated(), cls.TEXT, cls.SCENARIO]

    @classmethod
    def simulated(cls) -> list[str]:
        """Stepped item types, in the order the engine updates them."""
        return [
            cls.PERSON,
            cls.ASSET,
            cls.LIABILITY,
            cls.INCOME,
            cls.EXPENSE,
            cls.INCOME_TAX,
            cls.TRANSFER,
        ]


# Category tags recognized by the engine
NONTAXABLE = "nontaxable"
NON_INCOME = "non-income"
