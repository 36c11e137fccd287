"""
Shape shared by scenarios and their per-period snapshots.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from ..core.errors import ConfigError
from ..core.kinds import NON_INCOME, T
from ..tagged import Money, money_sum
from .item import Item


def index_by_name(items: Iterable[Any]) -> dict[str, Any]:
    return {i.name: i for i in items}


class ScenarioBase(Item):
    """
    Item lists, name indexes and aggregates of a household model.

    A `Scenario` fills the lists with items; a `Snapshot` fills them with the
    same items as they stood in one period. Code that reads `asset_list`,
    `find_item` or `net_assets` works on either.

    Attributes:
        spouse1: Primary person
        spouse2: Second person, or None
        dependents: Other people in the household
        asset_list, liability_list, income_list, expense_list, tax_list,
        transfer_list, text_list: Items per type, in row order
    """

    type = T.SCENARIO

    spouse1: Any = None
    spouse2: Any = None

    def _init_lists(self) -> None:
        self.dependents: list[Any] = []
        self.asset_list: list[Any] = []
        self.liability_list: list[Any] = []
        self.income_list: list[Any] = []
        self.expense_list: list[Any] = []
        self.tax_list: list[Any] = []
        self.transfer_list: list[Any] = []
        self.text_list: list[Any] = []

    def _build_indexes(self) -> None:
        self.people: dict[str, Any] = index_by_name(self.person_list)
        if self.spouse1 is not None:
            self.people["spouse1"] = self.spouse1
        if self.spouse2 is not None:
            self.people["spouse2"] = self.spouse2
        self.assets = index_by_name(self.asset_list)
        self.liabilities = index_by_name(self.liability_list)
        self.incomes = index_by_name(self.income_list)
        self.expenses = index_by_name(self.expense_list)
        self.taxes = index_by_name(self.tax_list)
        self.transfers = index_by_name(self.transfer_list)
        self.texts = index_by_name(self.text_list)
        self.all_items: dict[str, dict[str, Any]] = {
            T.PERSON: self.people,
            T.ASSET: self.assets,
            T.LIABILITY: self.liabilities,
            T.INCOME: self.incomes,
            T.EXPENSE: self.expenses,
            T.INCOME_TAX: self.taxes,
            T.TRANSFER: self.transfers,
            T.TEXT: self.texts,
            T.SCENARIO: {self.name: self},
        }

    @property
    def person_list(self) -> list[Any]:
        spouses = [p for p in (self.spouse1, self.spouse2) if p is not None]
        return [*spouses, *self.dependents]

    def find_items(self, type_: str) -> list[Any]:
        lists = {
            T.PERSON: self.person_list,
            T.ASSET: self.asset_list,
            T.LIABILITY: self.liability_list,
            T.INCOME: self.income_list,
            T.EXPENSE: self.expense_list,
            T.INCOME_TAX: self.tax_list,
            T.TRANSFER: self.transfer_list,
            T.TEXT: self.text_list,
            T.SCENARIO: [self],
        }
        if type_ not in lists:
            raise ConfigError(f"Unknown record type: {type_}")
        return lists[type_]

    def find_item(self, name: str, type_: str) -> Any | None:
        return self.all_items.get(type_, {}).get(name)

    def find_text(self, name: str) -> str:
        text = self.find_item(name, T.TEXT)
        return text.text if text is not None else ""

    def items(self) -> Iterator[Any]:
        """This scenario, then every item in engine order, then texts."""
        yield self
        for type_ in T.simulated():
            yield from self.find_items(type_)
        yield from self.text_list

    def __iter__(self) -> Iterator[Any]:
        return self.items()

    @property
    def sources(self) -> list[Any]:
        return [*self.asset_list, *self.income_list]

    @property
    def net_assets(self) -> Money:
        return money_sum([*(a.value for a in self.asset_list), *(-li.value for li in self.liability_list)])

    @property
    def total_expenses(self) -> Money:
        return money_sum(e.value for e in self.expense_list)

    @property
    def total_retirement_income(self) -> Money:
        """Yearly income from income-producing assets plus income values."""
        return money_sum(
            [
                *(a.value * (a.rate or 0.0) for a in self.asset_list if not a.has_category(NON_INCOME)),
                *(i.value for i in self.income_list),
            ]
        )

    @property
    def total_retirement_income_with_fixed(self) -> Money:
        return money_sum(
            [
                *(a.value * (a.rate or 0.0) for a in self.asset_list),
                *(i.value for i in self.income_list),
            ]
        )
