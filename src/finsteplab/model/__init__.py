"""
Household model: items, scenarios and per-period snapshots.
"""

from .asset import Asset, AssetStepper, InterestBearing
from .construct import construct
from .expense import Expense, ExpenseStepper
from .income import Income, IncomeStepper
from .income_tax import IncomeTax, IncomeTaxStepper
from .item import DEFAULT_SCENARIOS, START, Item, ItemStepper, item_id
from .liability import Liability, LiabilityStepper
from .monetary import CashFlow, Monetary
from .person import Person, PersonStepper
from .scenario import Scenario
from .scenario_base import ScenarioBase
from .snapshot import Snapshot
from .stateful import Stateful
from .text import Text
from .transfer import Transfer, TransferStepper

__all__ = [
    "DEFAULT_SCENARIOS",
    "START",
    "Asset",
    "AssetStepper",
    "CashFlow",
    "Expense",
    "ExpenseStepper",
    "Income",
    "IncomeStepper",
    "IncomeTax",
    "IncomeTaxStepper",
    "InterestBearing",
    "Item",
    "ItemStepper",
    "Liability",
    "LiabilityStepper",
    "Monetary",
    "Person",
    "PersonStepper",
    "Scenario",
    "ScenarioBase",
    "Snapshot",
    "Stateful",
    "Text",
    "Transfer",
    "TransferStepper",
    "construct",
    "item_id",
]
