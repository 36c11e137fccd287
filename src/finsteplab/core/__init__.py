"""
Core components for FinStepLab.

This module provides the foundational pieces the model and the engine are
built on: errors, currency rounding, item type constants, time-versioned
sequences, the timeline, the stepper protocol and per-period state records.
"""

from .context import SimContext
from .currency import CURRENCIES, EUR, JPY, USD, Currency, RoundingPolicy, get_currency
from .errors import ConfigError, ContractError, TaggedValueError, TransferSpecError
from .exceptions import ItemError
from .kinds import NON_INCOME, NONTAXABLE, T
from .state import ItemRecord, ItemState, ItemStatus
from .stepper import DONE, Stepper
from .temporal import Temporal
from .timeline import Action, Timeline, TimelineEvent

__all__ = [
    "CURRENCIES",
    "DONE",
    "EUR",
    "JPY",
    "NONTAXABLE",
    "NON_INCOME",
    "USD",
    "Action",
    "ConfigError",
    "ContractError",
    "Currency",
    "ItemError",
    "ItemRecord",
    "ItemState",
    "ItemStatus",
    "RoundingPolicy",
    "SimContext",
    "Stepper",
    "T",
    "TaggedValueError",
    "Temporal",
    "Timeline",
    "TimelineEvent",
    "TransferSpecError",
    "get_currency",
]
