"""
Simulation: actuarial tables, interest conversion, transfer resolution and the engine.
"""

from .actuary import (
    EOL,
    ActuaryDatum,
    actuary,
    actuary_for,
    compute_probabilities,
    life_table,
    load_life_table,
    lookup_or_eol,
)
from .engine import Sim, run_sim
from .interest import amortize, convert_interest, convert_interest_per_period, convert_periods
from .withdraw import Share, Withdrawal, add_sub_sources, withdraw

__all__ = [
    "EOL",
    "ActuaryDatum",
    "Share",
    "Sim",
    "Withdrawal",
    "actuary",
    "actuary_for",
    "add_sub_sources",
    "amortize",
    "compute_probabilities",
    "convert_interest",
    "convert_interest_per_period",
    "convert_periods",
    "life_table",
    "load_life_table",
    "lookup_or_eol",
    "run_sim",
    "withdraw",
]
