"""
FinStepLab - Period-Stepping Household Financial Projections

FinStepLab projects a household's finances forward month by month. A scenario
is built from plain rows (people, assets, liabilities, incomes, expenses,
income taxes, transfers) and simulated by an engine that steps every item
through its own state machine, pays expenses through transfer rules and
records an auditable timeline of everything that happened.

Key Features:
- **Versioned Items**: Rows sharing a type and name are versions of one item;
  a raise, a refinance or an end date is just another row
- **Explicit Steppers**: Each item version is advanced by a `Stepper` with a
  checked `step()` contract
- **Transfer Rules**: Expenses are paid from ordered, weighted or delegated
  sources, with taxable and deductible amounts tracked
- **Actuarial & Tax Tables**: Survival probabilities from a life table,
  US federal and California income tax
- **Snapshots**: An immutable view of the whole household for every period

Quick Start:
    ```python
    from finsteplab import Scenario, snapshot_frame

    rows = [
        {"type": "person", "name": "spouse1", "birth": "1967-01-01", "sex": "female"},
        {"type": "asset", "name": "savings", "value": 50_000, "rate": 0.03},
        {"type": "income", "name": "salary", "value": 6_000, "payment_period": "month",
         "deposit": "savings"},
        {"type": "transfer", "name": "living", "spec": '["salary", "savings"]'},
        {"type": "expense", "name": "rent", "value": 2_500, "payment_period": "month",
         "from_stream": "living"},
    ]
    scenario = Scenario({"name": "Default", "start": "2026-01-01"}, rows, 2036)
    df = snapshot_frame(scenario.snapshots)
    ```
"""

# Version information
__version__ = "0.1.0"
__description__ = "Period-stepping household financial projections"

from .calendar import CalendarRange, CalendarStep, CalendarUnit, calendar_range
from .config import SimConfig
from .core import (
    DONE,
    Action,
    ConfigError,
    ContractError,
    ItemError,
    ItemState,
    Stepper,
    T,
    TaggedValueError,
    Temporal,
    Timeline,
    TimelineEvent,
    TransferSpecError,
)
from .model import (
    Asset,
    Expense,
    Income,
    IncomeTax,
    Item,
    Liability,
    Person,
    Scenario,
    Snapshot,
    Stateful,
    Text,
    Transfer,
    construct,
)
from .results import aggregate_frame, snapshot_frame, timeline_frame
from .sim import Sim, run_sim, withdraw
from .tax import compute_tax

__all__ = [
    # Engine
    "Scenario",
    "Snapshot",
    "Sim",
    "SimConfig",
    "run_sim",
    # Items
    "Item",
    "Person",
    "Asset",
    "Liability",
    "Income",
    "Expense",
    "IncomeTax",
    "Transfer",
    "Text",
    "Stateful",
    "construct",
    # Protocol
    "DONE",
    "Stepper",
    "ItemState",
    "Temporal",
    "T",
    # Timeline
    "Action",
    "Timeline",
    "TimelineEvent",
    # Calendar
    "CalendarRange",
    "CalendarStep",
    "CalendarUnit",
    "calendar_range",
    # Money movement and tax
    "withdraw",
    "compute_tax",
    # Results
    "snapshot_frame",
    "timeline_frame",
    "aggregate_frame",
    # Errors
    "ConfigError",
    "ContractError",
    "ItemError",
    "TaggedValueError",
    "TransferSpecError",
]
