"""
Context classes for FinStepLab simulation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Any

from .currency import USD, Currency
from .timeline import Action, Timeline, TimelineEvent

if TYPE_CHECKING:
    from ..config import SimConfig
    from ..model.item import Item
    from ..model.scenario import Scenario
    from ..sim.engine import Sim


@dataclass
class SimContext:
    """
    Context object passed to every stepper during a simulation run.

    Attributes:
        scenario: The scenario being simulated
        sim: The engine driving the run
        config: Engine configuration
        currency: Currency whose precision and rounding govern `cents`
        timeline: The run's event log

    Note:
        Steppers reach other items only through the scenario; live state of
        other items is owned by the engine and passed explicitly where needed.
    """

    scenario: Scenario
    sim: Sim | None
    config: SimConfig
    currency: Currency = USD
    timeline: Timeline = field(default_factory=Timeline)

    def add_timeline(self, action: Action | str, d: date, item: Item, **data: Any) -> TimelineEvent:
        return self.timeline.add(action, d, item, **data)
