"""
People in the household: ages, life expectancy and survival.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import TYPE_CHECKING, Any

import numpy as np

from ..calendar import calculate_age, to_date
from ..core.errors import ConfigError
from ..core.kinds import T
from ..core.stepper import DONE
from ..sim.actuary import SEXES, compute_probabilities, lookup_or_eol
from ..tagged import Age, IAge, as_age, as_iage, iage
from .item import Item, ItemStepper

if TYPE_CHECKING:
    from ..calendar import CalendarStep
    from ..core.context import SimContext
    from ..core.state import ItemState
    from .scenario import Scenario


class Person(Item):
    """
    A member of the household.

    Attributes:
        birth: Date of birth
        sex: `male` or `female`, selecting the life table column
        expectancy: Remaining life expectancy at the scenario start
        expectancies: Remaining life expectancy at each year of the scenario
    """

    type = T.PERSON

    def __init__(self, row: Mapping[str, Any], scenario: Scenario | None = None):
        super().__init__(row, scenario)
        if row.get("birth") is None:
            raise ConfigError(f"Birth date for person {self.name} is not specified")
        if row.get("sex") is None:
            raise ConfigError(f"Sex for person {self.name} is not specified")
        self.birth: date = to_date(row["birth"])
        if self.birth > self.start:
            # not yet born at the scenario start
            self.start = self.birth
        self.sex: str = str(row["sex"]).strip().lower()
        if self.sex not in SEXES:
            raise ConfigError(f"Sex for person {self.name} must be one of {SEXES}, got {row['sex']!r}")
        self._survival: np.ndarray | None = None

    def age(self, when: date | int) -> Age:
        """Fractional age at a date, or whole-year age reached in a given year."""
        if isinstance(when, date):
            return calculate_age(self.birth, when)
        return as_age(when - self.birth.year)

    def iage(self, when: date | int) -> IAge:
        if isinstance(when, date):
            return iage(calculate_age(self.birth, when))
        return as_iage(when - self.birth.year)

    @property
    def _range(self) -> tuple[date, date]:
        if self.scenario is None:
            raise ConfigError(f"{self.id}: no scenario to take a date range from")
        return self.scenario.date_range

    @property
    def expectancy(self) -> float:
        start, _ = self._range
        return lookup_or_eol(self.age(start), self.sex).years

    @property
    def expectancies(self) -> list[float]:
        start, end = self._range
        base = self.iage(start)
        return [lookup_or_eol(base + y, self.sex).years for y in range(end.year - start.year + 1)]

    @property
    def survival_probabilities(self) -> np.ndarray:
        """Monthly survival from the scenario start, indexed by month offset."""
        if self._survival is None:
            start, end = self._range
            self._survival = compute_probabilities(self, start, end)
        return self._survival

    def survival_at(self, d: date) -> float:
        start, _ = self._range
        offset = (d.year - start.year) * 12 + d.month - start.month
        probs = self.survival_probabilities
        if offset <= 0:
            return 1.0
        return float(probs[min(offset, len(probs) - 1)])

    def stepper(self, start: CalendarStep, ctx: SimContext) -> PersonStepper:
        return PersonStepper(self, start, ctx)


class PersonStepper(ItemStepper):
    """Tracks age, survival and mortality month by month; ends with the life table."""

    item: Person

    def _state(self, period: CalendarStep):
        person = self.item
        age = person.age(period.start)
        datum = lookup_or_eol(age, person.sex)
        if datum.n == 0 and datum.p == 1:
            return DONE
        if self.ctx.config.record_age_events:
            birthday = _birthday_in(person.birth, period)
            if birthday is not None:
                self.timeline("age", birthday, age=person.iage(birthday), expectancy=datum.years)
        return {
            "age": age,
            "survival": person.survival_at(period.start),
            "n": datum.n,
            "mortality": datum.p,
            "expected": datum.years,
        }

    def initial(self, period: CalendarStep, previous: ItemState | None):
        return self._state(period)

    def advance(self, period: CalendarStep, previous: ItemState):
        return self._state(period)


def _birthday_in(birth: date, period: CalendarStep) -> date | None:
    for year in range(period.start.year, period.end.year + 1):
        try:
            day = birth.replace(year=year)
        except ValueError:
            day = date(year, 2, 28)
        if day > birth and period.contains(day):
            return day
    return None
