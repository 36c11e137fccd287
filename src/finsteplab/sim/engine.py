"""
Simulation engine: steps every item of a scenario through time.

Each period the engine
1. updates every item through its stepper, activating, swapping versions and
   terminating as the item's `Temporal` dictates,
2. pays expenses (and assessed taxes) through their transfers, repays linked
   liabilities, credits income taxes and deposits unspent income,
3. records a `Snapshot` of the live states.

Everything that happens is logged to the run's `Timeline`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import date
from typing import TYPE_CHECKING, Any

from ..calendar import CalendarUnit, calendar_range, to_date, truncate_date
from ..core.context import SimContext
from ..core.errors import ConfigError
from ..core.exceptions import ItemError
from ..core.kinds import NONTAXABLE, T
from ..core.state import ItemRecord, ItemState, ItemStatus
from ..core.stepper import DONE
from ..core.timeline import Action, TimelineEvent
from ..model.item import item_id
from ..model.snapshot import Snapshot
from ..tagged import cents
from .withdraw import Withdrawal

if TYPE_CHECKING:
    from ..calendar import CalendarRange, CalendarStep
    from ..config import SimConfig
    from ..model.item import Item
    from ..model.scenario import Scenario

logger = logging.getLogger(__name__)


class Sim:
    """
    One simulation run of a scenario.

    The run starts early enough to cover every item's first version (the
    pre-roll), but snapshots are only produced from `start` on. `run()` may be
    called any number of times; each call starts from scratch.

    **Example Usage:**
        ```python
        sim = Sim(scenario, end=date(2030, 1, 1))
        for snapshot in sim.run():
            print(snapshot.date, snapshot.net_assets)

        sim.timeline  # every event of the run, in order
        ```

    Attributes:
        scenario: The scenario being simulated
        start: First date for which a snapshot is produced
        end: Exclusive end of the run
        config: Engine configuration
        records: Engine bookkeeping per item id
        states: Live state per item id; only items currently active appear
    """

    def __init__(
        self,
        scenario: Scenario,
        start: date | str | None = None,
        end: date | str | None = None,
        config: SimConfig | None = None,
    ):
        self.scenario = scenario
        self.config = config or scenario.config
        self.start: date = to_date(start) if start is not None else scenario.start
        self.end: date = to_date(end) if end is not None else scenario.end_date
        if self.end <= self.start:
            raise ConfigError(f"Simulation end {self.end} is not after start {self.start}")
        self.items: list[Item] = [item for type_ in T.simulated() for item in scenario.find_items(type_)]
        self.records: dict[str, ItemRecord] = {}
        self.states: dict[str, ItemState] = {}
        self.ctx = self._new_context()
        self._snapshots: list[Snapshot] | None = None

    def _new_context(self) -> SimContext:
        return SimContext(self.scenario, self, self.config, currency=self.config.money())

    @property
    def preroll_start(self) -> date:
        """The first simulated date: `start`, or earlier to reach the first item version."""
        earliest = min((item.temporal.first.start for item in self.items), default=self.start)
        if earliest >= self.start:
            return self.start
        if self.config.unit in (CalendarUnit.WEEK, CalendarUnit.BIWEEKLY):
            return earliest
        return truncate_date(self.config.unit)(earliest)

    @property
    def periods(self) -> CalendarRange:
        return calendar_range(self.preroll_start, self.end, self.config.interval)

    def cents(self, amount: float) -> float:
        return cents(amount, self.ctx.currency)

    def timeline_event(self, action: Action | str, d: date, item: Item, **data: Any) -> TimelineEvent:
        return self.ctx.add_timeline(action, d, item, **data)

    def run(self) -> Iterator[Snapshot]:
        """Run the simulation, yielding one `Snapshot` per period from `start` on."""
        self.ctx = self._new_context()
        self.records = {}
        self.states = {}
        previous: Snapshot | None = None
        logger.debug("Simulating %s from %s (pre-roll %s) to %s", self.scenario.name, self.start, self.preroll_start, self.end)

        for period in self.periods:
            if period.step == 0:
                self._register(period)

            # 1. Advance every item
            for record in self.records.values():
                self._update(record, period)

            # 2. Move money
            self._pay(period)
            self._deposit(period)

            # 3. Record the period
            if period.start >= self.start:
                previous = Snapshot(self.scenario, period, previous, self.states)
                yield previous

    def _register(self, period: CalendarStep) -> None:
        for item in self.items:
            version = item.temporal.on_date(period.start) or item.temporal.first
            stepper = version.stepper(period, self.ctx)
            record = ItemRecord(item=version, stepper=stepper)
            # items starting later are first-valued when they begin
            if version.start <= period.start:
                result = stepper.step(period, None)
                if result is not DONE:
                    record.current = ItemState(period.start, version, period.step, **result)
            self.records[item.id] = record

    def _set_status(self, record: ItemRecord, status: ItemStatus, period: CalendarStep) -> None:
        logger.debug("%s: %s -> %s on %s", record.item.id, record.status.value, status.value, period.start)
        record.status = status
        if status is ItemStatus.TERMINATED:
            self.states.pop(record.item.id, None)

    def _update(self, record: ItemRecord, period: CalendarStep) -> None:
        item = record.item
        if record.status is ItemStatus.TERMINATED:
            return
        if record.status is ItemStatus.INIT:
            if period.start < item.temporal.first.start:
                return
            version = item.temporal.on_date(period.start)
            if version is None:
                self._set_status(record, ItemStatus.TERMINATED, period)
                return
            self.timeline_event(Action.BEGIN, period.start, version)
            self._set_status(record, ItemStatus.ACTIVE, period)
            if record.stepper.position != period.step or version is not record.item or record.current is None:
                record.stepper.close()
                record.item = version
                record.stepper = version.stepper(period, self.ctx)
                result = record.stepper.step(period, None)
            else:
                result = {}
                self.states[version.id] = record.current
        else:
            version = item.temporal.on_date(period.start)
            if version is None:
                self.timeline_event(Action.END, period.start, item)
                record.stepper.close()
                self._set_status(record, ItemStatus.TERMINATED, period)
                return
            if version is not item:
                self.timeline_event(Action.STEP, period.start, version, previous=item.start)
                record.stepper.close()
                record.item = version
                record.stepper = version.stepper(period, self.ctx)
            result = record.stepper.step(period, record.current)

        if result is DONE:
            self.timeline_event(Action.TERMINATE, period.start, record.item)
            self._set_status(record, ItemStatus.TERMINATED, period)
            return
        if result:
            state = ItemState(period.start, record.item, period.step, **result)
            record.current = state
            self.states[state.id] = state
        elif record.current is None or record.current.step != period.step:
            # steppers with no fields still need a live state
            state = ItemState(period.start, record.item, period.step)
            record.current = state
            self.states[state.id] = state

    def _payers(self) -> Iterator[ItemState]:
        for expense in self.scenario.expense_list:
            state = self.states.get(expense.id)
            if state is not None and state.value > 0:
                yield state
        for tax in self.scenario.tax_list:
            state = self.states.get(tax.id)
            if state is not None and state.value > 0 and state.item.from_stream:
                yield state

    def _pay(self, period: CalendarStep) -> None:
        for payer in self._payers():
            version = payer.item
            transfer_state = self.states.get(item_id(T.TRANSFER, version.from_stream))
            due = payer.value
            if transfer_state is not None:
                w = transfer_state.item.withdraw(
                    due,
                    payer.id,
                    self.states,
                    currency=self.ctx.currency,
                    log_unavailable=self.config.log_unavailable_sources,
                )
            elif version.from_stream in self.scenario.transfers:
                # not begun yet, or already ended
                if self.config.log_unavailable_sources:
                    logger.info("%s: transfer %s is not live on %s", payer.id, version.from_stream, period.start)
                w = Withdrawal(id=payer.id)
            else:
                raise ItemError(
                    version.type,
                    version.name,
                    f"There is no Transfer named {version.from_stream!r} to pay from",
                    period.start,
                )
            self.timeline_event(Action.PAY, period.start, version, amount=w.amount, due=due, sources=dict(w.sources))
            for src_id, amount in w.sources.items():
                self.timeline_event(Action.WITHDRAW, period.start, self.states[src_id].item, amount=amount, payer=payer.id)

            shortfall = self.cents(due - w.amount)
            payer.value = shortfall
            payer.paid = self.cents(payer.get("paid", 0.0) + w.amount)
            if shortfall > 0:
                payer.unpaid = self.cents(payer.get("unpaid", 0.0) + shortfall)
                logger.info("%s: %.2f of %.2f unpaid on %s", payer.id, shortfall, due, period.start)

            if payer.type == T.EXPENSE:
                self._repay(version.name, w.amount)
            self._credit_taxes(w.taxable, w.deductible)

    def _repay(self, expense: str, amount: float) -> None:
        for liability in self.scenario.liability_list:
            state = self.states.get(liability.id)
            if state is None or state.item.expense != expense:
                continue
            repaid = self.cents(min(amount, max(state.value, 0.0)))
            if repaid <= 0:
                continue
            state.value = self.cents(state.value - repaid)
            state.principal = self.cents(state.get("principal", 0.0) + repaid)
            amount = self.cents(amount - repaid)

    def _credit_taxes(self, taxable: float, deductible: float) -> None:
        if not taxable and not deductible:
            return
        for tax in self.scenario.tax_list:
            state = self.states.get(tax.id)
            if state is None:
                continue
            state.income = self.cents(state.income + taxable)
            state.deductions = self.cents(state.deductions + deductible)

    def _deposit(self, period: CalendarStep) -> None:
        for income in self.scenario.income_list:
            state = self.states.get(income.id)
            if state is None or state.value <= 0 or not state.item.deposit:
                continue
            asset = self.states.get(item_id(T.ASSET, state.item.deposit))
            if asset is None:
                logger.info("%s: deposit asset %s is not available on %s", state.id, state.item.deposit, period.start)
                continue
            amount = state.value
            asset.value = self.cents(asset.value + amount)
            self.timeline_event(Action.DEPOSIT, period.start, state.item, amount=amount, to=asset.id)
            if not state.item.has_category(NONTAXABLE):
                self._credit_taxes(amount, 0.0)
            state.value = 0.0
            state.deposited = self.cents(state.get("deposited", 0.0) + amount)

    @property
    def snapshots(self) -> list[Snapshot]:
        if self._snapshots is None:
            self._snapshots = list(self.run())
        return self._snapshots

    @property
    def timeline(self) -> list[TimelineEvent]:
        """Every event of the run, sorted; runs the simulation if it has not run yet."""
        if self._snapshots is None:
            self._snapshots = list(self.run())
        return self.ctx.timeline.events()

    def __repr__(self) -> str:
        return f"<Sim {self.scenario.name} {self.start.isoformat()} to {self.end.isoformat()}>"


def run_sim(
    scenario: Scenario,
    start: date | str | None = None,
    end: date | str | None = None,
    config: SimConfig | None = None,
) -> Iterator[Snapshot]:
    """
    Lazily simulate `scenario`, yielding a `Snapshot` per period.

    Each call starts a fresh run.
    """
    yield from Sim(scenario, start, end, config).run()
