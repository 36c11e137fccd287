"""
Tests for timeline ordering and the stepper contract.
"""

from datetime import date
from types import SimpleNamespace

import pytest

from finsteplab.calendar import CalendarStep
from finsteplab.core.errors import ContractError
from finsteplab.core.state import ItemState
from finsteplab.core.stepper import DONE, Stepper
from finsteplab.core.timeline import Action, Timeline


def fake_item(type_, name):
    return SimpleNamespace(type=type_, name=name, id=f"{type_}/{name}")


def step(i):
    return CalendarStep(date(2021, 1 + i, 1), date(2021, 2 + i, 1), i)


class TestTimeline:
    """Events sort by date, then action priority, then item type and name."""

    def test_date_first(self):
        tl = Timeline()
        item = fake_item("asset", "a")
        tl.add("pay", date(2021, 2, 1), item)
        tl.add("begin", date(2021, 3, 1), item)
        tl.add("end", date(2021, 1, 1), item)
        assert [e.date.month for e in tl.events()] == [1, 2, 3]

    def test_priority_within_date(self):
        tl = Timeline()
        d = date(2021, 1, 1)
        item = fake_item("asset", "a")
        for action in ("terminate", "pay", "withdraw", "begin"):
            tl.add(action, d, item)
        assert [e.action for e in tl] == [Action.BEGIN, Action.WITHDRAW, Action.PAY, Action.TERMINATE]

    def test_type_then_name_then_insertion(self):
        tl = Timeline()
        d = date(2021, 1, 1)
        tl.add("pay", d, fake_item("expense", "b"), n=1)
        tl.add("pay", d, fake_item("asset", "z"), n=2)
        tl.add("pay", d, fake_item("expense", "a"), n=3)
        tl.add("pay", d, fake_item("expense", "a"), n=4)
        assert [e.data["n"] for e in tl] == [2, 3, 4, 1]

    def test_events_leave_heap_intact(self):
        tl = Timeline()
        tl.add("begin", date(2021, 1, 1), fake_item("asset", "a"))
        tl.events()
        assert len(tl) == 1
        assert tl.for_item("asset/a")[0].action is Action.BEGIN

    def test_unknown_action(self):
        with pytest.raises(ValueError):
            Timeline().add("explode", date(2021, 1, 1), fake_item("asset", "a"))


class CountingStepper(Stepper):
    def initial(self, period, previous):
        return {"value": 0 if previous is None else previous.value}

    def advance(self, period, previous):
        if previous.value >= 2:
            return DONE
        return {"value": previous.value + 1}


class TestStepperContract:
    def make(self):
        return CountingStepper(fake_item("asset", "counter"), step(0), ctx=None)

    def test_steps_in_order(self):
        s = self.make()
        first = s.step(step(0), None)
        state = ItemState(date(2021, 1, 1), s.item, 0, **first)
        assert s.step(step(1), state) == {"value": 1}

    def test_first_step_must_match_start(self):
        with pytest.raises(ContractError):
            self.make().step(step(1), None)

    def test_skipping_a_step(self):
        s = self.make()
        s.step(step(0), None)
        with pytest.raises(ContractError):
            s.step(step(2), None)

    def test_done_closes(self):
        s = self.make()
        s.step(step(0), None)
        previous = ItemState(date(2021, 1, 1), s.item, 0, value=2)
        assert s.step(step(1), previous) is DONE
        assert s.closed
        with pytest.raises(ContractError):
            s.step(step(2), previous)

    def test_resume_after_close(self):
        s = self.make()
        s.close()
        with pytest.raises(ContractError):
            s.step(step(0), None)

    def test_first_step_sees_replaced_state(self):
        s = self.make()
        previous = ItemState(date(2020, 12, 1), s.item, 0, value=7)
        assert s.step(step(0), previous) == {"value": 7}


class TestItemState:
    def test_attribute_and_key_access(self):
        state = ItemState(date(2021, 1, 1), fake_item("asset", "a"), 0, value=10.0)
        assert state.value == state["value"] == 10.0
        assert state.id == "asset/a"
        assert "value" in state
        assert state.get("used", 0.0) == 0.0
        assert state.fields() == {"value": 10.0}

    def test_copy_is_shallow_and_separate(self):
        state = ItemState(date(2021, 1, 1), fake_item("asset", "a"), 0, value=10.0, sources={})
        copy = state.copy()
        copy.value = 5.0
        assert state.value == 10.0
        assert copy.sources is state.sources
