"""
Tests for transfer spec parsing and binding.
"""

import pytest

from finsteplab.core.errors import TransferSpecError
from finsteplab.model import Scenario, Transfer
from finsteplab.sim.withdraw import Share

try:
    from hypothesis import given
    from hypothesis import strategies as st

    HAS_HYPOTHESIS = True
except ImportError:
    HAS_HYPOTHESIS = False


SPOUSE1 = {"type": "person", "name": "spouse1", "birth": "1967-01-01", "sex": "female"}

SOURCES = [
    {"type": "asset", "name": "savings", "value": 1000},
    {"type": "asset", "name": "brokerage", "value": 5000},
    {"type": "income", "name": "salary", "value": 100, "payment_period": "month"},
    {"type": "liability", "name": "heloc", "value": 0},
]


@pytest.fixture
def scenario(make_scenario):
    return make_scenario([*SOURCES, {"type": "transfer", "name": "fallback", "spec": "savings"}])


class TestParse:
    def test_plain_name(self):
        assert Transfer.parse("savings") == "savings"

    def test_json_list_and_mapping(self):
        assert Transfer.parse('["salary", "savings"]') == ["salary", "savings"]
        assert Transfer.parse('{"a": 3, "b": 1}') == {"a": 3, "b": 1}

    def test_curly_quotes(self):
        assert Transfer.parse("[“salary”, “savings”]") == ["salary", "savings"]

    def test_bad_json_names_transfer(self):
        with pytest.raises(TransferSpecError, match="living"):
            Transfer.parse('["salary",', "living")

    def test_spec_required(self):
        with pytest.raises(TransferSpecError):
            Transfer({"name": "empty"})


class TestBind:
    def test_resolves_ids(self, scenario):
        transfer = Transfer({"name": "t", "spec": '["salary", "savings", "heloc", "@fallback"]'}, scenario)
        assert transfer.spec == ["income/salary", "asset/savings", "liability/heloc", "transfer/fallback"]
        assert transfer.references() == {"transfer/fallback"}

    def test_weights_normalized(self, scenario):
        transfer = Transfer({"name": "t", "spec": {"savings": 3, "brokerage": 1}}, scenario)
        assert transfer.spec == {"asset/savings": Share(0.75), "asset/brokerage": Share(0.25)}

    def test_zero_weight_warns(self, scenario):
        transfer = Transfer({"name": "t", "spec": {"savings": 1, "brokerage": 0}}, scenario)
        with pytest.warns(UserWarning, match="zero weight"):
            transfer.spec

    def test_non_positive_total(self, scenario):
        with pytest.raises(TransferSpecError):
            Transfer({"name": "t", "spec": {"savings": 0}}, scenario).spec
        with pytest.raises(TransferSpecError):
            Transfer({"name": "t", "spec": {"savings": -1, "brokerage": 2}}, scenario).spec

    def test_unknown_names(self, scenario):
        with pytest.raises(TransferSpecError, match="yacht"):
            Transfer({"name": "t", "spec": "yacht"}, scenario).spec
        with pytest.raises(TransferSpecError, match="nowhere"):
            Transfer({"name": "t", "spec": "@nowhere"}, scenario).spec

    def test_unknown_shape(self, scenario):
        with pytest.raises(TransferSpecError):
            Transfer({"name": "t", "spec": 42}, scenario).spec

    def test_needs_scenario(self):
        with pytest.raises(TransferSpecError):
            Transfer({"name": "t", "spec": "savings"}).spec


@pytest.mark.skipif(not HAS_HYPOTHESIS, reason="Hypothesis not installed")
class TestWeightProperties:
    """Normalized weights always sum to one and keep their proportions."""

    if HAS_HYPOTHESIS:

        @given(
            a=st.floats(min_value=0.001, max_value=1e6, allow_nan=False),
            b=st.floats(min_value=0.001, max_value=1e6, allow_nan=False),
        )
        def test_weights_sum_to_one(self, a, b):
            scenario = Scenario({"name": "Default", "start": "2021-01-01"}, [SPOUSE1, *SOURCES], 2022)
            spec = Transfer({"name": "t", "spec": {"savings": a, "brokerage": b}}, scenario).spec
            weights = [share.weight for share in spec.values()]
            assert sum(weights) == pytest.approx(1.0)
            assert spec["asset/savings"].weight == pytest.approx(a / (a + b))
