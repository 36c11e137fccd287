"""
Shared fixtures for the FinStepLab tests.
"""

from datetime import date

import pytest

from finsteplab import Scenario

START = date(2021, 1, 1)

SPOUSE1 = {"type": "person", "name": "spouse1", "birth": "1967-01-01", "sex": "female"}


@pytest.fixture
def make_scenario():
    """Build a scenario starting 2021-01-01 from rows; spouse1 is added when absent."""

    def build(rows, end_year=2022, **kwargs):
        rows = list(rows)
        if not any(r.get("type") == "person" and r.get("name") == "spouse1" for r in rows):
            rows.insert(0, SPOUSE1)
        return Scenario({"name": "Default", "start": START}, rows, end_year, **kwargs)

    return build


@pytest.fixture
def pass_through_rows():
    """Income of 100/month paying an expense of 100/month through one transfer."""
    return [
        SPOUSE1,
        {"type": "asset", "name": "savings", "value": 1000},
        {"type": "income", "name": "salary", "value": 100, "payment_period": "month"},
        {"type": "transfer", "name": "living", "spec": "salary"},
        {"type": "expense", "name": "rent", "value": 100, "payment_period": "month", "from_stream": "living"},
    ]
