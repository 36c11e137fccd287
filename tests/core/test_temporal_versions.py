"""
Tests for Temporal version lookup.
"""

from dataclasses import dataclass
from datetime import date

import pytest

from finsteplab.core.temporal import Temporal


@dataclass
class Version:
    start: date
    end: bool = False
    label: str = ""


@pytest.fixture
def rent():
    return Temporal(
        [
            Version(date(2023, 1, 1), label="raise"),
            Version(date(2021, 1, 1), label="initial"),
            Version(date(2030, 1, 1), end=True, label="moved"),
        ]
    )


class TestTemporal:
    def test_sorted_by_start(self, rent):
        assert [v.label for v in rent] == ["initial", "raise", "moved"]
        assert rent.first.label == "initial"
        assert rent.last.label == "moved"

    def test_before_first_start(self, rent):
        assert rent.on_date(date(2020, 12, 31)) is None

    def test_in_effect(self, rent):
        assert rent.on_date(date(2021, 1, 1)).label == "initial"
        assert rent.on_date(date(2022, 12, 31)).label == "initial"
        assert rent.on_date(date(2023, 1, 1)).label == "raise"

    def test_after_end(self, rent):
        assert rent.on_date(date(2030, 1, 1)) is None
        assert rent.on_date(date(2040, 1, 1)) is None

    def test_span(self, rent):
        assert rent.span() == (date(2021, 1, 1), date(2030, 1, 1))
        assert Temporal([Version(date(2021, 1, 1))]).span() == (date(2021, 1, 1), None)

    def test_slice(self, rent):
        assert [v.label for v in rent.slice(date(2022, 1, 1))] == ["raise", "moved"]
        assert [v.label for v in rent.slice(end=date(2023, 1, 1))] == ["initial"]

    def test_equal_starts_keep_input_order(self):
        a, b = Version(date(2021, 1, 1), label="a"), Version(date(2021, 1, 1), label="b")
        assert Temporal([a, b]).on_date(date(2021, 6, 1)) is b
