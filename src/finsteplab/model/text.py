"""
Named text snippets carried along with a scenario.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..core.kinds import T
from .item import Item

if TYPE_CHECKING:
    from .scenario import Scenario


class Text(Item):
    """A piece of text for reports; never simulated."""

    type = T.TEXT

    def __init__(self, row: Mapping[str, Any], scenario: Scenario | None = None):
        super().__init__(row, scenario)
        self.text: str = str(row.get("text") or "")
