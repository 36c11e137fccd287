"""
Custom exceptions for FinStepLab.

This module provides specialized exception classes that carry the context of the
offending item, so fatal errors can be diagnosed from the message alone.
"""

from __future__ import annotations

from datetime import date

from .errors import ConfigError


class ItemError(ConfigError):
    """
    Raised when an item cannot be constructed or simulated.

    Attributes:
        item_type: Type tag of the offending item (e.g. 'expense')
        item_name: Name of the offending item
        date: Simulated date at which the problem surfaced, if any
    """

    def __init__(
        self,
        item_type: str,
        item_name: str,
        message: str,
        date: date | None = None,
    ):
        self.item_type = item_type
        self.item_name = item_name
        self.date = date
        super().__init__(self._fmt(message))

    def _fmt(self, msg: str) -> str:
        """Format the error message with the item context."""
        where = f" @ {self.date.isoformat()}" if self.date is not None else ""
        return f"[{self.item_type} {self.item_name}{where}] {msg}"
