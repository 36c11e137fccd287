"""
Transfer resolution: recursive allocation of a payment across sources.

A bound transfer spec is one of:

- an item id (`"asset/savings"`, `"income/salary"`, `"transfer/fallback"`),
- a list of specs, drawn in order until the amount is covered,
- a mapping of item id to `Share`, each asked for its weighted part.

Withdrawing mutates the live states of the sources: assets and incomes go
down, liabilities (credit lines) go up, and each source's `used` accumulates.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

from ..core.currency import USD, Currency
from ..core.errors import ConfigError, TransferSpecError
from ..core.kinds import NONTAXABLE, T
from ..tagged import Money, cents

if TYPE_CHECKING:
    from ..core.state import ItemState
    from ..model.transfer import Transfer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Share:
    """Normalized weight of one source in a weighted transfer."""

    weight: float


BoundSpec = Union[str, list, dict]
SOURCE_TYPES = (T.ASSET, T.INCOME, T.LIABILITY)


@dataclass
class Withdrawal:
    """
    Result of withdrawing an amount through a transfer.

    Attributes:
        id: Id of the item being paid for
        amount: Total actually withdrawn
        sources: Amount taken per source id
        taxable: Part of `amount` that counts as taxable income
        deductible: Deductible interest on liabilities drawn against
    """

    id: str
    amount: Money = Money(0.0)
    sources: dict[str, Money] = field(default_factory=dict)
    taxable: Money = Money(0.0)
    deductible: Money = Money(0.0)


def add_sub_sources(dst: dict[str, Money], src: Mapping[str, float], currency: Currency = USD) -> None:
    """Merge a per-source breakdown into `dst`, rounding each total to cents."""
    for k, v in src.items():
        dst[k] = cents(dst.get(k, 0.0) + (v or 0.0), currency)


def withdraw(
    transfer: Transfer,
    amount: float,
    payer_id: str,
    states: Mapping[str, ItemState],
    currency: Currency = USD,
    log_unavailable: bool = True,
    _active: tuple[str, ...] = (),
) -> Withdrawal:
    """
    Withdraw `amount` on behalf of `payer_id` through `transfer`.

    Sources are looked up in `states`, the engine's live state map keyed by item
    id. A source with no live state (not started yet, or terminated) yields
    nothing and is logged; it is not an error.

    Weighted shares are each asked for `amount * weight`; a share that comes up
    short is not made up by its siblings.

    Raises:
        TransferSpecError: If transfers refer to each other in a cycle
        ConfigError: If a spec names an item that cannot act as a source
    """
    if transfer.id in _active:
        chain = " -> ".join((*_active, transfer.id))
        raise TransferSpecError(f"Transfer cycle: {chain}")
    active = (*_active, transfer.id)
    result = Withdrawal(id=payer_id)

    def draw(need: float, spec: BoundSpec) -> float:
        if isinstance(spec, str):
            return draw_from(need, spec)
        if isinstance(spec, list):
            total = 0.0
            for sub in spec:
                total = cents(total + draw(max(need - total, 0.0), sub), currency)
                if total >= need:
                    break
            return total
        if isinstance(spec, dict):
            return cents(
                sum(draw(cents(need * share.weight, currency), src) for src, share in spec.items()),
                currency,
            )
        raise TransferSpecError(f"Unknown transfer spec in {transfer.name}: {spec!r}")

    def draw_from(need: float, src_id: str) -> float:
        current = states.get(src_id)
        if current is None:
            if log_unavailable:
                logger.info("The source %s is not available on %s for %s", src_id, states_date(states), payer_id)
            return 0.0
        if current.type == T.TRANSFER:
            sub = withdraw(current.item, need, payer_id, states, currency, log_unavailable, active)
            add_sub_sources(result.sources, sub.sources, currency)
            result.taxable = cents(result.taxable + sub.taxable, currency)
            result.deductible = cents(result.deductible + sub.deductible, currency)
            return sub.amount
        if current.type not in SOURCE_TYPES:
            raise ConfigError(f"{src_id} is not a valid source of income")
        amt = cents(min(need, max(current.value, 0.0)), currency)
        if amt <= 0:
            return 0.0
        current.used = cents(current.get("used", 0.0) + amt, currency)
        taxable = not current.item.has_category(NONTAXABLE)
        if current.type == T.LIABILITY:
            current.value = cents(current.value + amt, currency)
            if taxable:
                result.deductible = cents(result.deductible + current.get("interest", 0.0), currency)
        else:
            current.value = cents(current.value - amt, currency)
            if taxable:
                result.taxable = cents(result.taxable + amt, currency)
        add_sub_sources(result.sources, {src_id: amt}, currency)
        return amt

    result.amount = cents(draw(amount, transfer.spec), currency)
    return result


def states_date(states: Mapping[str, ItemState]):
    """Date of the period the live states belong to, for messages."""
    return next((s.date for s in states.values()), None)
