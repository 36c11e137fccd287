"""
Tabular views of simulation results.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

import pandas as pd

if TYPE_CHECKING:
    from .core.timeline import TimelineEvent
    from .model.snapshot import Snapshot

TOTALS = ("net_assets", "total_expenses")


def _period_index(snapshots: Sequence[Snapshot], freq: str = "M") -> pd.PeriodIndex:
    return pd.PeriodIndex([pd.Period(s.date, freq=freq) for s in snapshots], freq=freq)


def snapshot_frame(snapshots: Iterable[Snapshot], field: str = "value") -> pd.DataFrame:
    """
    One state field of every item, period by period.

    Args:
        snapshots: Snapshots in run order (e.g. `scenario.snapshots`)
        field: State field to tabulate; items whose state lacks it are left out

    Returns:
        DataFrame indexed by a monthly `PeriodIndex`, one column per item id
        (NaN where the item was not live), plus `net_assets` and
        `total_expenses`

    Example:
        >>> df = snapshot_frame(scenario.snapshots)
        >>> df["asset/savings"].iloc[-1]
        >>> snapshot_frame(scenario.snapshots, "used")
    """
    snapshots = list(snapshots)
    rows = []
    for s in snapshots:
        row = {}
        for item in s.items():
            if item is s or getattr(item, "state", None) is None:
                continue
            if field in item.state:
                row[item.id] = item.state[field]
        row["net_assets"] = s.net_assets
        row["total_expenses"] = s.total_expenses
        rows.append(row)

    df = pd.DataFrame(rows, index=_period_index(snapshots))
    items = sorted(c for c in df.columns if c not in TOTALS)
    df = df.reindex(columns=[*items, *TOTALS])
    return df


def aggregate_frame(df: pd.DataFrame, freq: str = "Y", flows: Sequence[str] = ()) -> pd.DataFrame:
    """
    Resample a `snapshot_frame` to a coarser frequency.

    Balances take the last value of each period; columns named in `flows` are
    summed.

    Example:
        >>> yearly = aggregate_frame(snapshot_frame(scenario.snapshots), "Y")
        >>> interest = aggregate_frame(snapshot_frame(scenario.snapshots, "interest"), "Y", flows=df.columns)
    """
    if freq.upper() in ("M", "MONTHLY"):
        return df
    agg = {col: ("sum" if col in flows else "last") for col in df.columns}
    out = df.groupby(df.index.asfreq(freq)).agg(agg)
    return out.reindex(columns=df.columns)


def timeline_frame(events: Iterable[TimelineEvent]) -> pd.DataFrame:
    """
    The timeline as a DataFrame, one row per event in timeline order.

    Columns are `date`, `action`, `type` and `name`, followed by one column per
    data key seen in any event (`amount`, `sources`, `payer`, ...).
    """
    rows = [
        {"date": e.date, "action": str(e.action), "type": e.item.type, "name": e.item.name, **e.data}
        for e in events
    ]
    if not rows:
        return pd.DataFrame(columns=["date", "action", "type", "name"])
    return pd.DataFrame(rows)
