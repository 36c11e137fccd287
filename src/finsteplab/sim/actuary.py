"""
Actuarial tables and survival probabilities.

The default life table is a period table generated from a Gompertz-Makeham
mortality law, `mu(x) = A + B * c**x`, with separate infant mortality. It is
shaped like the SSA period life table (per sex: probability of death within
the year `p`, survivors `n` out of 100,000 births, remaining life expectancy
`years`), so a published table can be dropped in with `load_life_table`.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, NamedTuple

import numpy as np
import pandas as pd

from ..calendar import calculate_age, month_range
from ..core.errors import ConfigError

if TYPE_CHECKING:
    from ..model.person import Person

logger = logging.getLogger(__name__)

SEXES = ("male", "female")
FIELDS = ("p", "n", "years")
MAX_AGE = 119
RADIX = 100_000

# Gompertz-Makeham parameters per sex
MAKEHAM_A = 0.0005
GOMPERTZ_C = 1.1
GOMPERTZ_B = {"male": 3.0e-5, "female": 1.8e-5}
INFANT_Q = {"male": 0.0060, "female": 0.0050}


class ActuaryDatum(NamedTuple):
    """
    One row of a life table for one sex.

    Attributes:
        p: Probability of dying within the year
        n: Survivors at this age out of 100,000 births
        years: Remaining life expectancy in years
    """

    p: float
    n: float
    years: float


EOL = ActuaryDatum(p=1.0, n=0, years=0.0)


def _sex_columns(sex: str) -> pd.DataFrame:
    ages = np.arange(MAX_AGE + 1)
    mu = MAKEHAM_A + GOMPERTZ_B[sex] * GOMPERTZ_C**ages
    q = np.minimum(1.0, 1.0 - np.exp(-mu))
    q[0] = INFANT_Q[sex]
    survivors = RADIX * np.concatenate(([1.0], np.cumprod(1.0 - q)[:-1]))
    n = np.round(survivors)
    # curtate expectancy plus half a year for deaths within the year
    later = np.concatenate((np.cumsum(survivors[::-1])[::-1][1:], [0.0]))
    with np.errstate(divide="ignore", invalid="ignore"):
        years = np.where(survivors > 0, later / survivors + 0.5, 0.0)
    frame = pd.DataFrame({"p": q, "n": n, "years": years}, index=ages)
    gone = (frame["n"] == 0).to_numpy(copy=True)
    gone[-1] = True
    for name in FIELDS:
        frame.loc[gone, name] = getattr(EOL, name)
    return frame


@lru_cache(maxsize=1)
def life_table() -> pd.DataFrame:
    """
    The default life table.

    Returns:
        DataFrame indexed by integer age 0..119 with MultiIndex columns
        `(sex, field)`, sex in `("male", "female")`, field in `("p", "n", "years")`
    """
    table = pd.concat({sex: _sex_columns(sex) for sex in SEXES}, axis=1)
    table.index.name = "age"
    return table


def load_life_table(path: str | Path) -> pd.DataFrame:
    """
    Load a life table from CSV.

    The file must have a two-row header `(sex, field)` and the age as the
    first column, as written by `life_table().to_csv(path)`.
    """
    table = pd.read_csv(path, header=[0, 1], index_col=0)
    table.index = table.index.astype(int)
    table.index.name = "age"
    missing = {(s, f) for s in SEXES for f in FIELDS} - set(table.columns)
    if missing:
        raise ConfigError(f"Life table {path} is missing columns {sorted(missing)}")
    return table


def _row(table: pd.DataFrame, age: int, sex: str) -> ActuaryDatum | None:
    if age not in table.index:
        return None
    row = table.loc[age, sex]
    return ActuaryDatum(p=float(row["p"]), n=float(row["n"]), years=float(row["years"]))


def actuary(age: float, sex: str, table: pd.DataFrame | None = None) -> ActuaryDatum:
    """
    Look up actuarial data for a fractional age.

    Whole ages (or a fractional part of at most 0.003) return the table row;
    otherwise the two adjacent rows are interpolated linearly, with `n`
    rounded to a whole number of survivors.

    Raises:
        ConfigError: If the age lies outside the table or `sex` is unknown
    """
    if sex not in SEXES:
        raise ConfigError(f"Unknown sex {sex!r} for actuarial lookup")
    table = life_table() if table is None else table
    idx = math.floor(age)
    frac = age - idx
    base = _row(table, idx, sex)
    if base is None:
        raise ConfigError(f"No actuarial data for age {age:.3f} ({sex})")
    if frac <= 0.003:
        return base
    nxt = _row(table, idx + 1, sex)
    if nxt is None:
        raise ConfigError(f"No actuarial data for age {age:.3f} ({sex})")

    def interpolate(a: float, b: float) -> float:
        return a * (1 - frac) + b * frac

    return ActuaryDatum(
        p=interpolate(base.p, nxt.p),
        n=round(interpolate(base.n, nxt.n)),
        years=interpolate(base.years, nxt.years),
    )


def actuary_for(person: Person, d: date, table: pd.DataFrame | None = None) -> ActuaryDatum:
    """Actuarial data for a person at a date."""
    return actuary(calculate_age(person.birth, d), person.sex, table)


def lookup_or_eol(age: float, sex: str, table: pd.DataFrame | None = None) -> ActuaryDatum:
    """Like `actuary`, but ages past the end of the table yield `EOL`."""
    try:
        return actuary(age, sex, table)
    except ConfigError:
        if age < 0 or sex not in SEXES:
            raise
        logger.debug("Age %.3f beyond life table for %s; using end of life", age, sex)
        return EOL


def compute_probabilities(
    person: Person,
    start: date,
    end: date,
    table: pd.DataFrame | None = None,
) -> np.ndarray:
    """
    Monthly cumulative survival probabilities.

    Element `k` is the probability that `person`, alive at `start`, is still
    alive at the start of month `k`; element 0 is therefore 1. Each month
    applies the annual death probability at the person's age as a monthly
    hazard, `(1 - p) ** (1/12)`. Ages past the end of the table are treated as
    certain death.
    """
    if end <= start:
        return np.ones(1)
    count = (end.year - start.year) * 12 + end.month - start.month + (1 if end.day > 1 else 0)
    months = list(month_range(start, count).astype("datetime64[D]").astype(date))
    months[0] = start
    q = np.array([lookup_or_eol(calculate_age(person.birth, m), person.sex, table).p for m in months])
    monthly = (1.0 - q) ** (1.0 / 12.0)
    return np.concatenate(([1.0], np.cumprod(monthly)[:-1]))
