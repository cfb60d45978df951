"""
returns.py
----------
Derivation of day-over-day metrics on a chronologically ordered table.

    Daily_Returns[i] = (Close[i] / Close[i-1] - 1) * 100
    Price_Change[i]  =  Close[i] - Close[i-1]

The first row has no previous close and is undefined for both fields.
A zero previous close makes the return undefined (NaN, never inf).
"""

import warnings
import numpy as np
import pandas as pd

from src.errors import DegenerateComputation
from src.utils  import get_logger, timeit

log = get_logger(__name__)

DERIVED_COLUMNS = ("Daily_Returns", "Price_Change")


def sort_chronologically(df: pd.DataFrame, date_column: str = "Date") -> pd.DataFrame:
    """Stable ascending sort by date; ties keep their original order."""
    return df.sort_values(date_column, kind="mergesort").reset_index(drop=True)


@timeit
def derive_returns(
    df:             pd.DataFrame,
    drop_undefined: bool = True,
    date_column:    str  = "Date",
    price_column:   str  = "Close",
) -> pd.DataFrame:
    """
    Add Daily_Returns (%) and Price_Change (USD) columns.

    Parameters
    ----------
    df             : Cleaned price table.
    drop_undefined : Drop rows where either derived field is undefined
                     (always the first row). With False they are kept as NaN.

    Returns
    -------
    pd.DataFrame  New table sorted by date with a fresh RangeIndex.
    """
    out   = sort_chronologically(df, date_column)
    close = out[price_column]
    prev  = close.shift(1)

    zero_prev = prev == 0
    if zero_prev.any():
        dates = out.loc[zero_prev, date_column].dt.strftime("%Y-%m-%d").tolist()
        msg   = f"Previous close is zero on {len(dates)} row(s) {dates}; returns set to NaN"
        log.warning(msg)
        warnings.warn(msg, DegenerateComputation, stacklevel=2)

    with np.errstate(divide="ignore", invalid="ignore"):
        ratio = close / prev.where(~zero_prev)
    out["Daily_Returns"] = (ratio - 1) * 100
    out["Price_Change"]  = close - prev

    if not drop_undefined:
        return out

    undefined = out[list(DERIVED_COLUMNS)].isna().any(axis=1)
    n_drop    = int(undefined.sum())
    if n_drop:
        log.info("Dropped %d row(s) with undefined derived values.", n_drop)
    return out.loc[~undefined].reset_index(drop=True)
