"""
correlation.py
--------------
Pearson correlation matrix across the numeric metrics of a derived table,
plus its long (MetricA, MetricB, Value) form for tile-based heatmaps.

Missing-data policy: listwise complete observations. A row with any NaN
among the selected metrics is excluded from the whole matrix, so every
coefficient is computed over the same set of days.

Zero-variance metrics have undefined correlation: all of their entries,
including the diagonal, are NaN and a DegenerateComputation warning is
issued.
"""

import warnings
import numpy as np
import pandas as pd
from dataclasses import dataclass
from typing import List

from src.errors import DegenerateComputation
from src.utils  import get_logger

log = get_logger(__name__)

PRICE_CHANGE = "Price_Change"


@dataclass(frozen=True)
class CorrelationEntry:
    """One tile of the correlation heatmap."""
    metric_a: str
    metric_b: str
    value:    float


def correlation_metrics(
    df:                   pd.DataFrame,
    include_price_change: bool = False,
    date_column:          str  = "Date",
) -> List[str]:
    """Numeric columns in table order, excluding the date column."""
    cols = [c for c in df.select_dtypes(include="number").columns if c != date_column]
    if not include_price_change:
        cols = [c for c in cols if c != PRICE_CHANGE]
    return cols


def correlation_matrix(
    df:                   pd.DataFrame,
    include_price_change: bool = False,
    date_column:          str  = "Date",
) -> pd.DataFrame:
    """
    Square Pearson correlation matrix over complete observations.

    Returns
    -------
    pd.DataFrame  (metrics x metrics), symmetric, diagonal 1.0 for
                  metrics with non-zero variance, NaN for degenerate ones.
    """
    metrics  = correlation_metrics(df, include_price_change, date_column)
    data     = df[metrics].dropna(how="any")
    excluded = len(df) - len(data)
    if excluded:
        log.info("Correlation: excluded %d incomplete row(s).", excluded)

    corr = data.corr(method="pearson")

    # a constant non-dyadic column has a rounding-sized std, so count values
    n_unique   = data.nunique()
    degenerate = [m for m in metrics
                  if len(data) < 2 or n_unique[m] <= 1 or np.isnan(corr.loc[m, m])]
    for m in metrics:
        if m in degenerate:
            corr.loc[m, :] = np.nan
            corr.loc[:, m] = np.nan
        else:
            corr.loc[m, m] = 1.0

    if degenerate:
        msg = (f"Correlation undefined for zero-variance metric(s) {degenerate} "
               f"over {len(data)} complete row(s)")
        log.warning(msg)
        warnings.warn(msg, DegenerateComputation, stacklevel=2)

    log.info("Correlation matrix built over %d metric(s) and %d row(s).",
             len(metrics), len(data))
    return corr


def melt_correlation(corr: pd.DataFrame) -> pd.DataFrame:
    """
    Reshape a square matrix into long form: one row per ordered metric pair,
    MetricA varying fastest.
    """
    long = corr.rename_axis(index="MetricA", columns="MetricB").reset_index()
    long = long.melt(id_vars="MetricA", var_name="MetricB", value_name="Value")
    return long[["MetricA", "MetricB", "Value"]]


def correlation_entries(corr: pd.DataFrame) -> List[CorrelationEntry]:
    """Matrix as a list of CorrelationEntry values (NaN for undefined)."""
    return [
        CorrelationEntry(str(a), str(b), float(v))
        for a, b, v in melt_correlation(corr).itertuples(index=False)
    ]
