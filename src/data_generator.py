"""
Synthetic Price History Generator
=================================

Writes a daily OHLCV series in the report's input format (header row,
day-month-year dates) so the full report can be produced offline.

Closing prices follow a GBM with business-day steps; intraday high/low
are drawn around open/close and volume is lognormal with a mild
dependence on the absolute daily move.
"""

import os
import numpy as np
import pandas as pd
from typing import Optional


def generate_prices(
    start:   str   = "2010-01-01",
    end:     str   = "2022-12-31",
    price0:  float = 30.0,
    mu:      float = 0.18,
    sigma:   float = 0.27,
    seed:    int   = 42,
) -> pd.DataFrame:
    """
    Generate a synthetic daily price table.

    Parameters
    ----------
    start, end : Calendar bounds (business days only).
    price0     : Initial close.
    mu, sigma  : Annualised GBM drift and volatility.
    seed       : Random seed for reproducibility.

    Returns
    -------
    pd.DataFrame  Date, Open, High, Low, Close, Adj Close, Volume.
    """
    rng   = np.random.default_rng(seed)
    dates = pd.bdate_range(start, end)
    n     = len(dates)
    dt    = 1.0 / 252

    log_ret = (mu - 0.5 * sigma ** 2) * dt + sigma * np.sqrt(dt) * rng.standard_normal(n)
    close   = price0 * np.exp(np.cumsum(log_ret))
    open_   = np.concatenate([[price0], close[:-1]]) * (1 + rng.normal(0, 0.003, n))
    high    = np.maximum(open_, close) * (1 + np.abs(rng.normal(0, 0.006, n)))
    low     = np.minimum(open_, close) * (1 - np.abs(rng.normal(0, 0.006, n)))
    volume  = np.exp(
        rng.normal(17.2, 0.35, n) + 8.0 * np.abs(log_ret)
    ).round().astype(np.int64)

    return pd.DataFrame({
        "Date":      dates,
        "Open":      open_.round(4),
        "High":      high.round(4),
        "Low":       low.round(4),
        "Close":     close.round(4),
        "Adj Close": (close * 0.95).round(4),
        "Volume":    volume,
    })


def generate_price_csv(
    path:        str,
    start:       str = "2010-01-01",
    end:         str = "2022-12-31",
    seed:        int = 42,
    date_format: str = "%d-%m-%Y",
    prices:      Optional[pd.DataFrame] = None,
) -> str:
    """Write a synthetic (or given) price table as CSV; returns the path."""
    df = prices if prices is not None else generate_prices(start, end, seed=seed)
    out = df.copy()
    out["Date"] = pd.to_datetime(out["Date"]).dt.strftime(date_format)
    os.makedirs(os.path.dirname(path) if os.path.dirname(path) else ".", exist_ok=True)
    out.to_csv(path, index=False)
    return path
