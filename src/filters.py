"""
filters.py
----------
Inclusive calendar-year filter on the date column.
"""

import pandas as pd

from src.utils import get_logger

log = get_logger(__name__)


def filter_years(
    df:          pd.DataFrame,
    start_year:  int,
    end_year:    int,
    date_column: str = "Date",
) -> pd.DataFrame:
    """
    Keep rows whose date falls in [start_year, end_year].

    An inverted or non-overlapping range gives an empty table with the
    same columns; nothing is raised.
    """
    years = df[date_column].dt.year
    out   = df.loc[(years >= start_year) & (years <= end_year)].copy()
    log.info("Year filter %d-%d: kept %d of %d rows",
             start_year, end_year, len(out), len(df))
    return out
