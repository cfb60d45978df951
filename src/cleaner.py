"""
cleaner.py
----------
Missing-value reporting and removal of incomplete rows.

This is a reporting + filtering step; no value is ever imputed.
"""

import pandas as pd
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from src.utils import get_logger

log = get_logger(__name__)

_MAX_LISTED_ROWS = 10


@dataclass
class MissingValueReport:
    """Missing-data counts for one table."""
    total_missing:   int
    per_column:      Dict[str, int]
    incomplete_rows: int
    row_labels:      List = field(default_factory=list)

    def summary(self) -> str:
        lines = [f"Total missing values: {self.total_missing}",
                 "Missing values per column:"]
        width = max((len(c) for c in self.per_column), default=0)
        lines += [f"  {col:<{width}}  {n}" for col, n in self.per_column.items()]
        lines.append(f"Number of rows with missing values: {self.incomplete_rows}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        return {
            "total_missing":   self.total_missing,
            "per_column":      dict(self.per_column),
            "incomplete_rows": self.incomplete_rows,
        }


def missing_value_report(df: pd.DataFrame) -> MissingValueReport:
    """Count missing cells overall, per column, and per row."""
    na        = df.isna()
    per_col   = {str(c): int(n) for c, n in na.sum().items()}
    row_mask  = na.any(axis=1)
    return MissingValueReport(
        total_missing   = int(na.to_numpy().sum()),
        per_column      = per_col,
        incomplete_rows = int(row_mask.sum()),
        row_labels      = df.index[row_mask].tolist(),
    )


def drop_incomplete(df: pd.DataFrame) -> Tuple[pd.DataFrame, MissingValueReport]:
    """
    Remove every row with at least one missing field.

    Returns
    -------
    (clean_df, report) where report describes the input table.
    """
    report = missing_value_report(df)
    for line in report.summary().splitlines():
        log.info(line)

    if report.incomplete_rows == 0:
        log.info("No rows with missing values detected.")
        return df.copy(), report

    shown = report.row_labels[:_MAX_LISTED_ROWS]
    log.warning(
        "Removing %d incomplete row(s); first rows: %s%s",
        report.incomplete_rows, shown,
        " ..." if report.incomplete_rows > len(shown) else "",
    )
    clean = df.dropna(how="any").copy()
    log.info("Rows after cleaning: %d (was %d)", len(clean), len(df))
    return clean, report
