"""
pipeline.py
-----------
Runs the data stages as an explicit sequence of pure transformations:

    load_prices -> drop_incomplete -> filter_years -> derive_returns
                -> correlation_matrix -> melt_correlation

Each stage returns a new DataFrame; nothing here depends on a charting
library, so the pipeline runs headless.
"""

import pandas as pd
from dataclasses import dataclass
from typing import Optional

from src.config      import ReportConfig
from src.cleaner     import MissingValueReport, drop_incomplete
from src.correlation import correlation_matrix, melt_correlation
from src.filters     import filter_years
from src.loader      import load_prices, year_range
from src.returns     import derive_returns
from src.utils       import get_logger, timeit

log = get_logger(__name__)


@dataclass
class PipelineResult:
    """Every intermediate table of one report run."""
    raw:              pd.DataFrame
    cleaned:          pd.DataFrame
    filtered:         pd.DataFrame
    derived:          pd.DataFrame
    correlation:      pd.DataFrame      # square matrix
    correlation_long: pd.DataFrame      # MetricA, MetricB, Value
    missing:          MissingValueReport

    @property
    def undefined_dropped(self) -> int:
        return len(self.filtered) - len(self.derived)

    def summary(self) -> dict:
        return {
            "rows_loaded":       len(self.raw),
            "rows_cleaned":      len(self.cleaned),
            "rows_in_range":     len(self.filtered),
            "rows_derived":      len(self.derived),
            "undefined_dropped": self.undefined_dropped,
            "metrics":           list(self.correlation.columns),
            "missing_values":    self.missing.total_missing,
        }


def analyse(df: pd.DataFrame, cfg: ReportConfig) -> PipelineResult:
    """Run every stage after loading on an in-memory table."""
    a           = cfg.analysis
    date_col    = cfg.loader.date_column
    cleaned, mv = drop_incomplete(df)
    filtered    = filter_years(cleaned, a.start_year, a.end_year, date_col)
    derived     = derive_returns(filtered, drop_undefined=a.drop_undefined,
                                 date_column=date_col)
    corr        = correlation_matrix(derived, a.include_price_change, date_col)

    return PipelineResult(
        raw              = df,
        cleaned          = cleaned,
        filtered         = filtered,
        derived          = derived,
        correlation      = corr,
        correlation_long = melt_correlation(corr),
        missing          = mv,
    )


@timeit
def run_pipeline(cfg: ReportConfig, csv_path: Optional[str] = None) -> PipelineResult:
    """
    Load the configured CSV and run the full data pipeline.

    Raises
    ------
    OSError, ParseError from the loader.
    """
    path = csv_path or cfg.loader.csv_path
    raw  = load_prices(path, cfg.loader.date_format, cfg.loader.date_column)

    span = year_range(raw, cfg.loader.date_column)
    if span:
        log.info("Data covers %d-%d", *span)

    result = analyse(raw, cfg)
    log.info("Pipeline summary: %s", result.summary())
    return result
