"""
config.py
---------
Centralised configuration for the Stock Composite Report.
All parameters are read from environment variables with sensible defaults;
the command line in main.py overrides them per run.
"""

import os
from dataclasses import dataclass, field
from typing import Tuple


REQUIRED_COLUMNS: Tuple[str, ...] = ("Date", "Open", "High", "Low", "Close", "Volume")


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class LoaderConfig:
    """Input file location and parsing rules."""
    csv_path:     str = os.getenv("REPORT_CSV",          "msft.csv")
    date_format:  str = os.getenv("REPORT_DATE_FORMAT",  "%d-%m-%Y")   # day-month-year
    date_column:  str = "Date"


@dataclass
class AnalysisConfig:
    """Year range and derivation / correlation policies."""
    start_year:           int  = int(os.getenv("REPORT_START_YEAR", "2010"))
    end_year:             int  = int(os.getenv("REPORT_END_YEAR",   "2022"))
    include_price_change: bool = _env_bool("REPORT_INCLUDE_PRICE_CHANGE", "false")
    drop_undefined:       bool = _env_bool("REPORT_DROP_UNDEFINED",       "true")


@dataclass
class ChartConfig:
    """Labels and output settings for the rendered charts."""
    ticker:       str = os.getenv("REPORT_TICKER",  "MSFT")
    company:      str = os.getenv("REPORT_COMPANY", "Microsoft")
    source_label: str = os.getenv(
        "REPORT_SOURCE", "Stock Market Data (NASDAQ, NYSE, S&P500)"
    )
    hist_bins:    int = 40
    band_pct:     float = 0.05          # +/- band around the closing price
    dpi:          int = 150


@dataclass
class ReportConfig:
    """Master configuration aggregating all sub-configs."""
    loader:   LoaderConfig   = field(default_factory=LoaderConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    charts:   ChartConfig    = field(default_factory=ChartConfig)

    # Paths
    output_dir: str = os.getenv(
        "REPORT_OUTPUT_DIR", os.path.join(os.path.dirname(__file__), "..", "outputs")
    )
    log_level:  str = os.getenv("LOG_LEVEL", "INFO")

    # Operational mode
    render_charts: bool = True
    write_tables:  bool = True

    @property
    def year_label(self) -> str:
        return f"{self.analysis.start_year}-{self.analysis.end_year}"
