"""
conftest.py
-----------
Pytest configuration: routes log files to a temp directory and provides
CSV-writing fixtures shared by the test modules.
"""

import os
import sys
import tempfile

os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "stock_report_test_logs"))
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pandas as pd
import pytest

from src.config         import ReportConfig
from src.data_generator import generate_prices


HEADER = "Date,Open,High,Low,Close,Volume"


@pytest.fixture
def write_csv(tmp_path):
    """Factory: write raw CSV text to a file and return its path."""
    def _write(text: str, name: str = "prices.csv") -> str:
        path = tmp_path / name
        path.write_text(text.strip() + "\n", encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def four_day_csv(write_csv):
    """Four consecutive 2015 sessions, closes 50, 55, 52.25, 52.25."""
    return write_csv(f"""
{HEADER}
05-01-2015,49.0,51.0,48.5,50.0,1000000
06-01-2015,50.5,56.0,50.0,55.0,1800000
07-01-2015,54.0,55.5,52.0,52.25,1500000
08-01-2015,52.0,53.0,51.0,52.25,900000
""")


@pytest.fixture
def sample_prices():
    """Synthetic business-day OHLCV table spanning 2014-2016."""
    return generate_prices(start="2014-10-01", end="2016-03-31", seed=7)


@pytest.fixture
def cfg(tmp_path):
    c = ReportConfig()
    c.output_dir                    = str(tmp_path / "outputs")
    c.analysis.start_year           = 2010
    c.analysis.end_year             = 2022
    c.analysis.include_price_change = False
    c.analysis.drop_undefined       = True
    c.loader.date_format            = "%d-%m-%Y"
    return c
