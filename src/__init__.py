"""
Stock Composite Report
======================

Loads a historical stock-price CSV, cleans it, restricts it to a year
range, derives daily returns and price change, builds a Pearson
correlation matrix and renders a composite chart report.

Modules:
    config          - Dataclass configuration with environment defaults
    loader          - CSV loading and day-month-year date parsing
    cleaner         - Missing-value report and incomplete-row removal
    filters         - Inclusive year-range filter
    returns         - Daily returns and price change derivation
    correlation     - Pearson correlation matrix and long-form entries
    pipeline        - Loader -> Cleaner -> Filter -> Returns -> Correlation
    plotter         - matplotlib charts and composite layout
    data_generator  - Synthetic OHLCV CSV for offline demo runs
"""

__version__ = "1.0.0"
