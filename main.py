"""
main.py
-------
Entry point for the Stock Composite Report.

Usage
-----
# Report on a price history CSV (dates as dd-mm-YYYY):
    python main.py msft.csv

# Different year range, Price_Change included in the correlation:
    python main.py msft.csv --start-year 2015 --end-year 2020 --include-price-change

# Demo mode (synthetic data, no input file needed):
    python main.py --demo

Environment variables
---------------------
See src/config.py for the full list of supported env vars.
"""

import os
import sys
import argparse

# Ensure src/ is importable when running from project root
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from src.config import ReportConfig
from src.errors import ParseError
from src.utils  import get_logger, set_level

log = get_logger("main")


def write_tables(result, out_dir: str) -> None:
    """Save the derived table and the long-form correlation entries."""
    os.makedirs(out_dir, exist_ok=True)
    derived_path = os.path.join(out_dir, "derived.csv")
    corr_path    = os.path.join(out_dir, "correlation.csv")
    result.derived.to_csv(derived_path, index=False, date_format="%Y-%m-%d")
    result.correlation_long.to_csv(corr_path, index=False)
    log.info("Saved tables: %s, %s", derived_path, corr_path)


def run(cfg: ReportConfig, csv_path: str) -> int:
    from src.pipeline import run_pipeline

    try:
        result = run_pipeline(cfg, csv_path)
    except ParseError as exc:
        log.error("Could not parse input: %s", exc)
        return 1
    except OSError as exc:
        log.error("Could not read input: %s", exc)
        return 1

    if cfg.write_tables:
        write_tables(result, cfg.output_dir)

    if cfg.render_charts:
        from src.plotter import render_report
        render_report(result, cfg)

    print(f"\nMissing-value summary:\n{result.missing.summary()}")
    print(f"\nCorrelation matrix:\n{result.correlation.round(3).to_string()}")
    log.info("Report complete. Outputs in: %s", os.path.abspath(cfg.output_dir))
    return 0


# =============================================================================
# Entry point
# =============================================================================

def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Stock Composite Report - cleaning, returns, correlation and charts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py msft.csv                       # 2010-2022 report
  python main.py msft.csv --start-year 2018     # narrower range
  python main.py --demo                         # synthetic data
        """,
    )
    p.add_argument("csv", nargs="?", help="Input price CSV (default: $REPORT_CSV)")
    p.add_argument("--start-year", type=int, help="First year kept (inclusive)")
    p.add_argument("--end-year",   type=int, help="Last year kept (inclusive)")
    p.add_argument("--date-format", help="strftime format of the Date column")
    p.add_argument("--include-price-change", action="store_true",
                   help="Include Price_Change in the correlation matrix")
    p.add_argument("--keep-undefined", action="store_true",
                   help="Keep rows whose derived values are undefined (NaN)")
    p.add_argument("--output-dir", help="Directory for charts and tables")
    p.add_argument("--no-charts", action="store_true", help="Skip chart rendering")
    p.add_argument("--demo", action="store_true", help="Run on synthetic data")
    p.add_argument("--log-level", default=None,
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Log verbosity")
    return p.parse_args(argv)


def build_config(args: argparse.Namespace) -> ReportConfig:
    cfg = ReportConfig()
    if args.start_year is not None:
        cfg.analysis.start_year = args.start_year
    if args.end_year is not None:
        cfg.analysis.end_year = args.end_year
    if args.date_format:
        cfg.loader.date_format = args.date_format
    if args.include_price_change:
        cfg.analysis.include_price_change = True
    if args.keep_undefined:
        cfg.analysis.drop_undefined = False
    if args.output_dir:
        cfg.output_dir = args.output_dir
    if args.no_charts:
        cfg.render_charts = False
    if args.log_level:
        cfg.log_level = args.log_level
    return cfg


def main(argv=None) -> int:
    args = parse_args(argv)
    cfg  = build_config(args)
    set_level(cfg.log_level)

    csv_path = args.csv or cfg.loader.csv_path
    if args.demo:
        from src.data_generator import generate_price_csv
        csv_path = generate_price_csv(
            os.path.join(cfg.output_dir, "demo_prices.csv"),
            date_format=cfg.loader.date_format,
        )
        cfg.charts.ticker  = "DEMO"
        cfg.charts.company = "Synthetic"
        log.info("Generated synthetic price history: %s", csv_path)

    log.info("=" * 60)
    log.info("  STOCK COMPOSITE REPORT")
    log.info("  Input: %s", csv_path)
    log.info("  Years: %s", cfg.year_label)
    log.info("  Price_Change in correlation: %s", cfg.analysis.include_price_change)
    log.info("  Drop undefined derived rows: %s", cfg.analysis.drop_undefined)
    log.info("=" * 60)

    return run(cfg, csv_path)


if __name__ == "__main__":
    sys.exit(main())
