"""
loader.py
---------
Reads a historical price CSV into a DataFrame and parses its date column
under a declared day-month-year format.

Parsing policy
--------------
- Blank cells (and the usual NA markers) are missing values; they are left
  as NaN / NaT for the cleaner to report and remove.
- A non-blank cell that does not parse is fatal for the whole load: a
  ParseError names the file, CSV line, column and raw value of the first
  offending cell. Blank lines are skipped but still counted; a quoted field
  spanning several lines shifts the reported line number.
- Extra columns that hold no numeric values at all (e.g. a ticker symbol
  column) are dropped, since only numeric fields reach the correlation.
"""

import pandas as pd
from typing import Optional

from src.config import REQUIRED_COLUMNS
from src.errors import ParseError
from src.utils  import get_logger, timeit

log = get_logger(__name__)


def _clean_cells(raw: pd.Series) -> pd.Series:
    """Strip whitespace; blank strings become missing."""
    return raw.map(lambda v: (v.strip() or None) if isinstance(v, str) else None)


def _first_bad(path: str, column: str, cells: pd.Series, bad: pd.Series,
               what: str) -> ParseError:
    label = bad[bad].index[0]
    value = cells.loc[label]
    line  = int(label) + 2          # header occupies line 1
    return ParseError(
        f"{int(bad.sum())} {what} value(s) could not be parsed; first is '{value}'",
        path=path, line=line, column=column, value=value,
    )


def parse_dates(cells: pd.Series, date_format: str, path: str = "",
                column: str = "Date") -> pd.Series:
    """
    Parse a column of date strings under an explicit strftime format.

    Raises
    ------
    ParseError if any non-blank cell does not match the format.
    """
    cells  = _clean_cells(cells)
    parsed = pd.to_datetime(cells, format=date_format, errors="coerce")
    bad    = cells.notna() & parsed.isna()
    if bad.any():
        raise _first_bad(path, column, cells, bad, f"date (format '{date_format}')")
    return parsed


@timeit
def load_prices(
    path:        str,
    date_format: str = "%d-%m-%Y",
    date_column: str = "Date",
) -> pd.DataFrame:
    """
    Load a price history CSV.

    Parameters
    ----------
    path        : CSV file with a header row and at least
                  Date, Open, High, Low, Close, Volume.
    date_format : strftime format of the date column (day-month-year).
    date_column : Name of the date column.

    Returns
    -------
    pd.DataFrame with a datetime64 date column and float numeric columns,
    in file order.

    Raises
    ------
    OSError    : File missing or unreadable.
    ParseError : Empty file, missing required column, or unparseable cell.
    """
    path = str(path)
    with open(path, "r", newline="", encoding="utf-8") as fh:
        try:
            raw = pd.read_csv(fh, dtype=str, skipinitialspace=True,
                              skip_blank_lines=False)
        except pd.errors.EmptyDataError as exc:
            raise ParseError("File is empty", path=path) from exc
        except pd.errors.ParserError as exc:
            raise ParseError(f"Malformed CSV: {exc}", path=path) from exc
        except UnicodeDecodeError as exc:
            raise ParseError("File is not valid UTF-8", path=path) from exc

    raw.columns = [str(c).strip() for c in raw.columns]

    # index label i is file line i + 2 as long as no quoted field spans lines
    blank = raw.isna().all(axis=1)
    if blank.any():
        log.info("Skipping %d blank line(s) in %s", int(blank.sum()), path)
        raw = raw.loc[~blank]

    required = [date_column if c == "Date" else c for c in REQUIRED_COLUMNS]
    for col in required:
        if col not in raw.columns:
            raise ParseError("Missing required column", path=path, column=col)

    df = pd.DataFrame(index=raw.index)
    df[date_column] = parse_dates(raw[date_column], date_format, path, date_column)

    for col in raw.columns:
        if col == date_column:
            continue
        cells  = _clean_cells(raw[col])
        values = pd.to_numeric(cells, errors="coerce")
        bad    = cells.notna() & values.isna()
        if col not in required and cells.notna().any() and values.notna().sum() == 0:
            log.info("Dropping non-numeric column '%s'.", col)
            continue
        if bad.any():
            raise _first_bad(path, col, cells, bad, "numeric")
        df[col] = values.astype(float)

    n_dupes = int(df[date_column].dropna().duplicated().sum())
    if n_dupes:
        log.warning("%d duplicate date(s) in %s; original order is kept for ties.",
                    n_dupes, path)

    df = df.reset_index(drop=True)
    log.info("Loaded %d rows x %d columns from %s", len(df), df.shape[1], path)
    return df


def year_range(df: pd.DataFrame, date_column: str = "Date") -> Optional[tuple]:
    """(min_year, max_year) of the date column, or None for an empty table."""
    dates = df[date_column].dropna()
    if dates.empty:
        return None
    return int(dates.dt.year.min()), int(dates.dt.year.max())
