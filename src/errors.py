"""
errors.py
---------
Error taxonomy for the report pipeline.

Unreadable or missing input files surface as the built-in OSError
(FileNotFoundError for a missing path) straight from the loader.
"""

from typing import Optional


class ParseError(ValueError):
    """
    A date or numeric cell could not be parsed under the declared format,
    or the file lacks a required column.

    Attributes
    ----------
    path   : Input file path.
    line   : 1-based line number in the CSV (header is line 1), if known.
    column : Offending column name, if known.
    value  : Raw offending cell text, if known.
    """

    def __init__(self, message: str, path: str = "", line: Optional[int] = None,
                 column: Optional[str] = None, value: Optional[str] = None):
        self.path   = path
        self.line   = line
        self.column = column
        self.value  = value

        where = [p for p in (
            path,
            f"line {line}" if line is not None else "",
            f"column '{column}'" if column is not None else "",
        ) if p]
        super().__init__(f"{message} ({', '.join(where)})" if where else message)


class DegenerateComputation(RuntimeWarning):
    """
    Division by a zero closing price or correlation over a zero-variance
    metric. Non-fatal: the affected value is reported as NaN.
    """
