"""
Core validators for raw provider rows.
Pure functions - no IO, network, or side effects.
"""

import math
from datetime import date
from typing import Dict, Any


class ValidationError(ValueError):
    """Raised when data validation fails."""
    pass


def parse_row_date(value: Any) -> date:
    """
    Parse a provider date field into a date.

    Accepts date objects and ISO strings, with or without a time part.

    Raises:
        ValidationError: If the value cannot be parsed
    """
    if isinstance(value, date):
        return value

    if not isinstance(value, str) or len(value) < 10:
        raise ValidationError(f"date must be ISO string or date, got {value!r}")

    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        raise ValidationError(f"Invalid date string: {value!r}")


def validate_price_row(row: Dict[str, Any]) -> None:
    """
    Validate a raw close-price row ({'date', 'close'}).

    Args:
        row: Dictionary containing price data

    Raises:
        ValidationError: If validation fails
    """
    missing = {'date', 'close'} - set(row.keys())
    if missing:
        raise ValidationError(f"Missing required keys: {missing}")

    parse_row_date(row['date'])

    close = row['close']
    if isinstance(close, bool) or not isinstance(close, (int, float)):
        raise ValidationError(f"close must be numeric, got {type(close)}")

    if not math.isfinite(close):
        raise ValidationError(f"close must be finite, got {close}")

    if close <= 0:
        raise ValidationError(f"close must be positive, got {close}")


def validate_ratio_row(row: Dict[str, Any]) -> None:
    """
    Validate a raw annual ratio row has a usable fiscal-year source.

    Args:
        row: Dictionary containing ratio data

    Raises:
        ValidationError: If neither a year field nor a report date is usable
    """
    year = row.get('calendarYear') or row.get('fiscalYear')
    if year:
        year_str = str(year).strip()
        if len(year_str) != 4 or not year_str.isdigit():
            raise ValidationError(f"Fiscal year must be 4 digits, got {year!r}")
        return

    report_date = row.get('date')
    if not isinstance(report_date, str) or len(report_date) < 4 or not report_date[:4].isdigit():
        raise ValidationError(f"Ratio row has no fiscal year or report date: {report_date!r}")
