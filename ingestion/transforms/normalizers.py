"""
Normalizers for transforming provider data to engine inputs.
Pure functions apart from logging - no network or storage.
Minimal normalization - only when necessary.
"""

import logging
import math
from typing import Dict, Any, List, Optional

from comparison.models import PricePoint, FiscalRatioRecord
from ingestion.transforms.validators import (
    ValidationError,
    parse_row_date,
    validate_price_row,
    validate_ratio_row
)

logger = logging.getLogger(__name__)

# Identity fields of a ratio row; everything else numeric is a metric
RATIO_ID_FIELDS = {'symbol', 'date', 'calendarYear', 'fiscalYear', 'period', 'reportedCurrency'}


def normalize_price_history(
    raw_rows: List[Dict[str, Any]],
    *,
    ticker: str = ''
) -> List[PricePoint]:
    """
    Transform provider-native close rows to price points.

    Minimal normalization:
    - Field name mapping ('close', 'Close' or 'price')
    - Date strings to date objects
    - Invalid rows dropped (missing, non-finite or non-positive close)
    - Deduplication by date (keep last to handle corrections)

    Args:
        raw_rows: Provider rows
        ticker: Symbol for log context

    Returns:
        Price points in ascending date order
    """
    if not raw_rows:
        return []

    seen_dates = {}
    rejected = 0

    for raw in raw_rows:
        row = {
            'date': raw.get('date', raw.get('Date')),
            'close': _first_present(raw, ('close', 'Close', 'price'))
        }

        try:
            validate_price_row(row)
        except ValidationError as e:
            rejected += 1
            logger.debug(f"Dropping price row for {ticker}: {e}")
            continue

        row_date = parse_row_date(row['date'])
        seen_dates[row_date] = PricePoint(date=row_date, price=float(row['close']))

    if rejected:
        logger.warning(f"Dropped {rejected} invalid price rows for {ticker}")

    return [seen_dates[d] for d in sorted(seen_dates)]


def normalize_ratio_records(
    raw_rows: List[Dict[str, Any]],
    *,
    ticker: str = ''
) -> List[FiscalRatioRecord]:
    """
    Transform provider-native annual ratio rows to fiscal ratio records.

    Minimal normalization:
    - calendarYear (or fiscalYear in newer responses) to string
    - Numeric metric fields kept, non-numeric and non-finite values become None
    - Rows without any fiscal-year source dropped

    Args:
        raw_rows: Provider rows
        ticker: Symbol for log context

    Returns:
        Records sorted by report date ascending
    """
    if not raw_rows:
        return []

    records = []

    for raw in raw_rows:
        try:
            validate_ratio_row(raw)
        except ValidationError as e:
            logger.debug(f"Dropping ratio row for {ticker}: {e}")
            continue

        year = raw.get('calendarYear') or raw.get('fiscalYear')
        calendar_year = str(year).strip() if year else None
        report_date = raw.get('date')

        # calendarYear wins without cross-validation; note disagreements
        if calendar_year and isinstance(report_date, str) and report_date[:4] != calendar_year:
            logger.debug(
                f"{ticker} ratio row year {calendar_year} differs from report date {report_date}"
            )

        metrics = {
            name: _to_metric(value)
            for name, value in raw.items()
            if name not in RATIO_ID_FIELDS
        }

        records.append(FiscalRatioRecord(
            metrics=metrics,
            calendar_year=calendar_year,
            date=report_date,
            symbol=raw.get('symbol', ticker or None),
            period=raw.get('period')
        ))

    return sorted(records, key=lambda r: r.date or '')


def _first_present(raw: Dict[str, Any], keys) -> Optional[Any]:
    """Value of the first key present with a non-None value."""
    for key in keys:
        if raw.get(key) is not None:
            return raw[key]
    return None


def _to_metric(value: Any) -> Optional[float]:
    """Numeric metric value or None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)
