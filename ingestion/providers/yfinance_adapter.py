"""
yfinance adapter - fetch daily closes from Yahoo Finance.
Network IO allowed here, but minimal business logic.
"""

import logging
import yfinance as yf
import pandas as pd
from datetime import date, timedelta
from typing import Dict, Any, List

logger = logging.getLogger(__name__)

# Longest comparison period is 5Y; leave room for leap days
MAX_RANGE_DAYS = 365 * 5 + 7


class YFinanceError(Exception):
    """Raised when yfinance operations fail."""
    pass


def fetch_price_history(ticker: str, start: date, end: date) -> List[Dict[str, Any]]:
    """
    Fetch daily closes for a ticker within date window.
    Returns rows shaped like {'date': 'YYYY-MM-DD', 'close': float}.

    Args:
        ticker: Stock ticker symbol (e.g., 'AAPL')
        start: Start date (inclusive)
        end: End date (inclusive)

    Returns:
        List of raw close-price dictionaries

    Raises:
        YFinanceError: If fetch fails or validation fails
    """
    _validate_date_range(start, end)
    _validate_ticker(ticker)

    try:
        # yfinance uses exclusive end dates, so add 1 day
        yf_end = end + timedelta(days=1)

        data = yf.download(
            ticker,
            start=start.isoformat(),
            end=yf_end.isoformat(),
            progress=False,
            auto_adjust=False
        )
    except Exception as e:
        raise YFinanceError(f"Failed to fetch prices for {ticker}: {str(e)}") from e

    if data is None or len(data) == 0:
        logger.warning(f"No price data returned for {ticker} ({start} to {end})")
        return []

    # Single-ticker downloads may still come back with (field, ticker) columns
    if isinstance(data.columns, pd.MultiIndex):
        data.columns = data.columns.get_level_values(0)

    if 'Close' not in data.columns:
        raise YFinanceError(f"No Close column in yfinance response for {ticker}")

    rows = []
    for date_idx, close in data['Close'].items():
        if pd.isna(close):
            continue
        rows.append({
            'date': date_idx.strftime('%Y-%m-%d'),
            'close': float(close)
        })

    logger.info(f"Fetched {len(rows)} closes for {ticker} from yfinance")
    return rows


def _validate_date_range(start: date, end: date) -> None:
    """
    Validate date range parameters.

    Raises:
        YFinanceError: If validation fails
    """
    if start > end:
        raise YFinanceError(f"start date ({start}) must be <= end date ({end})")

    # Don't allow future dates
    today = date.today()
    if start > today or end > today:
        raise YFinanceError("Future dates not allowed for historical data")

    if (end - start).days > MAX_RANGE_DAYS:
        raise YFinanceError(f"Date range too long (max {MAX_RANGE_DAYS} days)")


def _validate_ticker(ticker: str) -> None:
    """
    Basic ticker validation.

    Raises:
        YFinanceError: If ticker is invalid
    """
    if not ticker or not isinstance(ticker, str):
        raise YFinanceError("Ticker must be non-empty string")

    if len(ticker) > 10:
        raise YFinanceError("Ticker too long (max 10 characters)")

    # Allow alphanumeric plus common ticker chars
    allowed_chars = set('ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789.-^=')
    if not set(ticker.upper()).issubset(allowed_chars):
        raise YFinanceError(f"Ticker contains invalid characters: {ticker}")
