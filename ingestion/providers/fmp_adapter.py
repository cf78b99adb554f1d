"""
Financial Modeling Prep adapter - fetch daily closes and annual ratios.
Network IO allowed here, but minimal business logic.
"""

import os
import logging
import requests
from datetime import date
from typing import Dict, Any, List, Optional
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Set up logger
logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = 'https://financialmodelingprep.com/stable'


class FMPError(Exception):
    """Raised when FMP operations fail."""
    pass


def fetch_historical_prices(
    ticker: str,
    start: date,
    end: date,
    session: Optional[requests.Session] = None
) -> List[Dict[str, Any]]:
    """
    Fetch end-of-day prices for a ticker within a date window.
    Returns raw rows in provider format - no normalization.

    Args:
        ticker: Stock ticker symbol (e.g., 'AAPL')
        start: Start date (inclusive)
        end: End date (inclusive)
        session: Optional requests session

    Returns:
        List of raw price dictionaries ({'date', 'close', ...})

    Raises:
        FMPError: If the request fails or the response is malformed
    """
    if start > end:
        raise FMPError(f"start date ({start}) must be <= end date ({end})")

    data = _get(
        '/historical-price-eod/full',
        {'symbol': ticker.upper(), 'from': start.isoformat(), 'to': end.isoformat()},
        ticker,
        session
    )

    # Older responses wrap rows as {'symbol': ..., 'historical': [...]}
    if isinstance(data, dict):
        data = data.get('historical', [])

    if not isinstance(data, list):
        raise FMPError(f"Unexpected price response for {ticker}: {type(data).__name__}")

    return data


def fetch_annual_ratios(
    ticker: str,
    limit: int = 10,
    session: Optional[requests.Session] = None
) -> List[Dict[str, Any]]:
    """
    Fetch annual financial ratio records for a ticker.

    Args:
        ticker: Stock ticker symbol
        limit: Number of fiscal years to look back
        session: Optional requests session

    Returns:
        List of raw ratio dictionaries (one per fiscal year)

    Raises:
        FMPError: If the request fails or the response is malformed
    """
    if limit <= 0:
        raise FMPError(f"limit must be positive, got {limit}")

    data = _get('/ratios', {'symbol': ticker.upper(), 'limit': limit}, ticker, session)

    if data is None:
        return []

    if not isinstance(data, list):
        raise FMPError(f"Unexpected ratios response for {ticker}: {type(data).__name__}")

    return data


def _get(
    endpoint: str,
    params: Dict[str, Any],
    ticker: str,
    session: Optional[requests.Session] = None
) -> Any:
    """
    Perform an authenticated GET against the FMP API.

    Args:
        endpoint: Path below the base URL
        params: Query parameters (API key is added here)
        ticker: Ticker for log context
        session: Optional requests session

    Returns:
        Decoded JSON body

    Raises:
        FMPError: If the API key is missing or the request fails
    """
    api_key = os.getenv('FMP_API_KEY')
    if not api_key:
        raise FMPError("FMP_API_KEY environment variable required")

    base_url = os.getenv('FMP_BASE_URL', DEFAULT_BASE_URL).rstrip('/')
    timeout = int(os.getenv('REQUESTS_TIMEOUT_S', '30'))

    http = session or requests
    url = f"{base_url}{endpoint}"

    logger.debug(f"Fetching {endpoint} for {ticker}")

    try:
        response = http.get(url, params={**params, 'apikey': api_key}, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except requests.RequestException as e:
        logger.error(f"FMP request {endpoint} failed for {ticker}: {e}")
        raise FMPError(f"Failed to fetch {endpoint} for {ticker}: {e}") from e
    except ValueError as e:
        raise FMPError(f"Invalid JSON from {endpoint} for {ticker}: {e}") from e

    count = len(data) if isinstance(data, list) else 1
    logger.info(f"Fetched {endpoint} for {ticker} ({count} records)")

    return data
