"""
Tests for Financial Modeling Prep adapter - mocked HTTP, no live API hits in CI.
"""

import os
import pytest
import requests
from datetime import date
from unittest.mock import Mock, patch

from ingestion.providers.fmp_adapter import (
    fetch_historical_prices,
    fetch_annual_ratios,
    FMPError,
    DEFAULT_BASE_URL
)


def _response(payload, status_code=200):
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Client Error")
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def api_env():
    with patch.dict(os.environ, {'FMP_API_KEY': 'test-key', 'REQUESTS_TIMEOUT_S': '5'}):
        os.environ.pop('FMP_BASE_URL', None)
        yield


class TestFetchHistoricalPrices:
    """Tests for fetch_historical_prices function."""

    @patch('ingestion.providers.fmp_adapter.requests.get')
    def test_success(self, mock_get, api_env):
        rows = [
            {'symbol': 'AAPL', 'date': '2024-01-16', 'close': 183.63, 'volume': 65603000},
            {'symbol': 'AAPL', 'date': '2024-01-12', 'close': 185.92, 'volume': 40444700},
        ]
        mock_get.return_value = _response(rows)

        result = fetch_historical_prices('aapl', date(2024, 1, 12), date(2024, 1, 16))

        assert result == rows
        mock_get.assert_called_once_with(
            f"{DEFAULT_BASE_URL}/historical-price-eod/full",
            params={'symbol': 'AAPL', 'from': '2024-01-12', 'to': '2024-01-16', 'apikey': 'test-key'},
            timeout=5
        )

    @patch('ingestion.providers.fmp_adapter.requests.get')
    def test_wrapped_historical_payload(self, mock_get, api_env):
        """Older {'symbol', 'historical': [...]} payloads are unwrapped."""
        mock_get.return_value = _response({
            'symbol': 'AAPL',
            'historical': [{'date': '2024-01-16', 'close': 183.63}]
        })

        result = fetch_historical_prices('AAPL', date(2024, 1, 12), date(2024, 1, 16))

        assert result == [{'date': '2024-01-16', 'close': 183.63}]

    def test_start_after_end(self, api_env):
        with pytest.raises(FMPError, match="must be <= end date"):
            fetch_historical_prices('AAPL', date(2024, 1, 16), date(2024, 1, 12))

    @patch('ingestion.providers.fmp_adapter.requests.get')
    def test_http_error(self, mock_get, api_env):
        mock_get.return_value = _response({'Error Message': 'Invalid API KEY'}, status_code=401)

        with pytest.raises(FMPError, match="Failed to fetch"):
            fetch_historical_prices('AAPL', date(2024, 1, 12), date(2024, 1, 16))

    @patch('ingestion.providers.fmp_adapter.requests.get')
    def test_network_error(self, mock_get, api_env):
        mock_get.side_effect = requests.ConnectionError("Connection refused")

        with pytest.raises(FMPError, match="Connection refused"):
            fetch_historical_prices('AAPL', date(2024, 1, 12), date(2024, 1, 16))

    @patch('ingestion.providers.fmp_adapter.requests.get')
    def test_invalid_json(self, mock_get, api_env):
        response = _response(None)
        response.json.side_effect = ValueError("Expecting value")
        mock_get.return_value = response

        with pytest.raises(FMPError, match="Invalid JSON"):
            fetch_historical_prices('AAPL', date(2024, 1, 12), date(2024, 1, 16))

    def test_missing_api_key(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(FMPError, match="FMP_API_KEY"):
                fetch_historical_prices('AAPL', date(2024, 1, 12), date(2024, 1, 16))

    def test_session_used_when_given(self, api_env):
        session = Mock()
        session.get.return_value = _response([])

        with patch.dict(os.environ, {'FMP_BASE_URL': 'http://localhost:9000/stable/'}):
            fetch_historical_prices('AAPL', date(2024, 1, 12), date(2024, 1, 16), session=session)

        assert session.get.call_args.args[0] == 'http://localhost:9000/stable/historical-price-eod/full'


class TestFetchAnnualRatios:
    """Tests for fetch_annual_ratios function."""

    @patch('ingestion.providers.fmp_adapter.requests.get')
    def test_success(self, mock_get, api_env):
        rows = [
            {'symbol': 'AAPL', 'date': '2023-09-30', 'fiscalYear': '2023', 'priceToEarningsRatio': 29.8},
            {'symbol': 'AAPL', 'date': '2022-09-24', 'fiscalYear': '2022', 'priceToEarningsRatio': 24.4},
        ]
        mock_get.return_value = _response(rows)

        result = fetch_annual_ratios('AAPL', limit=2)

        assert result == rows
        assert mock_get.call_args.kwargs['params'] == {'symbol': 'AAPL', 'limit': 2, 'apikey': 'test-key'}
        assert mock_get.call_args.args[0].endswith('/ratios')

    @patch('ingestion.providers.fmp_adapter.requests.get')
    def test_null_body(self, mock_get, api_env):
        mock_get.return_value = _response(None)

        assert fetch_annual_ratios('AAPL') == []

    @patch('ingestion.providers.fmp_adapter.requests.get')
    def test_unexpected_shape(self, mock_get, api_env):
        mock_get.return_value = _response({'Error Message': 'Limit Reach'})

        with pytest.raises(FMPError, match="Unexpected ratios response"):
            fetch_annual_ratios('AAPL')

    def test_invalid_limit(self, api_env):
        with pytest.raises(FMPError, match="limit must be positive"):
            fetch_annual_ratios('AAPL', limit=0)
