"""
Tests for core validators - pure functions for raw provider rows.
"""

import pytest
from datetime import date

from ingestion.transforms.validators import (
    ValidationError,
    parse_row_date,
    validate_price_row,
    validate_ratio_row
)


class TestParseRowDate:
    """Tests for parse_row_date function."""

    def test_iso_string(self):
        assert parse_row_date('2024-01-15') == date(2024, 1, 15)

    def test_datetime_string(self):
        assert parse_row_date('2024-01-15 00:00:00') == date(2024, 1, 15)
        assert parse_row_date('2024-01-15T16:00:00') == date(2024, 1, 15)

    def test_date_passthrough(self):
        assert parse_row_date(date(2024, 1, 15)) == date(2024, 1, 15)

    @pytest.mark.parametrize("value", [None, 20240115, '2024-1-5', '2024-13-45'])
    def test_invalid(self, value):
        with pytest.raises(ValidationError):
            parse_row_date(value)


class TestValidatePriceRow:
    """Tests for validate_price_row function."""

    def test_valid_row(self):
        validate_price_row({'date': '2024-01-15', 'close': 185.92})
        validate_price_row({'date': '2024-01-15', 'close': 186})

    def test_missing_keys(self):
        with pytest.raises(ValidationError, match="Missing required keys"):
            validate_price_row({'date': '2024-01-15'})

    @pytest.mark.parametrize("close", [None, '185.92', True])
    def test_non_numeric_close(self, close):
        with pytest.raises(ValidationError, match="must be numeric"):
            validate_price_row({'date': '2024-01-15', 'close': close})

    def test_non_finite_close(self):
        with pytest.raises(ValidationError, match="finite"):
            validate_price_row({'date': '2024-01-15', 'close': float('inf')})

    @pytest.mark.parametrize("close", [0, -1.5])
    def test_non_positive_close(self, close):
        with pytest.raises(ValidationError, match="positive"):
            validate_price_row({'date': '2024-01-15', 'close': close})


class TestValidateRatioRow:
    """Tests for validate_ratio_row function."""

    def test_calendar_year(self):
        validate_ratio_row({'calendarYear': '2023'})
        validate_ratio_row({'calendarYear': 2023})
        validate_ratio_row({'fiscalYear': '2024'})

    def test_date_fallback(self):
        validate_ratio_row({'date': '2023-09-30'})

    @pytest.mark.parametrize("year", ['23', 'FY23', '20234'])
    def test_bad_year(self, year):
        with pytest.raises(ValidationError, match="4 digits"):
            validate_ratio_row({'calendarYear': year, 'date': '2023-09-30'})

    @pytest.mark.parametrize("row", [{}, {'date': None}, {'date': 'n/a'}, {'date': '23'}])
    def test_no_year_source(self, row):
        with pytest.raises(ValidationError, match="no fiscal year"):
            validate_ratio_row(row)
