"""
Tests for display formatters.
"""

import pytest

from comparison.formatters import (
    format_percentage,
    format_ratio,
    format_correlation,
    format_metric_value,
    FormatterError,
    PLACEHOLDER
)


class TestFormatPercentage:
    """Tests for format_percentage function."""

    def test_signed(self):
        assert format_percentage(4.5454) == "+4.55%"
        assert format_percentage(-5.769) == "-5.77%"
        assert format_percentage(0.0) == "+0.00%"

    def test_unsigned(self):
        assert format_percentage(12.3456, decimal_places=1, signed=False) == "12.3%"

    def test_none(self):
        assert format_percentage(None) == PLACEHOLDER

    def test_non_numeric(self):
        with pytest.raises(FormatterError, match="must be numeric"):
            format_percentage("4.5")

        with pytest.raises(FormatterError):
            format_percentage(True)


class TestFormatRatio:
    """Tests for format_ratio function."""

    def test_default_decimals(self):
        assert format_ratio(2.0) == "2.00"
        assert format_ratio(1.4889048, 4) == "1.4889"

    def test_none(self):
        assert format_ratio(None) == PLACEHOLDER


class TestFormatCorrelation:
    """Tests for format_correlation function."""

    def test_values(self):
        assert format_correlation(0.87654) == "+0.877"
        assert format_correlation(-1.0) == "-1.000"
        assert format_correlation(0.0) == "+0.000"

    def test_none(self):
        assert format_correlation(None) == PLACEHOLDER


class TestFormatMetricValue:
    """Tests for format_metric_value function."""

    def test_percent_metric(self):
        """Percent metrics are stored as decimals."""
        assert format_metric_value(0.2534, 'returnOnEquity') == "25.3%"
        assert format_metric_value(-0.05, 'netProfitMargin') == "-5.0%"

    def test_ratio_metric(self):
        assert format_metric_value(28.456, 'priceToEarningsRatio') == "28.46"

    def test_none(self):
        assert format_metric_value(None, 'priceToEarningsRatio') == PLACEHOLDER

    def test_unknown_metric(self):
        with pytest.raises(ValueError, match="Unknown ratio metric"):
            format_metric_value(1.0, 'bogus')
