"""
Display formatters for comparison summaries.
Deterministic string formatting for returns, ratios, correlations and fiscal metrics.
"""

from typing import Optional

from comparison.config import metric_info


PLACEHOLDER = "–"


class FormatterError(Exception):
    """Raised when formatter input validation fails."""
    pass


def _check_numeric(value, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FormatterError(f"{name} must be numeric, got {type(value)}")


def format_percentage(value: Optional[float], decimal_places: int = 2, signed: bool = True) -> str:
    """
    Format a value that is already in percent (4.5 = 4.5%).

    Args:
        value: Percent value
        decimal_places: Number of decimal places (default: 2)
        signed: Prefix positive values with '+'

    Returns:
        Formatted string (e.g., "+4.55%")
    """
    if value is None:
        return PLACEHOLDER

    _check_numeric(value, "Percentage value")

    if signed:
        return f"{value:+.{decimal_places}f}%"
    return f"{value:.{decimal_places}f}%"


def format_ratio(value: Optional[float], decimal_places: int = 2) -> str:
    """Format a plain ratio (e.g., price ratio, beta) with fixed decimals."""
    if value is None:
        return PLACEHOLDER

    _check_numeric(value, "Ratio value")

    return f"{value:.{decimal_places}f}"


def format_correlation(value: Optional[float]) -> str:
    """Format a correlation coefficient with three decimals and explicit sign."""
    if value is None:
        return PLACEHOLDER

    _check_numeric(value, "Correlation value")

    return f"{value:+.3f}"


def format_metric_value(value: Optional[float], metric: str) -> str:
    """
    Format a fiscal ratio value following the metric's display format.

    'percent' metrics are stored as decimals (0.25 = 25.0%);
    'ratio' metrics print with two decimals.

    Args:
        value: Raw metric value
        metric: Metric identifier from the ratio registry

    Returns:
        Formatted string
    """
    if value is None:
        return PLACEHOLDER

    _check_numeric(value, "Metric value")

    if metric_info(metric)['format'] == 'percent':
        return f"{value * 100:.1f}%"
    return f"{value:.2f}"
