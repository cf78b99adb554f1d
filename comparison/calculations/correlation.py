"""
Correlation calculation utilities.
Pure functions for Pearson correlation over paired returns, full-sample and rolling.
"""

import numpy as np
from typing import List, NamedTuple, Sequence

from comparison.errors import InvalidParameterError
from comparison.models import ReturnPoint, CorrelationPoint


class SumsOfSquares(NamedTuple):
    """Centered moments shared by correlation and regression."""
    n: int
    mean_x: float
    mean_y: float
    ss_xx: float
    ss_yy: float
    ss_xy: float


def sums_of_squares(x: Sequence[float], y: Sequence[float]) -> SumsOfSquares:
    """
    Calculate means and centered sums of squares for paired samples.

    Args:
        x: Independent sample
        y: Dependent sample (same length as x)

    Returns:
        SumsOfSquares with n, means, ssXX, ssYY, ssXY

    Raises:
        InvalidParameterError: If the samples differ in length
    """
    if len(x) != len(y):
        raise InvalidParameterError(
            f"Paired samples must have same length: {len(x)} vs {len(y)}"
        )

    x_arr = np.asarray(x, dtype=float)
    y_arr = np.asarray(y, dtype=float)
    n = len(x_arr)

    if n == 0:
        return SumsOfSquares(0, 0.0, 0.0, 0.0, 0.0, 0.0)

    mean_x = float(x_arr.mean())
    mean_y = float(y_arr.mean())
    dx = x_arr - mean_x
    dy = y_arr - mean_y

    return SumsOfSquares(
        n=n,
        mean_x=mean_x,
        mean_y=mean_y,
        ss_xx=float(np.sum(dx * dx)),
        ss_yy=float(np.sum(dy * dy)),
        ss_xy=float(np.sum(dx * dy))
    )


def is_constant(values: Sequence[float]) -> bool:
    """True when every value is identical (no variance at all)."""
    if len(values) == 0:
        return True
    return float(np.ptp(np.asarray(values, dtype=float))) == 0.0


def pearson_r(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Calculate the Pearson product-moment correlation of two samples.

    Formula: r = ssXY / sqrt(ssXX * ssYY)

    Zero variance on either side leaves r undefined; it is clamped to 0.0.
    Fewer than two pairs also give 0.0.

    Args:
        x: Independent sample
        y: Dependent sample

    Returns:
        Correlation in [-1, 1]
    """
    ss = sums_of_squares(x, y)

    if ss.n < 2 or is_constant(x) or is_constant(y):
        return 0.0

    denominator = ss.ss_xx * ss.ss_yy
    if denominator <= 0:
        return 0.0

    r = ss.ss_xy / np.sqrt(denominator)
    return float(np.clip(r, -1.0, 1.0))


def validate_window(window: int) -> None:
    """
    Check a rolling correlation window.

    Raises:
        InvalidParameterError: If window is not an integer > 1
    """
    if isinstance(window, bool) or not isinstance(window, (int, np.integer)):
        raise InvalidParameterError(f"Window must be an integer, got {type(window).__name__}")

    if window <= 1:
        raise InvalidParameterError(f"Window must be > 1 for correlation, got {window}")


def rolling_correlation(
    returns: Sequence[ReturnPoint],
    window: int
) -> List[CorrelationPoint]:
    """
    Calculate Pearson correlation over every window of paired returns.

    X is return_b, Y is return_a. One point is emitted per window, dated at
    the window's last return.

    Args:
        returns: Paired returns in ascending date order
        window: Number of returns per window (must be > 1)

    Returns:
        List of max(0, n - window + 1) correlation points; empty when fewer
        returns than the window are available

    Raises:
        InvalidParameterError: If window is not an integer > 1
    """
    validate_window(window)

    if len(returns) < window:
        return []

    returns_b = np.array([r.return_b for r in returns], dtype=float)
    returns_a = np.array([r.return_a for r in returns], dtype=float)

    points = []
    for i in range(window - 1, len(returns)):
        x = returns_b[i - window + 1:i + 1]
        y = returns_a[i - window + 1:i + 1]
        points.append(CorrelationPoint(
            date=returns[i].date,
            correlation=pearson_r(x, y)
        ))

    return points
