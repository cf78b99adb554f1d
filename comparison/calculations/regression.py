"""
Regression calculation utilities.
Pure functions for a single-predictor OLS fit of symbol A returns on symbol B returns.
"""

import math
from typing import Dict, Sequence

from comparison.calculations.correlation import sums_of_squares, is_constant, pearson_r
from comparison.errors import InsufficientDataError, DegenerateInputError
from comparison.models import ReturnPoint, RegressionStats


def regression_stats(returns: Sequence[ReturnPoint]) -> RegressionStats:
    """
    Fit y = alpha + beta * x over the full return sample.

    X is return_b (independent), Y is return_a (dependent).

    Formulas:
        beta = ssXY / ssXX
        alpha = meanY - beta * meanX
        r = ssXY / sqrt(ssXX * ssYY), r^2
        s = sqrt(ssResidual / (n - 2))
        SE(beta) = s / sqrt(ssXX)
        SE(alpha) = s * sqrt(1/n + meanX^2 / ssXX)

    Args:
        returns: Paired returns

    Returns:
        RegressionStats; standard errors are None when n == 2

    Raises:
        InsufficientDataError: If fewer than 2 return pairs
        DegenerateInputError: If return_b has no variance (beta undefined)
    """
    n = len(returns)
    if n < 2:
        raise InsufficientDataError(
            f"Insufficient data: need at least 2 return pairs, have {n}"
        )

    x = [r.return_b for r in returns]
    y = [r.return_a for r in returns]

    ss = sums_of_squares(x, y)

    if is_constant(x) or ss.ss_xx <= 0:
        raise DegenerateInputError(
            "No variance in symbol B returns: beta undefined"
        )

    beta = ss.ss_xy / ss.ss_xx
    alpha = ss.mean_y - beta * ss.mean_x

    # Same zero-variance clamp as the rolling correlation
    r = pearson_r(x, y)
    r_squared = r ** 2

    if n == 2:
        return RegressionStats(
            n=n,
            beta=beta,
            alpha=alpha,
            pearson_r=r,
            r_squared=r_squared
        )

    ss_residual = sum(
        (yi - (alpha + beta * xi)) ** 2 for xi, yi in zip(x, y)
    )
    std_dev_error = math.sqrt(ss_residual / (n - 2))
    std_error_beta = std_dev_error / math.sqrt(ss.ss_xx)
    std_error_alpha = std_dev_error * math.sqrt(1 / n + (ss.mean_x ** 2) / ss.ss_xx)

    return RegressionStats(
        n=n,
        beta=beta,
        alpha=alpha,
        pearson_r=r,
        r_squared=r_squared,
        std_dev_error=std_dev_error,
        std_error_alpha=std_error_alpha,
        std_error_beta=std_error_beta
    )


def fit_line(
    returns: Sequence[ReturnPoint],
    stats: RegressionStats
) -> Dict[str, Dict[str, float]]:
    """
    Endpoints of the fitted line across the observed X range, plus the mean point.

    Args:
        returns: Paired returns the stats were fitted on
        stats: Result of regression_stats

    Returns:
        Dictionary with 'start', 'end' and 'mean' points ({'x', 'y'})

    Raises:
        InsufficientDataError: If returns is empty
    """
    if not returns:
        raise InsufficientDataError("Insufficient data: no returns to draw a fit line")

    x = [r.return_b for r in returns]
    y = [r.return_a for r in returns]

    min_x = min(x)
    max_x = max(x)

    return {
        'start': {'x': min_x, 'y': stats.alpha + stats.beta * min_x},
        'end': {'x': max_x, 'y': stats.alpha + stats.beta * max_x},
        'mean': {'x': sum(x) / len(x), 'y': sum(y) / len(y)}
    }
