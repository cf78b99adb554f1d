"""
Returns calculation utilities.
Pure functions for paired simple percentage returns over aligned prices.
"""

from typing import List, Sequence

from comparison.errors import DegenerateInputError
from comparison.models import AlignedPoint, ReturnPoint


def simple_return_pct(prev: float, curr: float) -> float:
    """
    Calculate a one-period simple return in percent.

    Formula: R = (P_t - P_{t-1}) / P_{t-1} * 100

    Args:
        prev: Price at t-1
        curr: Price at t

    Returns:
        Return in percent (10.0 = +10%)

    Raises:
        DegenerateInputError: If the previous price is zero
    """
    if prev == 0:
        raise DegenerateInputError("Zero previous price: return undefined")

    return (curr - prev) / prev * 100


def paired_returns(aligned: Sequence[AlignedPoint]) -> List[ReturnPoint]:
    """
    Convert aligned prices into paired daily returns.

    returns[i] covers the move from aligned[i] to aligned[i+1] and carries
    aligned[i+1].date.

    Args:
        aligned: Aligned points in ascending date order

    Returns:
        List of max(0, n-1) return points

    Raises:
        DegenerateInputError: If a zero price precedes any transition
    """
    returns = []

    for prev, curr in zip(aligned, aligned[1:]):
        try:
            return_a = simple_return_pct(prev.price_a, curr.price_a)
            return_b = simple_return_pct(prev.price_b, curr.price_b)
        except DegenerateInputError as e:
            raise DegenerateInputError(
                f"Cannot compute return ending {curr.date.isoformat()}: {e}"
            ) from e

        returns.append(ReturnPoint(
            date=curr.date,
            return_a=return_a,
            return_b=return_b
        ))

    return returns


def compound_returns(start_price: float, returns_pct: Sequence[float]) -> float:
    """
    Rebuild an ending price by compounding percent returns onto a start price.

    Args:
        start_price: First price of the series
        returns_pct: Simple returns in percent, in order

    Returns:
        Price implied after applying every return
    """
    price = start_price
    for r in returns_pct:
        price *= 1 + r / 100
    return price
