"""
Series alignment utilities.
Pure function intersecting two daily price series on their common dates.
"""

import math
from typing import Dict, Iterable, List
from datetime import date

from comparison.errors import DegenerateInputError
from comparison.models import PricePoint, AlignedPoint


def align_series(
    series_a: Iterable[PricePoint],
    series_b: Iterable[PricePoint]
) -> List[AlignedPoint]:
    """
    Align two price series on the dates they share.

    Inputs may be in any order and cover different dates. Only dates present
    in both series are kept, sorted by calendar date.

    Args:
        series_a: Price points for symbol A
        series_b: Price points for symbol B

    Returns:
        Aligned points in ascending date order (empty if no overlap)

    Raises:
        DegenerateInputError: If a price on a common date is NaN or infinite,
            or symbol B has a zero price

    Example:
        A = [(d1, 100), (d2, 110)], B = [(d2, 55), (d3, 60)]
        -> [AlignedPoint(d2, 110, 55, 2.0)]
    """
    # Duplicate dates are caller error; last occurrence wins
    prices_a: Dict[date, float] = {p.date: p.price for p in series_a}
    prices_b: Dict[date, float] = {p.date: p.price for p in series_b}

    if not prices_a or not prices_b:
        return []

    common_dates = sorted(prices_a.keys() & prices_b.keys())

    aligned = []
    for day in common_dates:
        price_a = prices_a[day]
        price_b = prices_b[day]

        for symbol, price in (('A', price_a), ('B', price_b)):
            if price is None or not math.isfinite(price):
                raise DegenerateInputError(
                    f"Non-finite price for symbol {symbol} on {day.isoformat()}: {price}"
                )

        if price_b == 0:
            raise DegenerateInputError(
                f"Zero price for symbol B on {day.isoformat()}: ratio undefined"
            )

        aligned.append(AlignedPoint(
            date=day,
            price_a=price_a,
            price_b=price_b,
            ratio=price_a / price_b
        ))

    return aligned
