"""
Extrema location utilities.
One generic min/max finder used for every derived series (prices, ratio,
correlation, fiscal metrics).
"""

import math
import numpy as np
from typing import Any, Callable, Optional, Sequence, Union

from comparison.errors import InsufficientDataError, DegenerateInputError
from comparison.models import Extrema


KeySpec = Union[None, str, Callable[[Any], float]]


def _make_accessor(key: KeySpec) -> Callable[[Any], float]:
    """Build a value accessor from a callable, a field/dict-key name, or None."""
    if key is None:
        return lambda item: item

    if callable(key):
        return key

    def accessor(item: Any) -> float:
        if isinstance(item, dict):
            return item[key]
        return getattr(item, key)

    return accessor


def find_extrema(series: Sequence[Any], key: KeySpec = None) -> Extrema:
    """
    Find the index of the minimum and maximum value in a series.

    Ties resolve to the first occurrence.

    Args:
        series: Non-empty sequence of numbers or records
        key: Accessor for the compared value; a callable, an attribute or
            dict-key name, or None to compare items directly

    Returns:
        Extrema with min_index and max_index

    Raises:
        InsufficientDataError: If series is empty
        DegenerateInputError: If an extracted value is None, non-numeric, NaN
            or infinite

    Example:
        find_extrema([5, 1, 9, 1, 9]) -> Extrema(min_index=1, max_index=2)
        find_extrema(aligned, key='ratio')
    """
    if len(series) == 0:
        raise InsufficientDataError("Insufficient data: cannot locate extrema of empty series")

    accessor = _make_accessor(key)

    values = []
    for i, item in enumerate(series):
        value = accessor(item)
        if isinstance(value, bool) or not isinstance(value, (int, float, np.number)):
            raise DegenerateInputError(f"Non-numeric value at index {i}: {value!r}")
        if not math.isfinite(value):
            raise DegenerateInputError(f"Non-finite value at index {i}: {value}")
        values.append(value)

    # np.argmin / np.argmax return the first occurrence on ties
    values_array = np.asarray(values, dtype=float)

    return Extrema(
        min_index=int(np.argmin(values_array)),
        max_index=int(np.argmax(values_array))
    )


def extrema_or_none(series: Sequence[Any], key: KeySpec = None) -> Optional[Extrema]:
    """find_extrema that returns None for empty series instead of raising."""
    if len(series) == 0:
        return None
    return find_extrema(series, key)
