"""
Guardrails for the comparison engine - coverage and sufficiency checks.
Flags data quality problems before they turn into misleading statistics.
"""

import warnings
from typing import Any, Dict, List, Sequence

from comparison.models import PricePoint, AlignedPoint


class DataQualityWarning(UserWarning):
    """Raised when data quality issues should be noted but don't block execution."""
    pass


def coverage_report(
    series_a: Sequence[PricePoint],
    series_b: Sequence[PricePoint],
    aligned: Sequence[AlignedPoint]
) -> Dict[str, Any]:
    """
    Summarize how much of each input survived date alignment.

    Args:
        series_a: Price points for symbol A
        series_b: Price points for symbol B
        aligned: Result of align_series

    Returns:
        Dictionary with per-side counts, overlap percentage and dropped dates
    """
    dates_a = {p.date for p in series_a}
    dates_b = {p.date for p in series_b}
    union = dates_a | dates_b

    only_a: List[str] = sorted(d.isoformat() for d in dates_a - dates_b)
    only_b: List[str] = sorted(d.isoformat() for d in dates_b - dates_a)

    return {
        'points_a': len(dates_a),
        'points_b': len(dates_b),
        'aligned_points': len(aligned),
        'overlap_pct': (len(aligned) / len(union) * 100) if union else 0.0,
        'dropped_a': only_a,
        'dropped_b': only_b
    }


def validate_window_for_returns(window: int, n_returns: int) -> bool:
    """
    Check whether a rolling window fits the available returns.

    Args:
        window: Rolling correlation window
        n_returns: Number of paired returns

    Returns:
        True if at least one window fits, False otherwise (with a warning)
    """
    if n_returns >= window:
        return True

    warnings.warn(
        f"Correlation window of {window} exceeds available returns ({n_returns}); "
        f"rolling correlation will be empty. Use a shorter window or a longer period.",
        DataQualityWarning
    )
    return False
