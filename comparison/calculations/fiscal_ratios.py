"""
Fiscal ratio alignment utilities.
Pure functions matching two entities' annual ratio records by fiscal year.
"""

from typing import Dict, Iterable, List, Optional

from comparison.config import RATIO_METRICS
from comparison.errors import InvalidParameterError
from comparison.models import FiscalRatioRecord, AlignedRatioPoint


def fiscal_year(record: FiscalRatioRecord) -> Optional[str]:
    """
    Derive the fiscal-year key of a ratio record.

    The reported calendar year wins when present; otherwise the first four
    characters of the report date are used.

    Args:
        record: Annual ratio record

    Returns:
        Four-character year string, or None if neither field is usable
    """
    if record.calendar_year:
        return str(record.calendar_year).strip()

    if record.date and len(record.date) >= 4:
        return record.date[:4]

    return None


def _records_by_year(records: Iterable[FiscalRatioRecord]) -> Dict[str, FiscalRatioRecord]:
    """Map fiscal year to record; later records for the same year replace earlier ones."""
    by_year = {}
    for record in records:
        year = fiscal_year(record)
        if year is None:
            continue
        by_year[year] = record
    return by_year


def align_fiscal_ratios(
    records_a: Iterable[FiscalRatioRecord],
    records_b: Iterable[FiscalRatioRecord],
    metric: str
) -> List[AlignedRatioPoint]:
    """
    Align two entities' annual ratio records on a selected metric.

    Only fiscal years reported by both entities, where the metric is
    non-null and finite on both sides, are kept.

    Args:
        records_a: Ratio records for entity A
        records_b: Ratio records for entity B
        metric: Metric identifier (e.g. 'priceToEarningsRatio')

    Returns:
        Aligned points in ascending year order; may be empty or have a
        single point

    Raises:
        InvalidParameterError: If metric is not a recognized ratio metric
    """
    if metric not in RATIO_METRICS:
        raise InvalidParameterError(
            f"Unknown ratio metric: {metric}. "
            f"Expected one of: {', '.join(RATIO_METRICS)}"
        )

    by_year_a = _records_by_year(records_a)
    by_year_b = _records_by_year(records_b)

    # Four-digit year strings sort lexicographically in numeric order
    common_years = sorted(by_year_a.keys() & by_year_b.keys())

    aligned = []
    for year in common_years:
        record_a = by_year_a[year]
        record_b = by_year_b[year]

        if not (record_a.has_finite(metric) and record_b.has_finite(metric)):
            continue

        aligned.append(AlignedRatioPoint(
            year=year,
            record_a=record_a,
            record_b=record_b,
            metric=metric
        ))

    return aligned
