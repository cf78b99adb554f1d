"""
Comparison aggregator - composes all pair calculations into ComparisonJSON.
Each section degrades to an explicit status instead of raising.
"""

import logging
from datetime import date, datetime
from enum import Enum
from typing import Dict, Any, Optional, List, Sequence

from comparison.calculations.alignment import align_series
from comparison.calculations.returns import paired_returns
from comparison.calculations.correlation import rolling_correlation, validate_window
from comparison.calculations.regression import regression_stats, fit_line
from comparison.calculations.extrema import extrema_or_none
from comparison.calculations.fiscal_ratios import align_fiscal_ratios
from comparison.config import metric_info
from comparison.errors import ComparisonError, InsufficientDataError, DegenerateInputError
from comparison.models import PricePoint, FiscalRatioRecord

logger = logging.getLogger(__name__)

CALCULATION_VERSION = '1.0.0'


class ResultStatus(str, Enum):
    """Outcome of one comparison section."""
    OK = 'ok'
    INSUFFICIENT_DATA = 'insufficient_data'
    DEGENERATE_INPUT = 'degenerate_input'
    SKIPPED = 'skipped'
    UPSTREAM_FAILURE = 'upstream_failure'


def _status_for(error: ComparisonError) -> ResultStatus:
    if isinstance(error, DegenerateInputError):
        return ResultStatus.DEGENERATE_INPUT
    return ResultStatus.INSUFFICIENT_DATA


def _extrema_dict(series: Sequence[Any], key) -> Optional[Dict[str, int]]:
    extrema = extrema_or_none(series, key)
    return extrema.to_dict() if extrema is not None else None


def compose_comparison(
    prices_a: Sequence[PricePoint],
    prices_b: Sequence[PricePoint],
    ratios_a: Optional[Sequence[FiscalRatioRecord]],
    ratios_b: Optional[Sequence[FiscalRatioRecord]],
    *,
    symbol_a: str,
    symbol_b: str,
    window: int,
    metric: str,
    as_of: Optional[date] = None
) -> Dict[str, Any]:
    """
    Run the full pair comparison and return a JSON-ready dictionary.

    Args:
        prices_a: Price history of symbol A (any order)
        prices_b: Price history of symbol B (any order)
        ratios_a: Annual ratio records of symbol A (None to skip fiscal section)
        ratios_b: Annual ratio records of symbol B (None to skip fiscal section)
        symbol_a: Symbol A (dependent side of the regression)
        symbol_b: Symbol B (independent side of the regression)
        window: Rolling correlation window in returns
        metric: Fiscal ratio metric identifier
        as_of: Date the comparison refers to (defaults to today)

    Returns:
        Complete ComparisonJSON dictionary

    Raises:
        InvalidParameterError: If window or metric is invalid
    """
    validate_window(window)
    metric_info(metric)

    if as_of is None:
        as_of = date.today()

    aligned_section, aligned = _compose_aligned(prices_a, prices_b)
    returns_section, returns = _compose_returns(aligned, aligned_section)
    correlation_section = _compose_correlation(returns, returns_section, window, len(aligned))
    regression_section = _compose_regression(returns, returns_section)
    fiscal_section = _compose_fiscal_ratios(ratios_a, ratios_b, metric)

    for name, section in [
        ('aligned', aligned_section),
        ('returns', returns_section),
        ('rolling_correlation', correlation_section),
        ('regression', regression_section),
        ('fiscal_ratios', fiscal_section)
    ]:
        if section['status'] not in (ResultStatus.OK, ResultStatus.SKIPPED):
            logger.warning(
                f"{symbol_a}/{symbol_b} {name}: {section['status'].value} - {section['reason']}"
            )

    data_period = {
        'start_date': aligned[0].date.isoformat() if aligned else None,
        'end_date': aligned[-1].date.isoformat() if aligned else None,
        'aligned_days': len(aligned)
    }

    correlation_points = correlation_section['points']
    latest = {
        'date': aligned[-1].date.isoformat() if aligned else None,
        'price_a': aligned[-1].price_a if aligned else None,
        'price_b': aligned[-1].price_b if aligned else None,
        'ratio': aligned[-1].ratio if aligned else None,
        'correlation': correlation_points[-1]['correlation'] if correlation_points else None
    }

    return {
        'symbols': {'a': symbol_a, 'b': symbol_b},
        'as_of_date': as_of.isoformat(),
        'parameters': {'window': window, 'metric': metric},
        'data_period': data_period,
        'aligned': aligned_section,
        'returns': returns_section,
        'rolling_correlation': correlation_section,
        'regression': regression_section,
        'fiscal_ratios': fiscal_section,
        'latest': latest,
        'metadata': {
            'calculated_at': datetime.now().isoformat(),
            'calculation_version': CALCULATION_VERSION
        }
    }


def _compose_aligned(prices_a, prices_b):
    """Align prices and locate price/ratio extrema."""
    try:
        aligned = align_series(prices_a, prices_b)
    except DegenerateInputError as e:
        return {
            'status': ResultStatus.DEGENERATE_INPUT,
            'reason': str(e),
            'points': [],
            'extrema': None
        }, []

    logger.debug(
        f"Aligned {len(aligned)} dates from {len(prices_a)} and {len(prices_b)} price points"
    )

    if not aligned:
        return {
            'status': ResultStatus.INSUFFICIENT_DATA,
            'reason': 'No overlapping dates between the two price series',
            'points': [],
            'extrema': None
        }, []

    try:
        extrema = {
            'price_a': _extrema_dict(aligned, 'price_a'),
            'price_b': _extrema_dict(aligned, 'price_b'),
            'ratio': _extrema_dict(aligned, 'ratio')
        }
    except DegenerateInputError as e:
        return {
            'status': ResultStatus.DEGENERATE_INPUT,
            'reason': str(e),
            'points': [],
            'extrema': None
        }, []

    return {
        'status': ResultStatus.OK,
        'reason': None,
        'points': [p.to_dict() for p in aligned],
        'extrema': extrema
    }, aligned


def _compose_returns(aligned, aligned_section):
    """Paired daily returns from aligned prices."""
    if aligned_section['status'] != ResultStatus.OK:
        return {
            'status': aligned_section['status'],
            'reason': f"Aligned prices unavailable: {aligned_section['reason']}",
            'points': []
        }, []

    if len(aligned) < 2:
        return {
            'status': ResultStatus.INSUFFICIENT_DATA,
            'reason': f'Need at least 2 aligned dates for returns, have {len(aligned)}',
            'points': []
        }, []

    try:
        returns = paired_returns(aligned)
    except DegenerateInputError as e:
        return {
            'status': ResultStatus.DEGENERATE_INPUT,
            'reason': str(e),
            'points': []
        }, []

    return {
        'status': ResultStatus.OK,
        'reason': None,
        'points': [r.to_dict() for r in returns]
    }, returns


def _compose_correlation(returns, returns_section, window, aligned_count):
    """Rolling correlation with extrema and chart index offset."""
    if returns_section['status'] != ResultStatus.OK:
        return {
            'status': returns_section['status'],
            'reason': f"Returns unavailable: {returns_section['reason']}",
            'window': window,
            'points': [],
            'extrema': None,
            'index_offset': None
        }

    points = rolling_correlation(returns, window)

    if not points:
        return {
            'status': ResultStatus.INSUFFICIENT_DATA,
            'reason': f'Need {window} returns for a correlation window, have {len(returns)}',
            'window': window,
            'points': [],
            'extrema': None,
            'index_offset': None
        }

    return {
        'status': ResultStatus.OK,
        'reason': None,
        'window': window,
        'points': [p.to_dict() for p in points],
        'extrema': _extrema_dict(points, 'correlation'),
        # Maps an index in the aligned series onto this series
        'index_offset': aligned_count - len(points)
    }


def _compose_regression(returns, returns_section):
    """Full-sample regression statistics and fitted line."""
    if returns_section['status'] != ResultStatus.OK:
        return {
            'status': returns_section['status'],
            'reason': f"Returns unavailable: {returns_section['reason']}",
            'stats': None,
            'standard_errors_available': False,
            'fit_line': None
        }

    try:
        stats = regression_stats(returns)
    except (InsufficientDataError, DegenerateInputError) as e:
        return {
            'status': _status_for(e),
            'reason': str(e),
            'stats': None,
            'standard_errors_available': False,
            'fit_line': None
        }

    return {
        'status': ResultStatus.OK,
        'reason': None if stats.has_standard_errors else 'Standard errors need at least 3 return pairs',
        'stats': stats.to_dict(),
        'standard_errors_available': stats.has_standard_errors,
        'fit_line': fit_line(returns, stats)
    }


def _compose_fiscal_ratios(ratios_a, ratios_b, metric):
    """Fiscal-year aligned values of the selected ratio metric."""
    info = metric_info(metric)
    base = {'metric': metric, 'label': info['label'], 'format': info['format']}

    if ratios_a is None or ratios_b is None:
        return {
            **base,
            'status': ResultStatus.SKIPPED,
            'reason': 'Ratio records not requested',
            'points': [],
            'extrema': None,
            'latest': None
        }

    points = align_fiscal_ratios(ratios_a, ratios_b, metric)
    logger.debug(f"Aligned {len(points)} fiscal years for {metric}")

    point_dicts: List[Dict[str, Any]] = [p.to_dict() for p in points]

    if len(points) < 2:
        status = ResultStatus.INSUFFICIENT_DATA
        reason = f"Need at least 2 fiscal years with {info['label']} on both sides, have {len(points)}"
    else:
        status = ResultStatus.OK
        reason = None

    return {
        **base,
        'status': status,
        'reason': reason,
        'points': point_dicts,
        'extrema': {
            'a': _extrema_dict(points, 'value_a'),
            'b': _extrema_dict(points, 'value_b')
        } if points else None,
        'latest': point_dicts[-1] if point_dicts else None
    }
