"""
Value types for the comparison engine.
All records are frozen dataclasses built once per comparison request.
"""

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Any, Mapping, Optional


@dataclass(frozen=True)
class PricePoint:
    """One daily close for one symbol."""
    date: date
    price: float

    def to_dict(self) -> Dict[str, Any]:
        return {'date': self.date.isoformat(), 'price': self.price}


@dataclass(frozen=True)
class AlignedPoint:
    """Prices of both symbols on a date present in both series."""
    date: date
    price_a: float
    price_b: float
    ratio: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'date': self.date.isoformat(),
            'price_a': self.price_a,
            'price_b': self.price_b,
            'ratio': self.ratio
        }


@dataclass(frozen=True)
class ReturnPoint:
    """Paired simple returns (in percent) for the transition ending on `date`."""
    date: date
    return_a: float
    return_b: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'date': self.date.isoformat(),
            'return_a': self.return_a,
            'return_b': self.return_b
        }


@dataclass(frozen=True)
class CorrelationPoint:
    """Pearson correlation of the window ending on `date`."""
    date: date
    correlation: float

    def to_dict(self) -> Dict[str, Any]:
        return {'date': self.date.isoformat(), 'correlation': self.correlation}


@dataclass(frozen=True)
class RegressionStats:
    """
    OLS fit of return_a (Y) on return_b (X) over the full sample.

    Standard errors are None when the sample has only two points
    (no residual degrees of freedom).
    """
    n: int
    beta: float
    alpha: float
    pearson_r: float
    r_squared: float
    std_dev_error: Optional[float] = None
    std_error_alpha: Optional[float] = None
    std_error_beta: Optional[float] = None

    @property
    def has_standard_errors(self) -> bool:
        return self.std_dev_error is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'n': self.n,
            'beta': self.beta,
            'alpha': self.alpha,
            'pearson_r': self.pearson_r,
            'r_squared': self.r_squared,
            'std_dev_error': self.std_dev_error,
            'std_error_alpha': self.std_error_alpha,
            'std_error_beta': self.std_error_beta
        }


@dataclass(frozen=True)
class Extrema:
    """Positions of the minimum and maximum value in a series."""
    min_index: int
    max_index: int

    def to_dict(self) -> Dict[str, int]:
        return {'min_index': self.min_index, 'max_index': self.max_index}


@dataclass(frozen=True)
class FiscalRatioRecord:
    """
    Annual fundamental ratios reported by one entity.

    Args:
        metrics: Metric name to value (None when not reported)
        calendar_year: Fiscal year as reported by the provider
        date: Report date string (YYYY-MM-DD)
        symbol: Reporting symbol
        period: Reporting period label (e.g. 'FY')
    """
    metrics: Mapping[str, Optional[float]] = field(default_factory=dict)
    calendar_year: Optional[str] = None
    date: Optional[str] = None
    symbol: Optional[str] = None
    period: Optional[str] = None

    def value(self, metric: str) -> Optional[float]:
        """Return the metric value, or None if missing or not numeric."""
        raw = self.metrics.get(metric)
        if raw is None or isinstance(raw, bool):
            return None
        try:
            return float(raw)
        except (TypeError, ValueError):
            return None

    def has_finite(self, metric: str) -> bool:
        value = self.value(metric)
        return value is not None and math.isfinite(value)


@dataclass(frozen=True)
class AlignedRatioPoint:
    """Both entities' records for a fiscal year where the selected metric is usable."""
    year: str
    record_a: FiscalRatioRecord
    record_b: FiscalRatioRecord
    metric: str

    @property
    def value_a(self) -> float:
        return self.record_a.value(self.metric)

    @property
    def value_b(self) -> float:
        return self.record_b.value(self.metric)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'year': self.year,
            'date_a': self.record_a.date,
            'date_b': self.record_b.date,
            'value_a': self.value_a,
            'value_b': self.value_b
        }
