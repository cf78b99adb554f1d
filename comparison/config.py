"""
Comparison configuration - time periods, ratio metric registry, request settings.
Defaults come from environment variables (.env supported).
"""

import os
from dataclasses import dataclass
from datetime import date
from typing import Dict, Optional, Tuple

from dateutil.relativedelta import relativedelta
from dotenv import load_dotenv

from comparison.errors import InvalidParameterError

# Load environment variables
load_dotenv()


DEFAULT_SYMBOL_A = 'AAPL'
DEFAULT_SYMBOL_B = 'NVDA'
DEFAULT_PERIOD = '6M'
DEFAULT_WINDOW = 120
DEFAULT_METRIC = 'priceToEarningsRatio'
DEFAULT_RATIO_YEARS = 10
PRICE_SOURCES = ('yfinance', 'fmp')

# Lookback per time period selection
TIME_PERIODS: Dict[str, relativedelta] = {
    '1M': relativedelta(months=1),
    '3M': relativedelta(months=3),
    '6M': relativedelta(months=6),
    '1Y': relativedelta(years=1),
    '2Y': relativedelta(years=2),
    '5Y': relativedelta(years=5),
}

# Recognized annual ratio metrics: identifier -> display info
RATIO_METRICS: Dict[str, Dict[str, str]] = {
    'priceToEarningsRatio': {'label': 'P/E Ratio', 'format': 'ratio'},
    'priceToBookRatio': {'label': 'P/B Ratio', 'format': 'ratio'},
    'priceToSalesRatio': {'label': 'P/S Ratio', 'format': 'ratio'},
    'returnOnEquity': {'label': 'ROE', 'format': 'percent'},
    'returnOnAssets': {'label': 'ROA', 'format': 'percent'},
    'grossProfitMargin': {'label': 'Gross Margin', 'format': 'percent'},
    'netProfitMargin': {'label': 'Net Margin', 'format': 'percent'},
    'operatingProfitMargin': {'label': 'Operating Margin', 'format': 'percent'},
    'currentRatio': {'label': 'Current Ratio', 'format': 'ratio'},
    'debtEquityRatio': {'label': 'Debt/Equity', 'format': 'ratio'},
    'debtRatio': {'label': 'Debt Ratio', 'format': 'ratio'},
    'interestCoverage': {'label': 'Interest Coverage', 'format': 'ratio'},
}


def period_date_range(period: str, today: Optional[date] = None) -> Tuple[date, date]:
    """
    Translate a time period selection into a [start, end] date range.

    Args:
        period: One of TIME_PERIODS ('1M', '3M', '6M', '1Y', '2Y', '5Y')
        today: End of range (defaults to today)

    Returns:
        Tuple of (start_date, end_date)

    Raises:
        ValueError: If period is not recognized
    """
    if period not in TIME_PERIODS:
        raise ValueError(
            f"Unknown time period: {period}. Expected one of: {', '.join(TIME_PERIODS)}"
        )

    if today is None:
        today = date.today()

    return today - TIME_PERIODS[period], today


def metric_info(metric: str) -> Dict[str, str]:
    """Return label and display format for a ratio metric."""
    if metric not in RATIO_METRICS:
        raise InvalidParameterError(f"Unknown ratio metric: {metric}")
    return RATIO_METRICS[metric]


@dataclass
class ComparisonConfig:
    """Parameters of one comparison request."""
    symbol_a: str = DEFAULT_SYMBOL_A
    symbol_b: str = DEFAULT_SYMBOL_B
    period: str = DEFAULT_PERIOD
    window: Optional[int] = None
    metric: Optional[str] = None
    ratio_years: Optional[int] = None
    price_source: Optional[str] = None
    include_ratios: bool = True

    def __post_init__(self):
        """Apply environment defaults and validate."""
        if not self.symbol_a or not isinstance(self.symbol_a, str):
            raise ValueError("symbol_a must be non-empty string")

        if not self.symbol_b or not isinstance(self.symbol_b, str):
            raise ValueError("symbol_b must be non-empty string")

        self.symbol_a = self.symbol_a.strip().upper()
        self.symbol_b = self.symbol_b.strip().upper()

        if self.symbol_a == self.symbol_b:
            raise ValueError(f"Symbols must differ, got {self.symbol_a} twice")

        if self.period not in TIME_PERIODS:
            raise ValueError(
                f"period must be one of {', '.join(TIME_PERIODS)}, got {self.period}"
            )

        if self.window is None:
            self.window = int(os.getenv('COMPARE_CORR_WINDOW', str(DEFAULT_WINDOW)))

        if isinstance(self.window, bool) or not isinstance(self.window, int) or self.window <= 1:
            raise ValueError(f"window must be an integer > 1, got {self.window}")

        if self.metric is None:
            self.metric = os.getenv('COMPARE_RATIO_METRIC', DEFAULT_METRIC)

        if self.metric not in RATIO_METRICS:
            raise ValueError(f"Unknown ratio metric: {self.metric}")

        if self.ratio_years is None:
            self.ratio_years = int(os.getenv('COMPARE_RATIO_YEARS', str(DEFAULT_RATIO_YEARS)))

        if self.ratio_years <= 0:
            raise ValueError(f"ratio_years must be positive, got {self.ratio_years}")

        if self.price_source is None:
            self.price_source = os.getenv('COMPARE_PRICE_SOURCE', 'yfinance')

        if self.price_source not in PRICE_SOURCES:
            raise ValueError(
                f"price_source must be one of {', '.join(PRICE_SOURCES)}, got {self.price_source}"
            )

    def date_range(self, today: Optional[date] = None) -> Tuple[date, date]:
        """Date range covered by this request's period."""
        return period_date_range(self.period, today)
