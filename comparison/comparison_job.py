"""
Orchestrated comparison job - providers to ComparisonJSON.
Fetches both symbols concurrently, calls pure functions, optionally writes JSON.
"""

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime
from pathlib import Path
from typing import Callable, Dict, Any, List, Optional

from comparison.comparison_aggregator import compose_comparison, ResultStatus
from comparison.config import ComparisonConfig
from comparison.guardrails import coverage_report, validate_window_for_returns
from ingestion.providers import fmp_adapter, yfinance_adapter
from ingestion.transforms.normalizers import normalize_price_history, normalize_ratio_records

logger = logging.getLogger(__name__)

PriceFetcher = Callable[[str, date, date], List[Dict[str, Any]]]
RatioFetcher = Callable[[str, int], List[Dict[str, Any]]]


class ComparisonJobError(Exception):
    """Raised when the comparison job cannot start."""
    pass


def price_fetcher_for(source: str) -> PriceFetcher:
    """
    Resolve the price history provider for a source name.

    Raises:
        ComparisonJobError: If source is unknown
    """
    if source == 'yfinance':
        return yfinance_adapter.fetch_price_history
    if source == 'fmp':
        return fmp_adapter.fetch_historical_prices
    raise ComparisonJobError(f"Unknown price source: {source}")


def run_comparison(
    config: ComparisonConfig,
    *,
    fetch_prices: Optional[PriceFetcher] = None,
    fetch_ratios: Optional[RatioFetcher] = None,
    output_path: Optional[Path] = None,
    today: Optional[date] = None
) -> Dict[str, Any]:
    """
    Run a complete pair comparison and optionally save results to JSON.

    Args:
        config: Comparison request parameters
        fetch_prices: Price provider (defaults to config.price_source)
        fetch_ratios: Annual ratio provider (defaults to FMP)
        output_path: Path to save ComparisonJSON (optional)
        today: End of the date range (defaults to today)

    Returns:
        Dictionary with job status, the comparison and timing
    """
    start_time = datetime.now()
    pair = f"{config.symbol_a}/{config.symbol_b}"

    if fetch_prices is None:
        fetch_prices = price_fetcher_for(config.price_source)
    if fetch_ratios is None:
        fetch_ratios = fmp_adapter.fetch_annual_ratios

    start, end = config.date_range(today)
    logger.info(f"Comparing {pair} from {start} to {end} (window {config.window})")

    try:
        with ThreadPoolExecutor(max_workers=4) as pool:
            price_futures = [
                pool.submit(fetch_prices, symbol, start, end)
                for symbol in (config.symbol_a, config.symbol_b)
            ]
            ratio_futures = [
                pool.submit(fetch_ratios, symbol, config.ratio_years)
                for symbol in (config.symbol_a, config.symbol_b)
            ] if config.include_ratios else []

            raw_a, raw_b = [f.result() for f in price_futures]

            ratios_a = ratios_b = None
            ratio_error = None
            if ratio_futures:
                try:
                    raw_ratios_a, raw_ratios_b = [f.result() for f in ratio_futures]
                    ratios_a = normalize_ratio_records(raw_ratios_a, ticker=config.symbol_a)
                    ratios_b = normalize_ratio_records(raw_ratios_b, ticker=config.symbol_b)
                except Exception as e:
                    # Ratios are optional; the price sections still render
                    ratio_error = str(e)
                    logger.warning(f"Ratio fetch failed for {pair}: {e}")

        prices_a = normalize_price_history(raw_a, ticker=config.symbol_a)
        prices_b = normalize_price_history(raw_b, ticker=config.symbol_b)

        comparison = compose_comparison(
            prices_a,
            prices_b,
            ratios_a,
            ratios_b,
            symbol_a=config.symbol_a,
            symbol_b=config.symbol_b,
            window=config.window,
            metric=config.metric,
            as_of=end
        )

        if ratio_error is not None:
            comparison['fiscal_ratios']['status'] = ResultStatus.UPSTREAM_FAILURE
            comparison['fiscal_ratios']['reason'] = f"Ratio fetch failed: {ratio_error}"

        aligned_count = comparison['data_period']['aligned_days']
        comparison['parameters'].update({
            'period': config.period,
            'start_date': start.isoformat(),
            'end_date': end.isoformat(),
            'price_source': config.price_source
        })
        comparison['data_quality'] = {
            **_coverage(prices_a, prices_b, comparison),
            'window_fits': validate_window_for_returns(config.window, max(0, aligned_count - 1))
        }

        if output_path is not None:
            output_path = Path(output_path)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, 'w') as f:
                json.dump(comparison, f, indent=2, default=str)
            logger.info(f"Saved comparison for {pair} to {output_path}")

        return {
            'pair': pair,
            'status': 'completed',
            'comparison': comparison,
            'output_path': str(output_path) if output_path is not None else None,
            'price_data_points': {'a': len(prices_a), 'b': len(prices_b)},
            'duration_seconds': (datetime.now() - start_time).total_seconds()
        }

    except Exception as e:
        logger.error(f"Comparison failed for {pair}: {e}")
        return {
            'pair': pair,
            'status': 'failed',
            'error_message': str(e),
            'comparison': None,
            'output_path': None,
            'duration_seconds': (datetime.now() - start_time).total_seconds()
        }


def _coverage(prices_a, prices_b, comparison: Dict[str, Any]) -> Dict[str, Any]:
    """Coverage summary computed from the dates that made it into the comparison."""
    aligned_dates = comparison['aligned']['points']
    report = coverage_report(prices_a, prices_b, aligned_dates)
    # Dropped-date lists can be long; keep counts only
    return {
        'points_a': report['points_a'],
        'points_b': report['points_b'],
        'aligned_points': report['aligned_points'],
        'overlap_pct': report['overlap_pct'],
        'dropped_a': len(report['dropped_a']),
        'dropped_b': len(report['dropped_b'])
    }
