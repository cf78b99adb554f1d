#!/usr/bin/env python3
"""
Main CLI for the pair comparison workbench.
Usage: python cli.py compare SYMBOL_A SYMBOL_B [options]
"""

import sys
import argparse
import logging
from pathlib import Path
from typing import Dict, Any, List, Optional

# Add project root to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from comparison.comparison_job import run_comparison
from comparison.config import ComparisonConfig, TIME_PERIODS, RATIO_METRICS, PRICE_SOURCES
from comparison.formatters import (
    format_percentage,
    format_ratio,
    format_correlation,
    format_metric_value
)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description='Compare two symbols: price ratio, correlation, beta and fiscal ratios',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python cli.py compare AAPL NVDA
  python cli.py compare MSFT GOOGL --period 1Y --window 60
  python cli.py compare KO PEP --metric returnOnEquity --output ./data/ko_pep.json
        """
    )
    subparsers = parser.add_subparsers(dest='command')

    compare = subparsers.add_parser('compare', help='Compare two symbols')
    compare.add_argument('symbol_a', help='Dependent symbol (Y), e.g. AAPL')
    compare.add_argument('symbol_b', help='Independent symbol (X), e.g. NVDA')
    compare.add_argument('--period',
                         choices=list(TIME_PERIODS),
                         default='6M',
                         help='Time period (default: 6M)')
    compare.add_argument('--window',
                         type=int,
                         help='Rolling correlation window in trading days (default: 120)')
    compare.add_argument('--metric',
                         choices=list(RATIO_METRICS),
                         help='Fiscal ratio metric (default: priceToEarningsRatio)')
    compare.add_argument('--source',
                         choices=list(PRICE_SOURCES),
                         help='Price history source (default: yfinance)')
    compare.add_argument('--no-ratios',
                         action='store_true',
                         help='Skip fiscal ratio comparison')
    compare.add_argument('--output',
                         help='Write ComparisonJSON to this path')
    compare.add_argument('--quiet', '-q',
                         action='store_true',
                         help='Minimal output (just success/failure)')
    compare.add_argument('--verbose', '-v',
                         action='store_true',
                         help='Debug logging')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command != 'compare':
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    try:
        config = ComparisonConfig(
            symbol_a=args.symbol_a,
            symbol_b=args.symbol_b,
            period=args.period,
            window=args.window,
            metric=args.metric,
            price_source=args.source,
            include_ratios=not args.no_ratios
        )
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    result = run_comparison(
        config,
        output_path=Path(args.output) if args.output else None
    )

    if result['status'] != 'completed':
        print(f"ERROR: Comparison failed for {result['pair']}: {result['error_message']}", file=sys.stderr)
        return 1

    if args.quiet:
        print(f"{result['pair']} comparison complete")
    else:
        print(render_summary(result['comparison']))
        if result['output_path']:
            print(f"Results saved to: {result['output_path']}")

    return 0


def render_summary(comparison: Dict[str, Any]) -> str:
    """
    Render a plain-text summary of a ComparisonJSON.

    Args:
        comparison: Result of compose_comparison

    Returns:
        Multi-line summary string
    """
    symbols = comparison['symbols']
    a, b = symbols['a'], symbols['b']
    period = comparison['data_period']
    latest = comparison['latest']

    lines = [f"Comparison: {a} vs {b}"]

    if period['aligned_days']:
        lines.append(f"Period: {period['start_date']} to {period['end_date']} ({period['aligned_days']} common days)")
    else:
        lines.append(f"Period: no common trading days ({comparison['aligned']['reason']})")
        return '\n'.join(lines)

    lines.append(f"Latest ({latest['date']}): {a} {format_ratio(latest['price_a'])}, "
                 f"{b} {format_ratio(latest['price_b'])}, ratio {format_ratio(latest['ratio'], 4)}")

    correlation = comparison['rolling_correlation']
    if correlation['status'] == 'ok':
        lines.append(f"Rolling correlation ({correlation['window']}D): {format_correlation(latest['correlation'])}")
    else:
        lines.append(f"Rolling correlation ({correlation['window']}D): – ({correlation['reason']})")

    regression = comparison['regression']
    if regression['status'] == 'ok':
        stats = regression['stats']
        lines.append(f"Regression {a} on {b} (n={stats['n']}):")
        lines.append(f"  Beta:  {format_ratio(stats['beta'], 4)} (SE {format_ratio(stats['std_error_beta'], 4)})")
        lines.append(f"  Alpha: {format_percentage(stats['alpha'], 4)} (SE {format_ratio(stats['std_error_alpha'], 4)})")
        lines.append(f"  R: {format_correlation(stats['pearson_r'])}  R²: {format_ratio(stats['r_squared'], 4)}"
                     f"  Std error: {format_ratio(stats['std_dev_error'], 4)}")
    else:
        lines.append(f"Regression: – ({regression['reason']})")

    fiscal = comparison['fiscal_ratios']
    if fiscal['status'] == 'ok':
        lines.append(f"{fiscal['label']} by fiscal year:")
        for point in fiscal['points']:
            lines.append(f"  {point['year']}: {a} {format_metric_value(point['value_a'], fiscal['metric'])}"
                         f"  {b} {format_metric_value(point['value_b'], fiscal['metric'])}")
    elif fiscal['status'] != 'skipped':
        lines.append(f"{fiscal['label']}: – ({fiscal['reason']})")

    return '\n'.join(lines)


if __name__ == '__main__':
    sys.exit(main())
