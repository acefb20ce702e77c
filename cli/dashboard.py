#!/usr/bin/env python3
"""
Dashboard analytics CLI.

Computes the indicator table, equity curve and headline metrics for a bar
CSV and prints the quote header, metric cards and the latest table rows.
"""
import argparse
import logging
import sys
from pathlib import Path

import pandas as pd

from marketlens.dashboard import DashboardEngine
from marketlens.data.bars import load_bars_csv
from marketlens.evaluation.trades import trades_from_records
from marketlens.presentation.table import default_enabled_keys
from marketlens.shared.defaults import INITIAL_CAPITAL, EQUITY_MULTIPLIER, INDICATOR_WINDOW
from marketlens.strategy.config import DEFAULT_STRATEGY_CONFIG
from marketlens.strategy.config_loader import load_config_from_yaml


def _load_trades(path):
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Trades file not found: {path}")
    return trades_from_records(pd.read_csv(path).to_dict("records"))


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Compute dashboard indicators and performance metrics for a bar series",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Default strategy, last 90 bars
    python -m cli.dashboard --bars data/AAPL.csv

    # Strategy from YAML with closed trades for the metric cards
    python -m cli.dashboard --bars data/AAPL.csv --config configs/strategy.yaml --trades trades.csv

    # Only price, RSI and MACD columns, written to CSV
    python -m cli.dashboard --bars data/AAPL.csv --indicators price,rsi,macd --output table.csv
        """
    )

    parser.add_argument(
        "--bars", "-b",
        required=True,
        help="OHLCV CSV file (first column is the date)",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Load strategy configuration from YAML file",
    )
    parser.add_argument(
        "--trades",
        type=str,
        help="CSV of closed trades (id, entry_date, exit_date, entry_price, exit_price, shares, signal_kind)",
    )
    parser.add_argument(
        "--window", "-w",
        type=int,
        default=INDICATOR_WINDOW,
        help=f"Number of trailing bars to show (default: {INDICATOR_WINDOW})",
    )
    parser.add_argument(
        "--indicators",
        type=str,
        help="Comma-separated indicator keys to show (default: price, the strategy SMAs and volume)",
    )
    parser.add_argument(
        "--multiplier",
        type=float,
        default=EQUITY_MULTIPLIER,
        help=f"Equity curve multiplier (default: {EQUITY_MULTIPLIER})",
    )
    parser.add_argument(
        "--capital",
        type=float,
        default=INITIAL_CAPITAL,
        help=f"Initial capital (default: {INITIAL_CAPITAL:,.0f})",
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        help="Write the windowed table to this CSV file",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config_from_yaml(args.config) if args.config else DEFAULT_STRATEGY_CONFIG
        bars = load_bars_csv(args.bars)
        trades = _load_trades(args.trades) if args.trades else []
        engine = DashboardEngine(config, initial_capital=args.capital, multiplier=args.multiplier)
        if args.indicators:
            enabled = [k.strip() for k in args.indicators.split(",") if k.strip()]
        else:
            enabled = default_enabled_keys(engine.spec)
        result = engine.build(bars, trades, window=args.window, enabled=enabled)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    print("=" * 80)
    print("MARKET DASHBOARD")
    print("=" * 80)
    quote = result.quote
    if quote is None:
        print("No price data")
    else:
        print(f"Price: {quote.price:.2f}", end="")
        if quote.change is not None:
            print(f"  ({quote.change:+.2f}, {quote.change_percent:+.2f}%)", end="")
        print()
        if quote.high_52w is not None:
            print(f"52W range: {quote.low_52w:.2f} - {quote.high_52w:.2f}")
    print()

    metrics = result.metrics
    print(f"Total Trades: {metrics.total_trades}")
    print(f"Win Rate: {metrics.win_rate:.1f}%")
    print(f"Avg Return: {metrics.avg_return:.2f}%")
    print(f"Total Return: {metrics.total_return:.2f}%")
    print(f"Max Drawdown: {metrics.max_drawdown:.2f}%")
    print(f"Sharpe Ratio: {metrics.sharpe_ratio:.2f}")
    print(f"Profit Factor: {metrics.profit_factor:.2f}")
    print(f"Expectancy: {metrics.expectancy:.4f}R")
    print()

    with pd.option_context("display.width", 160, "display.max_columns", 20):
        print(result.table.tail(10).to_string())

    if args.output:
        output = Path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)
        result.table.to_csv(output)
        print(f"\nTable saved to: {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
