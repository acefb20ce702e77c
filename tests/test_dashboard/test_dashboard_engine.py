"""
Tests for the DashboardEngine facade and the dashboard CLI.
"""
import pytest
import pandas as pd
import numpy as np
from cli.dashboard import main
from marketlens.cache import IndicatorCache
from marketlens.dashboard import DashboardEngine, DashboardResult
from marketlens.evaluation.trades import Trade, trades_to_frame
from marketlens.presentation.table import TableSpec, build_indicator_table
from marketlens.strategy.config import StrategyConfig


@pytest.fixture
def sample_ohlcv():
    dates = pd.date_range('2023-01-02', periods=150, freq='B')
    rng = np.random.default_rng(5)
    close = 100 + np.cumsum(rng.standard_normal(150))
    return pd.DataFrame({
        'open': close - 0.2,
        'high': close + 1,
        'low': close - 1,
        'close': close,
        'volume': rng.integers(1_000, 5_000, 150),
    }, index=dates)


@pytest.fixture
def sample_trades():
    return [
        Trade("1", "2023-02-01", "2023-02-10", 100.0, 110.0, 10, "MA_PULLBACK"),
        Trade("2", "2023-03-01", "2023-03-08", 100.0, 95.0, 10, "RSI_OVERSOLD"),
        Trade("3", "2023-04-03", "2023-04-20", 100.0, 120.0, 10, "AI_ENHANCED", ai_confidence=0.85),
    ]


class TestDashboardEngine:
    """Facade results and caching."""

    def test_build(self, sample_ohlcv, sample_trades):
        result = DashboardEngine().build(sample_ohlcv, sample_trades)
        assert isinstance(result, DashboardResult)
        assert len(result.table) == len(sample_ohlcv)
        assert {"sma10", "sma50", "equity", "drawdown", "benchmark"} <= set(result.table.columns)
        assert result.metrics.total_trades == 3
        assert result.metrics.win_rate == pytest.approx(200 / 3)
        assert result.quote.price == pytest.approx(sample_ohlcv["close"].iloc[-1])

    def test_spec_follows_strategy(self):
        engine = DashboardEngine(StrategyConfig(short_ma=5, long_ma=20, rsi_period=7))
        assert engine.spec.sma_periods == (5, 20)
        assert engine.spec.rsi_period == 7

    def test_table_matches_direct_build(self, sample_ohlcv):
        engine = DashboardEngine()
        expected = build_indicator_table(sample_ohlcv, engine.spec)
        pd.testing.assert_frame_equal(engine.indicator_table(sample_ohlcv), expected)
        # Cache hit returns the same content
        pd.testing.assert_frame_equal(engine.indicator_table(sample_ohlcv), expected)
        assert engine.cache.get_stats()["hits"] == 1

    def test_window_and_projection_after_computation(self, sample_ohlcv):
        engine = DashboardEngine()
        full = engine.build(sample_ohlcv).table
        windowed = engine.build(sample_ohlcv, window=20, enabled=["price", "sma50", "equity"]).table
        assert len(windowed) == 20
        assert list(windowed.columns) == [
            "open", "high", "low", "close", "is_green", "sma50", "equity", "drawdown", "benchmark",
        ]
        pd.testing.assert_frame_equal(windowed, full[windowed.columns].iloc[-20:])

    def test_equity_parameters(self, sample_ohlcv):
        engine = DashboardEngine(initial_capital=1000.0, multiplier=1.0)
        equity = engine.equity(sample_ohlcv)
        assert equity["equity"].iloc[0] == 1000.0
        pd.testing.assert_series_equal(equity["equity"], equity["benchmark"], check_names=False)
        scaled = engine.equity(sample_ohlcv, multiplier=2.0)
        assert not scaled["equity"].equals(equity["equity"])

    def test_metrics_unit_risk(self, sample_trades):
        plain = DashboardEngine().metrics(sample_trades)
        stop_based = DashboardEngine(unit_risk_pct=5.0).metrics(sample_trades)
        assert stop_based.expectancy == pytest.approx(plain.expectancy * 20)

    def test_shared_cache(self, sample_ohlcv):
        cache = IndicatorCache()
        DashboardEngine(cache=cache).indicator_table(sample_ohlcv)
        DashboardEngine(cache=cache).indicator_table(sample_ohlcv)
        assert cache.get_stats()["hits"] == 1
        DashboardEngine(spec=TableSpec(sma_periods=(5,)), cache=cache).indicator_table(sample_ohlcv)
        assert cache.get_stats()["misses"] == 2


class TestDashboardCli:
    """Smoke tests for python -m cli.dashboard."""

    def test_prints_and_writes_table(self, tmp_path, sample_ohlcv, sample_trades, capsys):
        bars_path = tmp_path / "bars.csv"
        sample_ohlcv.to_csv(bars_path)
        trades_path = tmp_path / "trades.csv"
        trades_to_frame(sample_trades).to_csv(trades_path, index=False)
        output = tmp_path / "out" / "table.csv"

        code = main([
            "--bars", str(bars_path),
            "--trades", str(trades_path),
            "--window", "15",
            "--indicators", "price,rsi",
            "--output", str(output),
        ])
        assert code == 0
        out = capsys.readouterr().out
        assert "Total Trades: 3" in out
        written = pd.read_csv(output, index_col=0)
        assert len(written) == 15
        assert "rsi" in written.columns
        assert "sma10" not in written.columns

    def test_default_indicators(self, tmp_path, sample_ohlcv):
        """Without --indicators the table shows the default-enabled toggles."""
        bars_path = tmp_path / "bars.csv"
        sample_ohlcv.to_csv(bars_path)
        output = tmp_path / "table.csv"
        assert main(["--bars", str(bars_path), "--output", str(output)]) == 0
        written = pd.read_csv(output, index_col=0)
        assert list(written.columns) == [
            "open", "high", "low", "close", "volume", "is_green", "sma10", "sma50",
        ]
        assert len(written) == 90

    def test_missing_bars_file(self, tmp_path, capsys):
        assert main(["--bars", str(tmp_path / "missing.csv")]) == 1
        assert "not found" in capsys.readouterr().out

    def test_unknown_indicator(self, tmp_path, sample_ohlcv, capsys):
        bars_path = tmp_path / "bars.csv"
        sample_ohlcv.to_csv(bars_path)
        assert main(["--bars", str(bars_path), "--indicators", "sma999"]) == 1
        assert "Unknown indicator" in capsys.readouterr().out
