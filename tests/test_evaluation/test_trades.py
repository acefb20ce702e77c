"""
Tests for Trade and BacktestMetrics types.
"""
import pytest
from marketlens.evaluation.trades import Trade, BacktestMetrics, trades_from_records, trades_to_frame
from marketlens.shared.types import SignalKind
from marketlens.shared.validation import InvalidParameterError


def _trade(**overrides):
    data = dict(
        id="t1",
        entry_date="2024-01-02",
        exit_date="2024-01-10",
        entry_price=100.0,
        exit_price=110.0,
        shares=10,
        signal_kind=SignalKind.MA_PULLBACK,
    )
    data.update(overrides)
    return Trade(**data)


class TestTrade:
    """Derived fields and validation."""

    def test_pnl(self):
        trade = _trade()
        assert trade.pnl == pytest.approx(100.0)
        assert trade.pnl_percent == pytest.approx(10.0)
        assert trade.is_winner

    def test_losing_trade(self):
        trade = _trade(exit_price=95.0)
        assert trade.pnl == pytest.approx(-50.0)
        assert trade.pnl_percent == pytest.approx(-5.0)
        assert not trade.is_winner

    def test_string_signal_kind(self):
        assert _trade(signal_kind="rsi_oversold").signal_kind is SignalKind.RSI_OVERSOLD

    def test_unknown_signal_kind(self):
        with pytest.raises(InvalidParameterError, match="signal kind"):
            _trade(signal_kind="BREAKOUT")

    def test_shares_must_be_positive_int(self):
        with pytest.raises(InvalidParameterError, match="shares"):
            _trade(shares=0)
        with pytest.raises(InvalidParameterError, match="shares"):
            _trade(shares=1.5)

    def test_prices_must_be_positive(self):
        with pytest.raises(InvalidParameterError, match="entry_price"):
            _trade(entry_price=0.0)

    def test_ai_confidence_rules(self):
        trade = _trade(signal_kind=SignalKind.AI_ENHANCED, ai_confidence=0.8)
        assert trade.ai_confidence == 0.8
        with pytest.raises(InvalidParameterError, match="required"):
            _trade(signal_kind=SignalKind.AI_ENHANCED)
        with pytest.raises(InvalidParameterError, match="ai_confidence must be in"):
            _trade(signal_kind=SignalKind.AI_ENHANCED, ai_confidence=1.5)
        with pytest.raises(InvalidParameterError, match="ai_confidence must be a number"):
            _trade(signal_kind=SignalKind.AI_ENHANCED, ai_confidence="high")
        with pytest.raises(InvalidParameterError, match="only allowed"):
            _trade(ai_confidence=0.5)


class TestTradeRecords:
    """Record conversion in both key styles."""

    def test_from_camel_case_record(self):
        trade = Trade.from_record({
            "id": 7,
            "entryDate": "2024-03-01",
            "exitDate": "2024-03-05",
            "entryPrice": 50,
            "exitPrice": 55,
            "shares": 4,
            "pnl": 999,  # ignored
            "signal": "AI_ENHANCED",
            "aiConfidence": 0.9,
        })
        assert trade.id == "7"
        assert trade.pnl == pytest.approx(20.0)
        assert trade.signal_kind is SignalKind.AI_ENHANCED

    def test_nan_optional_fields(self):
        trade = Trade.from_record({
            "id": "a", "entry_date": "2024-01-01", "exit_date": "2024-01-02",
            "entry_price": 10.0, "exit_price": 11.0, "shares": 1,
            "signal_kind": "MA_PULLBACK", "ai_confidence": float("nan"), "symbol": float("nan"),
        })
        assert trade.ai_confidence is None
        assert trade.symbol is None

    def test_missing_field(self):
        with pytest.raises(InvalidParameterError, match="entry_price"):
            Trade.from_record({"id": "x", "entry_date": "2024-01-01", "exit_date": "2024-01-02"})

    def test_to_dict_round_trip(self):
        trade = _trade(symbol="AAPL")
        record = trade.to_dict()
        assert record["entryDate"] == "2024-01-02"
        assert record["signal"] == "MA_PULLBACK"
        assert record["pnlPercent"] == pytest.approx(10.0)
        assert trades_from_records([record]) == [trade]

    def test_trades_to_frame(self):
        frame = trades_to_frame([_trade(), _trade(id="t2", exit_price=90.0)])
        assert len(frame) == 2
        assert frame["pnl"].tolist() == pytest.approx([100.0, -100.0])
        assert frame["signal_kind"].tolist() == ["MA_PULLBACK", "MA_PULLBACK"]

    def test_trades_to_frame_empty(self):
        frame = trades_to_frame([])
        assert frame.empty
        assert "pnl_percent" in frame.columns


class TestBacktestMetrics:
    def test_defaults(self):
        metrics = BacktestMetrics()
        assert metrics.total_trades == 0
        assert metrics.profit_factor == 0.0

    def test_to_dict_keys(self):
        assert list(BacktestMetrics().to_dict()) == [
            "totalTrades", "winRate", "avgReturn", "maxDrawdown",
            "expectancy", "sharpeRatio", "profitFactor", "totalReturn",
        ]
