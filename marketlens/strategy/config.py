"""
Strategy configuration for the dashboard's strategy panel.

StrategyConfig is immutable: updates produce a new, re-validated config.
Config validation runs at construction time (fail fast with clear errors).
"""
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict

from ..shared.defaults import (
    SHORT_MA, LONG_MA,
    RSI_PERIOD, RSI_OVERSOLD, RSI_OVERBOUGHT,
    STOP_LOSS_PCT, TAKE_PROFIT_PCT,
    USE_AI, AI_CONFIDENCE_THRESHOLD,
    SHORT_MA_RANGE, LONG_MA_RANGE, RSI_PERIOD_RANGE,
    RSI_OVERSOLD_RANGE, RSI_OVERBOUGHT_RANGE,
    STOP_LOSS_RANGE, TAKE_PROFIT_RANGE, AI_CONFIDENCE_RANGE,
)
from ..shared.validation import InvalidParameterError, validate_range


# camelCase keys used by the dashboard state
_CAMEL_TO_FIELD = {
    "shortMA": "short_ma",
    "longMA": "long_ma",
    "rsiPeriod": "rsi_period",
    "rsiOversold": "rsi_oversold",
    "rsiOverbought": "rsi_overbought",
    "stopLoss": "stop_loss",
    "takeProfit": "take_profit",
    "useAI": "use_ai",
    "aiConfidenceThreshold": "ai_confidence_threshold",
}
_FIELD_TO_CAMEL = {v: k for k, v in _CAMEL_TO_FIELD.items()}


def _validate_config(config: "StrategyConfig") -> None:
    """Validate ranges and cross-field ordering. Raises InvalidParameterError on failure."""
    validate_range(config.short_ma, SHORT_MA_RANGE, "short_ma", integer=True)
    validate_range(config.long_ma, LONG_MA_RANGE, "long_ma", integer=True)
    validate_range(config.rsi_period, RSI_PERIOD_RANGE, "rsi_period", integer=True)
    validate_range(config.rsi_oversold, RSI_OVERSOLD_RANGE, "rsi_oversold", integer=True)
    validate_range(config.rsi_overbought, RSI_OVERBOUGHT_RANGE, "rsi_overbought", integer=True)
    validate_range(config.stop_loss, STOP_LOSS_RANGE, "stop_loss")
    validate_range(config.take_profit, TAKE_PROFIT_RANGE, "take_profit")
    validate_range(config.ai_confidence_threshold, AI_CONFIDENCE_RANGE, "ai_confidence_threshold")
    if not isinstance(config.use_ai, bool):
        raise InvalidParameterError(f"use_ai must be a bool, got {config.use_ai!r}")
    if config.short_ma >= config.long_ma:
        raise InvalidParameterError(
            f"short_ma ({config.short_ma}) must be less than long_ma ({config.long_ma})"
        )


@dataclass(frozen=True)
class StrategyConfig:
    """Strategy panel settings."""
    # Moving averages
    short_ma: int = SHORT_MA
    long_ma: int = LONG_MA

    # RSI
    rsi_period: int = RSI_PERIOD
    rsi_oversold: int = RSI_OVERSOLD
    rsi_overbought: int = RSI_OVERBOUGHT

    # Risk management (percent of entry price)
    stop_loss: float = STOP_LOSS_PCT
    take_profit: float = TAKE_PROFIT_PCT

    # AI enhancement
    use_ai: bool = USE_AI
    ai_confidence_threshold: float = AI_CONFIDENCE_THRESHOLD

    def __post_init__(self) -> None:
        _validate_config(self)

    def with_updates(self, **changes: Any) -> "StrategyConfig":
        """Return a new validated config with the given fields replaced (camelCase accepted)."""
        normalized = {_CAMEL_TO_FIELD.get(k, k): v for k, v in changes.items()}
        unknown = set(normalized) - {f.name for f in fields(self)}
        if unknown:
            raise InvalidParameterError(f"Unknown strategy option(s): {sorted(unknown)}")
        return replace(self, **normalized)

    def to_dict(self, camel_case: bool = False) -> Dict[str, Any]:
        data = asdict(self)
        if camel_case:
            return {_FIELD_TO_CAMEL[k]: v for k, v in data.items()}
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StrategyConfig":
        """Build from snake_case or camelCase keys; missing keys use defaults."""
        return cls().with_updates(**data)


DEFAULT_STRATEGY_CONFIG = StrategyConfig()
