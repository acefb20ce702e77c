"""
YAML configuration loader for strategy settings.

Loads strategy configurations from YAML files, allowing easy sharing
and modification of strategies without code changes.

Example file:

    name: pullback
    moving_averages:
      short: 10
      long: 50
    rsi:
      period: 14
      oversold: 30
      overbought: 70
    risk:
      stop_loss: 3.0
      take_profit: 8.0
    ai:
      enabled: false
      confidence_threshold: 0.7
"""
import logging
from pathlib import Path
from typing import Union

import yaml

from .config import StrategyConfig
from ..shared.defaults import (
    SHORT_MA, LONG_MA,
    RSI_PERIOD, RSI_OVERSOLD, RSI_OVERBOUGHT,
    STOP_LOSS_PCT, TAKE_PROFIT_PCT,
    USE_AI, AI_CONFIDENCE_THRESHOLD,
)

logger = logging.getLogger(__name__)


def load_config_from_yaml(yaml_path: Union[str, Path]) -> StrategyConfig:
    """
    Load strategy configuration from YAML file.

    Args:
        yaml_path: Path to YAML configuration file

    Returns:
        StrategyConfig object

    Raises:
        FileNotFoundError: If YAML file doesn't exist
        ValueError: If YAML is empty, not a mapping, or holds out-of-range values
    """
    yaml_path = Path(yaml_path)

    if not yaml_path.exists():
        raise FileNotFoundError(f"Config file not found: {yaml_path}")

    with open(yaml_path, 'r') as f:
        config_dict = yaml.safe_load(f)

    if not config_dict:
        raise ValueError(f"Empty config file: {yaml_path}")
    if not isinstance(config_dict, dict):
        raise ValueError(f"Config file must contain a mapping: {yaml_path}")

    moving_averages = config_dict.get('moving_averages') or {}
    rsi = config_dict.get('rsi') or {}
    risk = config_dict.get('risk') or {}
    ai = config_dict.get('ai') or {}

    config = StrategyConfig(
        short_ma=moving_averages.get('short', SHORT_MA),
        long_ma=moving_averages.get('long', LONG_MA),
        rsi_period=rsi.get('period', RSI_PERIOD),
        rsi_oversold=rsi.get('oversold', RSI_OVERSOLD),
        rsi_overbought=rsi.get('overbought', RSI_OVERBOUGHT),
        stop_loss=float(risk.get('stop_loss', STOP_LOSS_PCT)),
        take_profit=float(risk.get('take_profit', TAKE_PROFIT_PCT)),
        use_ai=ai.get('enabled', USE_AI),
        ai_confidence_threshold=float(ai.get('confidence_threshold', AI_CONFIDENCE_THRESHOLD)),
    )
    logger.info(f"Loaded strategy config '{config_dict.get('name', yaml_path.stem)}' from {yaml_path}")
    return config


def save_config_to_yaml(config: StrategyConfig, yaml_path: Union[str, Path], name: str = "") -> Path:
    """Write a config in the nested layout read by load_config_from_yaml."""
    yaml_path = Path(yaml_path)
    data = {
        'name': name or yaml_path.stem,
        'moving_averages': {'short': config.short_ma, 'long': config.long_ma},
        'rsi': {
            'period': config.rsi_period,
            'oversold': config.rsi_oversold,
            'overbought': config.rsi_overbought,
        },
        'risk': {'stop_loss': config.stop_loss, 'take_profit': config.take_profit},
        'ai': {'enabled': config.use_ai, 'confidence_threshold': config.ai_confidence_threshold},
    }
    with open(yaml_path, 'w') as f:
        yaml.safe_dump(data, f, sort_keys=False)
    return yaml_path
