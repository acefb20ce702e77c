"""
Strategy configuration: validated, immutable settings and YAML loading.
"""
from .config import StrategyConfig, DEFAULT_STRATEGY_CONFIG
from .config_loader import load_config_from_yaml, save_config_to_yaml

__all__ = [
    'StrategyConfig',
    'DEFAULT_STRATEGY_CONFIG',
    'load_config_from_yaml',
    'save_config_to_yaml',
]
