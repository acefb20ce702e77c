"""
Base indicator interface.

All indicators follow this pattern:
1. Calculate values over the full price history
2. Expose one or more named columns for the aligned dashboard table
"""
from abc import ABC, abstractmethod
from typing import Optional, Tuple

import pandas as pd

from ..shared.types import optional_float


class Indicator(ABC):
    """
    Base class for all indicators.

    Indicators calculate values from a close-price series. They never truncate
    their input: windowing happens after calculation, at presentation time.
    """

    #: Toggle key used by the dashboard (e.g. "sma20", "rsi", "macd")
    key: str = ""

    @property
    @abstractmethod
    def columns(self) -> Tuple[str, ...]:
        """Column names this indicator contributes to the aligned table."""
        pass

    @abstractmethod
    def calculate(self, prices: pd.Series) -> pd.Series:
        """
        Calculate the primary indicator series from price data.

        Args:
            prices: Close-price series with datetime index

        Returns:
            Series with indicator values (same index as prices, NaN = undefined)
        """
        pass

    def calculate_frame(self, prices: pd.Series) -> pd.DataFrame:
        """Calculate every column this indicator contributes."""
        return pd.DataFrame({self.columns[0]: self.calculate(prices)}, index=prices.index)

    def get_value_at(self, prices: pd.Series, timestamp: pd.Timestamp) -> Optional[float]:
        """
        Get indicator value at a specific timestamp.

        Args:
            prices: Price series (must include data before timestamp)
            timestamp: Timestamp to get value for

        Returns:
            Indicator value at timestamp, or None if undefined or not in the index
        """
        values = self.calculate(prices)
        if timestamp in values.index:
            return optional_float(values[timestamp])
        return None
