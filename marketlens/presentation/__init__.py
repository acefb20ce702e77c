"""
Presentation-boundary helpers: aligned indicator table, windows, projections
and quote header figures.
"""
from .table import (
    TableSpec,
    IndicatorToggle,
    indicator_toggles,
    default_enabled_keys,
    build_indicator_table,
    trailing_window,
    select_columns,
    column_groups,
    table_to_records,
    pad_to_length,
)
from .quote import QuoteSummary, quote_summary, period_change, average_volume

__all__ = [
    'TableSpec',
    'IndicatorToggle',
    'indicator_toggles',
    'default_enabled_keys',
    'build_indicator_table',
    'trailing_window',
    'select_columns',
    'column_groups',
    'table_to_records',
    'pad_to_length',
    'QuoteSummary',
    'quote_summary',
    'period_change',
    'average_volume',
]
