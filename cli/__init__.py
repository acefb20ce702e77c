"""
Command-line entry points for the dashboard analytics engine.

Provides:
- dashboard: indicator table, quote header and metrics for a bar CSV
"""
