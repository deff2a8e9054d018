"""Savings and commission calculations."""

from roadshow.calculations.metrics import aggregate_totals, calculate_metrics

__all__ = ["aggregate_totals", "calculate_metrics"]
