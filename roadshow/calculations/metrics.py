"""
Savings and Commission Calculations

DESIGN DECISION: Calculation is DETERMINISTIC and side-effect free.
Nothing here touches storage or the UI; the store and the dashboard call
these functions whenever they need figures.

Figures are recomputed from scratch on every call. With a handful of
shows per user there is nothing worth caching, and recomputing means a
rate change is reflected everywhere immediately.
"""

from typing import Iterable, Optional

from roadshow.config import RateSettings, get_settings
from roadshow.models.show import (
    AggregateTotals,
    ShowFields,
    ShowMetrics,
    coerce_number,
)


def _resolve_rates(rates: Optional[RateSettings]) -> RateSettings:
    return rates if rates is not None else get_settings().rates


def calculate_metrics(
    show: ShowFields,
    rates: Optional[RateSettings] = None,
) -> ShowMetrics:
    """
    Work out budget, spend, savings and commission for one show.

    Args:
        show: The show (or form input) to evaluate
        rates: Rate card to use; defaults to the configured one

    Returns:
        The derived figures. Commission is 0 when the show went over
        budget; overspend is never charged back.
    """
    rates = _resolve_rates(rates)

    room_budget = coerce_number(show.nights) * rates.room_rate_per_night
    meeting_budget = coerce_number(show.meeting_days) * rates.meeting_rate_per_day
    total_budget = room_budget + meeting_budget
    actual_spend = (
        coerce_number(show.actual_room_cost)
        + coerce_number(show.actual_meeting_cost)
    )
    savings = total_budget - actual_spend
    commission = savings * rates.commission_rate if savings > 0 else 0.0

    return ShowMetrics(
        room_budget=room_budget,
        meeting_budget=meeting_budget,
        total_budget=total_budget,
        actual_spend=actual_spend,
        savings=savings,
        commission=commission,
    )


def aggregate_totals(
    shows: Iterable[ShowFields],
    rates: Optional[RateSettings] = None,
) -> AggregateTotals:
    """
    Sum per-show figures into dashboard totals.

    An empty sequence yields all-zero totals.
    """
    rates = _resolve_rates(rates)

    total_savings = 0.0
    total_commission = 0.0
    total_spent = 0.0
    total_budgeted = 0.0
    show_count = 0

    for show in shows:
        metrics = calculate_metrics(show, rates)
        total_savings += metrics.savings
        total_commission += metrics.commission
        total_spent += metrics.actual_spend
        total_budgeted += metrics.total_budget
        show_count += 1

    return AggregateTotals(
        total_savings=total_savings,
        total_commission=total_commission,
        total_spent=total_spent,
        total_budgeted=total_budgeted,
        show_count=show_count,
    )
