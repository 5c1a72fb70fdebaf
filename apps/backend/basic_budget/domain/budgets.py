from __future__ import annotations

from ..models import Cadence
from .dates import DateRange, list_week_ranges_overlapping_period
from .money import add_money, mul_money, sub_money
from .types import MoneyCents, WeekDay


def calculate_budgeted_period_cents(
    cadence: Cadence | str,
    amount_cents: int,
    period_range: DateRange,
    week_start: WeekDay,
) -> MoneyCents:
    """Expand a budget amount into a whole-period allocation.

    Weekly budgets are multiplied by every week window that touches the
    period, partial weeks at either end included.
    """
    if Cadence(cadence) == Cadence.MONTHLY:
        return MoneyCents(amount_cents)

    weeks = list_week_ranges_overlapping_period(period_range, week_start)
    return mul_money(amount_cents, len(weeks))


def calculate_remaining_period_cents(
    carryover_cents: int,
    budgeted_period_cents: int,
    spent_period_cents: int,
) -> MoneyCents:
    return sub_money(add_money(carryover_cents, budgeted_period_cents), spent_period_cents)
