"""
Left-to-Spend 계산 (오늘/이번 주 안전 지출 가능액)

공통 1단계:
    remaining = carryover + budgeted_period - spent_period
    remaining < 0 이면 초과 지출 → today/week 0, overspent = |remaining|

주간(weekly) 예산:
    left_this_week = max(0, 주간 금액 - 이번 주 지출)
    left_today     = left_this_week / (오늘 ~ 주 끝, 기간 끝으로 잘라낸 일수)

월간(monthly) 예산 (기간 → 주 → 일 2단계 배분):
    left_this_week = remaining * (이번 주 남은 기간 일수 / 기간 남은 일수)
    left_today     = left_this_week / 이번 주 남은 일수
    둘 다 0 이상 정수 센트로 내림
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional

from ..models import Cadence
from ..schemas import LeftToSpend
from .budgets import calculate_remaining_period_cents
from .dates import DateRange, count_days_inclusive, get_week_range, intersect_ranges
from .money import abs_money, add_money, as_money, div_money, max_money, zero_money
from .types import MoneyCents, WeekDay


@dataclass(frozen=True)
class LeftToSpendInput:
    cadence: Cadence
    amount_cents: int
    carryover_cents: int
    spent_period_cents: int
    spent_week_cents: int
    budgeted_period_cents: int
    period_start_date: str
    period_end_date: str
    date: str
    week_start: WeekDay


def floor_positive(value: float) -> MoneyCents:
    return as_money(max(0, math.floor(value)))


def _range_days(date_range: Optional[DateRange]) -> int:
    if date_range is None:
        return 0
    return count_days_inclusive(date_range.start_date, date_range.end_date)


def _overspent(remaining: MoneyCents) -> LeftToSpend:
    return LeftToSpend(
        remaining_period_cents=remaining,
        left_today_cents=zero_money(),
        left_this_week_cents=zero_money(),
        is_overspent=True,
        overspent_cents=abs_money(remaining),
    )


def _nothing_left(remaining: MoneyCents) -> LeftToSpend:
    return LeftToSpend(
        remaining_period_cents=remaining,
        left_today_cents=zero_money(),
        left_this_week_cents=zero_money(),
        is_overspent=False,
        overspent_cents=zero_money(),
    )


def remaining_days_in_week_within_period(value: str, period_range: DateRange, week_start: WeekDay) -> int:
    week_range = get_week_range(value, week_start)
    return _range_days(intersect_ranges(DateRange(value, week_range.end_date), period_range))


def _weekly_left_to_spend(data: LeftToSpendInput, remaining: MoneyCents) -> LeftToSpend:
    clamped_week = max_money(as_money(data.amount_cents - data.spent_week_cents), zero_money())
    days_remaining = remaining_days_in_week_within_period(
        data.date,
        DateRange(data.period_start_date, data.period_end_date),
        data.week_start,
    )
    left_today = zero_money() if days_remaining <= 0 else max_money(div_money(clamped_week, days_remaining), zero_money())
    return LeftToSpend(
        remaining_period_cents=remaining,
        left_today_cents=left_today,
        left_this_week_cents=clamped_week,
        is_overspent=False,
        overspent_cents=zero_money(),
    )


def _monthly_left_to_spend(data: LeftToSpendInput, remaining: MoneyCents) -> LeftToSpend:
    if count_days_inclusive(data.date, data.period_end_date) <= 0:
        return _nothing_left(remaining)

    period_range = DateRange(data.period_start_date, data.period_end_date)
    week_range = get_week_range(data.date, data.week_start)

    week_intersection = intersect_ranges(DateRange(data.date, week_range.end_date), period_range)
    period_intersection = intersect_ranges(DateRange(data.date, data.period_end_date), period_range)

    days_left_in_period_this_week = _range_days(week_intersection)
    days_left_in_week = _range_days(week_intersection)
    days_left_in_period = _range_days(period_intersection)

    if days_left_in_period <= 0 or days_left_in_week <= 0 or days_left_in_period_this_week <= 0:
        return _nothing_left(remaining)

    left_this_week_raw = remaining * (days_left_in_period_this_week / days_left_in_period)
    left_today_raw = left_this_week_raw / days_left_in_week

    return LeftToSpend(
        remaining_period_cents=remaining,
        left_today_cents=floor_positive(left_today_raw),
        left_this_week_cents=floor_positive(left_this_week_raw),
        is_overspent=False,
        overspent_cents=zero_money(),
    )


def compute_left_to_spend(data: LeftToSpendInput) -> LeftToSpend:
    remaining = calculate_remaining_period_cents(
        data.carryover_cents,
        data.budgeted_period_cents,
        data.spent_period_cents,
    )
    if remaining < 0:
        return _overspent(remaining)

    if Cadence(data.cadence) == Cadence.WEEKLY:
        return _weekly_left_to_spend(data, remaining)
    return _monthly_left_to_spend(data, remaining)


def sum_left_today_from_categories(values: Iterable[LeftToSpend]) -> MoneyCents:
    return add_money(*(item.left_today_cents for item in values))


def get_week_date_range_for_transaction_scope(
    value: str,
    week_start: WeekDay,
    period_start_date: str,
    period_end_date: str,
) -> Optional[DateRange]:
    """Week window around ``value`` clipped to the period (None when disjoint)."""
    return intersect_ranges(
        get_week_range(value, week_start),
        DateRange(period_start_date, period_end_date),
    )
