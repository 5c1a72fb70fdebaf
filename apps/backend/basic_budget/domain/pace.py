from __future__ import annotations

from ..models import PaceStatus
from .dates import count_days_inclusive
from .money import as_money

WARNING_SPENT_RATIO = 0.8
WARNING_PACE_FACTOR = 1.1


def compute_pace_status(
    budgeted_period_cents: int,
    remaining_period_cents: int,
    period_start_date: str,
    period_end_date: str,
    date: str,
) -> PaceStatus:
    """
    카테고리 진행 상태 (on_track / warning / overspent)

    - 잔액 음수 → overspent
    - 예산 없음 또는 기간 시작 전 → on_track
    - 예산 대비 80% 이상 사용, 또는 경과일 기준 기대 지출의 110% 초과 → warning
    """
    if remaining_period_cents < 0:
        return PaceStatus.OVERSPENT

    if budgeted_period_cents <= 0:
        return PaceStatus.ON_TRACK

    total_days = count_days_inclusive(period_start_date, period_end_date)
    elapsed_days = count_days_inclusive(period_start_date, date)
    if total_days <= 0 or elapsed_days <= 0:
        return PaceStatus.ON_TRACK

    progress = min(1.0, elapsed_days / total_days)
    spent = as_money(budgeted_period_cents - remaining_period_cents)
    expected_spent = budgeted_period_cents * progress
    spent_ratio = spent / budgeted_period_cents

    if spent_ratio >= WARNING_SPENT_RATIO or spent > expected_spent * WARNING_PACE_FACTOR:
        return PaceStatus.WARNING

    return PaceStatus.ON_TRACK
