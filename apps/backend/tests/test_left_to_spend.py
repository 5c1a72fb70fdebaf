"""
Left-to-Spend / 기간 예산 확장 / 진행 상태 계산 테스트
"""

from basic_budget.domain.budgets import calculate_budgeted_period_cents, calculate_remaining_period_cents
from basic_budget.domain.dates import DateRange
from basic_budget.domain.left_to_spend import (
    LeftToSpendInput,
    compute_left_to_spend,
    floor_positive,
    get_week_date_range_for_transaction_scope,
    remaining_days_in_week_within_period,
    sum_left_today_from_categories,
)
from basic_budget.domain.pace import compute_pace_status
from basic_budget.models import Cadence, PaceStatus
from basic_budget.schemas import LeftToSpend


def _input(**overrides) -> LeftToSpendInput:
    base = dict(
        cadence=Cadence.MONTHLY,
        amount_cents=30000,
        carryover_cents=0,
        spent_period_cents=12000,
        spent_week_cents=0,
        budgeted_period_cents=30000,
        period_start_date="2026-04-01",
        period_end_date="2026-04-30",
        date="2026-04-16",
        week_start=1,
    )
    base.update(overrides)
    return LeftToSpendInput(**base)


class TestMonthlyLeftToSpend:
    def test_reference_example(self):
        """기간 → 주 → 일 2단계 배분"""
        result = compute_left_to_spend(_input())

        assert result.remaining_period_cents == 18000
        assert result.left_this_week_cents == 4800
        assert result.left_today_cents == 1200
        assert result.is_overspent is False
        assert result.overspent_cents == 0

    def test_overspent(self):
        result = compute_left_to_spend(_input(budgeted_period_cents=10000, amount_cents=10000, spent_period_cents=11000))

        assert result.is_overspent is True
        assert result.overspent_cents == 1000
        assert result.remaining_period_cents == -1000
        assert result.left_today_cents == 0
        assert result.left_this_week_cents == 0

    def test_carryover_inflates_remaining(self):
        result = compute_left_to_spend(_input(carryover_cents=3000))
        assert result.remaining_period_cents == 21000
        # 21000 * 4/15 = 5600, 5600/4 = 1400
        assert result.left_this_week_cents == 5600
        assert result.left_today_cents == 1400

    def test_date_after_period_end(self):
        result = compute_left_to_spend(_input(date="2026-05-02"))
        assert result.remaining_period_cents == 18000
        assert result.left_today_cents == 0
        assert result.left_this_week_cents == 0
        assert result.is_overspent is False

    def test_last_day_of_period(self):
        """기간 마지막 날: 남은 잔액 전부가 오늘/이번 주 몫"""
        result = compute_left_to_spend(_input(date="2026-04-30"))
        assert result.left_this_week_cents == 18000
        assert result.left_today_cents == 18000


class TestWeeklyLeftToSpend:
    def _weekly(self, **overrides):
        params = dict(
            cadence=Cadence.WEEKLY,
            amount_cents=12000,
            budgeted_period_cents=60000,
            spent_period_cents=7000,
            spent_week_cents=7000,
            period_start_date="2026-02-01",
            period_end_date="2026-02-28",
            date="2026-02-10",
        )
        params.update(overrides)
        return _input(**params)

    def test_week_allowance_minus_week_spend(self):
        result = compute_left_to_spend(self._weekly())

        assert result.remaining_period_cents == 53000
        assert result.left_this_week_cents == 5000
        # 화요일 → 일요일까지 6일
        assert result.left_today_cents == 833
        assert result.is_overspent is False

    def test_week_spend_over_allowance_clamps_to_zero(self):
        result = compute_left_to_spend(self._weekly(spent_week_cents=15000, spent_period_cents=15000))
        assert result.left_this_week_cents == 0
        assert result.left_today_cents == 0
        assert result.is_overspent is False

    def test_partial_last_week_clipped_to_period(self):
        # 2026-02-27(금) → 주 끝은 03-01 이지만 기간 끝 02-28 까지 2일
        result = compute_left_to_spend(self._weekly(date="2026-02-27", spent_week_cents=0))
        assert result.left_this_week_cents == 12000
        assert result.left_today_cents == 6000


class TestHelpers:
    def test_floor_positive(self):
        assert floor_positive(12.9) == 12
        assert floor_positive(-3.2) == 0

    def test_remaining_days_in_week_within_period(self):
        period = DateRange("2026-04-01", "2026-04-30")
        assert remaining_days_in_week_within_period("2026-04-16", period, 1) == 4
        assert remaining_days_in_week_within_period("2026-04-29", period, 1) == 2

    def test_week_scope_clipped_to_period(self):
        scope = get_week_date_range_for_transaction_scope("2026-04-01", 1, "2026-04-01", "2026-04-30")
        assert scope == DateRange("2026-04-01", "2026-04-05")

    def test_week_scope_outside_period(self):
        assert get_week_date_range_for_transaction_scope("2026-06-10", 1, "2026-04-01", "2026-04-30") is None

    def test_sum_left_today(self):
        values = [
            LeftToSpend(
                remaining_period_cents=0,
                left_today_cents=v,
                left_this_week_cents=0,
                is_overspent=False,
            )
            for v in (1200, 833, 0)
        ]
        assert sum_left_today_from_categories(values) == 2033
        assert sum_left_today_from_categories([]) == 0


class TestBudgetExpansion:
    def test_monthly_amount_is_verbatim(self):
        period = DateRange("2026-02-01", "2026-02-28")
        assert calculate_budgeted_period_cents(Cadence.MONTHLY, 30000, period, 1) == 30000

    def test_weekly_amount_times_overlapping_weeks(self):
        period = DateRange("2026-02-01", "2026-02-28")
        assert calculate_budgeted_period_cents(Cadence.WEEKLY, 12000, period, 1) == 60000

    def test_remaining(self):
        assert calculate_remaining_period_cents(500, 30000, 12000) == 18500


class TestPaceStatus:
    def test_overspent(self):
        status = compute_pace_status(10000, -1, "2026-04-01", "2026-04-30", "2026-04-16")
        assert status == PaceStatus.OVERSPENT

    def test_no_budget_is_on_track(self):
        assert compute_pace_status(0, 0, "2026-04-01", "2026-04-30", "2026-04-16") == PaceStatus.ON_TRACK

    def test_before_period_is_on_track(self):
        assert compute_pace_status(30000, 1000, "2026-04-01", "2026-04-30", "2026-03-20") == PaceStatus.ON_TRACK

    def test_on_track_mid_period(self):
        # 16/30 경과, 40% 사용
        assert compute_pace_status(30000, 18000, "2026-04-01", "2026-04-30", "2026-04-16") == PaceStatus.ON_TRACK

    def test_warning_by_ratio(self):
        # 80% 사용
        assert compute_pace_status(30000, 6000, "2026-04-01", "2026-04-30", "2026-04-29") == PaceStatus.WARNING

    def test_warning_by_pace(self):
        # 3/30 경과 (기대 3000), 5000 사용 > 3300
        assert compute_pace_status(30000, 25000, "2026-04-01", "2026-04-30", "2026-04-03") == PaceStatus.WARNING
