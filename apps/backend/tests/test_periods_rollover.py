"""
기간 해석 / 이월 규칙 테스트
"""

import pytest

from basic_budget.domain.dates import DateRange
from basic_budget.domain.periods import (
    create_next_period_range,
    get_day_after_period,
    is_date_in_period,
    resolve_current_period_range,
)
from basic_budget.domain.rollover import compute_carryover_from_remaining
from basic_budget.models import CycleType, RolloverRule


class TestPeriodResolution:
    def test_monthly_current(self):
        assert resolve_current_period_range(CycleType.MONTHLY, "2026-04-16", None) == DateRange(
            "2026-04-01", "2026-04-30"
        )

    def test_biweekly_current_with_anchor(self):
        current = resolve_current_period_range(CycleType.BIWEEKLY, "2026-01-20", "2026-01-02")
        assert current == DateRange("2026-01-16", "2026-01-29")

    def test_biweekly_without_anchor_starts_today(self):
        current = resolve_current_period_range("biweekly", "2026-04-16", None)
        assert current == DateRange("2026-04-16", "2026-04-29")

    def test_next_period_is_contiguous(self):
        current = DateRange("2026-12-01", "2026-12-31")
        nxt = create_next_period_range(CycleType.MONTHLY, current, None)
        assert nxt.start_date == get_day_after_period(current)
        assert nxt == DateRange("2027-01-01", "2027-01-31")

    def test_is_date_in_period(self):
        period = DateRange("2026-04-01", "2026-04-30")
        assert is_date_in_period("2026-04-30", period)
        assert not is_date_in_period("2026-03-31", period)


class TestRollover:
    @pytest.mark.parametrize("remaining", [-5000, 0, 1, 12345])
    def test_reset_always_zero(self, remaining):
        assert compute_carryover_from_remaining(RolloverRule.RESET, remaining) == 0

    @pytest.mark.parametrize("remaining,expected", [(-5000, 0), (0, 0), (1, 1), (12345, 12345)])
    def test_pos_drops_negative(self, remaining, expected):
        assert compute_carryover_from_remaining(RolloverRule.POS, remaining) == expected

    @pytest.mark.parametrize("remaining", [-5000, 0, 1, 12345])
    def test_pos_neg_is_identity(self, remaining):
        assert compute_carryover_from_remaining("pos_neg", remaining) == remaining
