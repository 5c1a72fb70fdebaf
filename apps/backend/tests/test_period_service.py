"""
PeriodService 테스트
"""

import pytest

from basic_budget import schemas
from basic_budget.core.errors import ConflictError, NotFoundError, ValidationError
from basic_budget.models import CycleType
from conftest import make_period


class TestCreateNextPeriod:
    def test_first_period_from_settings(self, services):
        """기간이 없으면 오늘(2026-04-16)이 속한 월"""
        period = services.periods.create_next_period()

        assert period.cycle_type == CycleType.MONTHLY
        assert (period.start_date, period.end_date) == ("2026-04-01", "2026-04-30")
        assert period.income_cents == 0
        assert period.closed_at is None

    def test_next_after_latest_carries_income(self, services):
        make_period(services, start="2026-03-01", end="2026-03-31", income_cents=100)
        make_period(services, start="2026-04-01", end="2026-04-30", income_cents=420000)

        nxt = services.periods.create_next_period()

        assert (nxt.start_date, nxt.end_date) == ("2026-05-01", "2026-05-31")
        assert nxt.income_cents == 420000

    def test_biweekly_with_anchor(self, services):
        services.settings.update_settings({"cycle_type": "biweekly", "biweekly_anchor_date": "2026-04-03"})

        first = services.periods.create_next_period()
        second = services.periods.create_next_period()

        assert (first.start_date, first.end_date) == ("2026-04-03", "2026-04-16")
        assert (second.start_date, second.end_date) == ("2026-04-17", "2026-04-30")
        assert second.cycle_type == CycleType.BIWEEKLY


class TestCurrentPeriod:
    def test_current_period(self, services):
        april = make_period(services)
        make_period(services, start="2026-05-01", end="2026-05-31")

        assert services.periods.get_current_period().id == april.id

    def test_no_current_period(self, services):
        make_period(services, start="2026-05-01", end="2026-05-31")
        assert services.periods.get_current_period() is None

    def test_cycle_type_filter(self, services):
        make_period(services)
        services.settings.update_settings({"cycle_type": "biweekly"})
        assert services.periods.get_current_period() is None


class TestPeriodLifecycle:
    def test_close_is_one_way(self, services):
        period = make_period(services)

        closed = services.periods.close_period(period.id)
        assert closed.is_closed
        assert services.periods.get_period(period.id).closed_at == closed.closed_at

        with pytest.raises(ConflictError):
            services.periods.close_period(period.id)

    def test_close_missing(self, services):
        with pytest.raises(NotFoundError):
            services.periods.close_period("missing")

    def test_get_missing(self, services):
        with pytest.raises(NotFoundError):
            services.periods.get_period("missing")

    def test_invalid_inputs(self, services):
        with pytest.raises(ValidationError):
            make_period(services, start="2026-04-30", end="2026-04-01")
        with pytest.raises(ValidationError):
            make_period(services, income_cents=-1)
        assert services.periods.list_periods() == []

    def test_list_newest_first(self, services):
        make_period(services, start="2026-03-01", end="2026-03-31")
        make_period(services, start="2026-05-01", end="2026-05-31")
        make_period(services)

        starts = [p.start_date for p in services.periods.list_periods()]
        assert starts == ["2026-05-01", "2026-04-01", "2026-03-01"]

    def test_schema_rejects_bad_date(self):
        with pytest.raises(ValueError):
            schemas.PeriodCreate(cycle_type="monthly", start_date="2026/04/01", end_date="2026-04-30")

    def test_schema_rejects_impossible_calendar_date(self):
        with pytest.raises(ValueError):
            schemas.PeriodCreate(cycle_type="monthly", start_date="2026-02-01", end_date="2026-02-30")
        with pytest.raises(ValueError):
            schemas.SettingsUpdate(biweekly_anchor_date="2026-13-01")
