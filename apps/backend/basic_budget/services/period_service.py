"""
기간(Period) 서비스

책임:
- 오늘이 속한 기간 조회
- 기간 생성 / 다음 기간 생성 (월간 또는 2주 단위)
- 기간 마감 (open → closed, 되돌릴 수 없음)
"""

from __future__ import annotations

import logging
from typing import Optional

from .. import schemas
from ..core.errors import ConflictError
from ..domain.dates import DateRange, compare_date_strings
from ..domain.periods import create_next_period_range, resolve_current_period_range
from .context import ServiceContext
from .internal import ensure, require_value

logger = logging.getLogger(__name__)


class PeriodService:
    def __init__(self, ctx: ServiceContext):
        self.ctx = ctx
        self.repos = ctx.repos

    def get_current_period(self) -> Optional[schemas.Period]:
        """설정의 주기 유형 기준, 오늘(로컬 날짜)을 포함하는 기간. 없으면 None"""
        settings = self.repos.settings.get()
        today = self.ctx.clock.today_local()
        return self.repos.periods.get_current_by_date(today, settings.cycle_type)

    def get_period(self, period_id: str) -> schemas.Period:
        return require_value(self.repos.periods.get_by_id(period_id), f"Period not found: {period_id}")

    def create_period(self, data: schemas.PeriodCreate) -> schemas.Period:
        ensure(compare_date_strings(data.start_date, data.end_date) <= 0, "start_date must be <= end_date")
        ensure(data.income_cents >= 0, "income_cents must be >= 0")

        period = schemas.Period(
            id=self.ctx.ids.next(),
            cycle_type=data.cycle_type,
            start_date=data.start_date,
            end_date=data.end_date,
            income_cents=data.income_cents,
            created_at=self.ctx.clock.now(),
            closed_at=None,
        )
        self.repos.periods.insert(period)
        logger.info("period created id=%s %s..%s", period.id, period.start_date, period.end_date)
        return period

    def create_next_period(self) -> schemas.Period:
        """
        다음 기간 생성

        - 기간이 하나도 없으면: 설정(주기, 2주 기준일)과 오늘 날짜로 현재 기간을 생성 (수입 0)
        - 있으면: 가장 최근 기간 다음 구간을 같은 주기/수입으로 생성
        """
        settings = self.repos.settings.get()
        periods = self.repos.periods.list()

        if not periods:
            today = self.ctx.clock.today_local()
            current = resolve_current_period_range(settings.cycle_type, today, settings.biweekly_anchor_date)
            return self.create_period(
                schemas.PeriodCreate(
                    cycle_type=settings.cycle_type,
                    start_date=current.start_date,
                    end_date=current.end_date,
                    income_cents=0,
                )
            )

        latest = periods[0]
        next_range = create_next_period_range(
            latest.cycle_type,
            DateRange(latest.start_date, latest.end_date),
            settings.biweekly_anchor_date,
        )
        return self.create_period(
            schemas.PeriodCreate(
                cycle_type=latest.cycle_type,
                start_date=next_range.start_date,
                end_date=next_range.end_date,
                income_cents=latest.income_cents,
            )
        )

    def close_period(self, period_id: str) -> schemas.Period:
        period = self.get_period(period_id)
        if period.is_closed:
            raise ConflictError(f"Period already closed: {period_id}")

        closed_at = self.ctx.clock.now()
        self.repos.periods.close(period_id, closed_at)
        logger.info("period closed id=%s", period_id)
        return period.model_copy(update={"closed_at": closed_at})

    def list_periods(self) -> list[schemas.Period]:
        return self.repos.periods.list()
