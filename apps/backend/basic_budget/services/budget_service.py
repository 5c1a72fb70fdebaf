"""
예산(Budget) 서비스

책임:
- (기간, 카테고리) 단위 예산 upsert
- 기간/카테고리 요약 조회
- 기간 종료 잔액 → 다음 기간 이월(rollover) 적용
"""

from __future__ import annotations

import logging

from .. import schemas
from ..domain.money import zero_money
from ..domain.rollover import compute_carryover_from_remaining
from ..domain.types import WeekDay, date_str, week_day
from .context import ServiceContext
from .internal import ensure, require_value
from .summary import build_budget_summary, build_category_summary

logger = logging.getLogger(__name__)


class BudgetService:
    def __init__(self, ctx: ServiceContext):
        self.ctx = ctx
        self.repos = ctx.repos

    def upsert_budget(self, data: schemas.BudgetUpsert) -> schemas.Budget:
        """
        예산 생성 또는 수정

        기존 (period_id, category_id) 예산이 있으면 id/created_at/carryover_cents 를
        그대로 유지합니다. 일반 수정으로 이월액이 초기화되지 않습니다.

        Raises:
            ValidationError: amount_cents < 0
            NotFoundError: 기간 또는 카테고리 없음
        """
        ensure(data.amount_cents >= 0, "Budget amount must be >= 0")
        require_value(self.repos.periods.get_by_id(data.period_id), f"Period not found: {data.period_id}")
        require_value(self.repos.categories.get_by_id(data.category_id), f"Category not found: {data.category_id}")

        existing = self.repos.budgets.get_by_period_and_category(data.period_id, data.category_id)
        budget = schemas.Budget(
            id=existing.id if existing else self.ctx.ids.next(),
            period_id=data.period_id,
            category_id=data.category_id,
            cadence=data.cadence,
            amount_cents=data.amount_cents,
            rollover_rule=data.rollover_rule,
            carryover_cents=existing.carryover_cents if existing else zero_money(),
            created_at=existing.created_at if existing else self.ctx.clock.now(),
        )
        self.repos.budgets.upsert(budget)
        return budget

    def list_budgets(self, period_id: str) -> list[schemas.Budget]:
        require_value(self.repos.periods.get_by_id(period_id), f"Period not found: {period_id}")
        return self.repos.budgets.get_by_period(period_id)

    def get_budget_summary(self, period_id: str, date: str, week_start: WeekDay) -> schemas.BudgetSummary:
        date = date_str(date)
        week_start = week_day(week_start)
        period = require_value(self.repos.periods.get_by_id(period_id), f"Period not found: {period_id}")
        return build_budget_summary(self.ctx, period, date, week_start)

    def get_category_summary(
        self,
        period_id: str,
        category_id: str,
        date: str,
        week_start: WeekDay,
    ) -> schemas.CategorySummary:
        date = date_str(date)
        week_start = week_day(week_start)
        period = require_value(self.repos.periods.get_by_id(period_id), f"Period not found: {period_id}")
        category = require_value(self.repos.categories.get_by_id(category_id), f"Category not found: {category_id}")
        budget = require_value(
            self.repos.budgets.get_by_period_and_category(period_id, category_id),
            f"Budget not found for category {category_id} in period {period_id}",
        )
        return build_category_summary(self.ctx, period, category, budget, date, week_start)

    def apply_rollovers(self, from_period_id: str, to_period_id: str) -> list[schemas.Budget]:
        """
        이월 적용

        원본 기간의 각 예산을 기간 마지막 날 기준으로 요약하고, 이월 규칙에 따라
        대상 기간 예산의 carryover_cents 만 덮어씁니다. 대상 예산이 이미 있으면
        그 예산의 cadence/amount/rule 은 유지됩니다.

        누적이 아닌 덮어쓰기이므로 같은 (from, to) 로 여러 번 실행해도 결과가 같습니다.

        Returns:
            갱신/생성된 대상 기간 예산 목록
        """
        from_period = require_value(self.repos.periods.get_by_id(from_period_id), f"Period not found: {from_period_id}")
        require_value(self.repos.periods.get_by_id(to_period_id), f"Period not found: {to_period_id}")
        settings = self.repos.settings.get()

        applied: list[schemas.Budget] = []
        for from_budget in self.repos.budgets.get_by_period(from_period_id):
            category = self.repos.categories.get_by_id(from_budget.category_id)
            if category is None:
                continue

            summary = build_category_summary(
                self.ctx,
                from_period,
                category,
                from_budget,
                from_period.end_date,
                settings.week_start,
            )
            carryover = compute_carryover_from_remaining(from_budget.rollover_rule, summary.remaining_cents)

            target = self.repos.budgets.get_by_period_and_category(to_period_id, from_budget.category_id)
            if target is None:
                next_budget = from_budget.model_copy(
                    update={
                        "id": self.ctx.ids.next(),
                        "period_id": to_period_id,
                        "carryover_cents": carryover,
                        "created_at": self.ctx.clock.now(),
                    }
                )
            else:
                next_budget = target.model_copy(update={"carryover_cents": carryover})

            self.repos.budgets.upsert(next_budget)
            applied.append(next_budget)

        logger.info(
            "rollovers applied from=%s to=%s budgets=%d",
            from_period_id,
            to_period_id,
            len(applied),
        )
        return applied
