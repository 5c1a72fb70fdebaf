from __future__ import annotations

from .. import schemas
from ..domain.types import WeekDay, date_str, week_day
from ..models import PaceStatus
from .context import ServiceContext
from .internal import require_value
from .summary import build_category_summary


class CalculationService:
    """단일 카테고리의 Left-to-Spend / 진행 상태 조회"""

    def __init__(self, ctx: ServiceContext):
        self.ctx = ctx
        self.repos = ctx.repos

    def _summary(self, period_id: str, category_id: str, date: str, week_start: WeekDay) -> schemas.CategorySummary:
        date = date_str(date)
        week_start = week_day(week_start)
        period = require_value(self.repos.periods.get_by_id(period_id), f"Period not found: {period_id}")
        category = require_value(self.repos.categories.get_by_id(category_id), f"Category not found: {category_id}")
        budget = require_value(
            self.repos.budgets.get_by_period_and_category(period_id, category_id),
            f"Budget not found for category {category_id} in period {period_id}",
        )
        return build_category_summary(self.ctx, period, category, budget, date, week_start)

    def compute_left_to_spend(
        self,
        period_id: str,
        category_id: str,
        date: str,
        week_start: WeekDay,
    ) -> schemas.LeftToSpend:
        return self._summary(period_id, category_id, date, week_start).left_to_spend

    def compute_pace_status(self, period_id: str, category_id: str, date: str) -> PaceStatus:
        settings = self.repos.settings.get()
        return self._summary(period_id, category_id, date, settings.week_start).pace_status
