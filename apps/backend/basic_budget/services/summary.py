"""
예산 요약(Summary) 조립

카테고리별로 기간 예산/지출/잔액/Left-to-Spend/진행 상태를 계산하고,
기간 전체 합계(수입, 배정, 지출, 잔액, 미배정)를 묶어 BudgetSummary 를 만듭니다.
"""

from __future__ import annotations

from .. import schemas
from ..domain.budgets import calculate_budgeted_period_cents
from ..domain.dates import DateRange
from ..domain.left_to_spend import (
    LeftToSpendInput,
    compute_left_to_spend,
    get_week_date_range_for_transaction_scope,
)
from ..domain.money import add_money, sub_money, zero_money
from ..domain.pace import compute_pace_status
from ..domain.types import WeekDay
from .context import ServiceContext


def build_category_summary(
    ctx: ServiceContext,
    period: schemas.Period,
    category: schemas.Category,
    budget: schemas.Budget,
    date: str,
    week_start: WeekDay,
) -> schemas.CategorySummary:
    """
    카테고리 단일 요약

    Args:
        ctx: 서비스 컨텍스트
        period: 대상 기간
        category: 대상 카테고리 (보관 여부와 무관)
        budget: 해당 기간/카테고리 예산
        date: 기준일 (오늘)
        week_start: 주 시작 요일 (0=일요일)

    Returns:
        CategorySummary
    """
    period_range = DateRange(period.start_date, period.end_date)
    budgeted_period_cents = calculate_budgeted_period_cents(
        budget.cadence,
        budget.amount_cents,
        period_range,
        week_start,
    )

    spent_cents = ctx.repos.transactions.sum_spent_in_period(period.id, category.id)

    # 주간 지출은 기간 경계로 잘라낸 이번 주 창에서만 집계
    week_range = get_week_date_range_for_transaction_scope(date, week_start, period.start_date, period.end_date)
    if week_range is None:
        spent_week_cents = zero_money()
    else:
        spent_week_cents = ctx.repos.transactions.sum_spent_in_date_range(
            period.id,
            category.id,
            week_range.start_date,
            week_range.end_date,
        )

    left_to_spend = compute_left_to_spend(
        LeftToSpendInput(
            cadence=budget.cadence,
            amount_cents=budget.amount_cents,
            carryover_cents=budget.carryover_cents,
            spent_period_cents=spent_cents,
            spent_week_cents=spent_week_cents,
            budgeted_period_cents=budgeted_period_cents,
            period_start_date=period.start_date,
            period_end_date=period.end_date,
            date=date,
            week_start=week_start,
        )
    )

    remaining_cents = left_to_spend.remaining_period_cents
    pace_status = compute_pace_status(
        budgeted_period_cents,
        remaining_cents,
        period.start_date,
        period.end_date,
        date,
    )

    return schemas.CategorySummary(
        category_id=category.id,
        category=category,
        budget=budget,
        budgeted_period_cents=budgeted_period_cents,
        spent_cents=spent_cents,
        remaining_cents=remaining_cents,
        carryover_cents=budget.carryover_cents,
        left_to_spend=left_to_spend,
        pace_status=pace_status,
    )


def build_budget_summary(
    ctx: ServiceContext,
    period: schemas.Period,
    date: str,
    week_start: WeekDay,
) -> schemas.BudgetSummary:
    budgets = ctx.repos.budgets.get_by_period(period.id)
    categories = {c.id: c for c in ctx.repos.categories.list(include_archived=True)}

    summaries: list[schemas.CategorySummary] = []
    for budget in budgets:
        category = categories.get(budget.category_id)
        if category is None:
            continue
        summaries.append(build_category_summary(ctx, period, category, budget, date, week_start))

    total_allocated = add_money(*(s.budgeted_period_cents for s in summaries))
    total_spent = add_money(*(s.spent_cents for s in summaries))
    total_remaining = add_money(*(s.remaining_cents for s in summaries))

    return schemas.BudgetSummary(
        period_id=period.id,
        period=period,
        total_income_cents=period.income_cents,
        total_allocated_cents=total_allocated,
        total_spent_cents=total_spent,
        total_remaining_cents=total_remaining,
        unallocated_cents=sub_money(period.income_cents, total_allocated),
        categories=summaries,
    )
