from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Response

from .core.deps import get_services
from .domain.types import DATE_PATTERN
from .models import PaceStatus
from .schemas import (
    Alert,
    AlertRule,
    AlertRuleUpdate,
    Budget,
    BudgetSummary,
    BudgetUpsert,
    Category,
    CategoryCreate,
    CategorySummary,
    CategoryUpdate,
    CSVImportRequest,
    CSVImportResult,
    LeftToSpend,
    Period,
    PeriodCreate,
    RolloverRequest,
    Settings,
    SettingsUpdate,
    Transaction,
    TransactionCreate,
    TransactionFilter,
    TransactionUpdate,
)
from .services.context import Services

router = APIRouter()

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"


def _resolve_day(services: Services, date: Optional[str], week_start: Optional[int] = None) -> tuple[str, int]:
    # 기준일/주 시작 요일 미지정 시 오늘(로컬)과 설정값 사용
    day = date or services.context.clock.today_local()
    if week_start is None:
        week_start = services.settings.get_settings().week_start
    return day, week_start


# ===== Periods =====


@router.get("/periods", response_model=list[Period])
def list_periods(services: Services = Depends(get_services)):
    return services.periods.list_periods()


@router.post("/periods", response_model=Period, status_code=201)
def create_period(payload: PeriodCreate, services: Services = Depends(get_services)):
    return services.periods.create_period(payload)


@router.get("/periods/current", response_model=Optional[Period])
def get_current_period(services: Services = Depends(get_services)):
    return services.periods.get_current_period()


@router.post("/periods/next", response_model=Period, status_code=201)
def create_next_period(services: Services = Depends(get_services)):
    return services.periods.create_next_period()


@router.get("/periods/{period_id}", response_model=Period)
def get_period(period_id: str, services: Services = Depends(get_services)):
    return services.periods.get_period(period_id)


@router.post("/periods/{period_id}/close", response_model=Period)
def close_period(period_id: str, services: Services = Depends(get_services)):
    return services.periods.close_period(period_id)


# ===== Budgets / Summaries =====


@router.get("/periods/{period_id}/budgets", response_model=list[Budget])
def list_budgets(period_id: str, services: Services = Depends(get_services)):
    return services.budgets.list_budgets(period_id)


@router.put("/budgets", response_model=Budget)
def upsert_budget(payload: BudgetUpsert, services: Services = Depends(get_services)):
    return services.budgets.upsert_budget(payload)


@router.get("/periods/{period_id}/summary", response_model=BudgetSummary)
def get_budget_summary(
    period_id: str,
    date: Optional[str] = Query(None, pattern=DATE_PATTERN.pattern),
    week_start: Optional[int] = Query(None, ge=0, le=6),
    services: Services = Depends(get_services),
):
    day, week_start = _resolve_day(services, date, week_start)
    return services.budgets.get_budget_summary(period_id, day, week_start)


@router.get("/periods/{period_id}/categories/{category_id}/summary", response_model=CategorySummary)
def get_category_summary(
    period_id: str,
    category_id: str,
    date: Optional[str] = Query(None, pattern=DATE_PATTERN.pattern),
    week_start: Optional[int] = Query(None, ge=0, le=6),
    services: Services = Depends(get_services),
):
    day, week_start = _resolve_day(services, date, week_start)
    return services.budgets.get_category_summary(period_id, category_id, day, week_start)


@router.get("/periods/{period_id}/categories/{category_id}/left-to-spend", response_model=LeftToSpend)
def get_left_to_spend(
    period_id: str,
    category_id: str,
    date: Optional[str] = Query(None, pattern=DATE_PATTERN.pattern),
    week_start: Optional[int] = Query(None, ge=0, le=6),
    services: Services = Depends(get_services),
):
    day, week_start = _resolve_day(services, date, week_start)
    return services.calculations.compute_left_to_spend(period_id, category_id, day, week_start)


@router.get("/periods/{period_id}/categories/{category_id}/pace")
def get_pace_status(
    period_id: str,
    category_id: str,
    date: Optional[str] = Query(None, pattern=DATE_PATTERN.pattern),
    services: Services = Depends(get_services),
):
    day = date or services.context.clock.today_local()
    status: PaceStatus = services.calculations.compute_pace_status(period_id, category_id, day)
    return {"pace_status": status.value}


@router.post("/rollovers", response_model=list[Budget])
def apply_rollovers(payload: RolloverRequest, services: Services = Depends(get_services)):
    return services.budgets.apply_rollovers(payload.from_period_id, payload.to_period_id)


# ===== Categories =====


@router.get("/categories", response_model=list[Category])
def list_categories(
    include_archived: bool = Query(False),
    services: Services = Depends(get_services),
):
    return services.categories.list_categories(include_archived)


@router.post("/categories", response_model=Category, status_code=201)
def create_category(payload: CategoryCreate, services: Services = Depends(get_services)):
    return services.categories.create_category(payload)


@router.get("/categories/{category_id}", response_model=Category)
def get_category(category_id: str, services: Services = Depends(get_services)):
    return services.categories.get_category(category_id)


@router.patch("/categories/{category_id}", response_model=Category)
def update_category(category_id: str, payload: CategoryUpdate, services: Services = Depends(get_services)):
    return services.categories.update_category(category_id, payload)


@router.post("/categories/{category_id}/archive", response_model=Category)
def archive_category(category_id: str, services: Services = Depends(get_services)):
    return services.categories.archive_category(category_id)


# ===== Transactions =====


@router.get("/transactions", response_model=list[Transaction])
def list_transactions(
    filters: Annotated[TransactionFilter, Query()],
    services: Services = Depends(get_services),
):
    return services.transactions.list_transactions(filters)


@router.post("/transactions", response_model=Transaction, status_code=201)
def add_transaction(payload: TransactionCreate, services: Services = Depends(get_services)):
    return services.transactions.add_transaction(payload)


@router.get("/transactions/{tx_id}", response_model=Transaction)
def get_transaction(tx_id: str, services: Services = Depends(get_services)):
    return services.transactions.get_transaction(tx_id)


@router.patch("/transactions/{tx_id}", response_model=Transaction)
def update_transaction(tx_id: str, payload: TransactionUpdate, services: Services = Depends(get_services)):
    return services.transactions.update_transaction(tx_id, payload)


@router.delete("/transactions/{tx_id}", status_code=204)
def delete_transaction(tx_id: str, services: Services = Depends(get_services)):
    services.transactions.delete_transaction(tx_id)
    return Response(status_code=204)


# ===== Alerts =====


@router.post("/periods/{period_id}/alerts/evaluate", response_model=list[Alert])
def evaluate_alerts(
    period_id: str,
    date: Optional[str] = Query(None, pattern=DATE_PATTERN.pattern),
    services: Services = Depends(get_services),
):
    day = date or services.context.clock.today_local()
    return services.alerts.evaluate_alerts(period_id, day)


@router.get("/periods/{period_id}/alerts", response_model=list[Alert])
def list_alerts(
    period_id: str,
    open_only: bool = Query(True),
    services: Services = Depends(get_services),
):
    if open_only:
        return services.alerts.list_open_alerts(period_id)
    return services.alerts.list_alerts(period_id)


@router.post("/alerts/{alert_id}/dismiss", response_model=Alert)
def dismiss_alert(alert_id: str, services: Services = Depends(get_services)):
    return services.alerts.dismiss_alert(alert_id)


@router.get("/alert-rules/{category_id}", response_model=AlertRule)
def get_alert_rule(category_id: str, services: Services = Depends(get_services)):
    return services.alerts.get_alert_rules(category_id)


@router.put("/alert-rules/{category_id}", response_model=AlertRule)
def set_alert_rule(category_id: str, payload: AlertRuleUpdate, services: Services = Depends(get_services)):
    rule = AlertRule(category_id=category_id, **payload.model_dump())
    return services.alerts.set_alert_rule(rule)


# ===== Settings =====


@router.get("/settings", response_model=Settings)
def get_settings(services: Services = Depends(get_services)):
    return services.settings.get_settings()


@router.patch("/settings", response_model=Settings)
def update_settings(payload: SettingsUpdate, services: Services = Depends(get_services)):
    return services.settings.update_settings(payload)


# ===== CSV =====


@router.get("/export/transactions")
def export_transactions(
    period_id: Optional[str] = Query(None),
    services: Services = Depends(get_services),
):
    content = services.csv.export_transactions(period_id)
    return Response(
        content=content,
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="transactions.csv"'},
    )


@router.get("/periods/{period_id}/export/budgets")
def export_budget_snapshot(period_id: str, services: Services = Depends(get_services)):
    content = services.csv.export_budget_snapshot(period_id)
    return Response(
        content=content,
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="budgets-{period_id}.csv"'},
    )


@router.post("/import/transactions", response_model=CSVImportResult)
def import_transactions(payload: CSVImportRequest, services: Services = Depends(get_services)):
    return services.csv.import_transactions(payload.content, payload.period_id)
