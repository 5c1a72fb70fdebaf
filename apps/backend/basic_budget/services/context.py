"""
서비스 컨텍스트

서비스들이 공유하는 의존성(저장소 묶음, 시계, id 발급기)을 한 곳에 모읍니다.
설정(settings)은 전역이 아니라 SettingsRepository 를 통해 명시적으로 읽습니다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from sqlalchemy.orm import Session

from .. import schemas
from ..core.clock import Clock, IdProvider, SystemClock, UuidProvider
from ..repositories.base import Repositories
from ..repositories.memory import create_memory_repositories
from ..repositories.sql import create_sql_repositories

if TYPE_CHECKING:
    from .alert_service import AlertService
    from .budget_service import BudgetService
    from .calculation_service import CalculationService
    from .category_service import CategoryService
    from .csv_service import CSVService
    from .period_service import PeriodService
    from .settings_service import SettingsService
    from .transaction_service import TransactionService


@dataclass
class ServiceContext:
    repos: Repositories
    clock: Clock = field(default_factory=SystemClock)
    ids: IdProvider = field(default_factory=UuidProvider)


@dataclass
class Services:
    context: ServiceContext
    periods: "PeriodService"
    categories: "CategoryService"
    budgets: "BudgetService"
    transactions: "TransactionService"
    alerts: "AlertService"
    csv: "CSVService"
    settings: "SettingsService"
    calculations: "CalculationService"


def build_services(ctx: ServiceContext) -> Services:
    from .alert_service import AlertService
    from .budget_service import BudgetService
    from .calculation_service import CalculationService
    from .category_service import CategoryService
    from .csv_service import CSVService
    from .period_service import PeriodService
    from .settings_service import SettingsService
    from .transaction_service import TransactionService

    return Services(
        context=ctx,
        periods=PeriodService(ctx),
        categories=CategoryService(ctx),
        budgets=BudgetService(ctx),
        transactions=TransactionService(ctx),
        alerts=AlertService(ctx),
        csv=CSVService(ctx),
        settings=SettingsService(ctx),
        calculations=CalculationService(ctx),
    )


def sql_context(
    db: Session,
    clock: Optional[Clock] = None,
    ids: Optional[IdProvider] = None,
) -> ServiceContext:
    return ServiceContext(
        repos=create_sql_repositories(db),
        clock=clock or SystemClock(),
        ids=ids or UuidProvider(),
    )


def memory_context(
    clock: Optional[Clock] = None,
    ids: Optional[IdProvider] = None,
    settings: Optional[schemas.Settings] = None,
) -> ServiceContext:
    return ServiceContext(
        repos=create_memory_repositories(settings),
        clock=clock or SystemClock(),
        ids=ids or UuidProvider(),
    )
