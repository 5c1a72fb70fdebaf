"""
Services 패키지

비즈니스 로직 서비스 클래스들을 제공합니다.
"""

from .alert_service import AlertService
from .budget_service import BudgetService
from .calculation_service import CalculationService
from .category_service import CategoryService
from .context import ServiceContext, Services, build_services, memory_context, sql_context
from .csv_service import CSVService
from .period_service import PeriodService
from .settings_service import SettingsService
from .transaction_service import TransactionService

__all__ = [
    "AlertService",
    "BudgetService",
    "CalculationService",
    "CategoryService",
    "CSVService",
    "PeriodService",
    "SettingsService",
    "TransactionService",
    "ServiceContext",
    "Services",
    "build_services",
    "memory_context",
    "sql_context",
]
