"""
저장소 패키지

- base: 서비스가 의존하는 Protocol 계약과 Repositories 묶음
- sql: SQLAlchemy 세션 기반 구현
- memory: 테스트용 인메모리 구현
"""

from .base import (
    AlertRepository,
    BudgetRepository,
    CategoryRepository,
    ImportBatchRepository,
    PeriodRepository,
    Repositories,
    SettingsRepository,
    TransactionRepository,
    default_alert_rule,
)
from .memory import create_memory_repositories
from .sql import create_sql_repositories

__all__ = [
    "AlertRepository",
    "BudgetRepository",
    "CategoryRepository",
    "ImportBatchRepository",
    "PeriodRepository",
    "Repositories",
    "SettingsRepository",
    "TransactionRepository",
    "default_alert_rule",
    "create_memory_repositories",
    "create_sql_repositories",
]
