"""
저장소 계약 (Repository ports)

서비스는 이 Protocol들에만 의존합니다. 어떤 저장 엔진이든 (SQLAlchemy/SQLite,
인메모리 등) 아래 메서드를 만족하면 교체 가능합니다.

공통 규칙:
- get_* 은 없으면 None 반환 (NotFoundError 판단은 서비스 책임)
- 각 쓰기 호출은 그 자체로 원자적, 여러 호출을 묶는 트랜잭션은 없음
- soft-delete 된 거래는 모든 조회/합계에서 제외
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from .. import schemas
from ..models import CycleType


class PeriodRepository(Protocol):
    def insert(self, period: schemas.Period) -> None: ...

    def get_by_id(self, period_id: str) -> Optional[schemas.Period]: ...

    def get_current_by_date(self, date: str, cycle_type: Optional[CycleType] = None) -> Optional[schemas.Period]: ...

    def list(self) -> list[schemas.Period]: ...

    def close(self, period_id: str, closed_at: str) -> None: ...


class CategoryRepository(Protocol):
    def insert(self, category: schemas.Category) -> None: ...

    def update(self, category: schemas.Category) -> None: ...

    def archive(self, category_id: str, archived_at: str) -> None: ...

    def get_by_id(self, category_id: str) -> Optional[schemas.Category]: ...

    def list(self, include_archived: bool = False) -> list[schemas.Category]: ...


class BudgetRepository(Protocol):
    def upsert(self, budget: schemas.Budget) -> None: ...

    def get_by_id(self, budget_id: str) -> Optional[schemas.Budget]: ...

    def get_by_period(self, period_id: str) -> list[schemas.Budget]: ...

    def get_by_period_and_category(self, period_id: str, category_id: str) -> Optional[schemas.Budget]: ...


class TransactionRepository(Protocol):
    def insert(self, tx: schemas.Transaction) -> None: ...

    def update(self, tx: schemas.Transaction) -> None: ...

    def soft_delete(self, tx_id: str, deleted_at: str) -> None: ...

    def get_by_id(self, tx_id: str) -> Optional[schemas.Transaction]: ...

    def list(self, filter: schemas.TransactionFilter) -> list[schemas.Transaction]: ...

    def sum_spent_in_period(self, period_id: str, category_id: Optional[str] = None) -> int: ...

    def sum_spent_in_date_range(
        self,
        period_id: str,
        category_id: str,
        start_date: str,
        end_date: str,
    ) -> int: ...


class SettingsRepository(Protocol):
    def get(self) -> schemas.Settings: ...

    def update(self, patch: dict) -> schemas.Settings: ...


class AlertRepository(Protocol):
    def get_rule(self, category_id: str) -> schemas.AlertRule: ...

    def set_rule(self, rule: schemas.AlertRule) -> None: ...

    def insert(self, alert: schemas.Alert) -> None: ...

    def get_by_id(self, alert_id: str) -> Optional[schemas.Alert]: ...

    def list_by_period(self, period_id: str) -> list[schemas.Alert]: ...

    def list_open_by_period_and_category(self, period_id: str, category_id: str) -> list[schemas.Alert]: ...

    def dismiss(self, alert_id: str, dismissed_at: str) -> None: ...


class ImportBatchRepository(Protocol):
    def insert(self, batch: schemas.ImportBatch) -> None: ...

    def finish(
        self,
        batch_id: str,
        finished_at: str,
        imported_count: int,
        duplicates_count: int,
        error_count: int,
        notes: Optional[str] = None,
    ) -> None: ...

    def get_by_id(self, batch_id: str) -> Optional[schemas.ImportBatch]: ...


def default_alert_rule(category_id: str) -> schemas.AlertRule:
    # 저장된 규칙이 없을 때의 기본값 (저장하지 않음)
    return schemas.AlertRule(category_id=category_id, approaching_limit_percent=80, enabled=True)


@dataclass
class Repositories:
    periods: PeriodRepository
    categories: CategoryRepository
    budgets: BudgetRepository
    transactions: TransactionRepository
    settings: SettingsRepository
    alerts: AlertRepository
    import_batches: ImportBatchRepository
