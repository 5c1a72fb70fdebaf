"""
인메모리 저장소 구현 (테스트/임시 실행용)

SQL 구현과 동일한 계약을 dict 기반으로 제공합니다. 조회 결과는 항상 사본을
돌려주므로 호출자가 반환값을 수정해도 저장된 상태는 바뀌지 않습니다.
"""

from __future__ import annotations

from typing import Optional

from .. import schemas
from ..core.errors import PersistenceError
from ..models import CycleType
from .base import Repositories, default_alert_rule


def _copy(entity):
    return entity.model_copy(deep=True) if entity is not None else None


def _spent(rows) -> int:
    return -sum(tx.amount_cents for tx in rows if tx.amount_cents < 0)


class MemoryPeriodRepository:
    def __init__(self) -> None:
        self.rows: dict[str, schemas.Period] = {}

    def insert(self, period: schemas.Period) -> None:
        if period.id in self.rows:
            raise PersistenceError(f"Duplicate period id {period.id}")
        self.rows[period.id] = _copy(period)

    def get_by_id(self, period_id: str) -> Optional[schemas.Period]:
        return _copy(self.rows.get(period_id))

    def get_current_by_date(self, date: str, cycle_type: Optional[CycleType] = None) -> Optional[schemas.Period]:
        matches = [
            p
            for p in self.rows.values()
            if p.start_date <= date <= p.end_date and (cycle_type is None or p.cycle_type == cycle_type)
        ]
        if not matches:
            return None
        return _copy(max(matches, key=lambda p: p.start_date))

    def list(self) -> list[schemas.Period]:
        return [_copy(p) for p in sorted(self.rows.values(), key=lambda p: p.start_date, reverse=True)]

    def close(self, period_id: str, closed_at: str) -> None:
        if period_id in self.rows:
            self.rows[period_id].closed_at = closed_at


class MemoryCategoryRepository:
    def __init__(self) -> None:
        self.rows: dict[str, schemas.Category] = {}

    def insert(self, category: schemas.Category) -> None:
        if category.id in self.rows:
            raise PersistenceError(f"Duplicate category id {category.id}")
        self.rows[category.id] = _copy(category)

    def update(self, category: schemas.Category) -> None:
        current = self.rows.get(category.id)
        if current is None:
            return
        # archived_at 은 archive() 로만 변경
        self.rows[category.id] = category.model_copy(update={"archived_at": current.archived_at}, deep=True)

    def archive(self, category_id: str, archived_at: str) -> None:
        if category_id in self.rows:
            self.rows[category_id].archived_at = archived_at

    def get_by_id(self, category_id: str) -> Optional[schemas.Category]:
        return _copy(self.rows.get(category_id))

    def list(self, include_archived: bool = False) -> list[schemas.Category]:
        rows = [c for c in self.rows.values() if include_archived or c.archived_at is None]
        return [_copy(c) for c in sorted(rows, key=lambda c: c.name)]


class MemoryBudgetRepository:
    def __init__(self) -> None:
        self.rows: dict[str, schemas.Budget] = {}

    def upsert(self, budget: schemas.Budget) -> None:
        existing = self._find(budget.period_id, budget.category_id)
        if existing is None:
            self.rows[budget.id] = _copy(budget)
            return
        self.rows[existing.id] = budget.model_copy(
            update={"id": existing.id, "created_at": existing.created_at},
            deep=True,
        )

    def _find(self, period_id: str, category_id: str) -> Optional[schemas.Budget]:
        for budget in self.rows.values():
            if budget.period_id == period_id and budget.category_id == category_id:
                return budget
        return None

    def get_by_id(self, budget_id: str) -> Optional[schemas.Budget]:
        return _copy(self.rows.get(budget_id))

    def get_by_period(self, period_id: str) -> list[schemas.Budget]:
        rows = [b for b in self.rows.values() if b.period_id == period_id]
        return [_copy(b) for b in sorted(rows, key=lambda b: b.created_at)]

    def get_by_period_and_category(self, period_id: str, category_id: str) -> Optional[schemas.Budget]:
        return _copy(self._find(period_id, category_id))


class MemoryTransactionRepository:
    def __init__(self) -> None:
        self.rows: dict[str, schemas.Transaction] = {}

    def _live(self):
        return (tx for tx in self.rows.values() if tx.deleted_at is None)

    def insert(self, tx: schemas.Transaction) -> None:
        if tx.id in self.rows:
            raise PersistenceError(f"Duplicate transaction id {tx.id}")
        self.rows[tx.id] = _copy(tx)

    def update(self, tx: schemas.Transaction) -> None:
        if tx.id in self.rows:
            self.rows[tx.id] = _copy(tx)

    def soft_delete(self, tx_id: str, deleted_at: str) -> None:
        tx = self.rows.get(tx_id)
        if tx is not None:
            tx.deleted_at = deleted_at
            tx.updated_at = deleted_at

    def get_by_id(self, tx_id: str) -> Optional[schemas.Transaction]:
        tx = self.rows.get(tx_id)
        if tx is None or tx.deleted_at is not None:
            return None
        return _copy(tx)

    def list(self, filter: schemas.TransactionFilter) -> list[schemas.Transaction]:
        rows = list(self._live())
        if filter.period_id:
            rows = [tx for tx in rows if tx.period_id == filter.period_id]
        if filter.category_id:
            rows = [tx for tx in rows if tx.category_id == filter.category_id]
        if filter.start_date:
            rows = [tx for tx in rows if tx.date >= filter.start_date]
        if filter.end_date:
            rows = [tx for tx in rows if tx.date <= filter.end_date]
        if filter.source:
            rows = [tx for tx in rows if tx.source == filter.source]
        if filter.status:
            rows = [tx for tx in rows if tx.status == filter.status]
        rows.sort(key=lambda tx: (tx.date, tx.created_at), reverse=True)
        return [_copy(tx) for tx in rows]

    def sum_spent_in_period(self, period_id: str, category_id: Optional[str] = None) -> int:
        return _spent(
            tx
            for tx in self._live()
            if tx.period_id == period_id and (not category_id or tx.category_id == category_id)
        )

    def sum_spent_in_date_range(
        self,
        period_id: str,
        category_id: str,
        start_date: str,
        end_date: str,
    ) -> int:
        return _spent(
            tx
            for tx in self._live()
            if tx.period_id == period_id
            and tx.category_id == category_id
            and start_date <= tx.date <= end_date
        )


class MemorySettingsRepository:
    def __init__(self, initial: Optional[schemas.Settings] = None) -> None:
        self.row = _copy(initial) if initial is not None else schemas.Settings()

    def get(self) -> schemas.Settings:
        return _copy(self.row)

    def update(self, patch: dict) -> schemas.Settings:
        self.row = schemas.Settings.model_validate({**self.row.model_dump(), **patch})
        return _copy(self.row)


class MemoryAlertRepository:
    def __init__(self) -> None:
        self.rules: dict[str, schemas.AlertRule] = {}
        self.rows: dict[str, schemas.Alert] = {}

    def get_rule(self, category_id: str) -> schemas.AlertRule:
        rule = self.rules.get(category_id)
        return _copy(rule) if rule is not None else default_alert_rule(category_id)

    def set_rule(self, rule: schemas.AlertRule) -> None:
        self.rules[rule.category_id] = _copy(rule)

    def insert(self, alert: schemas.Alert) -> None:
        if alert.id in self.rows:
            raise PersistenceError(f"Duplicate alert id {alert.id}")
        self.rows[alert.id] = _copy(alert)

    def get_by_id(self, alert_id: str) -> Optional[schemas.Alert]:
        return _copy(self.rows.get(alert_id))

    def list_by_period(self, period_id: str) -> list[schemas.Alert]:
        rows = [a for a in self.rows.values() if a.period_id == period_id]
        return [_copy(a) for a in sorted(rows, key=lambda a: a.triggered_at, reverse=True)]

    def list_open_by_period_and_category(self, period_id: str, category_id: str) -> list[schemas.Alert]:
        return [
            _copy(a)
            for a in self.rows.values()
            if a.period_id == period_id and a.category_id == category_id and a.dismissed_at is None
        ]

    def dismiss(self, alert_id: str, dismissed_at: str) -> None:
        if alert_id in self.rows:
            self.rows[alert_id].dismissed_at = dismissed_at


class MemoryImportBatchRepository:
    def __init__(self) -> None:
        self.rows: dict[str, schemas.ImportBatch] = {}

    def insert(self, batch: schemas.ImportBatch) -> None:
        self.rows[batch.id] = _copy(batch)

    def finish(
        self,
        batch_id: str,
        finished_at: str,
        imported_count: int,
        duplicates_count: int,
        error_count: int,
        notes: Optional[str] = None,
    ) -> None:
        batch = self.rows.get(batch_id)
        if batch is None:
            return
        batch.finished_at = finished_at
        batch.imported_count = imported_count
        batch.duplicates_count = duplicates_count
        batch.error_count = error_count
        batch.notes = notes

    def get_by_id(self, batch_id: str) -> Optional[schemas.ImportBatch]:
        return _copy(self.rows.get(batch_id))


def create_memory_repositories(settings: Optional[schemas.Settings] = None) -> Repositories:
    return Repositories(
        periods=MemoryPeriodRepository(),
        categories=MemoryCategoryRepository(),
        budgets=MemoryBudgetRepository(),
        transactions=MemoryTransactionRepository(),
        settings=MemorySettingsRepository(settings),
        alerts=MemoryAlertRepository(),
        import_batches=MemoryImportBatchRepository(),
    )
