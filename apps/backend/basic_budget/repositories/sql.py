"""
SQLAlchemy 기반 저장소 구현

- ORM 행(models) ↔ 도메인 엔티티(schemas) 매핑만 담당
- 쓰기 호출마다 commit (호출 단위 원자성)
- SQLAlchemyError 는 rollback 후 PersistenceError 로 변환
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import models, schemas
from ..core.errors import PersistenceError
from .base import Repositories, default_alert_rule

logger = logging.getLogger(__name__)


class _SqlRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    @contextmanager
    def _write(self, action: str) -> Iterator[Session]:
        try:
            yield self.db
            self.db.commit()
        except (SQLAlchemyError, OverflowError) as exc:
            # OverflowError: DB-API 드라이버가 범위 밖 정수 바인딩 시 직접 발생
            self.db.rollback()
            logger.error("persistence failure during %s: %s", action, exc)
            raise PersistenceError(f"Failed to {action}", exc) from exc


class SqlPeriodRepository(_SqlRepository):
    def insert(self, period: schemas.Period) -> None:
        with self._write("insert period") as db:
            db.add(models.Period(**period.model_dump()))

    def get_by_id(self, period_id: str) -> Optional[schemas.Period]:
        row = self.db.get(models.Period, period_id)
        return schemas.Period.model_validate(row) if row else None

    def get_current_by_date(
        self, date: str, cycle_type: Optional[models.CycleType] = None
    ) -> Optional[schemas.Period]:
        stmt = select(models.Period).where(
            models.Period.start_date <= date,
            models.Period.end_date >= date,
        )
        if cycle_type is not None:
            stmt = stmt.where(models.Period.cycle_type == cycle_type)
        row = self.db.execute(stmt.order_by(models.Period.start_date.desc()).limit(1)).scalar_one_or_none()
        return schemas.Period.model_validate(row) if row else None

    def list(self) -> list[schemas.Period]:
        rows = self.db.execute(select(models.Period).order_by(models.Period.start_date.desc())).scalars()
        return [schemas.Period.model_validate(r) for r in rows]

    def close(self, period_id: str, closed_at: str) -> None:
        with self._write("close period") as db:
            db.execute(update(models.Period).where(models.Period.id == period_id).values(closed_at=closed_at))


class SqlCategoryRepository(_SqlRepository):
    def insert(self, category: schemas.Category) -> None:
        with self._write("insert category") as db:
            db.add(models.Category(**category.model_dump()))

    def update(self, category: schemas.Category) -> None:
        with self._write("update category") as db:
            db.execute(
                update(models.Category)
                .where(models.Category.id == category.id)
                .values(name=category.name, kind=category.kind, icon=category.icon, color=category.color)
            )

    def archive(self, category_id: str, archived_at: str) -> None:
        with self._write("archive category") as db:
            db.execute(
                update(models.Category).where(models.Category.id == category_id).values(archived_at=archived_at)
            )

    def get_by_id(self, category_id: str) -> Optional[schemas.Category]:
        row = self.db.get(models.Category, category_id)
        return schemas.Category.model_validate(row) if row else None

    def list(self, include_archived: bool = False) -> list[schemas.Category]:
        stmt = select(models.Category)
        if not include_archived:
            stmt = stmt.where(models.Category.archived_at.is_(None))
        rows = self.db.execute(stmt.order_by(models.Category.name)).scalars()
        return [schemas.Category.model_validate(r) for r in rows]


class SqlBudgetRepository(_SqlRepository):
    def upsert(self, budget: schemas.Budget) -> None:
        # (period_id, category_id) 유일: 기존 행이 있으면 그 행을 갱신
        with self._write("upsert budget") as db:
            existing = db.execute(
                select(models.Budget).where(
                    models.Budget.period_id == budget.period_id,
                    models.Budget.category_id == budget.category_id,
                )
            ).scalar_one_or_none()
            if existing is None:
                db.add(models.Budget(**budget.model_dump()))
                return
            existing.cadence = budget.cadence
            existing.amount_cents = budget.amount_cents
            existing.rollover_rule = budget.rollover_rule
            existing.carryover_cents = budget.carryover_cents

    def get_by_id(self, budget_id: str) -> Optional[schemas.Budget]:
        row = self.db.get(models.Budget, budget_id)
        return schemas.Budget.model_validate(row) if row else None

    def get_by_period(self, period_id: str) -> list[schemas.Budget]:
        rows = self.db.execute(
            select(models.Budget).where(models.Budget.period_id == period_id).order_by(models.Budget.created_at)
        ).scalars()
        return [schemas.Budget.model_validate(r) for r in rows]

    def get_by_period_and_category(self, period_id: str, category_id: str) -> Optional[schemas.Budget]:
        row = self.db.execute(
            select(models.Budget).where(
                models.Budget.period_id == period_id,
                models.Budget.category_id == category_id,
            )
        ).scalar_one_or_none()
        return schemas.Budget.model_validate(row) if row else None


class SqlTransactionRepository(_SqlRepository):
    def insert(self, tx: schemas.Transaction) -> None:
        with self._write("insert transaction") as db:
            db.add(models.Transaction(**tx.model_dump()))

    def update(self, tx: schemas.Transaction) -> None:
        with self._write("update transaction") as db:
            db.execute(
                update(models.Transaction)
                .where(models.Transaction.id == tx.id)
                .values(
                    date=tx.date,
                    amount_cents=tx.amount_cents,
                    category_id=tx.category_id,
                    merchant=tx.merchant,
                    note=tx.note,
                    status=tx.status,
                    updated_at=tx.updated_at,
                    deleted_at=tx.deleted_at,
                )
            )

    def soft_delete(self, tx_id: str, deleted_at: str) -> None:
        with self._write("delete transaction") as db:
            db.execute(
                update(models.Transaction)
                .where(models.Transaction.id == tx_id)
                .values(deleted_at=deleted_at, updated_at=deleted_at)
            )

    def get_by_id(self, tx_id: str) -> Optional[schemas.Transaction]:
        row = self.db.execute(
            select(models.Transaction).where(
                models.Transaction.id == tx_id,
                models.Transaction.deleted_at.is_(None),
            )
        ).scalar_one_or_none()
        return schemas.Transaction.model_validate(row) if row else None

    def list(self, filter: schemas.TransactionFilter) -> list[schemas.Transaction]:
        T = models.Transaction
        stmt = select(T).where(T.deleted_at.is_(None))
        if filter.period_id:
            stmt = stmt.where(T.period_id == filter.period_id)
        if filter.category_id:
            stmt = stmt.where(T.category_id == filter.category_id)
        if filter.start_date:
            stmt = stmt.where(T.date >= filter.start_date)
        if filter.end_date:
            stmt = stmt.where(T.date <= filter.end_date)
        if filter.source:
            stmt = stmt.where(T.source == filter.source)
        if filter.status:
            stmt = stmt.where(T.status == filter.status)
        rows = self.db.execute(stmt.order_by(T.date.desc(), T.created_at.desc())).scalars()
        return [schemas.Transaction.model_validate(r) for r in rows]

    def _spent(self, *conditions) -> int:
        T = models.Transaction
        value = self.db.execute(
            select(func.coalesce(-func.sum(T.amount_cents), 0)).where(
                T.amount_cents < 0,
                T.deleted_at.is_(None),
                *conditions,
            )
        ).scalar_one()
        return int(value or 0)

    def sum_spent_in_period(self, period_id: str, category_id: Optional[str] = None) -> int:
        T = models.Transaction
        conditions = [T.period_id == period_id]
        if category_id:
            conditions.append(T.category_id == category_id)
        return self._spent(*conditions)

    def sum_spent_in_date_range(
        self,
        period_id: str,
        category_id: str,
        start_date: str,
        end_date: str,
    ) -> int:
        T = models.Transaction
        return self._spent(
            T.period_id == period_id,
            T.category_id == category_id,
            T.date >= start_date,
            T.date <= end_date,
        )


class SqlSettingsRepository(_SqlRepository):
    def _row(self) -> models.AppSetting:
        row = self.db.get(models.AppSetting, 1)
        if row is None:
            raise PersistenceError("Settings row is missing")
        return row

    def get(self) -> schemas.Settings:
        return schemas.Settings.model_validate(self._row())

    def update(self, patch: dict) -> schemas.Settings:
        current = self.get()
        merged = schemas.Settings.model_validate({**current.model_dump(), **patch})
        with self._write("update settings"):
            row = self._row()
            for key, value in merged.model_dump().items():
                setattr(row, key, value)
        return merged


class SqlAlertRepository(_SqlRepository):
    def get_rule(self, category_id: str) -> schemas.AlertRule:
        row = self.db.get(models.AlertRule, category_id)
        if row is None:
            return default_alert_rule(category_id)
        return schemas.AlertRule.model_validate(row)

    def set_rule(self, rule: schemas.AlertRule) -> None:
        with self._write("set alert rule") as db:
            row = db.get(models.AlertRule, rule.category_id)
            if row is None:
                db.add(models.AlertRule(**rule.model_dump()))
                return
            row.approaching_limit_percent = rule.approaching_limit_percent
            row.enabled = rule.enabled

    def insert(self, alert: schemas.Alert) -> None:
        with self._write("insert alert") as db:
            db.add(models.Alert(**alert.model_dump()))

    def get_by_id(self, alert_id: str) -> Optional[schemas.Alert]:
        row = self.db.get(models.Alert, alert_id)
        return schemas.Alert.model_validate(row) if row else None

    def list_by_period(self, period_id: str) -> list[schemas.Alert]:
        rows = self.db.execute(
            select(models.Alert)
            .where(models.Alert.period_id == period_id)
            .order_by(models.Alert.triggered_at.desc())
        ).scalars()
        return [schemas.Alert.model_validate(r) for r in rows]

    def list_open_by_period_and_category(self, period_id: str, category_id: str) -> list[schemas.Alert]:
        rows = self.db.execute(
            select(models.Alert).where(
                models.Alert.period_id == period_id,
                models.Alert.category_id == category_id,
                models.Alert.dismissed_at.is_(None),
            )
        ).scalars()
        return [schemas.Alert.model_validate(r) for r in rows]

    def dismiss(self, alert_id: str, dismissed_at: str) -> None:
        with self._write("dismiss alert") as db:
            db.execute(update(models.Alert).where(models.Alert.id == alert_id).values(dismissed_at=dismissed_at))


class SqlImportBatchRepository(_SqlRepository):
    def insert(self, batch: schemas.ImportBatch) -> None:
        with self._write("insert import batch") as db:
            db.add(models.ImportBatch(**batch.model_dump()))

    def finish(
        self,
        batch_id: str,
        finished_at: str,
        imported_count: int,
        duplicates_count: int,
        error_count: int,
        notes: Optional[str] = None,
    ) -> None:
        with self._write("finish import batch") as db:
            db.execute(
                update(models.ImportBatch)
                .where(models.ImportBatch.id == batch_id)
                .values(
                    finished_at=finished_at,
                    imported_count=imported_count,
                    duplicates_count=duplicates_count,
                    error_count=error_count,
                    notes=notes,
                )
            )

    def get_by_id(self, batch_id: str) -> Optional[schemas.ImportBatch]:
        row = self.db.get(models.ImportBatch, batch_id)
        return schemas.ImportBatch.model_validate(row) if row else None


def create_sql_repositories(db: Session) -> Repositories:
    return Repositories(
        periods=SqlPeriodRepository(db),
        categories=SqlCategoryRepository(db),
        budgets=SqlBudgetRepository(db),
        transactions=SqlTransactionRepository(db),
        settings=SqlSettingsRepository(db),
        alerts=SqlAlertRepository(db),
        import_batches=SqlImportBatchRepository(db),
    )
