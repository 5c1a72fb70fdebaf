from __future__ import annotations

from enum import Enum
from typing import Type

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Enum as SAEnum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from .core.database import Base


class CycleType(str, Enum):
    MONTHLY = "monthly"
    BIWEEKLY = "biweekly"


class Cadence(str, Enum):
    MONTHLY = "monthly"
    WEEKLY = "weekly"


class RolloverRule(str, Enum):
    RESET = "reset"
    POS = "pos"
    POS_NEG = "pos_neg"


class CategoryKind(str, Enum):
    NEED = "need"
    WANT = "want"


class TransactionSource(str, Enum):
    MANUAL = "manual"
    IMPORT = "import"


class TransactionStatus(str, Enum):
    POSTED = "posted"
    PENDING = "pending"


class AlertType(str, Enum):
    APPROACHING_LIMIT = "approaching_limit"
    OVERSPENT = "overspent"


class PaceStatus(str, Enum):
    ON_TRACK = "on_track"
    WARNING = "warning"
    OVERSPENT = "overspent"


def _str_enum(enum_cls: Type[Enum], name: str) -> SAEnum:
    # DB에는 멤버 이름(MONTHLY)이 아니라 값(monthly)을 저장
    return SAEnum(
        enum_cls,
        name=name,
        native_enum=False,
        values_callable=lambda members: [m.value for m in members],
        validate_strings=True,
    )


# 날짜는 YYYY-MM-DD, 타임스탬프는 ISO-8601 문자열 그대로 저장 (사전식 비교 = 시간순)
DATE_LEN = 10
TS_LEN = 40
ID_LEN = 36


class Period(Base):
    __tablename__ = "periods"

    id: Mapped[str] = mapped_column(String(ID_LEN), primary_key=True)
    cycle_type: Mapped[CycleType] = mapped_column(_str_enum(CycleType, "cycle_type"), nullable=False)
    start_date: Mapped[str] = mapped_column(String(DATE_LEN), nullable=False)
    end_date: Mapped[str] = mapped_column(String(DATE_LEN), nullable=False)
    income_cents: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[str] = mapped_column(String(TS_LEN), nullable=False)
    closed_at: Mapped[str | None] = mapped_column(String(TS_LEN))

    __table_args__ = (
        CheckConstraint("start_date <= end_date", name="ck_period_range"),
        Index("idx_periods_date_window", "start_date", "end_date"),
        Index("idx_periods_cycle_type", "cycle_type"),
    )


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(String(ID_LEN), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    kind: Mapped[CategoryKind] = mapped_column(_str_enum(CategoryKind, "category_kind"), nullable=False)
    icon: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    color: Mapped[str] = mapped_column(String(16), nullable=False, default="")  # hex, e.g. "#FF4757"
    archived_at: Mapped[str | None] = mapped_column(String(TS_LEN))

    __table_args__ = (Index("idx_categories_name", "name"),)


class Budget(Base):
    __tablename__ = "budgets"

    id: Mapped[str] = mapped_column(String(ID_LEN), primary_key=True)
    period_id: Mapped[str] = mapped_column(ForeignKey("periods.id"), nullable=False)
    category_id: Mapped[str] = mapped_column(ForeignKey("categories.id"), nullable=False)
    cadence: Mapped[Cadence] = mapped_column(_str_enum(Cadence, "cadence"), nullable=False)
    amount_cents: Mapped[int] = mapped_column(Integer, nullable=False)
    rollover_rule: Mapped[RolloverRule] = mapped_column(_str_enum(RolloverRule, "rollover_rule"), nullable=False)
    carryover_cents: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[str] = mapped_column(String(TS_LEN), nullable=False)

    __table_args__ = (
        UniqueConstraint("period_id", "category_id", name="uq_budget_period_category"),
        Index("idx_budgets_period_id", "period_id"),
        Index("idx_budgets_category_id", "category_id"),
    )


class Transaction(Base):
    __tablename__ = "transactions"

    id: Mapped[str] = mapped_column(String(ID_LEN), primary_key=True)
    date: Mapped[str] = mapped_column(String(DATE_LEN), nullable=False)
    amount_cents: Mapped[int] = mapped_column(Integer, nullable=False)  # 음수 = 지출, 양수 = 수입
    category_id: Mapped[str] = mapped_column(ForeignKey("categories.id"), nullable=False)
    period_id: Mapped[str] = mapped_column(ForeignKey("periods.id"), nullable=False)
    merchant: Mapped[str | None] = mapped_column(String(200))
    note: Mapped[str | None] = mapped_column(Text)
    source: Mapped[TransactionSource] = mapped_column(
        _str_enum(TransactionSource, "transaction_source"), nullable=False, default=TransactionSource.MANUAL
    )
    external_id: Mapped[str | None] = mapped_column(String(128))
    status: Mapped[TransactionStatus] = mapped_column(
        _str_enum(TransactionStatus, "transaction_status"), nullable=False, default=TransactionStatus.POSTED
    )
    created_at: Mapped[str] = mapped_column(String(TS_LEN), nullable=False)
    updated_at: Mapped[str] = mapped_column(String(TS_LEN), nullable=False)
    deleted_at: Mapped[str | None] = mapped_column(String(TS_LEN))

    __table_args__ = (
        Index("idx_transactions_period_date", "period_id", "date"),
        Index("idx_transactions_category_date", "category_id", "date"),
        Index("idx_transactions_period_category_date", "period_id", "category_id", "date"),
        Index("idx_transactions_not_deleted", "deleted_at"),
        Index("idx_transactions_external_id", "external_id"),
    )


class AppSetting(Base):
    """Singleton settings row; ``id`` is always 1."""

    __tablename__ = "settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    cycle_type: Mapped[CycleType] = mapped_column(_str_enum(CycleType, "settings_cycle_type"), nullable=False)
    week_start: Mapped[int] = mapped_column(Integer, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    locale: Mapped[str] = mapped_column(String(32), nullable=False)
    biweekly_anchor_date: Mapped[str | None] = mapped_column(String(DATE_LEN))
    app_lock_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        CheckConstraint("id = 1", name="ck_settings_singleton"),
        CheckConstraint("week_start >= 0 AND week_start <= 6", name="ck_settings_week_start"),
    )


class AlertRule(Base):
    __tablename__ = "alert_rules"

    category_id: Mapped[str] = mapped_column(ForeignKey("categories.id"), primary_key=True)
    approaching_limit_percent: Mapped[int] = mapped_column(Integer, nullable=False, default=80)
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class Alert(Base):
    __tablename__ = "alerts"

    id: Mapped[str] = mapped_column(String(ID_LEN), primary_key=True)
    category_id: Mapped[str] = mapped_column(ForeignKey("categories.id"), nullable=False)
    period_id: Mapped[str] = mapped_column(ForeignKey("periods.id"), nullable=False)
    type: Mapped[AlertType] = mapped_column(_str_enum(AlertType, "alert_type"), nullable=False)
    threshold_percent: Mapped[int] = mapped_column(Integer, nullable=False)
    triggered_at: Mapped[str] = mapped_column(String(TS_LEN), nullable=False)
    dismissed_at: Mapped[str | None] = mapped_column(String(TS_LEN))

    __table_args__ = (Index("idx_alerts_period_category", "period_id", "category_id"),)


class ImportBatch(Base):
    __tablename__ = "import_batches"

    id: Mapped[str] = mapped_column(String(ID_LEN), primary_key=True)
    source: Mapped[str] = mapped_column(String(32), nullable=False)
    period_id: Mapped[str | None] = mapped_column(ForeignKey("periods.id"))
    started_at: Mapped[str] = mapped_column(String(TS_LEN), nullable=False)
    finished_at: Mapped[str | None] = mapped_column(String(TS_LEN))
    imported_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    duplicates_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    error_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    notes: Mapped[str | None] = mapped_column(Text)

    __table_args__ = (
        Index("idx_import_batches_period", "period_id"),
        Index("idx_import_batches_started", "started_at"),
    )
