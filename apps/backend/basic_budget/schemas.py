from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .core.errors import ValidationError
from .domain.types import date_str
from .models import (
    AlertType,
    Cadence,
    CategoryKind,
    CycleType,
    PaceStatus,
    RolloverRule,
    TransactionSource,
    TransactionStatus,
)


def _check_date(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    try:
        return date_str(v)
    except ValidationError as exc:
        raise ValueError("date must be a valid YYYY-MM-DD calendar date") from exc


# ===== Entities =====


class Period(BaseModel):
    id: str
    cycle_type: CycleType
    start_date: str
    end_date: str
    income_cents: int
    created_at: str
    closed_at: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @property
    def is_closed(self) -> bool:
        return self.closed_at is not None


class Category(BaseModel):
    id: str
    name: str
    kind: CategoryKind
    icon: str = ""
    color: str = ""
    archived_at: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class Budget(BaseModel):
    id: str
    period_id: str
    category_id: str
    cadence: Cadence
    amount_cents: int
    rollover_rule: RolloverRule
    carryover_cents: int = 0
    created_at: str

    model_config = ConfigDict(from_attributes=True)


class Transaction(BaseModel):
    id: str
    date: str
    amount_cents: int  # 음수 = 지출, 양수 = 수입
    category_id: str
    period_id: str
    merchant: Optional[str] = None
    note: Optional[str] = None
    source: TransactionSource = TransactionSource.MANUAL
    external_id: Optional[str] = None
    status: TransactionStatus = TransactionStatus.POSTED
    created_at: str
    updated_at: str
    deleted_at: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class Settings(BaseModel):
    cycle_type: CycleType = CycleType.MONTHLY
    week_start: int = Field(default=1, ge=0, le=6)
    currency: str = "USD"
    locale: str = "en-US"
    biweekly_anchor_date: Optional[str] = None
    app_lock_enabled: bool = False

    model_config = ConfigDict(from_attributes=True)

    @field_validator("biweekly_anchor_date")
    def anchor_format(cls, v: Optional[str]):
        return _check_date(v)


class AlertRule(BaseModel):
    category_id: str
    approaching_limit_percent: int = Field(default=80, ge=1, le=100)
    enabled: bool = True

    model_config = ConfigDict(from_attributes=True)


class Alert(BaseModel):
    id: str
    category_id: str
    period_id: str
    type: AlertType
    threshold_percent: int
    triggered_at: str
    dismissed_at: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @property
    def is_open(self) -> bool:
        return self.dismissed_at is None


class ImportBatch(BaseModel):
    id: str
    source: str = "csv"
    period_id: Optional[str] = None
    started_at: str
    finished_at: Optional[str] = None
    imported_count: int = 0
    duplicates_count: int = 0
    error_count: int = 0
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


# ===== Inputs =====


class PeriodCreate(BaseModel):
    cycle_type: CycleType
    start_date: str
    end_date: str
    income_cents: int = 0

    @field_validator("start_date", "end_date")
    def date_format(cls, v: Optional[str]):
        return _check_date(v)


class CategoryCreate(BaseModel):
    name: str
    kind: CategoryKind = CategoryKind.NEED
    icon: str = ""
    color: str = ""


class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    kind: Optional[CategoryKind] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    model_config = ConfigDict(extra="ignore")


class BudgetUpsert(BaseModel):
    period_id: str
    category_id: str
    cadence: Cadence = Cadence.MONTHLY
    amount_cents: int
    rollover_rule: RolloverRule = RolloverRule.RESET


class TransactionCreate(BaseModel):
    date: str
    amount_cents: int
    category_id: str
    period_id: str
    merchant: Optional[str] = None
    note: Optional[str] = None
    source: TransactionSource = TransactionSource.MANUAL

    @field_validator("date")
    def date_format(cls, v: Optional[str]):
        return _check_date(v)


class TransactionUpdate(BaseModel):
    """Partial update; ``merchant``/``note`` may be set to ``None`` explicitly."""

    date: Optional[str] = None
    amount_cents: Optional[int] = None
    category_id: Optional[str] = None
    merchant: Optional[str] = None
    note: Optional[str] = None
    status: Optional[TransactionStatus] = None
    model_config = ConfigDict(extra="ignore")

    @field_validator("date")
    def date_format(cls, v: Optional[str]):
        return _check_date(v)


class TransactionFilter(BaseModel):
    period_id: Optional[str] = None
    category_id: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    source: Optional[TransactionSource] = None
    status: Optional[TransactionStatus] = None

    @field_validator("start_date", "end_date")
    def date_format(cls, v: Optional[str]):
        return _check_date(v)


class SettingsUpdate(BaseModel):
    cycle_type: Optional[CycleType] = None
    week_start: Optional[int] = Field(default=None, ge=0, le=6)
    currency: Optional[str] = None
    locale: Optional[str] = None
    biweekly_anchor_date: Optional[str] = None
    app_lock_enabled: Optional[bool] = None
    model_config = ConfigDict(extra="ignore")

    @field_validator("biweekly_anchor_date")
    def anchor_format(cls, v: Optional[str]):
        return _check_date(v)

    @field_validator("currency")
    def currency_len(cls, v: Optional[str]):
        if v is None:
            return v
        if len(v) != 3:
            raise ValueError("currency must be 3-letter code")
        return v.upper()


# ===== Computed =====


class LeftToSpend(BaseModel):
    remaining_period_cents: int
    left_today_cents: int
    left_this_week_cents: int
    is_overspent: bool
    overspent_cents: int = 0  # 초과 지출 아닐 때 0


class CategorySummary(BaseModel):
    category_id: str
    category: Category
    budget: Budget
    budgeted_period_cents: int  # 주간 예산은 기간 내 겹치는 주 수만큼 확장
    spent_cents: int
    remaining_cents: int
    carryover_cents: int
    left_to_spend: LeftToSpend
    pace_status: PaceStatus


class BudgetSummary(BaseModel):
    period_id: str
    period: Period
    total_income_cents: int
    total_allocated_cents: int
    total_spent_cents: int
    total_remaining_cents: int
    unallocated_cents: int
    categories: list[CategorySummary] = Field(default_factory=list)


class CSVImportResult(BaseModel):
    imported: int = 0
    duplicates_skipped: int = 0
    errors: list[str] = Field(default_factory=list)


class CSVImportRequest(BaseModel):
    period_id: str
    content: str

    @model_validator(mode="after")
    def non_empty(self):
        if not self.content.strip():
            raise ValueError("content must not be empty")
        return self


class RolloverRequest(BaseModel):
    from_period_id: str
    to_period_id: str


class AlertRuleUpdate(BaseModel):
    approaching_limit_percent: int = Field(default=80, ge=1, le=100)
    enabled: bool = True
