"""
CSV 가져오기/내보내기 서비스

책임:
- 거래 / 예산 스냅샷 CSV 내보내기 (고정 컬럼 순서, RFC4180 인용)
- 거래 CSV 가져오기
  - 헤더 대소문자 무시
  - 행 단위 검증 (날짜, 금액, 카테고리, 상태)
  - external_id 및 유사 키(date|amount|merchant) 기반 중복 건너뛰기
  - 잘못된 행은 "row N: ..." 오류로 기록하고 계속 진행
  - ImportBatch 감사 레코드 생성 → 종료 시 집계 기록
"""

from __future__ import annotations

import csv
import io
import logging
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from .. import schemas
from ..core.errors import BackendError, ValidationError
from ..domain.types import date_str
from ..models import TransactionSource, TransactionStatus
from ..utils.normalization import (
    fuzzy_transaction_key,
    normalize_category_name,
    normalize_header,
    optional_text,
    parse_amount_cents,
)
from .context import ServiceContext
from .internal import require_value

logger = logging.getLogger(__name__)

TRANSACTION_HEADERS = [
    "id",
    "date",
    "amount_cents",
    "category_id",
    "period_id",
    "merchant",
    "note",
    "source",
    "external_id",
    "status",
    "created_at",
    "updated_at",
    "deleted_at",
]

BUDGET_SNAPSHOT_HEADERS = [
    "period_id",
    "period_start_date",
    "period_end_date",
    "category_id",
    "category_name",
    "cadence",
    "amount_cents",
    "rollover_rule",
    "carryover_cents",
]

CsvRecord = dict


def _cell(value) -> str:
    if value is None:
        return ""
    if hasattr(value, "value"):
        return str(value.value)
    return str(value)


def write_csv(headers: Sequence[str], rows: Iterable[Sequence]) -> str:
    """
    CSV 문자열 생성

    쉼표/따옴표/줄바꿈이 포함된 필드만 따옴표로 감싸고, 내부 따옴표는 두 번 씁니다.
    줄 구분은 "\\n", 마지막 줄바꿈은 붙이지 않습니다.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow([_cell(v) for v in row])
    return buffer.getvalue().rstrip()


def parse_csv(content: str) -> List[CsvRecord]:
    """
    CSV 문자열 → 레코드 목록

    - 헤더는 소문자/공백 제거로 정규화
    - 빈 줄은 무시
    - 값은 앞뒤 공백 제거
    """
    reader = csv.reader(io.StringIO(content.strip()))
    lines = [row for row in reader if any(cell.strip() for cell in row)]
    if not lines:
        return []

    headers = [normalize_header(h) for h in lines[0]]
    return [dict(zip(headers, (cell.strip() for cell in row))) for row in lines[1:]]


def _field(record: CsvRecord, *names: str) -> str:
    for name in names:
        value = (record.get(name) or "").strip()
        if value:
            return value
    return ""


class CSVService:
    def __init__(self, ctx: ServiceContext):
        self.ctx = ctx
        self.repos = ctx.repos

    # ===== 내보내기 =====

    def export_transactions(self, period_id: Optional[str] = None) -> str:
        transactions = self.repos.transactions.list(schemas.TransactionFilter(period_id=period_id))
        rows = (
            [
                tx.id,
                tx.date,
                tx.amount_cents,
                tx.category_id,
                tx.period_id,
                tx.merchant,
                tx.note,
                tx.source,
                tx.external_id,
                tx.status,
                tx.created_at,
                tx.updated_at,
                tx.deleted_at,
            ]
            for tx in transactions
        )
        return write_csv(TRANSACTION_HEADERS, rows)

    def export_budget_snapshot(self, period_id: str) -> str:
        period = require_value(self.repos.periods.get_by_id(period_id), f"Period not found: {period_id}")
        categories = {c.id: c for c in self.repos.categories.list(include_archived=True)}

        rows = []
        for budget in self.repos.budgets.get_by_period(period_id):
            category = categories.get(budget.category_id)
            rows.append(
                [
                    period.id,
                    period.start_date,
                    period.end_date,
                    budget.category_id,
                    category.name if category else "",
                    budget.cadence,
                    budget.amount_cents,
                    budget.rollover_rule,
                    budget.carryover_cents,
                ]
            )
        return write_csv(BUDGET_SNAPSHOT_HEADERS, rows)

    # ===== 가져오기 =====

    def import_transactions(self, csv_content: str, period_id: str) -> schemas.CSVImportResult:
        """
        거래 CSV 가져오기

        한 행의 실패가 배치 전체를 중단시키지 않습니다. 이미 삽입된 행은 되돌리지 않습니다.

        Args:
            csv_content: CSV 원문 (첫 줄 헤더)
            period_id: 대상 기간 ID

        Returns:
            CSVImportResult(imported, duplicates_skipped, errors)

        Raises:
            NotFoundError: 기간 없음 (배치 생성 전)
        """
        period = require_value(self.repos.periods.get_by_id(period_id), f"Period not found: {period_id}")
        records = parse_csv(csv_content)

        existing = self.repos.transactions.list(schemas.TransactionFilter(period_id=period_id))
        seen_external_ids: Set[str] = {tx.external_id for tx in existing if tx.external_id}
        seen_fuzzy: Set[str] = {fuzzy_transaction_key(tx.date, tx.amount_cents, tx.merchant) for tx in existing}

        categories = self.repos.categories.list(include_archived=True)
        category_ids = {c.id for c in categories}
        categories_by_name = {normalize_category_name(c.name): c.id for c in categories}

        batch = schemas.ImportBatch(
            id=self.ctx.ids.next(),
            source="csv",
            period_id=period_id,
            started_at=self.ctx.clock.now(),
        )
        self.repos.import_batches.insert(batch)

        result = schemas.CSVImportResult()
        try:
            for row_number, record in enumerate(records, start=2):
                try:
                    tx, external_id, key = self._build_row(
                        record,
                        period,
                        category_ids,
                        categories_by_name,
                    )
                    if (external_id and external_id in seen_external_ids) or key in seen_fuzzy:
                        result.duplicates_skipped += 1
                        logger.debug("row %d skipped as duplicate", row_number)
                        continue

                    self.repos.transactions.insert(tx)
                    if external_id:
                        seen_external_ids.add(external_id)
                    seen_fuzzy.add(key)
                    result.imported += 1
                except BackendError as exc:
                    result.errors.append(f"row {row_number}: {exc.message}")
                    logger.debug("row %d rejected: %s", row_number, exc.message)
                except Exception as exc:
                    result.errors.append(f"row {row_number}: {exc}")
                    logger.warning("row %d failed unexpectedly: %s", row_number, exc, exc_info=True)
        finally:
            self.repos.import_batches.finish(
                batch.id,
                finished_at=self.ctx.clock.now(),
                imported_count=result.imported,
                duplicates_count=result.duplicates_skipped,
                error_count=len(result.errors),
            )
        logger.info(
            "import batch finished id=%s imported=%d duplicates=%d errors=%d",
            batch.id,
            result.imported,
            result.duplicates_skipped,
            len(result.errors),
        )
        return result

    def _build_row(
        self,
        record: CsvRecord,
        period: schemas.Period,
        category_ids: Set[str],
        categories_by_name: dict,
    ) -> Tuple[schemas.Transaction, Optional[str], str]:
        """단일 행 검증 → (거래, external_id, 유사 키). 실패 시 ValidationError"""
        try:
            date = date_str(_field(record, "date"))
        except ValidationError as exc:
            raise ValidationError("Invalid or missing date (expected YYYY-MM-DD)", exc) from exc

        amount_cents = parse_amount_cents(_field(record, "amount_cents", "amount"))
        if amount_cents == 0:
            raise ValidationError("Invalid or zero amount")

        category_id = _field(record, "category_id", "categoryid")
        if not category_id:
            name = normalize_category_name(_field(record, "category_name", "category"))
            category_id = categories_by_name.get(name, "") if name else ""
        if not category_id:
            raise ValidationError("Missing category_id or category_name mapping")
        if category_id not in category_ids:
            raise ValidationError(f"Unknown category_id: {category_id}")

        raw_status = _field(record, "status").lower() or TransactionStatus.POSTED.value
        try:
            status = TransactionStatus(raw_status)
        except ValueError as exc:
            raise ValidationError(f"Invalid status '{raw_status}' (expected posted or pending)", exc) from exc

        merchant = optional_text(record.get("merchant"))
        external_id = optional_text(record.get("external_id"))
        now = self.ctx.clock.now()

        tx = schemas.Transaction(
            id=self.ctx.ids.next(),
            date=date,
            amount_cents=amount_cents,
            category_id=category_id,
            period_id=period.id,
            merchant=merchant,
            note=optional_text(record.get("note")),
            source=TransactionSource.IMPORT,
            external_id=external_id,
            status=status,
            created_at=now,
            updated_at=now,
            deleted_at=None,
        )
        return tx, external_id, fuzzy_transaction_key(date, amount_cents, merchant)
