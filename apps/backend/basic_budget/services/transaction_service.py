"""
거래(Transaction) 서비스

- 지출은 음수, 수입/환불은 양수 센트
- 삭제는 soft-delete (deleted_at 설정), 이후 모든 조회/합계에서 제외
"""

from __future__ import annotations

from .. import schemas
from ..models import TransactionSource, TransactionStatus
from .context import ServiceContext
from .internal import ensure, require_value


class TransactionService:
    def __init__(self, ctx: ServiceContext):
        self.ctx = ctx
        self.repos = ctx.repos

    def add_transaction(self, data: schemas.TransactionCreate) -> schemas.Transaction:
        ensure(bool(data.period_id), "period_id is required")
        ensure(bool(data.category_id), "category_id is required")
        ensure(data.amount_cents != 0, "amount_cents must not be 0")

        require_value(self.repos.periods.get_by_id(data.period_id), f"Period not found: {data.period_id}")
        require_value(self.repos.categories.get_by_id(data.category_id), f"Category not found: {data.category_id}")

        now = self.ctx.clock.now()
        tx = schemas.Transaction(
            id=self.ctx.ids.next(),
            date=data.date,
            amount_cents=data.amount_cents,
            category_id=data.category_id,
            period_id=data.period_id,
            merchant=data.merchant,
            note=data.note,
            source=data.source or TransactionSource.MANUAL,
            external_id=None,
            status=TransactionStatus.POSTED,
            created_at=now,
            updated_at=now,
            deleted_at=None,
        )
        self.repos.transactions.insert(tx)
        return tx

    def update_transaction(self, tx_id: str, patch: schemas.TransactionUpdate) -> schemas.Transaction:
        """
        부분 수정

        명시적으로 전달된 필드만 반영합니다. merchant/note 는 None 을 보내면 지워지고,
        그 외 필드의 None 은 "변경 없음"으로 취급합니다.
        """
        existing = self.get_transaction(tx_id)

        changes = patch.model_dump(exclude_unset=True)
        for key in ("date", "amount_cents", "category_id", "status"):
            if changes.get(key) is None:
                changes.pop(key, None)

        if "amount_cents" in changes:
            ensure(changes["amount_cents"] != 0, "amount_cents must not be 0")
        if "category_id" in changes:
            require_value(
                self.repos.categories.get_by_id(changes["category_id"]),
                f"Category not found: {changes['category_id']}",
            )

        changes["updated_at"] = self.ctx.clock.now()
        updated = existing.model_copy(update=changes)
        self.repos.transactions.update(updated)
        return updated

    def delete_transaction(self, tx_id: str) -> None:
        self.get_transaction(tx_id)
        self.repos.transactions.soft_delete(tx_id, self.ctx.clock.now())

    def get_transaction(self, tx_id: str) -> schemas.Transaction:
        return require_value(self.repos.transactions.get_by_id(tx_id), f"Transaction not found: {tx_id}")

    def list_transactions(self, filter: schemas.TransactionFilter | None = None) -> list[schemas.Transaction]:
        return self.repos.transactions.list(filter or schemas.TransactionFilter())
