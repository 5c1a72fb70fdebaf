from __future__ import annotations

from ..models import RolloverRule
from .money import as_money, zero_money
from .types import MoneyCents


def compute_carryover_from_remaining(rule: RolloverRule | str, remaining_period_cents: int) -> MoneyCents:
    """
    기간 종료 잔액 → 다음 기간 이월액

    - reset:   항상 0
    - pos:     잔액이 양수일 때만 이월 (초과 지출은 탕감)
    - pos_neg: 잔액 그대로 (흑자/적자 모두 이월)
    """
    rule = RolloverRule(rule)
    if rule == RolloverRule.RESET:
        return zero_money()
    if rule == RolloverRule.POS:
        return as_money(max(0, remaining_period_cents))
    return as_money(remaining_period_cents)
