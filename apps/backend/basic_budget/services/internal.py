from __future__ import annotations

from typing import Optional, TypeVar

from ..core.errors import NotFoundError, ValidationError

T = TypeVar("T")


def require_value(value: Optional[T], message: str) -> T:
    """조회 결과가 없으면 NotFoundError"""
    if value is None:
        raise NotFoundError(message)
    return value


def ensure(condition: bool, message: str) -> None:
    """입력 검증 실패 시 ValidationError"""
    if not condition:
        raise ValidationError(message)
