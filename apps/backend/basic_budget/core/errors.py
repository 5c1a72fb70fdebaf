"""
백엔드 예외 계층

서비스는 입력 검증/조회 실패 시 즉시 예외를 던지고, 호출자(라우터 등)가
code 값으로 응답 상태를 결정합니다.
"""

from __future__ import annotations

from typing import Literal

BackendErrorCode = Literal["not_found", "validation", "conflict", "persistence"]


class BackendError(Exception):
    """Base class for every error raised by the budget core."""

    code: BackendErrorCode = "validation"

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class ValidationError(BackendError):
    code = "validation"


class NotFoundError(BackendError):
    code = "not_found"


class ConflictError(BackendError):
    code = "conflict"


class PersistenceError(BackendError):
    code = "persistence"
