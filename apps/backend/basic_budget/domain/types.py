"""
브랜드(의미 구분) 원시 타입

금액(센트 정수), 날짜 문자열(YYYY-MM-DD), 타임스탬프(ISO-8601)를 일반
int/str과 구분하기 위한 NewType 정의와 검증 생성자입니다.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import NewType

from ..core.errors import ValidationError

MoneyCents = NewType("MoneyCents", int)
DateString = NewType("DateString", str)
TimestampString = NewType("TimestampString", str)

# 0 = Sunday, 1 = Monday, ... 6 = Saturday
WeekDay = int

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def cents(value: int | float) -> MoneyCents:
    """Round any numeric value to a whole cent amount (halves toward +inf)."""
    from .money import as_money

    return as_money(value)


def date_str(value: str) -> DateString:
    """
    YYYY-MM-DD 형식 검증 후 DateString 반환

    Example:
        >>> date_str("2026-04-16")
        '2026-04-16'
    """
    raw = str(value).strip()
    if not DATE_PATTERN.match(raw):
        raise ValidationError(f"Invalid date string: {value}")
    try:
        datetime.strptime(raw, "%Y-%m-%d")
    except ValueError as exc:
        raise ValidationError(f"Invalid date string: {value}", exc) from exc
    return DateString(raw)


def timestamp(value: str) -> TimestampString:
    raw = str(value).strip()
    try:
        datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError as exc:
        raise ValidationError(f"Invalid timestamp: {value}", exc) from exc
    return TimestampString(raw)


def week_day(value: int) -> WeekDay:
    if not isinstance(value, int) or isinstance(value, bool) or not (0 <= value <= 6):
        raise ValidationError(f"week_start must be 0-6, got {value!r}")
    return value
