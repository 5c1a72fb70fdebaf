"""
날짜 문자열(YYYY-MM-DD) 기반 달력 연산

- 월/주/격주 범위 계산
- 양끝 포함 일수 계산
- 범위 교집합

모든 범위는 양끝 포함(inclusive)이며, 문자열은 0-패딩 고정폭이므로
사전식 비교가 날짜 비교와 같습니다. datetime.date는 타임존이 없으므로
로컬 타임존에 따른 날짜 밀림이 없습니다.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List, Optional

from ..core.errors import ValidationError
from ..models import CycleType
from .types import DATE_PATTERN, DateString, WeekDay


@dataclass(frozen=True)
class DateRange:
    start_date: DateString
    end_date: DateString


def parse_date(value: str) -> date:
    """zero-padded YYYY-MM-DD 만 허용 (strptime 단독은 "2026-4-16" 도 통과)"""
    if not DATE_PATTERN.match(str(value)):
        raise ValidationError(f"Invalid date string: {value}")
    try:
        return datetime.strptime(str(value), "%Y-%m-%d").date()
    except ValueError as exc:
        raise ValidationError(f"Invalid date string: {value}", exc) from exc


def format_date(value: date) -> DateString:
    return DateString(f"{value.year:04d}-{value.month:02d}-{value.day:02d}")


def compare_date_strings(a: str, b: str) -> int:
    if a == b:
        return 0
    return -1 if a < b else 1


def add_days(value: str, days: int) -> DateString:
    return format_date(parse_date(value) + timedelta(days=days))


def days_between(start: str, end: str) -> int:
    """Signed day difference ``end - start``."""
    return (parse_date(end) - parse_date(start)).days


def count_days_inclusive(start_date: str, end_date: str) -> int:
    delta = days_between(start_date, end_date)
    if delta < 0:
        return 0
    return delta + 1


def is_date_within_range(value: str, date_range: DateRange) -> bool:
    return (
        compare_date_strings(value, date_range.start_date) >= 0
        and compare_date_strings(value, date_range.end_date) <= 0
    )


def intersect_ranges(a: DateRange, b: DateRange) -> Optional[DateRange]:
    start_date = a.start_date if compare_date_strings(a.start_date, b.start_date) >= 0 else b.start_date
    end_date = a.end_date if compare_date_strings(a.end_date, b.end_date) <= 0 else b.end_date
    if compare_date_strings(start_date, end_date) > 0:
        return None
    return DateRange(start_date, end_date)


def sunday_based_weekday(value: date) -> int:
    # date.weekday()는 월=0, 여기서는 일=0 규약
    return value.isoweekday() % 7


def get_week_range(value: str, week_start: WeekDay) -> DateRange:
    """
    date가 속한 7일 주 범위

    주의 시작 요일은 week_start (0=일 ... 6=토)
    """
    weekday = sunday_based_weekday(parse_date(value))
    delta_to_start = (weekday - week_start + 7) % 7
    start_date = add_days(value, -delta_to_start)
    return DateRange(start_date, add_days(start_date, 6))


def get_month_range(value: str) -> DateRange:
    parsed = parse_date(value)
    last_day = calendar.monthrange(parsed.year, parsed.month)[1]
    return DateRange(
        format_date(parsed.replace(day=1)),
        format_date(parsed.replace(day=last_day)),
    )


def get_biweekly_range_for_date(anchor_date: str, value: str) -> DateRange:
    """
    anchor_date부터 14일 단위로 타일링한 구간 중 date를 포함하는 구간

    anchor 이전 날짜도 지원합니다 (음수 인덱스, floor 나눗셈).
    """
    window_index = days_between(anchor_date, value) // 14
    start_date = add_days(anchor_date, window_index * 14)
    return DateRange(start_date, add_days(start_date, 13))


def list_week_ranges_overlapping_period(period: DateRange, week_start: WeekDay) -> List[DateRange]:
    first_week = get_week_range(period.start_date, week_start)
    ranges: List[DateRange] = []

    cursor_start = first_week.start_date
    while compare_date_strings(cursor_start, period.end_date) <= 0:
        week_range = DateRange(cursor_start, add_days(cursor_start, 6))
        if intersect_ranges(week_range, period):
            ranges.append(week_range)
        cursor_start = add_days(cursor_start, 7)

    return ranges


def get_next_period_range(
    cycle_type: CycleType | str,
    current_period: DateRange,
    biweekly_anchor_date: Optional[str],
) -> DateRange:
    next_start = add_days(current_period.end_date, 1)
    if CycleType(cycle_type) == CycleType.MONTHLY:
        return get_month_range(next_start)

    anchor = biweekly_anchor_date or current_period.start_date
    return get_biweekly_range_for_date(anchor, next_start)
