from __future__ import annotations

from typing import Optional

from ..models import CycleType
from .dates import (
    DateRange,
    add_days,
    get_biweekly_range_for_date,
    get_month_range,
    get_next_period_range,
    is_date_within_range,
)
from .types import DateString


def resolve_current_period_range(
    cycle_type: CycleType | str,
    value: str,
    biweekly_anchor_date: Optional[str],
) -> DateRange:
    """Period window containing ``value`` for the given cycle type.

    Without an anchor a biweekly cycle starts on ``value`` itself.
    """
    if CycleType(cycle_type) == CycleType.MONTHLY:
        return get_month_range(value)
    return get_biweekly_range_for_date(biweekly_anchor_date or value, value)


def create_next_period_range(
    cycle_type: CycleType | str,
    current_range: DateRange,
    biweekly_anchor_date: Optional[str],
) -> DateRange:
    return get_next_period_range(cycle_type, current_range, biweekly_anchor_date)


def is_date_in_period(value: str, period: DateRange) -> bool:
    return is_date_within_range(value, period)


def get_day_after_period(period: DateRange) -> DateString:
    return add_days(period.end_date, 1)
