"""Integer-cent arithmetic.

Every monetary computation in the core goes through these helpers so that no
float ever survives into a stored or returned amount.
"""

from __future__ import annotations

import math

from .types import MoneyCents


def as_money(value: int | float) -> MoneyCents:
    # 반올림: .5는 +무한대 방향 (banker's rounding 사용 안 함)
    return MoneyCents(int(math.floor(value + 0.5)))


def zero_money() -> MoneyCents:
    return MoneyCents(0)


def abs_money(value: int) -> MoneyCents:
    return as_money(abs(value))


def add_money(*values: int) -> MoneyCents:
    return as_money(sum(values))


def sub_money(a: int, b: int) -> MoneyCents:
    return as_money(a - b)


def mul_money(a: int, factor: int | float) -> MoneyCents:
    return as_money(a * factor)


def div_money(a: int, divisor: int | float) -> MoneyCents:
    if divisor == 0:
        return zero_money()
    return as_money(a / divisor)


def max_money(a: int, b: int) -> MoneyCents:
    return as_money(max(a, b))


def min_money(a: int, b: int) -> MoneyCents:
    return as_money(min(a, b))


def clamp_money(value: int, lower: int, upper: int) -> MoneyCents:
    return as_money(min(upper, max(lower, value)))


def dollars_from_cents(value: int) -> float:
    return value / 100


def cents_from_dollars(value: float) -> MoneyCents:
    return as_money(value * 100)
