"""
센트 정수 연산 테스트
"""

import pytest

from basic_budget.domain.money import (
    abs_money,
    add_money,
    as_money,
    cents_from_dollars,
    clamp_money,
    div_money,
    dollars_from_cents,
    max_money,
    min_money,
    mul_money,
    sub_money,
    zero_money,
)
from basic_budget.domain.types import cents


class TestRounding:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (2.5, 3),
            (3.5, 4),
            (-2.5, -2),
            (-2.6, -3),
            (0.49, 0),
            (833.33, 833),
        ],
    )
    def test_half_rounds_toward_positive_infinity(self, value, expected):
        """.5는 +무한대 방향 (banker's rounding 아님)"""
        assert as_money(value) == expected
        assert cents(value) == expected

    def test_results_are_int(self):
        assert isinstance(div_money(1000, 3), int)
        assert isinstance(mul_money(1000, 1.5), int)


class TestArithmetic:
    def test_basic_ops(self):
        assert zero_money() == 0
        assert add_money(100, 200, -50) == 250
        assert add_money() == 0
        assert sub_money(100, 250) == -150
        assert mul_money(12000, 5) == 60000
        assert abs_money(-1000) == 1000

    def test_div_by_zero_is_zero(self):
        assert div_money(5000, 0) == 0
        assert div_money(5000, 6) == 833

    def test_min_max_clamp(self):
        assert max_money(-5, 0) == 0
        assert min_money(-5, 0) == -5
        assert clamp_money(150, 0, 100) == 100
        assert clamp_money(-10, 0, 100) == 0
        assert clamp_money(42, 0, 100) == 42

    def test_dollar_conversion(self):
        assert dollars_from_cents(123456) == 1234.56
        assert cents_from_dollars(12.34) == 1234
        assert cents_from_dollars(0.1 + 0.2) == 30
