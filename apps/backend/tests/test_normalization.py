"""
정규화 유틸리티 테스트
"""

from basic_budget.utils.normalization import (
    fuzzy_transaction_key,
    normalize_category_name,
    normalize_header,
    normalize_merchant,
    optional_text,
    parse_amount_cents,
)


class TestNormalizeHeader:
    def test_case_and_whitespace(self):
        assert normalize_header(" Amount_Cents ") == "amount_cents"
        assert normalize_header("DATE") == "date"

    def test_bom_removed(self):
        assert normalize_header("\ufeffdate") == "date"

    def test_empty(self):
        assert normalize_header(None) == ""
        assert normalize_header("") == ""


class TestMerchantAndCategory:
    def test_merchant_trim_lower(self):
        assert normalize_merchant("  Corner Cafe ") == "corner cafe"
        assert normalize_merchant(None) == ""

    def test_category_name_nfkc(self):
        """전각 문자 → 반각"""
        assert normalize_category_name(" ＧＲＯＣＥＲＩＥＳ ") == "groceries"

    def test_optional_text(self):
        assert optional_text("  note ") == "note"
        assert optional_text("   ") is None
        assert optional_text(None) is None


class TestParseAmountCents:
    def test_integer_is_cents(self):
        assert parse_amount_cents("-1250") == -1250
        assert parse_amount_cents("500") == 500

    def test_decimal_is_dollars(self):
        assert parse_amount_cents("-12.50") == -1250
        assert parse_amount_cents("$1,234.56") == 123456
        assert parse_amount_cents("-$4.99") == -499

    def test_unparseable_is_zero(self):
        assert parse_amount_cents("") == 0
        assert parse_amount_cents(None) == 0
        assert parse_amount_cents("abc") == 0
        assert parse_amount_cents("inf") == 0

    def test_out_of_int64_range_is_zero(self):
        assert parse_amount_cents("1e308") == 0
        assert parse_amount_cents("-1e300") == 0
        assert parse_amount_cents("99999999999999999999") == 0
        assert parse_amount_cents("9223372036854775807") == 9223372036854775807


class TestFuzzyKey:
    def test_key_format(self):
        assert fuzzy_transaction_key("2026-04-02", -1250, " Corner Cafe") == "2026-04-02|-1250|corner cafe"

    def test_missing_merchant(self):
        assert fuzzy_transaction_key("2026-04-02", -1250, None) == "2026-04-02|-1250|"
