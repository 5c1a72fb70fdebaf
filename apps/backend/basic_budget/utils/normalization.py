"""
정규화 유틸리티 함수

CSV 헤더, 가맹점명, 카테고리명, 금액 문자열 등을 정규화하여
가져오기(import) 시 매칭/중복 판단 정확도를 높입니다.
"""

import math
import re
import unicodedata

_INTEGER_PATTERN = re.compile(r"^-?\d+$")
_CURRENCY_NOISE = re.compile(r"[$,]")

# SQLite INTEGER (signed 64-bit)
MIN_CENTS = -(2**63)
MAX_CENTS = 2**63 - 1


def normalize_header(value: str | None) -> str:
    """
    CSV 헤더 정규화

    - BOM/앞뒤 공백 제거
    - 소문자 변환

    Example:
        >>> normalize_header(" Amount_Cents ")
        "amount_cents"
    """
    if not value:
        return ""
    return value.replace("\ufeff", "").strip().lower()


def normalize_merchant(value: str | None) -> str:
    """
    가맹점명 정규화 (중복 판단 키용)

    앞뒤 공백 제거 후 소문자 변환만 수행합니다. 내부 공백/특수문자는 유지.

    Example:
        >>> normalize_merchant("  Corner Cafe ")
        "corner cafe"
    """
    if not value:
        return ""
    return value.strip().lower()


def normalize_category_name(value: str | None) -> str:
    """
    카테고리명 정규화 (이름 → id 매핑용)

    - NFKC 정규화
    - 앞뒤 공백 제거, 소문자 변환

    Example:
        >>> normalize_category_name(" Groceries ")
        "groceries"
    """
    if not value:
        return ""
    return unicodedata.normalize("NFKC", value).strip().lower()


def optional_text(value: str | None) -> str | None:
    """앞뒤 공백 제거, 빈 문자열은 None"""
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def parse_amount_cents(raw: str | None) -> int:
    """
    금액 문자열 → 센트 정수

    - 정수 문자열("-1250")은 이미 센트 단위로 간주
    - 그 외에는 `$`/`,` 제거 후 달러 값으로 보고 ×100 반올림
    - 비어 있거나 해석 불가하면 0
    - 64비트 정수 범위를 벗어나면 0

    Args:
        raw: CSV 셀 값

    Returns:
        센트 단위 정수 (해석 실패 시 0)

    Example:
        >>> parse_amount_cents("-1250")
        -1250
        >>> parse_amount_cents("$1,234.56")
        123456
    """
    if not raw:
        return 0
    value = raw.strip()
    if _INTEGER_PATTERN.match(value):
        cents = int(value)
    else:
        try:
            as_float = float(_CURRENCY_NOISE.sub("", value))
        except ValueError:
            return 0
        scaled = as_float * 100 + 0.5
        if not math.isfinite(scaled):
            return 0
        cents = int(math.floor(scaled))
    if not MIN_CENTS <= cents <= MAX_CENTS:
        return 0
    return cents


def fuzzy_transaction_key(date: str, amount_cents: int, merchant: str | None) -> str:
    """
    거래 유사 중복 키: "date|amount_cents|merchant"

    Example:
        >>> fuzzy_transaction_key("2026-04-02", -1250, " Corner Cafe")
        "2026-04-02|-1250|corner cafe"
    """
    return f"{date}|{amount_cents}|{normalize_merchant(merchant)}"
