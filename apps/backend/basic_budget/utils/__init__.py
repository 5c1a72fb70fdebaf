"""
Utils 패키지
"""

from .normalization import (
    fuzzy_transaction_key,
    normalize_category_name,
    normalize_header,
    normalize_merchant,
    optional_text,
    parse_amount_cents,
)

__all__ = [
    "fuzzy_transaction_key",
    "normalize_category_name",
    "normalize_header",
    "normalize_merchant",
    "optional_text",
    "parse_amount_cents",
]
