from __future__ import annotations

import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

import pandas as pd

"""Cell normalizers.

All functions are total: any input (None, NaN, garbage text, odd objects)
yields a value, never an exception.

- format_date: date -> 'YYYY-MM-DD', other non-empty value -> str, empty -> ''
- clean_placeholder: '----' / empty -> '', otherwise passthrough
- parse_decimal: numeric or '4,679.00' style text -> Decimal (2 places), else 0.00
- parse_number: string form of parse_decimal ('4679.00')
- parse_boolean: True / 'true' (any case) -> True, everything else False
- text_value: generic text cell ('' for empty, '1000' for 1000.0)
"""

__all__ = [
    "PLACEHOLDER",
    "ZERO",
    "is_missing",
    "format_date",
    "clean_placeholder",
    "parse_decimal",
    "format_number",
    "parse_number",
    "parse_boolean",
    "text_value",
]

PLACEHOLDER = "----"
TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0.00")

# parseFloat 互換: 先頭の数値部分のみ採用 ("12abc" -> 12)
_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def is_missing(value: Any) -> bool:
    """True for None, NaN/NaT and blank strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def format_date(value: Any) -> str:
    if is_missing(value):
        return ""
    if isinstance(value, datetime):
        return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        return value.strip()
    return str(value)


def clean_placeholder(value: Any) -> Any:
    if is_missing(value):
        return ""
    if isinstance(value, str) and value.strip() == PLACEHOLDER:
        return ""
    return value


def parse_decimal(value: Any) -> Decimal:
    """Coerce a cell to a 2-place Decimal; unparseable input gives 0.00."""
    if is_missing(value) or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        candidate = value
    elif isinstance(value, (int, float)):
        candidate = Decimal(str(value))
    elif isinstance(value, str):
        match = _LEADING_NUMBER.match(value.replace(",", "").strip())
        if match is None:
            return ZERO
        candidate = Decimal(match.group(0))
    else:
        return ZERO
    if not candidate.is_finite():
        return ZERO
    try:
        quantized = candidate.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return ZERO
    # -0.00 は 0.00 に寄せる
    return quantized if quantized != 0 else ZERO


def format_number(value: Decimal) -> str:
    return f"{value:.2f}"


def parse_number(value: Any) -> str:
    return format_number(parse_decimal(value))


def parse_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


def text_value(value: Any) -> str:
    if is_missing(value):
        return ""
    if isinstance(value, (datetime, date)):
        return format_date(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()
