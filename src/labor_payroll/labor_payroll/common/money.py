from __future__ import annotations

from typing import Union

from ..core.exceptions import ValidationError

Number = Union[int, float]


def format_number(value: Number | str | None) -> str:
    """1234567 -> '1.234.567' (vi-VN grouping)."""
    if not value:
        return ""
    return f"{int(round(float(value))):,}".replace(",", ".")


def format_currency(amount: Number) -> str:
    return f"{format_number(amount) or '0'} ₫"


def parse_number(value: str) -> int:
    cleaned = (value or "").replace(".", "").replace("₫", "").strip()
    if not cleaned:
        return 0
    try:
        return int(cleaned)
    except ValueError:
        raise ValidationError(f"Số tiền không hợp lệ: {value!r}")


def line_amount(shifts: float, rate: Number) -> int:
    return int(round(float(shifts) * float(rate)))
