from __future__ import annotations

from typing import Optional

from ..core.constants import MAX_SHIFTS_PER_RECORD, SHIFT_STEP
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} không hợp lệ")
    return value.strip()


def require_non_negative(value, field_name: str) -> int:
    try:
        amount = int(round(float(value or 0)))
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} không hợp lệ")
    if amount < 0:
        raise ValidationError(f"{field_name} không được âm")
    return amount


def require_positive(value, field_name: str) -> int:
    amount = require_non_negative(value, field_name)
    if amount == 0:
        raise ValidationError(f"{field_name} phải lớn hơn 0")
    return amount


def optional_rate(value, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    return require_non_negative(value, field_name)


def require_shifts(value) -> float:
    """Số công: > 0, bước 0.5, không quá MAX_SHIFTS_PER_RECORD."""
    try:
        shifts = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Số công không hợp lệ")

    if shifts <= 0:
        raise ValidationError("Số công phải lớn hơn 0")
    if shifts > MAX_SHIFTS_PER_RECORD:
        raise ValidationError(f"Số công tối đa {MAX_SHIFTS_PER_RECORD}")
    if abs(shifts / SHIFT_STEP - round(shifts / SHIFT_STEP)) > 1e-9:
        raise ValidationError(f"Số công phải là bội số của {SHIFT_STEP}")
    return shifts
