from __future__ import annotations

from .base import PayrollCalculator
from ...timesheet.model import TimeRecord


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: shifts x rate_used, rounded to whole VND."""

    def record_amount(self, record: TimeRecord) -> int:
        return record.amount
