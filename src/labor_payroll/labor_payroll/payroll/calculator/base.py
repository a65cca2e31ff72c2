from __future__ import annotations

from abc import ABC, abstractmethod

from ...timesheet.model import TimeRecord


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def record_amount(self, record: TimeRecord) -> int:
        raise NotImplementedError
