from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import parse_iso_date
from ..core.enums import TransactionType


@dataclass(frozen=True)
class Transaction:
    """Giao dịch công nợ: ứng lương (advance) hoặc thanh toán (payment)."""

    transaction_id: str
    worker_id: str
    tx_type: TransactionType
    amount: int
    tx_date: date
    note: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.transaction_id,
            "workerId": self.worker_id,
            "type": self.tx_type.value,
            "amount": self.amount,
            "date": self.tx_date.isoformat(),
            "note": self.note or "",
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Transaction":
        return cls(
            transaction_id=str(data["id"]),
            worker_id=str(data["workerId"]),
            tx_type=TransactionType(data["type"]),
            amount=int(round(float(data.get("amount") or 0))),
            tx_date=parse_iso_date(str(data["date"])),
            note=data.get("note") or None,
        )


@dataclass(frozen=True)
class WorkerDebt:
    """Công nợ lũy kế của một công nhật: còn nợ = đã làm - (đã ứng + đã trả)."""

    worker_id: str
    worker_name: str
    total_earned: int
    total_advanced: int
    total_paid: int

    @property
    def remaining_debt(self) -> int:
        return self.total_earned - (self.total_advanced + self.total_paid)

    def to_dict(self) -> dict:
        return {
            "workerId": self.worker_id,
            "workerName": self.worker_name,
            "totalEarned": self.total_earned,
            "totalAdvanced": self.total_advanced,
            "totalPaid": self.total_paid,
            "remainingDebt": self.remaining_debt,
        }
