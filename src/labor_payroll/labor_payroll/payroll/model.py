from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class BatchItem:
    """Một dòng trong đợt chi: (công nhật, công trình) -> số tiền chi."""

    worker_id: str
    project_id: str
    project_name: str
    basic_amount: int = 0
    extra_amount: int = 0
    note: str = ""

    @property
    def total_amount(self) -> int:
        return int(self.basic_amount) + int(self.extra_amount)

    @property
    def key(self) -> tuple[str, str]:
        return self.worker_id, self.project_id

    def to_dict(self) -> dict:
        return {
            "workerId": self.worker_id,
            "projectId": self.project_id,
            "projectName": self.project_name,
            "basicAmount": self.basic_amount,
            "extraAmount": self.extra_amount,
            "totalAmount": self.total_amount,
            "note": self.note,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BatchItem":
        return cls(
            worker_id=str(data["workerId"]),
            project_id=str(data.get("projectId") or ""),
            project_name=str(data.get("projectName") or ""),
            basic_amount=int(round(float(data.get("basicAmount") or 0))),
            extra_amount=int(round(float(data.get("extraAmount") or 0))),
            note=str(data.get("note") or ""),
        )


@dataclass(frozen=True)
class PayrollBatch:
    """Đợt chi lương (ví dụ "Đợt 1 tháng 5") gồm nhiều công nhật / công trình."""

    batch_id: str
    name: str
    month: int
    year: int
    created_at: datetime
    items: tuple[BatchItem, ...] = field(default_factory=tuple)

    @property
    def total_amount(self) -> int:
        return sum(i.total_amount for i in self.items)

    def find_item(self, worker_id: str, project_id: str) -> Optional[BatchItem]:
        for item in self.items:
            if item.key == (worker_id, project_id):
                return item
        return None

    def to_dict(self, *, with_items: bool = True) -> dict:
        data = {
            "id": self.batch_id,
            "name": self.name,
            "month": self.month,
            "year": self.year,
            "date": self.created_at.isoformat(timespec="seconds"),
            "totalAmount": self.total_amount,
        }
        if with_items:
            data["items"] = [i.to_dict() for i in self.items]
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "PayrollBatch":
        raw_date = str(data.get("date") or "")
        try:
            created_at = datetime.fromisoformat(raw_date.replace("Z", "+00:00")).replace(tzinfo=None)
        except ValueError:
            created_at = datetime(int(data["year"]), int(data["month"]), 1)
        return cls(
            batch_id=str(data["id"]),
            name=str(data.get("name") or ""),
            month=int(data["month"]),
            year=int(data["year"]),
            created_at=created_at,
            items=tuple(BatchItem.from_dict(i) for i in data.get("items") or []),
        )


@dataclass(frozen=True)
class MonthlyPayrollItem:
    worker_id: str
    worker_name: str
    total_shifts: float
    total_amount: int
    paid_amount: int
    project_names: tuple[str, ...]

    @property
    def remaining_amount(self) -> int:
        return self.total_amount - self.paid_amount

    def to_dict(self) -> dict:
        return {
            "workerId": self.worker_id,
            "workerName": self.worker_name,
            "totalShifts": self.total_shifts,
            "totalAmount": self.total_amount,
            "paidAmount": self.paid_amount,
            "remainingAmount": self.remaining_amount,
            "projectNames": list(self.project_names),
        }


@dataclass(frozen=True)
class WeeklyPayrollItem:
    worker_id: str
    worker_name: str
    worker_role: str
    total_shifts: float
    total_amount: int
    details: tuple[dict, ...]

    def to_dict(self) -> dict:
        return {
            "workerId": self.worker_id,
            "workerName": self.worker_name,
            "role": self.worker_role,
            "totalShifts": self.total_shifts,
            "totalAmount": self.total_amount,
            "details": list(self.details),
        }
