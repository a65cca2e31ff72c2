from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import parse_iso_date
from ..common.money import line_amount


@dataclass(frozen=True)
class TimeRecord:
    """Thực thể miền (domain): Bản ghi chấm công (một công nhật, một ngày, một công trình)."""

    record_id: str
    worker_id: str
    project_id: str
    work_date: date
    shifts: float
    rate_used: int
    note: Optional[str] = None

    @property
    def amount(self) -> int:
        return line_amount(self.shifts, self.rate_used)

    def to_dict(self) -> dict:
        return {
            "id": self.record_id,
            "workerId": self.worker_id,
            "projectId": self.project_id,
            "date": self.work_date.isoformat(),
            "shifts": self.shifts,
            "rateUsed": self.rate_used,
            "amount": self.amount,
            "note": self.note or "",
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TimeRecord":
        return cls(
            record_id=str(data["id"]),
            worker_id=str(data["workerId"]),
            project_id=str(data.get("projectId") or ""),
            work_date=parse_iso_date(str(data["date"])),
            shifts=float(data.get("shifts") or 0),
            rate_used=int(round(float(data.get("rateUsed") or 0))),
            note=data.get("note") or None,
        )
