from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Worker:
    """Thực thể miền (domain): Công nhật.

    rate_1_cong: đơn giá cho ngày làm 1 công.
    rate_2_cong: tổng tiền cho ngày làm 2 công (chia đôi thành đơn giá/công).
    """

    worker_id: str
    name: str
    role: str = "Công nhật"
    daily_rate: int = 0
    rate_1_cong: Optional[int] = None
    rate_2_cong: Optional[int] = None
    current_project_id: Optional[str] = None
    identity_card_number: Optional[str] = None
    phone: Optional[str] = None
    bank_account: Optional[str] = None
    bank_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.worker_id,
            "name": self.name,
            "role": self.role,
            "dailyRate": self.daily_rate,
            "rate1Cong": self.rate_1_cong,
            "rate2Cong": self.rate_2_cong,
            "currentProjectId": self.current_project_id,
            "identityCardNumber": self.identity_card_number,
            "phone": self.phone,
            "bankAccount": self.bank_account,
            "bankName": self.bank_name,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Worker":
        def opt_int(key: str) -> Optional[int]:
            value = data.get(key)
            return None if value in (None, "") else int(value)

        return cls(
            worker_id=str(data["id"]),
            name=str(data.get("name") or ""),
            role=str(data.get("role") or "Công nhật"),
            daily_rate=int(data.get("dailyRate") or 0),
            rate_1_cong=opt_int("rate1Cong"),
            rate_2_cong=opt_int("rate2Cong"),
            current_project_id=data.get("currentProjectId") or None,
            identity_card_number=data.get("identityCardNumber") or None,
            phone=data.get("phone") or None,
            bank_account=data.get("bankAccount") or None,
            bank_name=data.get("bankName") or None,
        )
