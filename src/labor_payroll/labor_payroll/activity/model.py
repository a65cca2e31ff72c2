from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ActivityLog:
    """Nhật ký thao tác của người dùng."""

    log_id: str
    user_id: str
    user_name: str
    action: str
    details: str
    timestamp: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.log_id,
            "userId": self.user_id,
            "userName": self.user_name,
            "action": self.action,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(timespec="seconds"),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ActivityLog":
        raw = str(data.get("timestamp") or "")
        try:
            timestamp = datetime.fromisoformat(raw.replace("Z", "+00:00")).replace(tzinfo=None)
        except ValueError:
            timestamp = datetime.now()
        return cls(
            log_id=str(data["id"]),
            user_id=str(data.get("userId") or ""),
            user_name=str(data.get("userName") or ""),
            action=str(data.get("action") or ""),
            details=str(data.get("details") or ""),
            timestamp=timestamp,
        )
