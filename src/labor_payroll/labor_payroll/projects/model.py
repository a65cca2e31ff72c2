from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ProjectStatus


@dataclass(frozen=True)
class Project:
    """Thực thể miền (domain): Công trình."""

    project_id: str
    name: str
    address: str = ""
    status: ProjectStatus = ProjectStatus.ACTIVE
    standard_rate: Optional[int] = None
    double_rate: Optional[int] = None

    @property
    def is_active(self) -> bool:
        return self.status == ProjectStatus.ACTIVE

    def to_dict(self) -> dict:
        return {
            "id": self.project_id,
            "name": self.name,
            "address": self.address,
            "status": self.status.value,
            "standardRate": self.standard_rate,
            "doubleRate": self.double_rate,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Project":
        return cls(
            project_id=str(data["id"]),
            name=str(data.get("name") or ""),
            address=str(data.get("address") or ""),
            status=ProjectStatus(data.get("status") or ProjectStatus.ACTIVE.value),
            standard_rate=_opt_int(data.get("standardRate")),
            double_rate=_opt_int(data.get("doubleRate")),
        )


def _opt_int(value) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)
