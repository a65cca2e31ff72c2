from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import TimeRecord


class TimeRecordRepository(Protocol):
    def get_by_id(self, record_id: str) -> Optional[TimeRecord]:
        raise NotImplementedError

    def list_range(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        worker_id: Optional[str] = None,
        project_id: Optional[str] = None,
    ) -> Sequence[TimeRecord]:
        """Both bounds inclusive; None means unbounded."""

        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

    def add_many(self, records: Sequence[TimeRecord]) -> None:
        raise NotImplementedError

    def update(self, record: TimeRecord) -> bool:
        raise NotImplementedError

    def delete(self, record_id: str) -> bool:
        raise NotImplementedError

    def replace_all(self, records: Sequence[TimeRecord]) -> None:
        raise NotImplementedError
