from __future__ import annotations

from typing import Protocol, Sequence

from .model import ActivityLog


class ActivityLogRepository(Protocol):
    def add(self, log: ActivityLog) -> None:
        raise NotImplementedError

    def list_recent(self, limit: int) -> Sequence[ActivityLog]:
        raise NotImplementedError

    def list_all(self) -> Sequence[ActivityLog]:
        raise NotImplementedError

    def replace_all(self, logs: Sequence[ActivityLog]) -> None:
        """Used by backup restore."""

        raise NotImplementedError
