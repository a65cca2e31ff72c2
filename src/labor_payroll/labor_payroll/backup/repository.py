from __future__ import annotations

from typing import Optional, Protocol


class SnapshotStorage(Protocol):
    """JSON blob store (`app_storage`); the newest row wins."""

    def save(self, data: dict) -> None:
        raise NotImplementedError

    def latest(self) -> Optional[dict]:
        raise NotImplementedError
